"""Generate synthetic daily case counts from known parameters."""

import logging
from typing import Optional

import jax.numpy as jnp
import numpyro.distributions as dist
from jax import Array
from jax.typing import ArrayLike

from sirinfer.config import SingleGroupConfig, TwoGroupConfig
from sirinfer.utils import log_decorator

from . import single_group, two_group
from .odes import solution_succeeded

logger = logging.getLogger("sirinfer")


def sample_cases(
    rng_key: Array,
    expected_cases: ArrayLike,
    d_inv: Optional[float] = None,
) -> Array:
    """Draw integer counts around `expected_cases`.

    Parameters
    ----------
    rng_key : Array
        jax PRNGKey.
    expected_cases : ArrayLike
        strictly positive expected counts.
    d_inv : float, optional
        inverse dispersion of a negative binomial draw, by default None
        meaning Poisson noise.

    Returns
    -------
    Array
        counts with the shape of `expected_cases`.
    """
    if d_inv is None:
        return dist.Poisson(expected_cases).sample(rng_key)
    return dist.NegativeBinomial2(
        mean=expected_cases, concentration=1.0 / d_inv
    ).sample(rng_key)


def _checked_incidence(solution, incidence_fn, ode_params) -> Array:
    if not bool(solution_succeeded(solution)):
        raise RuntimeError(
            f"ODE solve failed with {solution.result}, try raising "
            "SolverParams.max_steps"
        )
    return incidence_fn(solution.ys, ode_params)


@log_decorator
def synthetic_single_group_cases(
    config: SingleGroupConfig,
    rng_key: Array,
    beta: float,
    gamma: float,
    i0: float,
    d_inv: Optional[float] = None,
) -> Array:
    """Simulate noisy daily cases for every report day of `config.data`.

    Returns
    -------
    Array
        counts with shape (time_simulation, 1).
    """
    ode_params = single_group.SingleGroupODEParams(
        beta=jnp.asarray(beta),
        gamma=jnp.asarray(gamma),
        population=config.data.populations,
    )
    solution = single_group.simulate_trajectory(
        ode_params, i0, config.data, config.solver_params
    )
    expected = (
        _checked_incidence(solution, single_group.incidence, ode_params)
        + config.observation_params.epsilon
    )
    logger.info(
        "simulated %s days of single group cases, R0 = %.3f",
        config.data.time_simulation,
        float(single_group.reproduction_number(beta, gamma)),
    )
    return sample_cases(rng_key, expected, d_inv)


@log_decorator
def synthetic_two_group_cases(
    config: TwoGroupConfig,
    rng_key: Array,
    beta: float,
    gamma_1: float,
    gamma_2: float,
    i1_0: float,
    i2_0: float,
    d_inv: Optional[float] = None,
) -> Array:
    """Simulate noisy daily cases of both groups for every report day.

    Returns
    -------
    Array
        counts with shape (time_simulation, 2).
    """
    ode_params = two_group.TwoGroupODEParams(
        beta=jnp.asarray(beta),
        gamma_1=jnp.asarray(gamma_1),
        gamma_2=jnp.asarray(gamma_2),
        population=config.data.populations,
        contact_matrix=config.data.contact,
    )
    solution = two_group.simulate_trajectory(
        ode_params, i1_0, i2_0, config.data, config.solver_params
    )
    expected = (
        _checked_incidence(solution, two_group.incidence, ode_params)
        + config.observation_params.epsilon
    )
    logger.info(
        "simulated %s days of two group cases, R0 = %.3f",
        config.data.time_simulation,
        float(two_group.reproduction_number(ode_params)),
    )
    return sample_cases(rng_key, expected, d_inv)
