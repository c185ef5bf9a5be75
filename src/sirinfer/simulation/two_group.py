"""The two age group SIR model driven by a contact matrix.

    lambda_k = beta * sum_j C_kj * I_j / N_j
    dS_k/dt = -lambda_k * S_k
    dI_k/dt =  lambda_k * S_k - gamma_k * I_k
    dR_k/dt =  gamma_k * I_k

Compartments are jax arrays with one entry per group. Each group recovers
at its own rate, `gamma_1` and `gamma_2` are kept as separately named
parameters all the way down to the vector field.
"""

import chex
import jax.numpy as jnp
from diffrax import Solution
from jax import Array
from jax.typing import ArrayLike

from sirinfer.config import SolverParams, TwoGroupData
from sirinfer.typing import (
    CompartmentGradients,
    CompartmentState,
    CompartmentTimeseries,
)

from .odes import AbstractODEParams, simulate


@chex.dataclass
class TwoGroupODEParams(AbstractODEParams):
    beta: chex.ArrayDevice  # transmission rate
    gamma_1: chex.ArrayDevice  # recovery rate of group 1
    gamma_2: chex.ArrayDevice  # recovery rate of group 2
    population: chex.ArrayDevice  # (N1, N2)
    contact_matrix: chex.ArrayDevice  # C, shape (2, 2)


def recovery_rates(p: TwoGroupODEParams) -> Array:
    return jnp.stack([p.gamma_1, p.gamma_2])


def force_of_infection(i: ArrayLike, p: TwoGroupODEParams) -> Array:
    """Per group force of infection, works on states and whole trajectories.

    Parameters
    ----------
    i : ArrayLike
        infectious individuals, trailing axis is the group axis.
    p : TwoGroupODEParams
        model parameters.

    Returns
    -------
    Array
        lambda with the same shape as `i`.
    """
    return p.beta * jnp.einsum(
        "kj,...j->...k", p.contact_matrix, i / p.population
    )


def two_group_ode(
    t: float, state: CompartmentState, p: TwoGroupODEParams
) -> CompartmentGradients:
    """Two group SIR gradients at time `t`."""
    s, i, _ = state
    s_to_i = force_of_infection(i, p) * s
    i_to_r = recovery_rates(p) * i
    ds = -s_to_i
    di = s_to_i - i_to_r
    dr = i_to_r
    return tuple([ds, di, dr])


def get_initial_state(
    population: ArrayLike,
    initial_infectious_1: ArrayLike,
    initial_infectious_2: ArrayLike,
) -> CompartmentState:
    population = jnp.asarray(population) * 1.0
    i_0 = jnp.stack(
        [jnp.asarray(initial_infectious_1), jnp.asarray(initial_infectious_2)]
    ) * 1.0
    return (population - i_0, i_0, jnp.zeros_like(population))


def simulate_trajectory(
    ode_parameters: TwoGroupODEParams,
    initial_infectious_1: ArrayLike,
    initial_infectious_2: ArrayLike,
    data: TwoGroupData,
    solver_parameters: SolverParams,
) -> Solution:
    """Integrate the model over every report time of `data`."""
    return simulate(
        two_group_ode,
        initial_state=get_initial_state(
            ode_parameters.population,
            initial_infectious_1,
            initial_infectious_2,
        ),
        ode_parameters=ode_parameters,
        solver_parameters=solver_parameters,
        save_times=data.report_times,
        initial_time=data.initial_time,
    )


def incidence(
    trajectory: CompartmentTimeseries, p: TwoGroupODEParams
) -> Array:
    """Expected new infections per report time and group, lambda_k * S_k."""
    s, i, _ = trajectory
    return force_of_infection(i, p) * s


def next_generation_matrix(p: TwoGroupODEParams) -> Array:
    """K = F V^-1 at the disease free equilibrium S_k = N_k.

    F[k, j] = beta * C[k, j] * N_k / N_j is the rate new infections appear
    in group k per infectious individual of group j, V = diag(gamma) holds
    the removal rates.
    """
    n = jnp.asarray(p.population)
    f = p.beta * p.contact_matrix * n[:, None] / n[None, :]
    v = jnp.diag(recovery_rates(p))
    return f @ jnp.linalg.inv(v)


def dominant_eigenvalue(k: ArrayLike) -> Array:
    """Spectral radius of a square next generation matrix.

    2x2 matrices use the larger root of x^2 - x tr(K) + det(K) = 0, larger
    matrices fall back on a general eigen solver. The discriminant
    tr(K)^2 - 4 det(K) is expanded as (K00 - K11)^2 + 4 K01 K10, which is
    never negative for a non-negative K, even for equal eigenvalues.
    """
    k = jnp.asarray(k)
    if k.shape == (2, 2):
        trace = jnp.trace(k)
        discriminant = (k[0, 0] - k[1, 1]) ** 2 + 4 * k[0, 1] * k[1, 0]
        return (trace + jnp.sqrt(discriminant)) / 2
    return jnp.max(jnp.abs(jnp.linalg.eigvals(k)))


def reproduction_number(p: TwoGroupODEParams) -> Array:
    return dominant_eigenvalue(next_generation_matrix(p))
