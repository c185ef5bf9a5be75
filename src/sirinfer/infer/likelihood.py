"""Negative binomial observation model shared by both SIR models.

Daily counts follow NegativeBinomial2(mean=incidence + epsilon,
concentration=1/d_inv). A proposal whose expected counts are not all
strictly positive and finite, or whose ODE solve failed, is rejected with a
log density of -inf instead of raising, so one bad draw never stops a run.
Residual non-positive means are rejected, never clamped.
"""

from typing import Optional

import jax.numpy as jnp
import numpyro
import numpyro.distributions as dist
from jax import Array
from jax.typing import ArrayLike

from sirinfer.typing import ObservedData


def expected_cases(incidence: ArrayLike, epsilon: float) -> Array:
    """Floor the incidence away from zero by adding `epsilon`."""
    return jnp.asarray(incidence) + epsilon


def valid_expected_cases(expected: ArrayLike) -> Array:
    """True if every expected count is finite and strictly positive."""
    expected = jnp.asarray(expected)
    return jnp.all(jnp.isfinite(expected)) & jnp.all(expected > 0)


def _safe_mean(expected: ArrayLike, valid: ArrayLike) -> Array:
    # keeps NaN out of log_prob and its gradient on rejected proposals
    return jnp.where(valid, expected, 1.0)


def negative_binomial_log_likelihood(
    expected: ArrayLike, observed: ArrayLike, d_inv: ArrayLike
) -> Array:
    """Summed log likelihood of `observed` counts.

    Parameters
    ----------
    expected : ArrayLike
        expected counts, same shape as `observed`.
    observed : ArrayLike
        non-negative integer counts.
    d_inv : ArrayLike
        inverse dispersion, the negative binomial concentration is 1/d_inv.

    Returns
    -------
    Array
        scalar log density, -inf if any expected count is invalid.
    """
    valid = valid_expected_cases(expected)
    log_prob = (
        dist.NegativeBinomial2(
            mean=_safe_mean(expected, valid), concentration=1.0 / d_inv
        )
        .log_prob(jnp.asarray(observed))
        .sum()
    )
    return jnp.where(valid, log_prob, -jnp.inf)


def observe_cases(
    name: str,
    expected: ArrayLike,
    d_inv: ArrayLike,
    observed: Optional[ObservedData] = None,
    accepted: ArrayLike = True,
) -> Array:
    """Create the numpyro observation site for daily cases.

    Parameters
    ----------
    name : str
        site name of the counts.
    expected : ArrayLike
        expected counts, already floored by `expected_cases()`.
    d_inv : ArrayLike
        inverse dispersion shared by every element of `expected`.
    observed : ObservedData, optional
        observed counts, by default None meaning counts are sampled, as
        in posterior predictive forecasts.
    accepted : ArrayLike, optional
        False rejects the proposal regardless of `expected`, used to pass
        on ODE solver failures.

    Returns
    -------
    Array
        observed or sampled counts.
    """
    valid = jnp.asarray(accepted) & valid_expected_cases(expected)
    numpyro.factor(f"{name}_rejected", jnp.where(valid, 0.0, -jnp.inf))
    return numpyro.sample(
        name,
        dist.NegativeBinomial2(
            mean=_safe_mean(expected, valid), concentration=1.0 / d_inv
        ),
        obs=observed,
    )
