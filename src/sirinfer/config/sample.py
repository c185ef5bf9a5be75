"""Helpers for turning a priors record into numpyro sample sites."""

import jax.numpy as jnp
import numpyro
from jax import Array
from numpyro.distributions import Distribution

from .parameter_set import ParameterSet
from .priors import ExponentialPrior, NormalPrior


def sample_parameters(
    priors: ParameterSet, rng_key: Array | None = None, _prefix: str = ""
) -> dict[str, Array]:
    """Sample every prior within `priors`, returning values by field name.

    Parameters
    ----------
    priors : ParameterSet
        priors record such as `SingleGroupPriors`, each field holding a
        declarative prior, a numpyro distribution or a fixed float.
    rng_key : Array, optional
        PRNGKey used when called outside of an inference context, by
        default None meaning the context's key is used.
    _prefix : str, optional
        prefix prepended to every site name.

    Returns
    -------
    dict[str, Array]
        field name to sampled (or fixed) value. Site names match the field
        names so posterior samples can be looked up by parameter name.

    Examples
    --------
    >>> import numpyro.handlers as handlers
    >>> with handlers.seed(rng_seed=1):
    ...     params = sample_parameters(SingleGroupPriors(gamma=1 / 7))
    >>> sorted(params)
    ['beta', 'd_inv', 'gamma', 'i0']
    """
    parameters = {}
    for name, value in priors:
        site_name = f"{_prefix}{name}"
        if isinstance(value, (NormalPrior, ExponentialPrior)):
            value = value.to_distribution()
        if isinstance(value, Distribution):
            parameters[name] = numpyro.sample(
                site_name, value, rng_key=rng_key
            )
        else:
            # fixed values are not inferred
            parameters[name] = jnp.asarray(value)
    return parameters
