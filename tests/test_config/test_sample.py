import jax.numpy as jnp
import numpyro.distributions as dist
import pytest
from jax.random import PRNGKey
from numpyro.handlers import seed, trace

from sirinfer.config import (
    NormalPrior,
    SingleGroupPriors,
    TwoGroupPriors,
    sample_parameters,
)


def test_sample_parameters_site_names():
    t = trace(seed(sample_parameters, rng_seed=0)).get_trace(
        TwoGroupPriors()
    )
    assert set(t.keys()) == {
        "beta",
        "gamma_1",
        "gamma_2",
        "i1_0",
        "i2_0",
        "d_inv",
    }


def test_sample_parameters_within_bounds():
    with seed(rng_seed=1):
        for _ in range(20):
            params = sample_parameters(SingleGroupPriors())
            assert 0.0 <= params["beta"] <= 1.0
            assert 0.0 <= params["gamma"] <= 1.0
            assert 1.0 <= params["i0"] <= 10.0
            assert params["d_inv"] > 0.0


def test_fixed_values_are_not_sampled():
    priors = SingleGroupPriors(gamma=1 / 7, i0=5.0)
    t = trace(seed(sample_parameters, rng_seed=0)).get_trace(priors)
    assert "gamma" not in t and "i0" not in t
    with seed(rng_seed=0):
        params = sample_parameters(priors)
    assert params["gamma"] == pytest.approx(1 / 7)
    assert isinstance(params["i0"], jnp.ndarray)


def test_sample_parameters_rng_key_and_prefix():
    priors = SingleGroupPriors(
        beta=NormalPrior(loc=0.3, scale=0.01, low=0.0, high=1.0),
        d_inv=dist.Exponential(5.0),
    )
    t = trace(
        lambda: sample_parameters(priors, rng_key=PRNGKey(0), _prefix="x_")
    ).get_trace()
    assert {"x_beta", "x_gamma", "x_i0", "x_d_inv"} == set(t.keys())
    params = sample_parameters(priors, rng_key=PRNGKey(0))
    assert params["beta"] == pytest.approx(0.3, abs=0.1)
