import numpyro.distributions as dist
import pytest
from pydantic import ValidationError

import sirinfer.config as config


def test_normal_prior_distributions():
    unbounded = config.NormalPrior(loc=0.0, scale=1.0).to_distribution()
    assert isinstance(unbounded, dist.Normal)
    bounded = config.NormalPrior(
        loc=0.3, scale=0.1, low=0.0, high=1.0
    ).to_distribution()
    assert float(bounded.support.lower_bound) == 0.0
    assert float(bounded.support.upper_bound) == 1.0


def test_normal_prior_invalid_bounds():
    with pytest.raises(ValidationError):
        config.NormalPrior(loc=0.3, scale=0.1, low=1.0, high=0.0)
    with pytest.raises(ValidationError):
        config.NormalPrior(loc=0.3, scale=0.0)


def test_exponential_prior():
    prior = config.ExponentialPrior(rate=5.0).to_distribution()
    assert isinstance(prior, dist.Exponential)
    with pytest.raises(ValidationError):
        config.ExponentialPrior(rate=-1.0)


def test_single_group_prior_defaults():
    priors = config.SingleGroupPriors()
    assert priors.beta == config.NormalPrior(
        loc=0.3, scale=0.1, low=0.0, high=1.0
    )
    assert priors.gamma == config.NormalPrior(
        loc=0.15, scale=0.1, low=0.0, high=1.0
    )
    assert priors.i0 == config.NormalPrior(
        loc=2.0, scale=10.0, low=1.0, high=10.0
    )
    assert priors.d_inv == config.ExponentialPrior(rate=5.0)


def test_two_group_prior_defaults():
    priors = config.TwoGroupPriors()
    # recovery rates are separate records with identical defaults
    assert priors.gamma_1 == priors.gamma_2
    assert priors.gamma_1 == config.NormalPrior(
        loc=0.1, scale=0.5, low=0.0, high=1.0
    )
    assert priors.i1_0.low == 1.0 and priors.i2_0.high == 10.0


def test_priors_accept_fixed_values_and_distributions():
    priors = config.SingleGroupPriors(gamma=1 / 7, d_inv=dist.HalfNormal(1.0))
    assert priors.gamma == pytest.approx(1 / 7)
    assert isinstance(priors.d_inv, dist.HalfNormal)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"beta": config.NormalPrior(loc=0.3, scale=0.1, low=-1.0, high=1.0)},
        {"beta": config.NormalPrior(loc=0.3, scale=0.1)},
        {"gamma": config.ExponentialPrior(rate=1.0)},
        {"i0": config.NormalPrior(loc=2.0, scale=1.0, low=0.0, high=10.0)},
        {"d_inv": config.NormalPrior(loc=1.0, scale=1.0, low=-1.0)},
        {"beta": 1.5},
        {"gamma": 0.0},
        {"i0": 0.5},
        {"i0": 11.0},
        {"d_inv": -0.1},
    ],
)
def test_single_group_priors_outside_domain(kwargs):
    with pytest.raises(ValidationError):
        config.SingleGroupPriors(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"gamma_2": config.NormalPrior(loc=0.1, scale=0.5, low=0.0, high=2)},
        {"i1_0": config.ExponentialPrior(rate=1.0)},
        {"i2_0": 20.0},
    ],
)
def test_two_group_priors_outside_domain(kwargs):
    with pytest.raises(ValidationError):
        config.TwoGroupPriors(**kwargs)
