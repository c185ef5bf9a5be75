"""Prior distributions over the free parameters of the SIR models.

Every free parameter is declared with a bounded domain. A prior is either a
declarative prior record (`NormalPrior`, `ExponentialPrior`), a raw numpyro
`Distribution`, or a fixed float which is then not inferred. Bounded
records build distributions whose support is the declared interval, so the
sampler works on the truncated domain directly instead of rejecting draws.
"""

import math
from typing import Annotated, Optional, Union

import numpyro.distributions as dist
from annotated_types import Ge, Le
from numpyro.distributions import Distribution
from pydantic import Field, PositiveFloat, model_validator
from typing_extensions import Self

from sirinfer.typing import OpenUnitIntervalFloat

from .parameter_set import ParameterSet

InitialInfectiousFloat = Annotated[float, Ge(1.0), Le(10.0)]


class NormalPrior(ParameterSet):
    """A normal prior, truncated to [low, high] when bounds are given."""

    loc: float
    scale: PositiveFloat
    low: Optional[float] = None
    high: Optional[float] = None

    @model_validator(mode="after")
    def _validate_bounds(self) -> Self:
        if (
            self.low is not None
            and self.high is not None
            and self.low >= self.high
        ):
            raise ValueError(
                f"prior lower bound {self.low} must be below upper bound "
                f"{self.high}"
            )
        return self

    def to_distribution(self) -> Distribution:
        if self.low is None and self.high is None:
            return dist.Normal(self.loc, self.scale)
        return dist.TruncatedNormal(
            self.loc, self.scale, low=self.low, high=self.high
        )


class ExponentialPrior(ParameterSet):
    """An exponential prior on (0, inf)."""

    rate: PositiveFloat

    def to_distribution(self) -> Distribution:
        return dist.Exponential(self.rate)


BoundedPrior = Union[NormalPrior, ExponentialPrior]


def _check_support(
    name: str, prior, lower: float, upper: float = math.inf
) -> None:
    """Assert a declarative prior stays inside a parameter's domain."""
    if isinstance(prior, NormalPrior):
        low = -math.inf if prior.low is None else prior.low
        high = math.inf if prior.high is None else prior.high
        if low < lower or high > upper:
            raise ValueError(
                f"{name} prior bounds [{low}, {high}] fall outside the "
                f"parameter domain [{lower}, {upper}]"
            )
    elif isinstance(prior, ExponentialPrior) and upper < math.inf:
        raise ValueError(
            f"{name} has a bounded domain [{lower}, {upper}], an "
            "exponential prior can not respect it"
        )


class SingleGroupPriors(ParameterSet):
    """Priors over beta, gamma, i0 and d_inv of the single group model."""

    beta: Union[BoundedPrior, Distribution, OpenUnitIntervalFloat] = Field(
        default_factory=lambda: NormalPrior(
            loc=0.3, scale=0.1, low=0.0, high=1.0
        ),
        description="""Transmission rate, domain (0, 1).""",
    )
    gamma: Union[BoundedPrior, Distribution, OpenUnitIntervalFloat] = Field(
        default_factory=lambda: NormalPrior(
            loc=0.15, scale=0.1, low=0.0, high=1.0
        ),
        description="""Recovery rate, domain (0, 1).""",
    )
    i0: Union[BoundedPrior, Distribution, InitialInfectiousFloat] = Field(
        default_factory=lambda: NormalPrior(
            loc=2.0, scale=10.0, low=1.0, high=10.0
        ),
        description="""Initial number of infectious individuals, domain
        [1, 10].""",
    )
    d_inv: Union[BoundedPrior, Distribution, PositiveFloat] = Field(
        default_factory=lambda: ExponentialPrior(rate=5.0),
        description="""Inverse dispersion of the negative binomial
        observation model, domain (0, inf).""",
    )

    @model_validator(mode="after")
    def _validate_prior_supports(self) -> Self:
        _check_support("beta", self.beta, 0.0, 1.0)
        _check_support("gamma", self.gamma, 0.0, 1.0)
        _check_support("i0", self.i0, 1.0, 10.0)
        _check_support("d_inv", self.d_inv, 0.0)
        return self


class TwoGroupPriors(ParameterSet):
    """Priors over the six free parameters of the two group model.

    The recovery rates of both groups are separate parameters with
    separate priors and are estimated independently of each other.
    """

    beta: Union[BoundedPrior, Distribution, OpenUnitIntervalFloat] = Field(
        default_factory=lambda: NormalPrior(
            loc=0.3, scale=0.1, low=0.0, high=1.0
        ),
        description="""Transmission rate shared by both groups.""",
    )
    gamma_1: Union[BoundedPrior, Distribution, OpenUnitIntervalFloat] = (
        Field(
            default_factory=lambda: NormalPrior(
                loc=0.1, scale=0.5, low=0.0, high=1.0
            ),
            description="""Recovery rate of the first group.""",
        )
    )
    gamma_2: Union[BoundedPrior, Distribution, OpenUnitIntervalFloat] = (
        Field(
            default_factory=lambda: NormalPrior(
                loc=0.1, scale=0.5, low=0.0, high=1.0
            ),
            description="""Recovery rate of the second group.""",
        )
    )
    i1_0: Union[BoundedPrior, Distribution, InitialInfectiousFloat] = Field(
        default_factory=lambda: NormalPrior(
            loc=2.0, scale=10.0, low=1.0, high=10.0
        ),
        description="""Initial infectious individuals in the first group.""",
    )
    i2_0: Union[BoundedPrior, Distribution, InitialInfectiousFloat] = Field(
        default_factory=lambda: NormalPrior(
            loc=2.0, scale=10.0, low=1.0, high=10.0
        ),
        description="""Initial infectious individuals in the second group.""",
    )
    d_inv: Union[BoundedPrior, Distribution, PositiveFloat] = Field(
        default_factory=lambda: ExponentialPrior(rate=5.0),
        description="""Inverse dispersion shared by both groups'
        observation models.""",
    )

    @model_validator(mode="after")
    def _validate_prior_supports(self) -> Self:
        _check_support("beta", self.beta, 0.0, 1.0)
        _check_support("gamma_1", self.gamma_1, 0.0, 1.0)
        _check_support("gamma_2", self.gamma_2, 0.0, 1.0)
        _check_support("i1_0", self.i1_0, 1.0, 10.0)
        _check_support("i2_0", self.i2_0, 1.0, 10.0)
        _check_support("d_inv", self.d_inv, 0.0)
        return self
