"""Top level configuration records for one simulation or inference run."""

from pydantic import Field

from .data import SingleGroupData, TwoGroupData
from .parameter_set import ParameterSet
from .params import ObservationParams, SolverParams
from .priors import SingleGroupPriors, TwoGroupPriors


class SimulationConfig(ParameterSet):
    """Settings shared by every SIR model configuration."""

    solver_params: SolverParams = Field(
        default_factory=SolverParams,
        description="""ODE solver settings.""",
    )
    observation_params: ObservationParams = Field(
        default_factory=ObservationParams,
        description="""Negative binomial observation model settings.""",
    )


class SingleGroupConfig(SimulationConfig):
    """Configuration of the single population SIR model."""

    data: SingleGroupData
    priors: SingleGroupPriors = Field(default_factory=SingleGroupPriors)


class TwoGroupConfig(SimulationConfig):
    """Configuration of the two age group SIR model."""

    data: TwoGroupData
    priors: TwoGroupPriors = Field(default_factory=TwoGroupPriors)
