"""sirinfer configuration module."""

from .data import EpidemicData, SingleGroupData, TwoGroupData
from .parameter_set import ParameterSet
from .params import ObservationParams, SolverParams
from .priors import (
    BoundedPrior,
    ExponentialPrior,
    NormalPrior,
    SingleGroupPriors,
    TwoGroupPriors,
)
from .sample import sample_parameters
from .simulation_config import (
    SimulationConfig,
    SingleGroupConfig,
    TwoGroupConfig,
)

__all__ = [
    "ParameterSet",
    "SolverParams",
    "ObservationParams",
    "NormalPrior",
    "ExponentialPrior",
    "BoundedPrior",
    "SingleGroupPriors",
    "TwoGroupPriors",
    "EpidemicData",
    "SingleGroupData",
    "TwoGroupData",
    "SimulationConfig",
    "SingleGroupConfig",
    "TwoGroupConfig",
    "sample_parameters",
]
