"""A module for typing utilities in sirinfer."""

from .typing import (
    CompartmentGradients,
    CompartmentState,
    CompartmentTimeseries,
    ObservedData,
    ODE_Eqns,
    OpenUnitIntervalFloat,
)

__all__ = [
    "CompartmentState",
    "CompartmentGradients",
    "CompartmentTimeseries",
    "OpenUnitIntervalFloat",
    "ObservedData",
    "ODE_Eqns",
]
