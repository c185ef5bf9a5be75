"""Module to hold the SIR vector fields and their solver."""

from . import single_group, two_group
from .odes import AbstractODEParams, simulate, solution_succeeded
from .single_group import SingleGroupODEParams, single_group_ode
from .synthetic import (
    sample_cases,
    synthetic_single_group_cases,
    synthetic_two_group_cases,
)
from .two_group import (
    TwoGroupODEParams,
    dominant_eigenvalue,
    next_generation_matrix,
    two_group_ode,
)

__all__ = [
    "simulate",
    "solution_succeeded",
    "AbstractODEParams",
    "single_group",
    "two_group",
    "SingleGroupODEParams",
    "single_group_ode",
    "TwoGroupODEParams",
    "two_group_ode",
    "next_generation_matrix",
    "dominant_eigenvalue",
    "sample_cases",
    "synthetic_single_group_cases",
    "synthetic_two_group_cases",
]
