"""sirinfer inference module."""

from .inference import InferenceProcess, MCMCProcess
from .likelihood import (
    expected_cases,
    negative_binomial_log_likelihood,
    observe_cases,
    valid_expected_cases,
)
from .models import single_group_model, two_group_model

__all__ = [
    "InferenceProcess",
    "MCMCProcess",
    "single_group_model",
    "two_group_model",
    "expected_cases",
    "valid_expected_cases",
    "negative_binomial_log_likelihood",
    "observe_cases",
]
