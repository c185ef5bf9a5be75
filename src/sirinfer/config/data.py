"""Fixed data supplied to one simulation or inference run."""

import logging
from typing import Optional

import jax.numpy as jnp
import numpy as np
from jax import Array
from pydantic import (
    Field,
    NonNegativeFloat,
    NonNegativeInt,
    PositiveFloat,
    PositiveInt,
    field_validator,
    model_validator,
)
from typing_extensions import Self

from sirinfer.typing import ObservedData

from .parameter_set import ParameterSet

logger = logging.getLogger("sirinfer")


class EpidemicData(ParameterSet):
    """Report times and observation window shared by both models."""

    time_simulation: PositiveInt = Field(
        description="""Number of report days to simulate, may extend past
        the observed data to produce forecasts."""
    )
    number_data: NonNegativeInt = Field(
        default=0,
        description="""Number of observed days, at most `time_simulation`.
        Observations cover the first `number_data` report days.""",
    )
    initial_time: float = Field(
        default=0.0, description="""Time of the initial state."""
    )
    time_sequence: Optional[list[float]] = Field(
        default=None,
        description="""Strictly increasing report times, one per simulated
        day. Defaults to initial_time + 1, ..., initial_time +
        time_simulation.""",
    )

    @model_validator(mode="after")
    def _validate_observation_window(self) -> Self:
        if self.number_data > self.time_simulation:
            raise ValueError(
                f"number_data ({self.number_data}) can not exceed "
                f"time_simulation ({self.time_simulation})"
            )
        return self

    @model_validator(mode="after")
    def _validate_time_sequence(self) -> Self:
        if self.time_sequence is None:
            return self
        if len(self.time_sequence) != self.time_simulation:
            raise ValueError(
                f"time_sequence has {len(self.time_sequence)} entries but "
                f"time_simulation is {self.time_simulation}"
            )
        if self.time_sequence[0] < self.initial_time:
            raise ValueError(
                "time_sequence can not start before initial_time"
            )
        if any(
            later <= earlier
            for earlier, later in zip(
                self.time_sequence, self.time_sequence[1:]
            )
        ):
            raise ValueError("time_sequence must be strictly increasing")
        return self

    @property
    def report_times(self) -> Array:
        """Times at which the trajectory and incidence are reported."""
        if self.time_sequence is not None:
            return jnp.asarray(self.time_sequence)
        return self.initial_time + jnp.arange(1, self.time_simulation + 1)

    def with_observed_cases(self, observed_cases) -> Self:
        """Return a validated copy holding `observed_cases`.

        `number_data` is set to the length of the observations.
        """
        cases = np.asarray(observed_cases)
        fields = self.model_dump()
        fields["number_data"] = int(cases.shape[0])
        fields["observed_cases"] = self._cases_field(cases)
        return self.__class__.model_validate(fields)

    def _cases_field(self, cases: np.ndarray):
        raise NotImplementedError(
            "implement conversion of observed cases for this data class"
        )


class SingleGroupData(EpidemicData):
    """Data block of the single population SIR model."""

    population: PositiveFloat = Field(description="""Population size N.""")
    observed_cases: list[NonNegativeInt] = Field(
        default_factory=list,
        description="""Observed daily case counts, `number_data` long.""",
    )

    @model_validator(mode="after")
    def _validate_observed_length(self) -> Self:
        if len(self.observed_cases) != self.number_data:
            raise ValueError(
                f"found {len(self.observed_cases)} observed cases but "
                f"number_data is {self.number_data}"
            )
        return self

    @property
    def populations(self) -> Array:
        return jnp.array([self.population])

    @property
    def observed(self) -> ObservedData:
        """Observed cases with shape (number_data, 1)."""
        return jnp.asarray(self.observed_cases).reshape(-1, 1)

    def _cases_field(self, cases: np.ndarray):
        return cases.reshape(-1).astype(int).tolist()


class TwoGroupData(EpidemicData):
    """Data block of the two age group SIR model."""

    population: tuple[PositiveFloat, PositiveFloat] = Field(
        description="""Population size of each group, (N1, N2)."""
    )
    contact_matrix: list[list[NonNegativeFloat]] = Field(
        description="""2x2 contact rates, entry [i][j] is the rate at which
        group i contacts group j."""
    )
    observed_cases: tuple[list[NonNegativeInt], list[NonNegativeInt]] = (
        Field(
            default_factory=lambda: ([], []),
            description="""Observed daily case counts of each group, each
            `number_data` long.""",
        )
    )
    reciprocity_rtol: PositiveFloat = Field(
        default=0.05,
        description="""Relative tolerance of the N_i*C_ij == N_j*C_ji
        check, violations are logged as warnings.""",
    )

    @field_validator("contact_matrix", mode="after")
    @classmethod
    def _validate_contact_matrix_shape(
        cls, contact_matrix: list[list[float]]
    ) -> list[list[float]]:
        if len(contact_matrix) != 2 or any(
            len(row) != 2 for row in contact_matrix
        ):
            raise ValueError("contact_matrix must be 2x2")
        return contact_matrix

    @model_validator(mode="after")
    def _validate_observed_length(self) -> Self:
        for group, cases in enumerate(self.observed_cases, start=1):
            if len(cases) != self.number_data:
                raise ValueError(
                    f"found {len(cases)} observed cases for group {group} "
                    f"but number_data is {self.number_data}"
                )
        return self

    @model_validator(mode="after")
    def _check_reciprocity(self) -> Self:
        weighted = np.asarray(self.population)[:, None] * np.asarray(
            self.contact_matrix
        )
        if not np.allclose(weighted, weighted.T, rtol=self.reciprocity_rtol):
            logger.warning(
                "contact matrix is not reciprocal under population "
                "weighting, N_i * C_ij = %s",
                weighted.tolist(),
            )
        return self

    @property
    def populations(self) -> Array:
        return jnp.asarray(self.population)

    @property
    def contact(self) -> Array:
        return jnp.asarray(self.contact_matrix)

    @property
    def observed(self) -> ObservedData:
        """Observed cases with shape (number_data, 2)."""
        return jnp.asarray(self.observed_cases).reshape(2, -1).T

    def _cases_field(self, cases: np.ndarray):
        cases = cases.astype(int)
        return (cases[:, 0].tolist(), cases[:, 1].tolist())
