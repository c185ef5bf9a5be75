from pydantic import BaseModel, ConfigDict


class ParameterSet(BaseModel):
    """Immutable base for every sirinfer configuration record."""

    # allow diffrax solvers and numpyro distributions as field values
    model_config = ConfigDict(
        arbitrary_types_allowed=True, extra="forbid", frozen=True
    )
