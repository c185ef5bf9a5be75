"""Module for declaring types shared across sirinfer."""

from typing import Annotated, Callable, Tuple

import jax
from annotated_types import Gt, Lt
from jaxtyping import PyTree

CompartmentState = Tuple[jax.Array, ...]
CompartmentGradients = Tuple[jax.Array, ...]
CompartmentTimeseries = CompartmentState

# a rate strictly inside (0, 1), such as beta or gamma
OpenUnitIntervalFloat = Annotated[float, Gt(0.0), Lt(1.0)]

ODE_Eqns = Callable[
    [jax.typing.ArrayLike, CompartmentState, PyTree],
    CompartmentGradients,
]

# daily counts, leading axis is time, trailing axis is population group
ObservedData = jax.Array
