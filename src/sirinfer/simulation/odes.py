"""Solve SIR vector fields with diffrax."""

import logging
from inspect import getfullargspec
from typing import get_type_hints

import chex
import jax.numpy as jnp
from diffrax import (  # type: ignore
    RESULTS,
    AbstractStepSizeController,
    ConstantStepSize,
    ODETerm,
    PIDController,
    SaveAt,
    Solution,
    diffeqsolve,
)
from jax import Array
from jax.typing import ArrayLike

from sirinfer.config import SolverParams
from sirinfer.typing import CompartmentState, ODE_Eqns

logger = logging.getLogger("sirinfer")


@chex.dataclass
class AbstractODEParams:
    """The internal representation containing parameters passed to the ODEs.

    Subclasses hold named jax values, one field per parameter, along with
    any fixed data (population sizes, contact rates) the vector field needs.
    """


def simulate(
    ode: ODE_Eqns,
    initial_state: CompartmentState,
    ode_parameters: AbstractODEParams,
    solver_parameters: SolverParams,
    save_times: ArrayLike,
    initial_time: float = 0.0,
) -> Solution:
    """Solve `ode` from `initial_time`, reporting the state at `save_times`.

    Parameters
    ----------
    ode: ODE_Eqns
        a callable that takes in a numeric time, a compartment state, and the
        passed `ode_parameters` in that order and returns the gradients
        of the compartment state at that numeric time. Must be free of
        side effects, the solver calls it at arbitrary times.
    initial_state : CompartmentState
        tuple of jax arrays representing the compartments modeled by
        ODEs in their initial states at `initial_time`.
    ode_parameters : AbstractODEParams
        parameters of the vector field, of the exact type `ode` annotates
        its third argument with.
    solver_parameters : SolverParams
        solver specific parameters that dictate how the ODE solver works.
    save_times : ArrayLike
        strictly increasing report times, the solve ends at the last one.
    initial_time : float, optional
        time of `initial_state`, by default 0.

    Returns
    -------
    diffrax.Solution
        Solution object, `sol.ys` containing compartment states at each of
        `save_times`. When `solver_parameters.throw` is False a failed solve
        is reported through `sol.result`, see `solution_succeeded()`.

    Raises
    ------
    TypeError
        `initial_state` must only contain jax.Array types.
    """
    if any(
        [not isinstance(compartment, Array) for compartment in initial_state]
    ):
        raise TypeError(
            "Please pass jax.numpy.array instead of np.array to ODEs"
        )
    # check that simulate passes expected params object to `ode`
    expected_ode_parameters_type = get_type_hints(ode)[
        getfullargspec(ode).args[2]
    ]
    assert type(ode_parameters) is expected_ode_parameters_type, (
        f"passed {type(ode_parameters)} ode parameters, but your ODE model "
        f"expects {expected_ode_parameters_type}"
    )
    save_times = jnp.asarray(save_times)
    term = ODETerm(ode)

    stepsize_controller: AbstractStepSizeController
    if solver_parameters.constant_step_size > 0.0:
        stepsize_controller = ConstantStepSize()
        dt0 = solver_parameters.constant_step_size
    else:
        # first step size determined automatically
        stepsize_controller = PIDController(
            rtol=solver_parameters.ode_solver_rel_tolerance,
            atol=solver_parameters.ode_solver_abs_tolerance,
        )
        dt0 = None
    logger.debug(
        "solving %s with %s, rtol=%s atol=%s max_steps=%s",
        getattr(ode, "__name__", ode),
        type(solver_parameters.solver_method).__name__,
        solver_parameters.ode_solver_rel_tolerance,
        solver_parameters.ode_solver_abs_tolerance,
        solver_parameters.max_steps,
    )

    return diffeqsolve(
        term,
        solver_parameters.solver_method,
        initial_time,
        save_times[-1],
        dt0,
        initial_state,
        args=ode_parameters,
        stepsize_controller=stepsize_controller,
        saveat=SaveAt(ts=save_times),
        max_steps=solver_parameters.max_steps,
        throw=solver_parameters.throw,
    )


def solution_succeeded(solution: Solution) -> Array:
    """Boolean jax scalar, True if the solver reached the final time."""
    return solution.result == RESULTS.successful
