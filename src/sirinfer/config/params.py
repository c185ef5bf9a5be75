"""Module containing solver and observation parameter sets."""

from diffrax import AbstractSolver, Tsit5
from pydantic import Field, NonNegativeFloat, PositiveFloat, PositiveInt

from .parameter_set import ParameterSet


class SolverParams(ParameterSet):
    """Parameters used by the ODE solver."""

    solver_method: AbstractSolver = Field(
        default_factory=lambda: Tsit5(),
        description="""What sort of differential equation solver you wish to
        use to solve ODEs, defaults to Tsit5(), a general solver good for
        non-stiff problems. For more information on picking a solver see:
        https://docs.kidger.site/diffrax/usage/how-to-choose-a-solver/""",
    )
    ode_solver_rel_tolerance: PositiveFloat = Field(
        default=1e-6,
        description="""Solver relative tolerance, used for adaptive step sizer
        to decide the size of a subsequent step. Use constant_step_size to
        switch to constant solver mode. For more information on tolerance see
        the `choosing tolerances` drop down here:
        https://docs.kidger.site/diffrax/api/stepsize_controller/#diffrax.PIDController""",
    )
    ode_solver_abs_tolerance: PositiveFloat = Field(
        default=1e-6,
        description="""Solver absolute tolerance, used for adaptive step sizer
        to decide the size of a subsequent step.""",
    )
    max_steps: PositiveInt = Field(
        default=2000,
        description="""The maximum number of steps the ode solver will take
        for a single solve. Bounds the cost of pathological parameter
        draws, raise it for long or stiff problems.""",
    )
    constant_step_size: NonNegativeFloat = Field(
        default=0,
        description="""If non-zero, solver will use constant step size
        equal to the value set. If 0 solver will use adaptive step size with
        ode_solver_rel/abs_tolerance""",
    )
    throw: bool = Field(
        default=False,
        description="""Whether a failed solve (for example `max_steps`
        exhausted) raises. When False the failure is reported through
        `Solution.result` and inference rejects the proposal instead.""",
    )


class ObservationParams(ParameterSet):
    """Parameters of the negative binomial observation model."""

    epsilon: PositiveFloat = Field(
        default=1e-5,
        description="""Small constant added to every expected count so the
        negative binomial mean stays strictly positive.""",
    )
