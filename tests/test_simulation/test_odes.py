import chex
import jax.numpy as jnp
import numpy as np
import pytest

import sirinfer.config as config
import sirinfer.simulation as simulation
from sirinfer.typing import CompartmentGradients, CompartmentState


@chex.dataclass
class TestingODEParams(simulation.AbstractODEParams):
    beta: chex.ArrayDevice  # r0/infectious period
    gamma: chex.ArrayDevice  # 1/infectious period


def sir_ode(
    t: float, state: CompartmentState, p: TestingODEParams
) -> CompartmentGradients:
    """A simple SIR ODE model with no time-varying components."""
    s, i, _ = state
    s_to_i = p.beta * s * i
    i_to_r = i * p.gamma
    ds = -s_to_i
    di = s_to_i - i_to_r
    dr = i_to_r
    return tuple([ds, di, dr])


@pytest.fixture
def ode_params():
    r0 = 2.0
    infectious_period = 7.0
    return TestingODEParams(
        beta=r0 / infectious_period, gamma=1 / infectious_period
    )


@pytest.fixture
def initial_state():
    return tuple([jnp.array([0.99]), jnp.array([0.01]), jnp.array([0.0])])


def test_simulation_expected_shapes(ode_params, initial_state):
    for days in [50, 100, 200]:
        solution = simulation.simulate(
            sir_ode,
            initial_state=initial_state,
            ode_parameters=ode_params,
            solver_parameters=config.SolverParams(),
            save_times=jnp.arange(1, days + 1),
        )
        assert all(
            [
                solution.ys[compartment].shape == (days, 1)
                for compartment in range(len(initial_state))
            ]
        )
        assert simulation.solution_succeeded(solution)


def test_simulation_initial_time(ode_params, initial_state):
    solution = simulation.simulate(
        sir_ode,
        initial_state=initial_state,
        ode_parameters=ode_params,
        solver_parameters=config.SolverParams(),
        save_times=jnp.array([10.0, 10.5, 20.0]),
        initial_time=10.0,
    )
    # first report time is the initial time itself
    assert jnp.allclose(solution.ys[0][0], initial_state[0])
    assert jnp.allclose(solution.ts, jnp.array([10.0, 10.5, 20.0]))


def test_constant_step_size_matches_adaptive(ode_params, initial_state):
    save_times = jnp.arange(1, 31)
    adaptive = simulation.simulate(
        sir_ode,
        initial_state,
        ode_params,
        config.SolverParams(),
        save_times,
    )
    constant = simulation.simulate(
        sir_ode,
        initial_state,
        ode_params,
        config.SolverParams(constant_step_size=0.1),
        save_times,
    )
    for adaptive_ys, constant_ys in zip(adaptive.ys, constant.ys):
        assert jnp.allclose(adaptive_ys, constant_ys, atol=1e-5)


def test_simulation_numpy_state_raises(ode_params):
    initial_state = tuple([np.array([0.99]), np.array([0.01]), np.array([0])])
    with pytest.raises(TypeError):
        simulation.simulate(
            sir_ode,
            initial_state=initial_state,
            ode_parameters=ode_params,
            solver_parameters=config.SolverParams(),
            save_times=jnp.arange(1, 11),
        )


def test_simulation_wrong_params_type(initial_state):
    @chex.dataclass
    class OtherParams(simulation.AbstractODEParams):
        beta: chex.ArrayDevice
        gamma: chex.ArrayDevice

    with pytest.raises(AssertionError):
        simulation.simulate(
            sir_ode,
            initial_state=initial_state,
            ode_parameters=OtherParams(beta=0.3, gamma=0.1),
            solver_parameters=config.SolverParams(),
            save_times=jnp.arange(1, 11),
        )


def test_exhausted_step_budget_is_reported(ode_params, initial_state):
    solution = simulation.simulate(
        sir_ode,
        initial_state=initial_state,
        ode_parameters=ode_params,
        solver_parameters=config.SolverParams(max_steps=1),
        save_times=jnp.arange(1, 101),
    )
    assert not simulation.solution_succeeded(solution)
    assert not jnp.all(jnp.isfinite(solution.ys[0]))
