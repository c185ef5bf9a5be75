"""The single population SIR model.

    dS/dt = -beta * I/N * S
    dI/dt =  beta * I/N * S - gamma * I
    dR/dt =  gamma * I

Each compartment is a jax array with one entry, so trajectories carry a
trailing group axis of size 1 like those of the two group model.
"""

import chex
import jax.numpy as jnp
from diffrax import Solution
from jax import Array
from jax.typing import ArrayLike

from sirinfer.config import SingleGroupData, SolverParams
from sirinfer.typing import (
    CompartmentGradients,
    CompartmentState,
    CompartmentTimeseries,
)

from .odes import AbstractODEParams, simulate


@chex.dataclass
class SingleGroupODEParams(AbstractODEParams):
    beta: chex.ArrayDevice  # transmission rate
    gamma: chex.ArrayDevice  # recovery rate
    population: chex.ArrayDevice  # N, shape (1,)


def single_group_ode(
    t: float, state: CompartmentState, p: SingleGroupODEParams
) -> CompartmentGradients:
    """SIR gradients at time `t`, negative compartments are not clamped."""
    s, i, _ = state
    s_to_i = p.beta * i / p.population * s
    i_to_r = p.gamma * i
    ds = -s_to_i
    di = s_to_i - i_to_r
    dr = i_to_r
    return tuple([ds, di, dr])


def get_initial_state(
    population: ArrayLike, initial_infectious: ArrayLike
) -> CompartmentState:
    """Everyone susceptible except `initial_infectious`, nobody recovered."""
    population = jnp.atleast_1d(population) * 1.0
    i_0 = jnp.broadcast_to(initial_infectious, population.shape) * 1.0
    return (population - i_0, i_0, jnp.zeros_like(population))


def simulate_trajectory(
    ode_parameters: SingleGroupODEParams,
    initial_infectious: ArrayLike,
    data: SingleGroupData,
    solver_parameters: SolverParams,
) -> Solution:
    """Integrate the model over every report time of `data`."""
    return simulate(
        single_group_ode,
        initial_state=get_initial_state(
            ode_parameters.population, initial_infectious
        ),
        ode_parameters=ode_parameters,
        solver_parameters=solver_parameters,
        save_times=data.report_times,
        initial_time=data.initial_time,
    )


def incidence(
    trajectory: CompartmentTimeseries, p: SingleGroupODEParams
) -> Array:
    """Expected new infections per report time, beta * I/N * S."""
    s, i, _ = trajectory
    return p.beta * i / p.population * s


def reproduction_number(beta: ArrayLike, gamma: ArrayLike) -> Array:
    return jnp.asarray(beta) / gamma
