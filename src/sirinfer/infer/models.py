"""Numpyro models of the single and two group SIR epidemics.

Each call samples the free parameters from the configured priors, solves
the ODEs from scratch, derives the incidence, and compares it to the
observed counts. Nothing is cached between proposals.

Recorded sites per draw: every free parameter, `R0`, `incidence` over all
report days, and `cases`, observed over the first `number_data` days or,
with `forecast=True`, sampled over every report day.
"""

import numpyro
from diffrax import Solution
from jax import Array

from sirinfer.config import (
    EpidemicData,
    SingleGroupConfig,
    TwoGroupConfig,
    sample_parameters,
)
from sirinfer.simulation import single_group, solution_succeeded, two_group

from .likelihood import expected_cases, observe_cases


def _observe(
    expected: Array,
    d_inv: Array,
    data: EpidemicData,
    solution: Solution,
    forecast: bool,
) -> Array:
    accepted = solution_succeeded(solution)
    if forecast:
        return observe_cases("cases", expected, d_inv, accepted=accepted)
    if data.number_data == 0:
        raise ValueError(
            "no observed cases to fit, set observed_cases on the data or "
            "call the model with forecast=True"
        )
    return observe_cases(
        "cases",
        expected[: data.number_data],
        d_inv,
        observed=data.observed,
        accepted=accepted,
    )


def single_group_model(
    config: SingleGroupConfig, forecast: bool = False
) -> Solution:
    """Numpyro model of the single population SIR epidemic.

    Parameters
    ----------
    config : SingleGroupConfig
        data, priors, solver and observation settings.
    forecast : bool, optional
        if True, cases are sampled for every report day instead of being
        observed, by default False.

    Returns
    -------
    diffrax.Solution
        the solved trajectory of this proposal.
    """
    data = config.data
    params = sample_parameters(config.priors)
    ode_params = single_group.SingleGroupODEParams(
        beta=params["beta"],
        gamma=params["gamma"],
        population=data.populations,
    )
    solution = single_group.simulate_trajectory(
        ode_params, params["i0"], data, config.solver_params
    )
    r0 = single_group.reproduction_number(params["beta"], params["gamma"])
    numpyro.deterministic("R0", r0)
    incidence = numpyro.deterministic(
        "incidence", single_group.incidence(solution.ys, ode_params)
    )
    _observe(
        expected_cases(incidence, config.observation_params.epsilon),
        params["d_inv"],
        data,
        solution,
        forecast,
    )
    return solution


def two_group_model(
    config: TwoGroupConfig, forecast: bool = False
) -> Solution:
    """Numpyro model of the two age group SIR epidemic.

    Both groups' counts share one `d_inv`, each group has its own
    recovery rate.

    Parameters
    ----------
    config : TwoGroupConfig
        data, priors, solver and observation settings.
    forecast : bool, optional
        if True, cases are sampled for every report day instead of being
        observed, by default False.

    Returns
    -------
    diffrax.Solution
        the solved trajectory of this proposal.
    """
    data = config.data
    params = sample_parameters(config.priors)
    ode_params = two_group.TwoGroupODEParams(
        beta=params["beta"],
        gamma_1=params["gamma_1"],
        gamma_2=params["gamma_2"],
        population=data.populations,
        contact_matrix=data.contact,
    )
    solution = two_group.simulate_trajectory(
        ode_params,
        params["i1_0"],
        params["i2_0"],
        data,
        config.solver_params,
    )
    numpyro.deterministic("R0", two_group.reproduction_number(ode_params))
    incidence = numpyro.deterministic(
        "incidence", two_group.incidence(solution.ys, ode_params)
    )
    _observe(
        expected_cases(incidence, config.observation_params.epsilon),
        params["d_inv"],
        data,
        solution,
        forecast,
    )
    return solution

