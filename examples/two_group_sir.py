"""Fit the two age group SIR model to synthetic daily cases.

The contact matrix is reciprocal under population weighting and the true
parameters give a basic reproduction number of exactly 2.
"""

import jax
import jax.numpy as jnp
import numpyro

# chains run in parallel across host devices, must be set before jax starts
numpyro.set_host_device_count(4)
jax.config.update("jax_enable_x64", True)

from sirinfer import (  # noqa: E402
    MCMCProcess,
    TwoGroupConfig,
    TwoGroupData,
    synthetic_two_group_cases,
    two_group_model,
    use_logging,
)

TRUE_PARAMS = {
    "beta": 1 / 35,
    "gamma_1": 1 / 7,
    "gamma_2": 1 / 10,
    "i1_0": 5.0,
    "i2_0": 2.0,
    "d_inv": 0.05,
}


def get_config(number_data: int = 0, observed_cases=None):
    data = TwoGroupData(
        time_simulation=150,
        population=(750.0, 250.0),
        contact_matrix=[[4.0, 2.0], [6.0, 5.0]],
    )
    if observed_cases is not None:
        data = data.with_observed_cases(observed_cases[:number_data])
    return TwoGroupConfig(data=data)


if __name__ == "__main__":
    use_logging("info")
    # %%
    config_static = get_config()
    cases = synthetic_two_group_cases(
        config_static, jax.random.PRNGKey(1), **TRUE_PARAMS
    )
    # %%
    config_infer = get_config(number_data=120, observed_cases=cases)
    inference_process = MCMCProcess(
        numpyro_model=two_group_model,
        num_warmup=1000,
        num_samples=1000,
        num_chains=4,
    )
    inference_process.infer(config=config_infer)
    samples = inference_process.get_samples()
    for site in inference_process.latent_sites:
        print(
            f"{site}: true {TRUE_PARAMS[site]:.4f}, "
            f"posterior mean {float(jnp.mean(samples[site])):.4f}"
        )
    print(f"posterior R0: {float(jnp.mean(samples['R0'])):.3f}, true 2.0")
    print(f"converged: {inference_process.check_convergence()}")
    # %%
    forecast = inference_process.posterior_predictive(forecast=True)
    # total forecast cases over the unobserved days, per group
    unobserved = slice(config_infer.data.number_data, None)
    for group in range(2):
        totals = jnp.sum(forecast["cases"][:, unobserved, group], axis=1)
        low, high = jnp.quantile(totals, jnp.array([0.05, 0.95]))
        print(
            f"group {group + 1}: simulated "
            f"{int(jnp.sum(cases[unobserved, group]))}, forecast "
            f"{float(jnp.median(totals)):.0f} [{float(low):.0f}, "
            f"{float(high):.0f}]"
        )
