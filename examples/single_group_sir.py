"""Fit the single population SIR model to synthetic daily cases.

Cases are simulated from known parameters, the first 100 days are fitted
with four NUTS chains and the posterior is used to forecast all 120 days.
"""

import jax
import jax.numpy as jnp
import numpyro

# chains run in parallel across host devices, must be set before jax starts
numpyro.set_host_device_count(4)
jax.config.update("jax_enable_x64", True)

from sirinfer import (  # noqa: E402
    MCMCProcess,
    SingleGroupConfig,
    SingleGroupData,
    single_group_model,
    synthetic_single_group_cases,
    use_logging,
)

TRUE_BETA = 2 / 7
TRUE_GAMMA = 1 / 7
TRUE_I0 = 5.0
TRUE_D_INV = 0.05


def get_config(number_data: int = 0, observed_cases=None):
    data = SingleGroupData(time_simulation=120, population=1000.0)
    if observed_cases is not None:
        data = data.with_observed_cases(observed_cases[:number_data])
    return SingleGroupConfig(data=data)


if __name__ == "__main__":
    use_logging("info")
    # %%
    # produce synthetic data with fixed parameters
    config_static = get_config()
    cases = synthetic_single_group_cases(
        config_static,
        jax.random.PRNGKey(0),
        beta=TRUE_BETA,
        gamma=TRUE_GAMMA,
        i0=TRUE_I0,
        d_inv=TRUE_D_INV,
    )
    # %%
    # fit the first 100 days
    config_infer = get_config(number_data=100, observed_cases=cases)
    inference_process = MCMCProcess(
        numpyro_model=single_group_model,
        num_warmup=1000,
        num_samples=1000,
        num_chains=4,
    )
    inference_process.infer(config=config_infer)
    samples = inference_process.get_samples()
    for site, stats in inference_process.summary().items():
        if site in inference_process.latent_sites or site == "R0":
            print(
                f"{site}: mean {float(jnp.mean(stats['mean'])):.4f} "
                f"r_hat {float(jnp.max(stats['r_hat'])):.3f} "
                f"n_eff {float(jnp.min(stats['n_eff'])):.0f}"
            )
    print(
        f"Parameterized R0: {TRUE_BETA / TRUE_GAMMA:.3f}, "
        f"posterior R0: {float(jnp.mean(samples['R0'])):.3f}"
    )
    print(f"converged: {inference_process.check_convergence()}")
    # %%
    # forecast every report day from the posterior
    forecast = inference_process.posterior_predictive(forecast=True)
    median = jnp.median(forecast["cases"][..., 0], axis=0)
    low, high = jnp.quantile(
        forecast["cases"][..., 0], jnp.array([0.05, 0.95]), axis=0
    )
    for day in range(config_infer.data.number_data, len(median)):
        print(
            f"day {day + 1}: simulated {int(cases[day, 0])}, forecast "
            f"{float(median[day]):.0f} [{float(low[day]):.0f}, "
            f"{float(high[day]):.0f}]"
        )
