"""Define the available sirinfer inference processes."""

import logging
from typing import Optional

import arviz as az
import jax.numpy as jnp
from jax import Array
from jax.random import PRNGKey
from numpyro.diagnostics import summary as diagnostic_summary
from numpyro.infer import MCMC, NUTS, Predictive, init_to_median
from numpyro.infer.hmc import HMCState
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveFloat,
    PositiveInt,
    PrivateAttr,
)
from typing_extensions import Callable, Literal

from sirinfer.utils import log_decorator

logger = logging.getLogger("sirinfer")


class InferenceProcess(BaseModel):
    """An Inference process for fitting a numpyro model to data.

    Meant to be an Abstract class for specific inference methods.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)
    numpyro_model: Callable = Field(
        description="""Model that samples parameters, solves the ODEs and
        optionally compares the result to observed data, for example
        `single_group_model`."""
    )
    inference_prngkey: Array = Field(
        default_factory=lambda: PRNGKey(8675314)
    )
    # bool flag marking inference complete
    _inference_complete: bool = PrivateAttr(default=False)
    # reference to the numpyro object doing inference
    _inferer: Optional[MCMC] = PrivateAttr(default=None)
    # final sampler state, usable to chain further inference
    _inference_state: Optional[HMCState] = PrivateAttr(default=None)
    # kwargs used to fit, reused to generate predictives.
    _inferer_kwargs: dict = PrivateAttr(default_factory=lambda: dict())

    def infer(self, **kwargs) -> MCMC:
        """Fit the model to data, kwargs are passed to the model."""
        raise NotImplementedError(
            "Inference process not implemented, please use a subclass."
        )

    def get_samples(self, group_by_chain: bool = False) -> dict[str, Array]:
        raise NotImplementedError(
            "get_samples() process not implemented, please use a subclass."
        )

    def _assert_inference_complete(self) -> None:
        if not self._inference_complete:
            raise AssertionError(
                "Inference process not completed, please call infer() first."
            )


class MCMCProcess(InferenceProcess):
    """Fit a model with the No-U-Turn sampler over independent chains."""

    num_samples: PositiveInt
    num_warmup: PositiveInt
    num_chains: PositiveInt = 4
    nuts_max_tree_depth: PositiveInt = 10
    nuts_init_strategy: Callable = init_to_median
    dense_mass: bool = True
    chain_method: Literal["parallel", "sequential", "vectorized"] = Field(
        default="parallel",
        description="""How chains are run, "parallel" needs
        `numpyro.set_host_device_count(num_chains)` before jax starts,
        otherwise numpyro falls back to sequential.""",
    )
    mcmc_kwargs: dict = Field(
        default_factory=lambda: dict(),
        description="""Extra kwargs to MCMC, for more info see:
          https://num.pyro.ai/en/stable/mcmc.html""",
    )
    nuts_kwargs: dict = Field(
        default_factory=lambda: dict(),
        description="""Extra kwargs to NUTS sampler, for more info see:
        https://num.pyro.ai/en/latest/mcmc.html#numpyro.infer.hmc.NUTS""",
    )
    progress_bar: bool = True

    @log_decorator
    def infer(self, **kwargs) -> MCMC:
        """Fit the model to data using NUTS.

        Additional keyword arguments are passed to the model.

        Returns
        -------
        MCMC
            The MCMC object used for inference.
        """
        inferer = MCMC(
            NUTS(
                self.numpyro_model,
                dense_mass=self.dense_mass,
                max_tree_depth=self.nuts_max_tree_depth,
                init_strategy=self.nuts_init_strategy,
                **self.nuts_kwargs,
            ),
            num_warmup=self.num_warmup,
            num_samples=self.num_samples,
            num_chains=self.num_chains,
            chain_method=self.chain_method,
            progress_bar=self.progress_bar,
            **self.mcmc_kwargs,
        )
        logger.info(
            "running NUTS with %s chains of %s warmup and %s samples",
            self.num_chains,
            self.num_warmup,
            self.num_samples,
        )
        inferer.run(rng_key=self.inference_prngkey, **kwargs)
        self._inference_complete = True
        self._inferer = inferer
        self._inference_state = inferer.last_state
        self._inferer_kwargs = kwargs
        return inferer

    def get_samples(self, group_by_chain: bool = False) -> dict[str, Array]:
        """Get the posterior samples from the inference process.

        Parameters
        ----------
        group_by_chain : bool
            whether or not to group posterior samples by chain or not. Adds
            a leading dimension to return dict's values if True.

        Returns
        -------
        dict[str, Array]
            parameter sites and `numpyro.deterministic` sites such as R0
            and incidence, arranged with shape `(num_chains * num_samples,)`
            if group_by_chain=False, otherwise `(num_chains, num_samples)`.
        """
        self._assert_inference_complete()
        assert isinstance(self._inferer, MCMC)
        return self._inferer.get_samples(group_by_chain=group_by_chain)

    @property
    def latent_sites(self) -> list[str]:
        """Names of the sampled free parameters."""
        self._assert_inference_complete()
        assert isinstance(self._inference_state, HMCState)
        return list(self._inference_state.z.keys())

    def posterior_predictive(self, **kwargs) -> dict[str, Array]:
        """Resample the model's unobserved sites for every posterior draw.

        kwargs override those passed to `infer()`, for example
        `forecast=True` to sample cases over every report day.
        """
        self._assert_inference_complete()
        return Predictive(
            self.numpyro_model,
            posterior_samples=self.get_samples(),
        )(
            rng_key=self.inference_prngkey,
            **{**self._inferer_kwargs, **kwargs},
        )

    def posterior_records(self, **predictive_kwargs) -> list[dict]:
        """One plain dict per retained draw.

        Each record holds the free parameters, R0, incidence and the
        posterior predictive cases. `predictive_kwargs` are forwarded to
        `posterior_predictive()`, by default `forecast=True`.
        """
        predictive_kwargs.setdefault("forecast", True)
        samples = {
            **self.get_samples(),
            **self.posterior_predictive(**predictive_kwargs),
        }
        # thinning in mcmc_kwargs retains fewer than num_samples per chain
        num_draws = len(next(iter(samples.values())))
        return [
            {
                name: jnp.asarray(values[draw]).tolist()
                for name, values in samples.items()
                if not name.endswith("_rejected")
            }
            for draw in range(num_draws)
        ]

    def summary(self, prob: float = 0.9) -> dict[str, dict[str, Array]]:
        """Per site mean, quantiles, effective sample size and R-hat."""
        return diagnostic_summary(
            self.get_samples(group_by_chain=True), prob=prob
        )

    def check_convergence(
        self,
        max_r_hat: PositiveFloat = 1.10,
        min_ess: PositiveFloat = 1000,
        sites: Optional[list[str]] = None,
    ) -> bool:
        """Check R-hat and effective sample size of `sites`.

        Parameters
        ----------
        max_r_hat : float
            largest acceptable split R-hat, by default 1.10.
        min_ess : float
            smallest acceptable effective sample size, by default 1000.
        sites : list[str], optional
            sites to check, by default the free parameters.

        Returns
        -------
        bool
            True if every checked site converged, failures are logged as
            warnings.
        """
        stats = self.summary()
        converged = True
        for site in sites if sites is not None else self.latent_sites:
            r_hat = float(jnp.max(stats[site]["r_hat"]))
            n_eff = float(jnp.min(stats[site]["n_eff"]))
            # NaN fails both comparisons
            if not (r_hat <= max_r_hat and n_eff >= min_ess):
                logger.warning(
                    "%s has not converged, r_hat=%.3f n_eff=%.0f",
                    site,
                    r_hat,
                    n_eff,
                )
                converged = False
        return converged

    def to_arviz(self, **predictive_kwargs) -> az.InferenceData:
        """Return the results of a fit as an arviz InferenceData object.

        `predictive_kwargs` are forwarded to `posterior_predictive()`.

        Returns
        -------
        arviz.InferenceData
            arviz InferenceData object containing posterior, prior and
            posterior_predictive groups.

        Raises
        ------
        AssertionError
            if fitting has not yet been run via `infer()`
        """
        self._assert_inference_complete()
        prior = Predictive(self.numpyro_model, num_samples=self.num_samples)(
            rng_key=self.inference_prngkey,
            **self._inferer_kwargs,
        )
        return az.from_numpyro(
            self._inferer,
            prior=prior,
            posterior_predictive=self.posterior_predictive(
                **predictive_kwargs
            ),
        )
