"""sirinfer, Bayesian inference for SIR epidemic models.

sirinfer fits single population and two age group SIR models to daily case
counts. The ODEs are solved with diffrax and the transmission, recovery,
initial infection and dispersion parameters are sampled with numpyro's
No-U-Turn sampler under a negative binomial observation model.
"""

import importlib

from . import config, infer, simulation, typing, utils

# Defines all the different modules able to be imported from src
__all__ = ["config", "infer", "simulation", "typing", "utils"]
submodules = ["config", "infer", "simulation", "typing", "utils"]
# Append the __all__ of all submodules to the main __all__
for submodule in submodules:
    module = importlib.import_module(f".{submodule}", package="sirinfer")
    if hasattr(module, "__all__"):
        for attr in module.__all__:
            globals()[attr] = getattr(module, attr)
            __all__.append(attr)
# flattens all submodules into the sirinfer namespace.
