import jax

# counts and populations are compared at double precision
jax.config.update("jax_enable_x64", True)
