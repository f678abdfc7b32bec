from npzd import runtime_settings, runtime_state

numpy = runtime_state.backend_module

if runtime_settings.backend not in ("numpy", "jax"):
    raise ValueError(f"Unrecognized backend {runtime_settings.backend}")
