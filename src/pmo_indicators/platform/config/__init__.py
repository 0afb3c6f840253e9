from .pmo_runtime import PmoRuntimeConfig, load_pmo_runtime_config

__all__ = [
    "PmoRuntimeConfig",
    "load_pmo_runtime_config",
]
