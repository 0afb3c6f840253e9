from .indicators import build_compute_pmo_use_case, build_default_pmo_params, warmup_pmo_compute

__all__ = [
    "build_compute_pmo_use_case",
    "build_default_pmo_params",
    "warmup_pmo_compute",
]
