from .pmo_kernels import PmoGrid, compute_pmo_grid_f64
from .warmup import (
    PmoNumbaWarmupRunner,
    apply_numba_runtime_config,
    ensure_numba_cache_dir_writable,
)

__all__ = [
    "PmoGrid",
    "PmoNumbaWarmupRunner",
    "apply_numba_runtime_config",
    "compute_pmo_grid_f64",
    "ensure_numba_cache_dir_writable",
]
