from .pmo_cascade import DEFAULT_DECIMAL_PRECISION, ROC_EMA_DISPLAY_SCALE, compute_pmo_cascade
from .seeded_ema import (
    EmaStep,
    delta_step,
    iter_seeded_ema,
    mean_of_present,
    seeded_ema,
    weighted_step,
)

__all__ = [
    "DEFAULT_DECIMAL_PRECISION",
    "ROC_EMA_DISPLAY_SCALE",
    "EmaStep",
    "compute_pmo_cascade",
    "delta_step",
    "iter_seeded_ema",
    "mean_of_present",
    "seeded_ema",
    "weighted_step",
]
