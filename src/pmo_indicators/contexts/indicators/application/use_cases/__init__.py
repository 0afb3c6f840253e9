from .compute_pmo import PMO_ROC_LOOKBACK, ComputePmoUseCase

__all__ = [
    "PMO_ROC_LOOKBACK",
    "ComputePmoUseCase",
]
