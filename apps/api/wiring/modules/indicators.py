"""
Composition helpers for indicators API module.

Related: apps.api.routes.indicators, pmo_indicators.platform.config.pmo_runtime
"""

from __future__ import annotations

from pmo_indicators.contexts.indicators.adapters.outbound.compute_numba import (
    PmoNumbaWarmupRunner,
)
from pmo_indicators.contexts.indicators.adapters.outbound.history import SortedHistoryPreparer
from pmo_indicators.contexts.indicators.adapters.outbound.roc import CloseRocSource
from pmo_indicators.contexts.indicators.application.use_cases import ComputePmoUseCase
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.platform.config import PmoRuntimeConfig


def build_compute_pmo_use_case(*, config: PmoRuntimeConfig) -> ComputePmoUseCase:
    """
    Build Decimal PMO use case with default history/ROC adapters.

    Args:
        config: Loaded runtime config.
    Returns:
        ComputePmoUseCase: Ready-to-use use case.
    Assumptions:
        Adapters are stateless and shared across requests.
    Raises:
        ValueError: If decimal precision is invalid.
    Side Effects:
        None.
    """
    return ComputePmoUseCase(
        history_preparer=SortedHistoryPreparer(),
        roc_source=CloseRocSource(precision=config.decimal_precision),
        decimal_precision=config.decimal_precision,
    )


def build_default_pmo_params(*, config: PmoRuntimeConfig) -> PmoParams:
    """
    Build default periods from runtime config (fail-fast at startup).

    Args:
        config: Loaded runtime config.
    Returns:
        PmoParams: Validated default periods.
    Assumptions:
        None.
    Raises:
        InvalidParameterError: If configured periods violate bounds.
    Side Effects:
        None.
    """
    return PmoParams(
        time_period=config.time_period,
        smoothing_period=config.smoothing_period,
        signal_period=config.signal_period,
    )


def warmup_pmo_compute(*, config: PmoRuntimeConfig) -> PmoNumbaWarmupRunner:
    """
    Apply numba runtime settings and compile grid kernels at startup.

    Args:
        config: Loaded runtime config.
    Returns:
        PmoNumbaWarmupRunner: Warmed-up runner.
    Assumptions:
        Called once per process.
    Raises:
        ValueError: If numba cache dir is not writable.
    Side Effects:
        JIT compilation and process env mutation.
    """
    runner = PmoNumbaWarmupRunner(config=config)
    runner.warmup()
    return runner
