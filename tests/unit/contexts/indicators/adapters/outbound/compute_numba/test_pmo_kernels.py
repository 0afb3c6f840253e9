from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import numpy as np
import pytest

from pmo_indicators.contexts.indicators.adapters.outbound.compute_numba import (
    compute_pmo_grid_f64,
)
from pmo_indicators.contexts.indicators.adapters.outbound.history import SortedHistoryPreparer
from pmo_indicators.contexts.indicators.adapters.outbound.roc import CloseRocSource
from pmo_indicators.contexts.indicators.application.use_cases import ComputePmoUseCase
from pmo_indicators.contexts.indicators.domain.errors import (
    InsufficientHistoryError,
    InvalidParameterError,
)
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.shared_kernel.primitives import Bar, UtcTimestamp


def _close_series(*, t_size: int) -> np.ndarray:
    """
    Build deterministic positive close series rounded to cents.

    Args:
        t_size: Number of timeline rows.
    Returns:
        np.ndarray: Float64 close series.
    Assumptions:
        Two-decimal rounding keeps float and decimal inputs identical.
    Raises:
        None.
    Side Effects:
        Allocates numpy arrays.
    """
    rng = np.random.default_rng(20240101)
    steps = rng.normal(0.0, 1.2, t_size)
    base = 100.0 + np.cumsum(steps) + 5.0 * np.sin(np.arange(t_size) / 7.0)
    return np.round(np.maximum(base, 10.0), 2)


def _decimal_reference(*, close: np.ndarray, params: PmoParams) -> dict[str, np.ndarray]:
    """
    Compute Decimal PMO and convert each stage into float64 arrays with NaN for absence.

    Args:
        close: Float64 close series.
        params: PMO periods.
    Returns:
        dict[str, np.ndarray]: `roc_ema`, `pmo`, `signal` reference arrays.
    Assumptions:
        Closes are exactly representable as two-decimal text.
    Raises:
        None.
    Side Effects:
        None.
    """
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    bars = [
        Bar.from_close(UtcTimestamp(start + timedelta(days=i)), Decimal(f"{value:.2f}"))
        for i, value in enumerate(close.tolist())
    ]
    use_case = ComputePmoUseCase(
        history_preparer=SortedHistoryPreparer(),
        roc_source=CloseRocSource(),
    )
    points = use_case.execute(bars, params)

    def _to_f64(values: list[Decimal | None]) -> np.ndarray:
        return np.array([np.nan if v is None else float(v) for v in values], dtype=np.float64)

    return {
        "roc_ema": _to_f64([p.roc_ema for p in points]),
        "pmo": _to_f64([p.pmo for p in points]),
        "signal": _to_f64([p.signal for p in points]),
    }


def test_compute_pmo_grid_f64_matches_decimal_reference() -> None:
    """
    Verify every variant row of the numba grid matches the Decimal cascade.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Float64 drift stays far below `rtol=1e-9` for these lengths.
    Raises:
        AssertionError: If any variant diverges or warmup NaN positions differ.
    Side Effects:
        Triggers numba compilation.
    """
    close = _close_series(t_size=180)
    variants = [(35, 20, 10), (12, 6, 4), (2, 1, 1)]

    grid = compute_pmo_grid_f64(
        close=close,
        time_periods=np.array([v[0] for v in variants], dtype=np.int64),
        smoothing_periods=np.array([v[1] for v in variants], dtype=np.int64),
        signal_periods=np.array([v[2] for v in variants], dtype=np.int64),
    )

    assert grid.pmo.shape == (3, 180)
    assert grid.pmo.dtype == np.float64
    assert grid.pmo.flags["C_CONTIGUOUS"]

    for row, (time_period, smoothing_period, signal_period) in enumerate(variants):
        params = PmoParams(
            time_period=time_period,
            smoothing_period=smoothing_period,
            signal_period=signal_period,
        )
        reference = _decimal_reference(close=close, params=params)
        for name in ("roc_ema", "pmo", "signal"):
            np.testing.assert_allclose(
                getattr(grid, name)[row],
                reference[name],
                rtol=1e-9,
                atol=1e-9,
                equal_nan=True,
            )


def test_compute_pmo_grid_f64_warmup_columns_are_nan() -> None:
    close = _close_series(t_size=80)

    grid = compute_pmo_grid_f64(
        close=close,
        time_periods=np.array([35], dtype=np.int64),
        smoothing_periods=np.array([20], dtype=np.int64),
        signal_periods=np.array([10], dtype=np.int64),
    )

    # column t holds bar index t + 1
    assert np.isnan(grid.roc_ema[0, :35]).all() and not np.isnan(grid.roc_ema[0, 35])
    assert np.isnan(grid.pmo[0, :54]).all() and not np.isnan(grid.pmo[0, 54])
    assert np.isnan(grid.signal[0, :63]).all() and not np.isnan(grid.signal[0, 63])


def test_compute_pmo_grid_f64_rejects_invalid_variants() -> None:
    close = _close_series(t_size=60)

    with pytest.raises(InvalidParameterError):
        compute_pmo_grid_f64(
            close=close,
            time_periods=np.array([1], dtype=np.int64),
            smoothing_periods=np.array([2], dtype=np.int64),
            signal_periods=np.array([2], dtype=np.int64),
        )

    with pytest.raises(InsufficientHistoryError):
        compute_pmo_grid_f64(
            close=close,
            time_periods=np.array([10, 50], dtype=np.int64),
            smoothing_periods=np.array([5, 20], dtype=np.int64),
            signal_periods=np.array([3, 3], dtype=np.int64),
        )


def test_compute_pmo_grid_f64_rejects_misaligned_or_malformed_arrays() -> None:
    close = _close_series(t_size=60)

    with pytest.raises(ValueError, match="length must match"):
        compute_pmo_grid_f64(
            close=close,
            time_periods=np.array([10, 12], dtype=np.int64),
            smoothing_periods=np.array([5], dtype=np.int64),
            signal_periods=np.array([3, 3], dtype=np.int64),
        )

    with pytest.raises(ValueError, match="1D"):
        compute_pmo_grid_f64(
            close=close.reshape(6, 10),
            time_periods=np.array([2], dtype=np.int64),
            smoothing_periods=np.array([1], dtype=np.int64),
            signal_periods=np.array([1], dtype=np.int64),
        )

    with pytest.raises(ValueError, match="at least one"):
        compute_pmo_grid_f64(
            close=close,
            time_periods=np.array([], dtype=np.int64),
            smoothing_periods=np.array([], dtype=np.int64),
            signal_periods=np.array([], dtype=np.int64),
        )
