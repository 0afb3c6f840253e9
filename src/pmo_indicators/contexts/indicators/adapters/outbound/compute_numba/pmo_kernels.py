"""
Numba float64 kernels for Price Momentum Oscillator parameter grids.

Related: pmo_indicators.contexts.indicators.domain.services.pmo_cascade,
  pmo_indicators.contexts.indicators.domain.specifications.pmo_params
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import numba as nb
import numpy as np

from pmo_indicators.contexts.indicators.domain.specifications import PmoParams

ROC_EMA_DISPLAY_SCALE_F64 = 10.0


@dataclass(frozen=True, slots=True)
class PmoGrid:
    """
    Variant-major `(V, T)` float64 outputs for one close series.

    NaN marks positions where a stage has not warmed up.
    """

    roc_ema: np.ndarray
    pmo: np.ndarray
    signal: np.ndarray


@nb.njit(cache=True)
def _roc_series_f64(close: np.ndarray, lookback: int) -> np.ndarray:
    """
    Compute close-to-close ROC in percent.

    Args:
        close: Float64 close series.
        lookback: Positive integer lag.
    Returns:
        np.ndarray: Float64 ROC series.
    Assumptions:
        Warmup is `t < lookback`; NaN or zero lagged close yields NaN.
    Raises:
        None.
    Side Effects:
        Allocates one output array.
    """
    t_size = close.shape[0]
    out = np.empty(t_size, dtype=np.float64)
    for time_index in range(t_size):
        if time_index < lookback:
            out[time_index] = np.nan
            continue
        current = float(close[time_index])
        previous = float(close[time_index - lookback])
        if math.isnan(current) or math.isnan(previous) or previous == 0.0:
            out[time_index] = np.nan
        else:
            out[time_index] = 100.0 * (current - previous) / previous
    return out


@nb.njit(cache=True)
def _seeded_ema_series_f64(
    source: np.ndarray,
    seed_position: int,
    window: int,
    alpha: float,
    weighted: bool,
) -> np.ndarray:
    """
    Seed with a trailing mean at `seed_position`, then recurse.

    Args:
        source: Float64 source series.
        seed_position: 0-based seed position.
        window: Seed window width.
        alpha: Smoothing constant.
        weighted: `current * a + prev * (1 - a)` when True,
            `(current - prev) * a + prev` otherwise.
    Returns:
        np.ndarray: Float64 smoothed series.
    Assumptions:
        The seed mean skips NaN values; recursion propagates NaN.
    Raises:
        None.
    Side Effects:
        Allocates one output array.
    """
    t_size = source.shape[0]
    out = np.empty(t_size, dtype=np.float64)
    previous = np.nan
    for time_index in range(t_size):
        if time_index < seed_position:
            out[time_index] = np.nan
            continue
        if time_index == seed_position:
            start = time_index - window + 1
            if start < 0:
                start = 0
            total = 0.0
            count = 0
            for index in range(start, time_index + 1):
                value = float(source[index])
                if not math.isnan(value):
                    total += value
                    count += 1
            previous = total / count if count > 0 else np.nan
        else:
            current = float(source[time_index])
            if math.isnan(current) or math.isnan(previous):
                previous = np.nan
            elif weighted:
                previous = current * alpha + previous * (1.0 - alpha)
            else:
                previous = (current - previous) * alpha + previous
        out[time_index] = previous
    return out


@nb.njit(parallel=True, cache=True)
def _pmo_variants_f64(
    close: np.ndarray,
    time_periods: np.ndarray,
    smoothing_periods: np.ndarray,
    signal_periods: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Compute ROC-EMA, PMO and signal matrices for per-variant periods.

    Args:
        close: Float64 close series.
        time_periods: Per-variant ROC-EMA periods.
        smoothing_periods: Per-variant PMO periods.
        signal_periods: Per-variant signal periods.
    Returns:
        tuple[np.ndarray, np.ndarray, np.ndarray]: Three `(V, T)` float64 matrices.
    Assumptions:
        Periods were validated by the Python wrapper.
    Raises:
        None.
    Side Effects:
        Allocates output matrices and per-variant temporaries.
    """
    variants = time_periods.shape[0]
    t_size = close.shape[0]
    roc = _roc_series_f64(close, 1)
    roc_ema_out = np.empty((variants, t_size), dtype=np.float64)
    pmo_out = np.empty((variants, t_size), dtype=np.float64)
    signal_out = np.empty((variants, t_size), dtype=np.float64)
    for variant_index in nb.prange(variants):
        time_period = int(time_periods[variant_index])
        smoothing_period = int(smoothing_periods[variant_index])
        signal_period = int(signal_periods[variant_index])

        roc_ema_raw = _seeded_ema_series_f64(
            roc,
            time_period,
            time_period,
            2.0 / time_period,
            True,
        )
        roc_ema = roc_ema_raw * ROC_EMA_DISPLAY_SCALE_F64
        pmo = _seeded_ema_series_f64(
            roc_ema,
            time_period + smoothing_period - 1,
            smoothing_period,
            2.0 / smoothing_period,
            False,
        )
        signal = _seeded_ema_series_f64(
            pmo,
            time_period + smoothing_period + signal_period - 2,
            signal_period,
            2.0 / (signal_period + 1.0),
            False,
        )
        roc_ema_out[variant_index, :] = roc_ema
        pmo_out[variant_index, :] = pmo
        signal_out[variant_index, :] = signal
    return roc_ema_out, pmo_out, signal_out


def compute_pmo_grid_f64(
    *,
    close: np.ndarray,
    time_periods: np.ndarray,
    smoothing_periods: np.ndarray,
    signal_periods: np.ndarray,
) -> PmoGrid:
    """
    Compute PMO outputs for `V` parameter variants over one close series.

    Args:
        close: One-dimensional close series in date order.
        time_periods: Per-variant ROC-EMA periods.
        smoothing_periods: Per-variant PMO periods.
        signal_periods: Per-variant signal periods.
    Returns:
        PmoGrid: Float64 C-contiguous `(V, T)` matrices.
    Assumptions:
        Column `t` corresponds to 1-based bar index `t + 1`.
    Raises:
        ValueError: If arrays are malformed or misaligned.
        InvalidParameterError: If any variant violates period bounds.
        InsufficientHistoryError: If `close` is shorter than any variant's hard minimum.
    Side Effects:
        Triggers numba compilation on first call (cached on disk).
    """
    close_f64 = _prepare_series(name="close", values=close)
    time_i64 = _prepare_int_variants(name="time_periods", values=time_periods)
    smoothing_i64 = _prepare_int_variants(
        name="smoothing_periods",
        values=smoothing_periods,
        expected_size=time_i64.shape[0],
    )
    signal_i64 = _prepare_int_variants(
        name="signal_periods",
        values=signal_periods,
        expected_size=time_i64.shape[0],
    )

    for variant_index in range(time_i64.shape[0]):
        params = PmoParams(
            time_period=int(time_i64[variant_index]),
            smoothing_period=int(smoothing_i64[variant_index]),
            signal_period=int(signal_i64[variant_index]),
        )
        params.validate_history(count=close_f64.shape[0])

    roc_ema, pmo, signal = _pmo_variants_f64(close_f64, time_i64, smoothing_i64, signal_i64)
    return PmoGrid(
        roc_ema=np.ascontiguousarray(roc_ema),
        pmo=np.ascontiguousarray(pmo),
        signal=np.ascontiguousarray(signal),
    )


def _prepare_series(*, name: str, values: np.ndarray | None) -> np.ndarray:
    """
    Normalize mandatory one-dimensional series input.

    Args:
        name: Logical input name for deterministic error messages.
        values: Series input.
    Returns:
        np.ndarray: Float64 C-contiguous one-dimensional array.
    Assumptions:
        Series may include NaN values; they propagate through the cascade.
    Raises:
        ValueError: If input is missing or not one-dimensional.
    Side Effects:
        Allocates normalized array.
    """
    if values is None:
        raise ValueError(f"{name} series is required")
    out = np.ascontiguousarray(values, dtype=np.float64)
    if out.ndim != 1:
        raise ValueError(f"{name} must be a 1D array")
    return out


def _prepare_int_variants(
    *,
    name: str,
    values: np.ndarray | None,
    expected_size: int | None = None,
) -> np.ndarray:
    """
    Normalize integer per-variant parameter vector.

    Args:
        name: Logical parameter name for deterministic error messages.
        values: Parameter vector.
        expected_size: Optional expected length for strict alignment checks.
    Returns:
        np.ndarray: Int64 C-contiguous vector.
    Assumptions:
        Bounds are checked per variant by `PmoParams`.
    Raises:
        ValueError: If vector is missing, empty, or misaligned.
    Side Effects:
        Allocates normalized vector.
    """
    if values is None:
        raise ValueError(f"{name} vector is required")
    out = np.ascontiguousarray(values, dtype=np.int64)
    if out.ndim != 1:
        raise ValueError(f"{name} must be a 1D array")
    if out.shape[0] == 0:
        raise ValueError(f"{name} must contain at least one value")
    if expected_size is not None and out.shape[0] != expected_size:
        raise ValueError(
            f"{name} length must match variants: "
            f"expected={expected_size}, got={out.shape[0]}"
        )
    return out


__all__ = [
    "PmoGrid",
    "compute_pmo_grid_f64",
]
