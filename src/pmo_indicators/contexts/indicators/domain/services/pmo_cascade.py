"""
Three-stage PMO smoothing cascade over a rate-of-change series.

Related: .seeded_ema, ..specifications.pmo_params,
  ...application.use_cases.compute_pmo
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Sequence

from pmo_indicators.contexts.indicators.domain.entities import PmoPoint, RocPoint
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams

from .seeded_ema import delta_step, seeded_ema, weighted_step

DEFAULT_DECIMAL_PRECISION = 28
ROC_EMA_DISPLAY_SCALE = Decimal(10)


def compute_pmo_cascade(
    roc_points: Sequence[RocPoint],
    params: PmoParams,
    *,
    precision: int = DEFAULT_DECIMAL_PRECISION,
) -> tuple[PmoPoint, ...]:
    """
    Smooth ROC into ROC-EMA, PMO and signal series and assemble output points.

    Stage constants:
    - ROC-EMA: seed at index `time_period + 1`, alpha `2 / time_period`,
      weighted recursion on the raw value; output is raw x10.
    - PMO: seed at `time_period + smoothing_period`, alpha `2 / smoothing_period`,
      delta recursion on the x10 ROC-EMA.
    - Signal: seed at `time_period + smoothing_period + signal_period - 1`,
      alpha `2 / (signal_period + 1)`, delta recursion on PMO.

    Args:
        roc_points: ROC series with contiguous 1-based indices.
        params: Validated PMO periods.
        precision: Decimal significant digits for all arithmetic.
    Returns:
        tuple[PmoPoint, ...]: One point per ROC point, in order.
    Assumptions:
        History length was already checked by `PmoParams.validate_history`.
    Raises:
        ValueError: If indices are not `1..N` in order or precision is not positive.
    Side Effects:
        None. Arithmetic runs in a call-local decimal context.
    """
    if precision <= 0:
        raise ValueError(f"precision must be > 0, got {precision}")
    _ensure_contiguous_indices(roc_points=roc_points)

    time_period = params.time_period
    smoothing_period = params.smoothing_period
    signal_period = params.signal_period

    with localcontext() as ctx:
        ctx.prec = precision

        alpha_roc_ema = Decimal(2) / time_period
        alpha_pmo = Decimal(2) / smoothing_period
        alpha_signal = Decimal(2) / (signal_period + 1)

        roc_values = [point.roc for point in roc_points]

        # positions are 0-based: position = index - 1
        roc_ema_raw = seeded_ema(
            roc_values,
            seed_position=params.roc_ema_start - 1,
            window=time_period,
            step=weighted_step(alpha_roc_ema),
        )
        roc_ema = [
            None if value is None else value * ROC_EMA_DISPLAY_SCALE for value in roc_ema_raw
        ]
        pmo = seeded_ema(
            roc_ema,
            seed_position=params.pmo_start - 1,
            window=smoothing_period,
            step=delta_step(alpha_pmo),
        )
        signal = seeded_ema(
            pmo,
            seed_position=params.signal_start - 1,
            window=signal_period,
            step=delta_step(alpha_signal),
        )

    return tuple(
        PmoPoint(
            index=point.index,
            timestamp=point.timestamp,
            roc_ema=roc_ema[position],
            pmo=pmo[position],
            signal=signal[position],
        )
        for position, point in enumerate(roc_points)
    )


def _ensure_contiguous_indices(*, roc_points: Sequence[RocPoint]) -> None:
    """
    Require indices `1..N` in order so positions map to indices.

    Args:
        roc_points: ROC series.
    Returns:
        None.
    Assumptions:
        None.
    Raises:
        ValueError: On the first out-of-place index.
    Side Effects:
        None.
    """
    for position, point in enumerate(roc_points):
        expected = position + 1
        if point.index != expected:
            raise ValueError(
                "roc points must carry contiguous 1-based indices: "
                f"expected={expected}, got={point.index}"
            )
