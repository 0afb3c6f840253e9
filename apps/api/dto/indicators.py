"""
Pydantic API models and converters for PMO endpoints.

Related: apps.api.routes.indicators,
  pmo_indicators.contexts.indicators.application.use_cases.compute_pmo,
  pmo_indicators.contexts.indicators.adapters.outbound.compute_numba.pmo_kernels
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from decimal import Decimal
from typing import Sequence

import numpy as np
from pydantic import BaseModel, Field

from pmo_indicators.contexts.indicators.adapters.outbound.compute_numba import PmoGrid
from pmo_indicators.contexts.indicators.domain.entities import PmoPoint
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.shared_kernel.primitives import Bar, UtcTimestamp


class BarRequest(BaseModel):
    """
    API representation of one input bar; missing OHL default to close.
    """

    timestamp: datetime
    close: Decimal
    open: Decimal | None = None
    high: Decimal | None = None
    low: Decimal | None = None
    volume: Decimal | None = None


class PmoComputeRequest(BaseModel):
    """
    API payload for `POST /indicators/pmo`; omitted periods use runtime defaults.
    """

    bars: list[BarRequest] = Field(min_length=1)
    time_period: int | None = None
    smoothing_period: int | None = None
    signal_period: int | None = None


class PmoParamsResponse(BaseModel):
    """
    Effective periods used for the computation.
    """

    time_period: int
    smoothing_period: int
    signal_period: int


class PmoPointResponse(BaseModel):
    """
    One output point; decimals are strings, absent values are null.
    """

    index: int
    timestamp: str
    roc_ema: str | None
    pmo: str | None
    signal: str | None


class PmoComputeResponse(BaseModel):
    """
    API response for `POST /indicators/pmo`.
    """

    schema_version: int
    params: PmoParamsResponse
    points: list[PmoPointResponse]


class PmoGridRequest(BaseModel):
    """
    API payload for `POST /indicators/pmo/grid`; period lists are aligned per variant.
    """

    close: list[float] = Field(min_length=1)
    time_periods: list[int] = Field(min_length=1)
    smoothing_periods: list[int] = Field(min_length=1)
    signal_periods: list[int] = Field(min_length=1)


class PmoGridResponse(BaseModel):
    """
    Float outputs as `(V, T)` nested lists; NaN and infinities are rendered as null.
    """

    schema_version: int
    variants: int
    t: int
    roc_ema: list[list[float | None]]
    pmo: list[list[float | None]]
    signal: list[list[float | None]]


def build_bars(*, request: PmoComputeRequest) -> list[Bar]:
    """
    Convert API bars into domain bars.

    Args:
        request: Parsed API payload.
    Returns:
        list[Bar]: Domain bars in request order.
    Assumptions:
        Naive timestamps are interpreted as UTC.
    Raises:
        ValueError: If a bar violates `Bar` invariants.
    Side Effects:
        None.
    """
    bars: list[Bar] = []
    for item in request.bars:
        timestamp = item.timestamp
        if timestamp.tzinfo is None or timestamp.utcoffset() is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        bars.append(
            Bar(
                timestamp=UtcTimestamp(timestamp),
                open=item.close if item.open is None else item.open,
                high=item.close if item.high is None else item.high,
                low=item.close if item.low is None else item.low,
                close=item.close,
                volume=Decimal(0) if item.volume is None else item.volume,
            )
        )
    return bars


def build_pmo_params(*, request: PmoComputeRequest, defaults: PmoParams) -> PmoParams:
    """
    Merge explicit request periods over runtime defaults.

    Args:
        request: Parsed API payload.
        defaults: Periods from runtime config.
    Returns:
        PmoParams: Validated effective periods.
    Assumptions:
        None.
    Raises:
        InvalidParameterError: If merged periods violate bounds.
    Side Effects:
        None.
    """
    return PmoParams(
        time_period=defaults.time_period if request.time_period is None else request.time_period,
        smoothing_period=(
            defaults.smoothing_period
            if request.smoothing_period is None
            else request.smoothing_period
        ),
        signal_period=(
            defaults.signal_period if request.signal_period is None else request.signal_period
        ),
    )


def build_pmo_compute_response(
    *,
    points: Sequence[PmoPoint],
    params: PmoParams,
) -> PmoComputeResponse:
    """
    Build response payload from computed points.

    Args:
        points: Use case output.
        params: Effective periods.
    Returns:
        PmoComputeResponse: Schema v1 response.
    Assumptions:
        Point order is preserved.
    Raises:
        None.
    Side Effects:
        None.
    """
    return PmoComputeResponse(
        schema_version=1,
        params=PmoParamsResponse(**params.as_dict()),
        points=[PmoPointResponse(**point.as_dict()) for point in points],
    )


def build_pmo_grid_response(*, grid: PmoGrid) -> PmoGridResponse:
    """
    Build response payload from float grid matrices.

    Args:
        grid: Kernel output.
    Returns:
        PmoGridResponse: Schema v1 response with non-finite values rendered as null.
    Assumptions:
        All three matrices share shape `(V, T)`.
    Raises:
        None.
    Side Effects:
        None.
    """
    variants, t_size = grid.pmo.shape
    return PmoGridResponse(
        schema_version=1,
        variants=int(variants),
        t=int(t_size),
        roc_ema=_matrix_to_lists(values=grid.roc_ema),
        pmo=_matrix_to_lists(values=grid.pmo),
        signal=_matrix_to_lists(values=grid.signal),
    )


def _matrix_to_lists(*, values: np.ndarray) -> list[list[float | None]]:
    return [
        [value if math.isfinite(value) else None for value in row]
        for row in values.tolist()
    ]
