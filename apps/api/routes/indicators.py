"""
Indicators API routes.

Related: apps.api.dto.indicators,
  pmo_indicators.contexts.indicators.application.use_cases.compute_pmo,
  pmo_indicators.contexts.indicators.adapters.outbound.compute_numba.pmo_kernels
"""

from __future__ import annotations

import numpy as np
from fastapi import APIRouter

from apps.api.dto import (
    PmoComputeRequest,
    PmoComputeResponse,
    PmoGridRequest,
    PmoGridResponse,
    build_bars,
    build_pmo_compute_response,
    build_pmo_grid_response,
    build_pmo_params,
)
from pmo_indicators.contexts.indicators.adapters.outbound.compute_numba import (
    compute_pmo_grid_f64,
)
from pmo_indicators.contexts.indicators.application.use_cases import ComputePmoUseCase
from pmo_indicators.contexts.indicators.domain.errors import (
    BadHistoryError,
    InvalidParameterError,
)
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.platform.errors import PmoError


def build_indicators_router(
    *,
    use_case: ComputePmoUseCase,
    default_params: PmoParams,
) -> APIRouter:
    """
    Build router exposing PMO compute endpoints.

    Related: apps.api.dto.indicators, apps.api.wiring.modules.indicators

    Args:
        use_case: Decimal PMO use case.
        default_params: Periods used when the request omits them.
    Returns:
        APIRouter: Router with `POST /indicators/pmo` and `POST /indicators/pmo/grid`.
    Assumptions:
        Dependencies are initialized in composition root.
    Raises:
        ValueError: If a dependency is missing.
    Side Effects:
        None.
    """
    if use_case is None:  # type: ignore[truthy-bool]
        raise ValueError("build_indicators_router requires use_case")
    if default_params is None:  # type: ignore[truthy-bool]
        raise ValueError("build_indicators_router requires default_params")

    router = APIRouter(tags=["indicators"])

    @router.post("/indicators/pmo", response_model=PmoComputeResponse)
    def post_indicators_pmo(request: PmoComputeRequest) -> PmoComputeResponse:
        """
        Compute PMO points for the posted bar history.

        Args:
            request: API payload with bars and optional periods.
        Returns:
            PmoComputeResponse: One point per bar in date order.
        Assumptions:
            Values are exact decimals rendered as strings.
        Raises:
            PmoError: With `validation_error` for malformed bars.
            InvalidParameterError: Mapped to 422 by registered handlers.
            BadHistoryError: Mapped to 422 by registered handlers.
        Side Effects:
            None.
        """
        params = build_pmo_params(request=request, defaults=default_params)
        try:
            bars = build_bars(request=request)
        except (TypeError, ValueError) as error:
            raise PmoError(code="validation_error", message=str(error)) from error

        points = use_case.execute(bars, params)
        return build_pmo_compute_response(points=points, params=params)

    @router.post("/indicators/pmo/grid", response_model=PmoGridResponse)
    def post_indicators_pmo_grid(request: PmoGridRequest) -> PmoGridResponse:
        """
        Compute float64 PMO matrices for several period variants at once.

        Args:
            request: API payload with close series and aligned period lists.
        Returns:
            PmoGridResponse: `(V, T)` matrices with NaN rendered as null.
        Assumptions:
            Close series is already date-ordered.
        Raises:
            PmoError: With `validation_error` for misaligned arrays.
            InvalidParameterError: Mapped to 422 by registered handlers.
            BadHistoryError: Mapped to 422 by registered handlers.
        Side Effects:
            May trigger numba compilation on first call.
        """
        try:
            grid = compute_pmo_grid_f64(
                close=np.asarray(request.close, dtype=np.float64),
                time_periods=np.asarray(request.time_periods, dtype=np.int64),
                smoothing_periods=np.asarray(request.smoothing_periods, dtype=np.int64),
                signal_periods=np.asarray(request.signal_periods, dtype=np.int64),
            )
        except (InvalidParameterError, BadHistoryError):
            raise
        except ValueError as error:
            raise PmoError(code="validation_error", message=str(error)) from error
        return build_pmo_grid_response(grid=grid)

    return router
