from .indicators import (
    BarRequest,
    PmoComputeRequest,
    PmoComputeResponse,
    PmoGridRequest,
    PmoGridResponse,
    PmoParamsResponse,
    PmoPointResponse,
    build_bars,
    build_pmo_compute_response,
    build_pmo_grid_response,
    build_pmo_params,
)

__all__ = [
    "BarRequest",
    "PmoComputeRequest",
    "PmoComputeResponse",
    "PmoGridRequest",
    "PmoGridResponse",
    "PmoParamsResponse",
    "PmoPointResponse",
    "build_bars",
    "build_pmo_compute_response",
    "build_pmo_grid_response",
    "build_pmo_params",
]
