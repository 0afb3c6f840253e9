"""
FastAPI application factory for PMO API.
"""

from __future__ import annotations

import os
from typing import Mapping

from fastapi import FastAPI

from apps.api.common import register_api_error_handlers
from apps.api.routes import build_indicators_router
from apps.api.wiring import (
    build_compute_pmo_use_case,
    build_default_pmo_params,
    warmup_pmo_compute,
)
from pmo_indicators.platform.config import load_pmo_runtime_config


def create_app(
    *,
    environ: Mapping[str, str] | None = None,
    warmup_numba: bool = True,
) -> FastAPI:
    """
    Build FastAPI app with the indicators module wired at startup.

    Related: apps.api.routes.indicators, apps.api.wiring.modules.indicators

    Args:
        environ: Optional environment mapping override.
        warmup_numba: Whether to compile grid kernels before serving.
    Returns:
        FastAPI: Application instance with registered routers.
    Assumptions:
        Wiring performs fail-fast validation before first request.
    Raises:
        FileNotFoundError: If explicit `PMO_CONFIG` path is missing.
        ValueError: If config parsing/validation fails.
        InvalidParameterError: If configured default periods are invalid.
    Side Effects:
        Reads PMO YAML and optionally performs Numba warmup.
    """
    effective_environ = os.environ if environ is None else environ
    config = load_pmo_runtime_config(environ=effective_environ)
    default_params = build_default_pmo_params(config=config)
    use_case = build_compute_pmo_use_case(config=config)
    if warmup_numba:
        warmup_pmo_compute(config=config)

    app = FastAPI(
        title="PMO Indicators API",
        version="1.0.0",
    )
    register_api_error_handlers(app=app)
    app.include_router(
        build_indicators_router(
            use_case=use_case,
            default_params=default_params,
        )
    )
    return app
