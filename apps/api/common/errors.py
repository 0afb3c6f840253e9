"""
Shared API error handlers for the PmoError contract and deterministic 422 payloads.

Related: pmo_indicators.platform.errors.pmo_error,
  pmo_indicators.contexts.indicators.application.errors.pmo_error_mapping
"""

from __future__ import annotations

from typing import Any, Mapping, Sequence, cast

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.requests import Request
from starlette.responses import JSONResponse

from pmo_indicators.contexts.indicators.application.errors import to_pmo_error
from pmo_indicators.contexts.indicators.domain.errors import (
    BadHistoryError,
    InvalidParameterError,
)
from pmo_indicators.platform.errors import PmoError

_PMO_STATUS_BY_CODE: Mapping[str, int] = {
    "validation_error": 422,
    "invalid_parameter": 422,
    "insufficient_history": 422,
    "bad_history": 422,
    "unexpected_error": 500,
}


def register_api_error_handlers(*, app: FastAPI) -> None:
    """
    Register global API handlers for PmoError, indicator domain errors and validation errors.

    Args:
        app: FastAPI application instance.
    Returns:
        None.
    Assumptions:
        Handlers are installed once during application startup.
    Raises:
        ValueError: If `app` dependency is missing.
    Side Effects:
        Mutates FastAPI exception-handler registry.
    """
    if app is None:  # type: ignore[truthy-bool]
        raise ValueError("register_api_error_handlers requires app")

    app.add_exception_handler(PmoError, pmo_error_handler)
    app.add_exception_handler(InvalidParameterError, domain_error_handler)
    app.add_exception_handler(BadHistoryError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)


def pmo_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert PmoError into deterministic JSON response payload.

    Args:
        _request: Starlette request object (unused).
        error: Raised PmoError instance.
    Returns:
        JSONResponse: Response with contract payload `{"error": ...}`.
    Assumptions:
        Status code is derived from PmoError.code via stable mapping table.
    Raises:
        None.
    Side Effects:
        None.
    """
    pmo_error = cast(PmoError, error)
    status_code = _status_code_for_error_code(code=pmo_error.code)
    return JSONResponse(status_code=status_code, content=pmo_error.to_payload())


def domain_error_handler(request: Request, error: Exception) -> JSONResponse:
    """
    Translate indicator domain errors and render them as PmoError payloads.

    Args:
        request: Starlette request object.
        error: Raised domain exception.
    Returns:
        JSONResponse: Mapped error response.
    Assumptions:
        Mapping table lives in `to_pmo_error`.
    Raises:
        None.
    Side Effects:
        None.
    """
    return pmo_error_handler(request, to_pmo_error(error))


def request_validation_error_handler(_request: Request, error: Exception) -> JSONResponse:
    """
    Convert FastAPI RequestValidationError to canonical `validation_error` payload.

    Args:
        _request: Starlette request object (unused).
        error: Raised validation exception from FastAPI/Pydantic.
    Returns:
        JSONResponse: HTTP 422 payload with deterministically sorted `details.errors` list.
    Assumptions:
        Validation errors include `loc`, `type`, and `msg` attributes.
    Raises:
        None.
    Side Effects:
        None.
    """
    validation_error = cast(RequestValidationError, error)
    pmo_error = PmoError(
        code="validation_error",
        message="Validation failed",
        details={
            "errors": _sorted_validation_errors(raw_errors=validation_error.errors()),
        },
    )
    return pmo_error_handler(_request, pmo_error)


def _status_code_for_error_code(*, code: str) -> int:
    """
    Resolve HTTP status code for canonical error code.

    Args:
        code: Machine-readable PmoError code.
    Returns:
        int: HTTP status code.
    Assumptions:
        Unknown codes are treated as unexpected internal errors.
    Raises:
        None.
    Side Effects:
        None.
    """
    return _PMO_STATUS_BY_CODE.get(code, 500)


def _sorted_validation_errors(*, raw_errors: Any) -> list[dict[str, str]]:
    """
    Convert raw validation errors into deterministic list sorted by path, code, and message.

    Args:
        raw_errors: Raw iterable from FastAPI validation subsystem.
    Returns:
        list[dict[str, str]]: Sorted normalized validation items.
    Assumptions:
        Unknown raw shapes are stringified for deterministic payload stability.
    Raises:
        None.
    Side Effects:
        None.
    """
    if not isinstance(raw_errors, Sequence) or isinstance(raw_errors, (str, bytes, bytearray)):
        return []

    normalized_items: list[dict[str, str]] = []
    for raw_error in raw_errors:
        if not isinstance(raw_error, Mapping):
            normalized_items.append(
                {
                    "path": "unknown",
                    "code": "validation_error",
                    "message": str(raw_error),
                }
            )
            continue

        normalized_items.append(
            {
                "path": _normalize_error_path(loc=raw_error.get("loc")),
                "code": _normalize_error_code(raw_type=raw_error.get("type")),
                "message": str(raw_error.get("msg", "Validation error")),
            }
        )

    return sorted(
        normalized_items,
        key=lambda item: (item["path"], item["code"], item["message"]),
    )


def _normalize_error_path(*, loc: Any) -> str:
    """
    Convert FastAPI/Pydantic `loc` tuple into dot-delimited path, e.g. `body.bars.0.close`.
    """
    if isinstance(loc, Sequence) and not isinstance(loc, (str, bytes, bytearray)):
        path_parts = [str(part) for part in loc]
        if path_parts:
            return ".".join(path_parts)
    if loc is None:
        return "unknown"
    return str(loc)


def _normalize_error_code(*, raw_type: Any) -> str:
    """
    Normalize raw validation error type; Pydantic `missing` becomes `required`.
    """
    if raw_type is None:
        return "validation_error"

    normalized = str(raw_type).strip().lower()
    if not normalized:
        return "validation_error"

    if normalized == "missing" or normalized.endswith(".missing"):
        return "required"

    return normalized
