"""
Translation of indicator domain errors into the platform `PmoError` contract.

Related: pmo_indicators.platform.errors.pmo_error,
  apps/api/common/errors.py,
  apps/cli/commands/compute_pmo.py
"""

from __future__ import annotations

from pmo_indicators.contexts.indicators.domain.errors import (
    BadHistoryError,
    InsufficientHistoryError,
    InvalidParameterError,
)
from pmo_indicators.platform.errors import PmoError


def to_pmo_error(error: Exception) -> PmoError:
    """
    Map one exception to a deterministic `PmoError`.

    Args:
        error: Raised exception.
    Returns:
        PmoError: `invalid_parameter`, `insufficient_history`, `bad_history`,
            or `unexpected_error`.
    Assumptions:
        `PmoError` instances are passed through unchanged.
    Raises:
        None.
    Side Effects:
        None.
    """
    if isinstance(error, PmoError):
        return error
    if isinstance(error, InvalidParameterError):
        return PmoError(
            code="invalid_parameter",
            message=str(error),
            details={"parameter": error.parameter, "value": error.value},
        )
    if isinstance(error, InsufficientHistoryError):
        return PmoError(
            code="insufficient_history",
            message=str(error),
            details={
                "provided": error.provided,
                "required": error.required,
                "recommended": error.recommended,
            },
        )
    if isinstance(error, BadHistoryError):
        return PmoError(code="bad_history", message=str(error))
    return PmoError(code="unexpected_error", message="Unexpected error")
