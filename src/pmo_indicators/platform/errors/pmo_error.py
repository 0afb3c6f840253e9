from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping


@dataclass(frozen=True, slots=True)
class PmoError(Exception):
    """
    Error contract shared by the CLI and API: `code` picks the exit/HTTP status,
    `message` is human readable, `details` is a flat JSON-ready mapping.

    Related: pmo_indicators.contexts.indicators.application.errors.pmo_error_mapping,
      apps.api.common.errors, apps.cli.commands.compute_pmo
    """

    code: str
    message: str
    details: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """
        Strip code/message and freeze details into key-sorted JSON values.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Detail values are scalars, Decimals, or lists of JSON-ready items.
        Raises:
            ValueError: If `code` or `message` is blank.
        Side Effects:
            None.
        """
        code = self.code.strip()
        message = self.message.strip()
        if not code:
            raise ValueError("PmoError.code must be non-empty")
        if not message:
            raise ValueError("PmoError.message must be non-empty")
        object.__setattr__(self, "code", code)
        object.__setattr__(self, "message", message)
        object.__setattr__(
            self,
            "details",
            {str(key): _json_value(self.details[key]) for key in sorted(self.details, key=str)},
        )

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_payload(self) -> dict[str, Any]:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "details": dict(self.details),
            }
        }


def _json_value(value: Any) -> Any:
    # Decimal renders as text so values survive JSON exactly
    if isinstance(value, Decimal):
        return str(value)
    if value is None or isinstance(value, (str, int, float, list)):
        return value
    return str(value)
