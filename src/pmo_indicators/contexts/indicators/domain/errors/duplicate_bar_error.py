from __future__ import annotations

from .bad_history_error import BadHistoryError


class DuplicateBarError(BadHistoryError):
    """
    Raised when two bars share one timestamp.

    Related: ...adapters.outbound.history.sorted_history_preparer
    """

    def __init__(self, message: str, *, timestamp: str) -> None:
        super().__init__(message)
        self.timestamp = timestamp
