from __future__ import annotations

from .bad_history_error import BadHistoryError


class InsufficientHistoryError(BadHistoryError):
    """
    Raised when fewer bars are provided than the hard minimum requires.

    `recommended` is informational only; it is never enforced.

    Related: ..specifications.pmo_params
    """

    def __init__(self, message: str, *, provided: int, required: int, recommended: int) -> None:
        super().__init__(message)
        self.provided = provided
        self.required = required
        self.recommended = recommended
