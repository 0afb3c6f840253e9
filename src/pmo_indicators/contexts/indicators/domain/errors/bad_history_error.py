from __future__ import annotations


class BadHistoryError(ValueError):
    """
    Raised when the provided bar history cannot be used for computation.

    Related: .insufficient_history_error, .duplicate_bar_error,
      ...adapters.outbound.history.sorted_history_preparer
    """
