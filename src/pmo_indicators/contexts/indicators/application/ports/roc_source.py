from __future__ import annotations

from typing import Protocol, Sequence

from pmo_indicators.contexts.indicators.domain.entities import IndexedBar, RocPoint


class RocSource(Protocol):
    """
    Port producing a rate-of-change series aligned with the indexed history.

    Related:
      - src/pmo_indicators/contexts/indicators/adapters/outbound/roc/close_roc_source.py
      - src/pmo_indicators/contexts/indicators/domain/services/pmo_cascade.py
    """

    def compute(self, history: Sequence[IndexedBar], *, lookback: int) -> tuple[RocPoint, ...]:
        """
        Compute ROC for each bar against the bar `lookback` positions earlier.

        Args:
            history: Date-ordered indexed bars.
            lookback: Number of bars back to compare against.
        Returns:
            tuple[RocPoint, ...]: One point per bar with matching index/timestamp.
        Assumptions:
            `roc` is None where no lagged bar exists.
        Raises:
            InvalidParameterError: If `lookback` is not positive.
        Side Effects:
            None.
        """
        ...
