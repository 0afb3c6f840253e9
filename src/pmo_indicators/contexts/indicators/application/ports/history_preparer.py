from __future__ import annotations

from typing import Protocol, Sequence

from pmo_indicators.contexts.indicators.domain.entities import IndexedBar
from pmo_indicators.shared_kernel.primitives import Bar


class HistoryPreparer(Protocol):
    """
    Port turning caller-supplied bars into a clean, date-ordered indexed history.

    Related:
      - src/pmo_indicators/contexts/indicators/adapters/outbound/history/
        sorted_history_preparer.py
      - src/pmo_indicators/contexts/indicators/application/use_cases/compute_pmo.py
    """

    def prepare(self, bars: Sequence[Bar]) -> tuple[IndexedBar, ...]:
        """
        Order bars by time and assign 1-based indices.

        Args:
            bars: Raw bars in any order.
        Returns:
            tuple[IndexedBar, ...]: Date-ascending bars indexed `1..N`.
        Assumptions:
            Output length equals the number of distinct bars.
        Raises:
            BadHistoryError: If the bars cannot form a valid history.
        Side Effects:
            None.
        """
        ...
