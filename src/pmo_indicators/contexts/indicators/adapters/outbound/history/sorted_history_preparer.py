"""
Default history preparer: sort by timestamp, reject duplicates, assign indices.

Related: pmo_indicators.contexts.indicators.application.ports.history_preparer
"""

from __future__ import annotations

import logging
from typing import Sequence

from pmo_indicators.contexts.indicators.domain.entities import IndexedBar
from pmo_indicators.contexts.indicators.domain.errors import DuplicateBarError
from pmo_indicators.shared_kernel.primitives import Bar

log = logging.getLogger(__name__)


class SortedHistoryPreparer:
    """
    HistoryPreparer producing a date-ascending, duplicate-free indexed history.
    """

    def prepare(self, bars: Sequence[Bar]) -> tuple[IndexedBar, ...]:
        """
        Sort bars by timestamp and index them `1..N`.

        Args:
            bars: Raw bars in any order.
        Returns:
            tuple[IndexedBar, ...]: Ordered indexed bars.
        Assumptions:
            Sort is stable; equal timestamps never survive to output.
        Raises:
            DuplicateBarError: If two bars share one timestamp.
        Side Effects:
            Logs at DEBUG level when input was not already ordered.
        """
        ordered = sorted(bars, key=lambda bar: bar.timestamp)
        if any(left is not right for left, right in zip(ordered, bars)):
            log.debug("bars reordered by timestamp: count=%s", len(ordered))

        for previous, current in zip(ordered, ordered[1:]):
            if previous.timestamp == current.timestamp:
                raise DuplicateBarError(
                    f"Duplicate bar timestamp in history: {current.timestamp}",
                    timestamp=str(current.timestamp),
                )

        return tuple(
            IndexedBar(index=position, bar=bar) for position, bar in enumerate(ordered, start=1)
        )
