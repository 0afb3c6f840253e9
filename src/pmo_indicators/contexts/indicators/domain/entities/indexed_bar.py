from __future__ import annotations

from dataclasses import dataclass

from pmo_indicators.shared_kernel.primitives import Bar, UtcTimestamp


@dataclass(frozen=True, slots=True)
class IndexedBar:
    """
    Bar placed at its 1-based position inside a cleaned, date-ordered history.

    Related: ...application.ports.history_preparer,
      ...adapters.outbound.history.sorted_history_preparer
    """

    index: int
    bar: Bar

    def __post_init__(self) -> None:
        """
        Validate position invariant.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Positions start at 1 and are assigned by the history preparer.
        Raises:
            ValueError: If index is not a positive integer.
        Side Effects:
            None.
        """
        if self.index <= 0:
            raise ValueError(f"IndexedBar.index must be >= 1, got {self.index}")

    @property
    def timestamp(self) -> UtcTimestamp:
        return self.bar.timestamp
