from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .utc_timestamp import UtcTimestamp


@dataclass(frozen=True, slots=True)
class Bar:
    """
    Bar: one price observation supplied by the caller.

    Prices are `Decimal` so indicator output reproduces published values exactly.
    Ordering and indexing are not part of the bar itself: the history preparer
    assigns positions after sorting.
    """

    timestamp: UtcTimestamp

    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal

    volume: Decimal = Decimal(0)

    def __post_init__(self) -> None:
        if self.timestamp is None:  # type: ignore[truthy-bool]
            raise ValueError("Bar requires timestamp")

        for name in ("open", "high", "low", "close", "volume"):
            value = getattr(self, name)
            if not isinstance(value, Decimal):
                raise TypeError(f"Bar.{name} must be Decimal, got {type(value).__name__}")
            if not value.is_finite():
                raise ValueError(f"Bar.{name} must be finite, got {value}")

        if self.high < max(self.open, self.close):
            raise ValueError("Bar requires high >= max(open, close)")

        if self.low > min(self.open, self.close):
            raise ValueError("Bar requires low <= min(open, close)")

        if self.volume < 0:
            raise ValueError("Bar requires volume >= 0")

    @classmethod
    def from_close(cls, timestamp: UtcTimestamp, close: Decimal) -> "Bar":
        """
        Build a flat bar where open/high/low all equal close.
        """
        return cls(timestamp=timestamp, open=close, high=close, low=close, close=close)

