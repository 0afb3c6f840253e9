from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from pmo_indicators.shared_kernel.primitives import UtcTimestamp


@dataclass(frozen=True, slots=True)
class RocPoint:
    """
    One rate-of-change observation aligned with its source bar.

    `roc` is None where no lagged bar exists or the lagged close is zero.

    Related: ...application.ports.roc_source,
      ...adapters.outbound.roc.close_roc_source
    """

    index: int
    timestamp: UtcTimestamp
    roc: Decimal | None
