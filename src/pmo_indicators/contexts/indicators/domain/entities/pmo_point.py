from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from pmo_indicators.shared_kernel.primitives import UtcTimestamp


@dataclass(frozen=True, slots=True)
class PmoPoint:
    """
    Price Momentum Oscillator output for one input bar.

    Fields are None until their smoothing stage has warmed up:
    - `roc_ema`: from index `time_period + 1` (displayed value, x10)
    - `pmo`: from index `time_period + smoothing_period`
    - `signal`: from index `time_period + smoothing_period + signal_period - 1`

    Related: ..services.pmo_cascade, ...application.use_cases.compute_pmo
    """

    index: int
    timestamp: UtcTimestamp
    roc_ema: Decimal | None = None
    pmo: Decimal | None = None
    signal: Decimal | None = None

    def as_dict(self) -> dict[str, Any]:
        """
        Serialize with decimals as strings so values survive JSON exactly.

        Args:
            None.
        Returns:
            dict[str, Any]: Plain mapping, None kept for absent values.
        Assumptions:
            None.
        Raises:
            None.
        Side Effects:
            None.
        """
        return {
            "index": self.index,
            "timestamp": str(self.timestamp),
            "roc_ema": _decimal_str(self.roc_ema),
            "pmo": _decimal_str(self.pmo),
            "signal": _decimal_str(self.signal),
        }


def _decimal_str(value: Decimal | None) -> str | None:
    return None if value is None else str(value)
