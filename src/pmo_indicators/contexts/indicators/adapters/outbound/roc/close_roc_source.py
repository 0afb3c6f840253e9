"""
Default ROC source over bar close prices.

Related: pmo_indicators.contexts.indicators.application.ports.roc_source
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Sequence

from pmo_indicators.contexts.indicators.domain.entities import IndexedBar, RocPoint
from pmo_indicators.contexts.indicators.domain.errors import InvalidParameterError
from pmo_indicators.contexts.indicators.domain.services import DEFAULT_DECIMAL_PRECISION

_PERCENT = Decimal(100)


class CloseRocSource:
    """
    RocSource computing `100 * (close - lagged_close) / lagged_close`.
    """

    def __init__(self, *, precision: int = DEFAULT_DECIMAL_PRECISION) -> None:
        if precision <= 0:
            raise ValueError(f"precision must be > 0, got {precision}")
        self._precision = precision

    def compute(self, history: Sequence[IndexedBar], *, lookback: int) -> tuple[RocPoint, ...]:
        """
        Compute close-to-close ROC for every bar.

        Args:
            history: Date-ordered indexed bars.
            lookback: Number of bars back to compare against.
        Returns:
            tuple[RocPoint, ...]: Aligned ROC points.
        Assumptions:
            The first `lookback` points and zero lagged closes yield None.
        Raises:
            InvalidParameterError: If `lookback` is not positive.
        Side Effects:
            None.
        """
        if isinstance(lookback, bool) or not isinstance(lookback, int) or lookback <= 0:
            raise InvalidParameterError(
                "Lookback period must be greater than 0 for ROC.",
                parameter="lookback",
                value=lookback,
            )

        out: list[RocPoint] = []
        with localcontext() as ctx:
            ctx.prec = self._precision
            for position, item in enumerate(history):
                roc: Decimal | None = None
                if position >= lookback:
                    lagged_close = history[position - lookback].bar.close
                    if lagged_close != 0:
                        roc = _PERCENT * (item.bar.close - lagged_close) / lagged_close
                out.append(RocPoint(index=item.index, timestamp=item.timestamp, roc=roc))
        return tuple(out)
