"""
Use case computing the Price Momentum Oscillator for one bar history.

Related: ..ports.history_preparer, ..ports.roc_source,
  ...domain.services.pmo_cascade, ...domain.specifications.pmo_params
"""

from __future__ import annotations

import logging
from typing import Sequence

from pmo_indicators.contexts.indicators.application.ports import HistoryPreparer, RocSource
from pmo_indicators.contexts.indicators.domain.entities import PmoPoint
from pmo_indicators.contexts.indicators.domain.services import (
    DEFAULT_DECIMAL_PRECISION,
    compute_pmo_cascade,
)
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.shared_kernel.primitives import Bar

log = logging.getLogger(__name__)

PMO_ROC_LOOKBACK = 1


class ComputePmoUseCase:
    """
    Validate, clean, derive ROC and run the PMO cascade.

    Related: pmo_indicators.contexts.indicators.domain.services.pmo_cascade,
      apps.api.routes.indicators, apps.cli.commands.compute_pmo
    """

    def __init__(
        self,
        *,
        history_preparer: HistoryPreparer,
        roc_source: RocSource,
        decimal_precision: int = DEFAULT_DECIMAL_PRECISION,
    ) -> None:
        """
        Store collaborators.

        Args:
            history_preparer: Port implementation for ordering/indexing bars.
            roc_source: Port implementation for ROC derivation.
            decimal_precision: Significant digits for cascade arithmetic.
        Returns:
            None.
        Assumptions:
            Collaborators are stateless across calls.
        Raises:
            ValueError: If a collaborator is missing or precision is not positive.
        Side Effects:
            None.
        """
        if history_preparer is None:  # type: ignore[truthy-bool]
            raise ValueError("ComputePmoUseCase requires history_preparer")
        if roc_source is None:  # type: ignore[truthy-bool]
            raise ValueError("ComputePmoUseCase requires roc_source")
        if decimal_precision <= 0:
            raise ValueError(f"decimal_precision must be > 0, got {decimal_precision}")
        self._history_preparer = history_preparer
        self._roc_source = roc_source
        self._decimal_precision = decimal_precision

    def execute(self, bars: Sequence[Bar], params: PmoParams) -> tuple[PmoPoint, ...]:
        """
        Compute one PMO point per input bar.

        Args:
            bars: Caller bars, any order.
            params: Validated PMO periods.
        Returns:
            tuple[PmoPoint, ...]: Date-ordered points, one per bar.
        Assumptions:
            Each call recomputes the full history from scratch.
        Raises:
            InsufficientHistoryError: If fewer than `time_period + smoothing_period` bars.
            BadHistoryError: If the history preparer rejects the bars.
        Side Effects:
            Emits log records.
        """
        params.validate_history(count=len(bars))

        history = self._history_preparer.prepare(bars)
        # preparers are allowed to drop bars
        params.validate_history(count=len(history))
        if len(history) < params.recommended_history:
            log.warning(
                "pmo history below recommended minimum: bars=%s recommended=%s",
                len(history),
                params.recommended_history,
            )

        roc_points = self._roc_source.compute(history, lookback=PMO_ROC_LOOKBACK)
        points = compute_pmo_cascade(
            roc_points,
            params,
            precision=self._decimal_precision,
        )

        log.info(
            "pmo computed: bars=%s time_period=%s smoothing_period=%s signal_period=%s "
            "roc_ema_start=%s pmo_start=%s signal_start=%s",
            len(points),
            params.time_period,
            params.smoothing_period,
            params.signal_period,
            params.roc_ema_start,
            params.pmo_start,
            params.signal_start if params.signal_start <= len(points) else None,
        )
        return points
