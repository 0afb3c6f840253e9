from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Sequence

import pytest

from pmo_indicators.contexts.indicators.adapters.outbound.history import SortedHistoryPreparer
from pmo_indicators.contexts.indicators.adapters.outbound.roc import CloseRocSource
from pmo_indicators.contexts.indicators.application.use_cases import (
    PMO_ROC_LOOKBACK,
    ComputePmoUseCase,
)
from pmo_indicators.contexts.indicators.domain.entities import IndexedBar, RocPoint
from pmo_indicators.contexts.indicators.domain.errors import InsufficientHistoryError
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.shared_kernel.primitives import Bar, UtcTimestamp

_USE_CASE_LOGGER = "pmo_indicators.contexts.indicators.application.use_cases.compute_pmo"


def _bars(count: int) -> list[Bar]:
    """
    Build daily bars with a deterministic oscillating close.

    Args:
        count: Number of bars.
    Returns:
        list[Bar]: Date-ascending bars.
    Assumptions:
        Closes stay strictly positive.
    Raises:
        None.
    Side Effects:
        None.
    """
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return [
        Bar.from_close(
            UtcTimestamp(start + timedelta(days=i)),
            Decimal(100) + Decimal(i % 9) - Decimal(i % 4) / 2,
        )
        for i in range(count)
    ]


class _DroppingPreparer:
    """
    HistoryPreparer stub dropping the first bar to simulate cleaning.
    """

    def prepare(self, bars: Sequence[Bar]) -> tuple[IndexedBar, ...]:
        return tuple(
            IndexedBar(index=position, bar=bar) for position, bar in enumerate(bars[1:], start=1)
        )


class _RecordingRocSource:
    """
    RocSource stub recording lookback and returning a constant ROC.
    """

    def __init__(self) -> None:
        self.lookbacks: list[int] = []

    def compute(self, history: Sequence[IndexedBar], *, lookback: int) -> tuple[RocPoint, ...]:
        self.lookbacks.append(lookback)
        return tuple(
            RocPoint(
                index=item.index,
                timestamp=item.timestamp,
                roc=None if item.index <= lookback else Decimal(1),
            )
            for item in history
        )


def _use_case() -> ComputePmoUseCase:
    return ComputePmoUseCase(
        history_preparer=SortedHistoryPreparer(),
        roc_source=CloseRocSource(),
    )


def test_compute_pmo_use_case_returns_one_point_per_bar() -> None:
    """
    Verify output length, ordering and default warmup boundaries.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Default periods 35/20/10.
    Raises:
        AssertionError: If points are misaligned with bars.
    Side Effects:
        None.
    """
    bars = _bars(80)

    points = _use_case().execute(bars, PmoParams())

    assert len(points) == 80
    assert [p.timestamp for p in points] == [b.timestamp for b in bars]
    assert points[34].roc_ema is None and points[35].roc_ema is not None
    assert points[53].pmo is None and points[54].pmo is not None
    assert points[62].signal is None and points[63].signal is not None


def test_compute_pmo_use_case_orders_unsorted_input() -> None:
    bars = _bars(70)
    shuffled = bars[35:] + bars[:35]

    use_case = _use_case()

    assert use_case.execute(shuffled, PmoParams()) == use_case.execute(bars, PmoParams())


def test_compute_pmo_use_case_is_idempotent() -> None:
    bars = _bars(60)
    use_case = _use_case()

    first = use_case.execute(bars, PmoParams())
    second = use_case.execute(bars, PmoParams())

    assert first == second


def test_compute_pmo_use_case_accepts_exact_minimum_history() -> None:
    """
    Verify `time_period + smoothing_period` bars succeed and one fewer fails.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Signal stays absent when history equals the minimum.
    Raises:
        AssertionError: If the minimum boundary is wrong.
    Side Effects:
        None.
    """
    params = PmoParams(time_period=10, smoothing_period=5, signal_period=3)
    use_case = _use_case()

    points = use_case.execute(_bars(15), params)
    assert points[-1].pmo is not None
    assert all(p.signal is None for p in points)

    with pytest.raises(InsufficientHistoryError) as exc_info:
        use_case.execute(_bars(14), params)
    assert exc_info.value.provided == 14
    assert exc_info.value.required == 15


def test_compute_pmo_use_case_rechecks_history_after_preparation() -> None:
    roc_source = _RecordingRocSource()
    use_case = ComputePmoUseCase(history_preparer=_DroppingPreparer(), roc_source=roc_source)
    params = PmoParams(time_period=10, smoothing_period=5, signal_period=3)

    with pytest.raises(InsufficientHistoryError) as exc_info:
        use_case.execute(_bars(15), params)

    assert exc_info.value.provided == 14
    assert roc_source.lookbacks == []


def test_compute_pmo_use_case_uses_one_bar_lookback() -> None:
    roc_source = _RecordingRocSource()
    use_case = ComputePmoUseCase(history_preparer=SortedHistoryPreparer(), roc_source=roc_source)

    points = use_case.execute(_bars(20), PmoParams(time_period=4, smoothing_period=4))

    assert roc_source.lookbacks == [PMO_ROC_LOOKBACK] == [1]
    # constant ROC of 1 converges to 10 immediately
    assert points[-1].roc_ema == Decimal(10)
    assert points[-1].pmo == Decimal(10)


def test_compute_pmo_use_case_warns_below_recommended_history(
    caplog: pytest.LogCaptureFixture,
) -> None:
    """
    Verify a WARNING is logged when history is valid but short of the recommendation.

    Args:
        caplog: pytest log capture fixture.
    Returns:
        None.
    Assumptions:
        Default recommendation is 315 bars.
    Raises:
        AssertionError: If warning/info records are missing.
    Side Effects:
        None.
    """
    with caplog.at_level(logging.INFO, logger=_USE_CASE_LOGGER):
        _use_case().execute(_bars(60), PmoParams())

    levels = [record.levelno for record in caplog.records if record.name == _USE_CASE_LOGGER]
    assert logging.WARNING in levels
    assert logging.INFO in levels


def test_compute_pmo_use_case_does_not_warn_with_recommended_history(
    caplog: pytest.LogCaptureFixture,
) -> None:
    params = PmoParams(time_period=4, smoothing_period=4, signal_period=2)

    with caplog.at_level(logging.INFO, logger=_USE_CASE_LOGGER):
        _use_case().execute(_bars(params.recommended_history), params)

    assert not [
        record
        for record in caplog.records
        if record.name == _USE_CASE_LOGGER and record.levelno >= logging.WARNING
    ]


def test_compute_pmo_use_case_rejects_missing_collaborators() -> None:
    with pytest.raises(ValueError):
        ComputePmoUseCase(history_preparer=None, roc_source=CloseRocSource())  # type: ignore[arg-type]  # noqa: E501
    with pytest.raises(ValueError):
        ComputePmoUseCase(
            history_preparer=SortedHistoryPreparer(),
            roc_source=CloseRocSource(),
            decimal_precision=0,
        )


def test_compute_pmo_use_case_preserves_sub_millisecond_timestamps() -> None:
    """
    Verify bars closer than one millisecond are neither merged nor rejected.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Bars are 300 microseconds apart.
    Raises:
        AssertionError: If output timestamps differ from input timestamps.
    Side Effects:
        None.
    """
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    bars = [
        Bar.from_close(UtcTimestamp(start + timedelta(microseconds=300 * i)), Decimal(100 + i))
        for i in range(5)
    ]

    params = PmoParams(time_period=2, smoothing_period=1, signal_period=1)

    points = _use_case().execute(bars, params)

    assert [p.timestamp for p in points] == [b.timestamp for b in bars]
    assert points[-1].signal is not None
