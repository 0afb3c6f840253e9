from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from pmo_indicators.contexts.indicators.domain.entities import RocPoint
from pmo_indicators.contexts.indicators.domain.services import compute_pmo_cascade
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.shared_kernel.primitives import UtcTimestamp

_START = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _roc_points(values: list[Decimal | None]) -> list[RocPoint]:
    """
    Build contiguous daily ROC points from raw values.

    Args:
        values: ROC values by position.
    Returns:
        list[RocPoint]: Points indexed `1..N`.
    Assumptions:
        Timestamps are one day apart.
    Raises:
        None.
    Side Effects:
        None.
    """
    return [
        RocPoint(
            index=position + 1,
            timestamp=UtcTimestamp(_START + timedelta(days=position)),
            roc=value,
        )
        for position, value in enumerate(values)
    ]


def _hand_checked_roc() -> list[Decimal | None]:
    return [None] + [Decimal(v) for v in (2, 4, 6, 8, 10, 0, 2, 4, 6, 8, 10)]


def test_compute_pmo_cascade_matches_hand_computed_values() -> None:
    """
    Verify all three stages against values computed by hand.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Periods 4/4/4 give alphas 0.5/0.5/0.4, all exact in decimal.
    Raises:
        AssertionError: If any stage value differs.
    Side Effects:
        None.
    """
    params = PmoParams(time_period=4, smoothing_period=4, signal_period=4)

    points = compute_pmo_cascade(_roc_points(_hand_checked_roc()), params)

    roc_ema = [p.roc_ema for p in points]
    pmo = [p.pmo for p in points]
    signal = [p.signal for p in points]

    assert roc_ema[:4] == [None, None, None, None]
    assert roc_ema[4:] == [
        Decimal("50"),
        Decimal("75"),
        Decimal("37.5"),
        Decimal("28.75"),
        Decimal("34.375"),
        Decimal("47.1875"),
        Decimal("63.59375"),
        Decimal("81.796875"),
    ]
    assert pmo[:7] == [None] * 7
    assert pmo[7:] == [
        Decimal("47.8125"),
        Decimal("41.09375"),
        Decimal("44.140625"),
        Decimal("53.8671875"),
        Decimal("67.83203125"),
    ]
    assert signal[:10] == [None] * 10
    assert signal[10:] == [Decimal("46.728515625"), Decimal("55.169921875")]


def test_compute_pmo_cascade_default_periods_on_sixty_bars() -> None:
    """
    Verify warmup boundaries for defaults when history is too short for signal.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        60 bars satisfy the 55-bar minimum but not the 64-bar signal start.
    Raises:
        AssertionError: If warmup boundaries drift.
    Side Effects:
        None.
    """
    values: list[Decimal | None] = [None] + [Decimal(i % 7) - 3 for i in range(59)]

    points = compute_pmo_cascade(_roc_points(values), PmoParams())

    assert len(points) == 60
    assert [p.index for p in points] == list(range(1, 61))
    assert points[34].roc_ema is None
    assert points[35].roc_ema is not None
    assert points[53].pmo is None
    assert points[54].pmo is not None
    assert all(p.signal is None for p in points)


def test_compute_pmo_cascade_roc_ema_seed_is_mean_times_ten() -> None:
    values: list[Decimal | None] = [None, Decimal(1), Decimal(2), Decimal(3), Decimal("0.5")]
    params = PmoParams(time_period=3, smoothing_period=1, signal_period=1)

    points = compute_pmo_cascade(_roc_points(values), params)

    assert points[3].roc_ema == Decimal(20)
    # window 1 seeds on the current value
    assert points[3].pmo == Decimal(20)
    assert points[3].signal == Decimal(20)


def test_compute_pmo_cascade_propagates_absent_roc() -> None:
    """
    Verify None stops each recursion while seed means skip absent values.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        ROC at index 7 is absent.
    Raises:
        AssertionError: If absence leaks into numbers or seeds stop skipping None.
    Side Effects:
        None.
    """
    values = _hand_checked_roc()
    values[6] = None

    points = compute_pmo_cascade(_roc_points(values), PmoParams(4, 4, 4))

    assert points[5].roc_ema == Decimal("75")
    assert all(p.roc_ema is None for p in points[6:])
    # seed window 50, 75, None, None
    assert points[7].pmo == Decimal("62.5")
    assert all(p.pmo is None for p in points[8:])
    assert points[10].signal == Decimal("62.5")
    assert points[11].signal is None


def test_compute_pmo_cascade_is_deterministic() -> None:
    roc = _roc_points(_hand_checked_roc())
    params = PmoParams(4, 4, 4)

    assert compute_pmo_cascade(roc, params) == compute_pmo_cascade(roc, params)


def test_compute_pmo_cascade_respects_precision() -> None:
    values: list[Decimal | None] = [None, Decimal(1), Decimal(1), Decimal(2)]
    params = PmoParams(time_period=3, smoothing_period=1, signal_period=1)

    points = compute_pmo_cascade(_roc_points(values), params, precision=5)

    assert points[3].roc_ema == Decimal("13.333")


def test_compute_pmo_cascade_rejects_non_contiguous_indices() -> None:
    roc = _roc_points([None, Decimal(1), Decimal(2)])
    gap = [roc[0], roc[2]]

    with pytest.raises(ValueError, match="contiguous"):
        compute_pmo_cascade(gap, PmoParams(2, 1, 1))

    with pytest.raises(ValueError, match="precision"):
        compute_pmo_cascade(roc, PmoParams(2, 1, 1), precision=0)
