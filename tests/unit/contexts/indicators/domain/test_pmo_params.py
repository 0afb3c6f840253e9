from __future__ import annotations

import pytest

from pmo_indicators.contexts.indicators.domain.errors import (
    BadHistoryError,
    InsufficientHistoryError,
    InvalidParameterError,
)
from pmo_indicators.contexts.indicators.domain.specifications import PmoParams


def test_pmo_params_defaults_and_derived_starts() -> None:
    """
    Verify default periods and the derived warmup indices.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Defaults are the classic 35/20/10 set.
    Raises:
        AssertionError: If derived indices drift.
    Side Effects:
        None.
    """
    params = PmoParams()

    assert params.as_dict() == {"time_period": 35, "smoothing_period": 20, "signal_period": 10}
    assert params.roc_ema_start == 36
    assert params.pmo_start == 55
    assert params.signal_start == 64
    assert params.min_history == 55
    assert params.recommended_history == 315


@pytest.mark.parametrize(
    ("kwargs", "parameter", "message"),
    [
        ({"time_period": 1}, "time_period", "Time period must be greater than 1 for PMO."),
        ({"smoothing_period": 0}, "smoothing_period", "Smoothing period must be greater than 0"),
        ({"signal_period": -2}, "signal_period", "Signal period must be greater than 0"),
    ],
)
def test_pmo_params_rejects_out_of_bounds_periods(
    kwargs: dict[str, int],
    parameter: str,
    message: str,
) -> None:
    """
    Verify each bound raises InvalidParameterError naming the offending parameter.

    Args:
        kwargs: Period overrides.
        parameter: Expected parameter name on the error.
        message: Expected message prefix.
    Returns:
        None.
    Assumptions:
        Remaining periods keep their defaults.
    Raises:
        AssertionError: If the wrong error is raised.
    Side Effects:
        None.
    """
    with pytest.raises(InvalidParameterError) as exc_info:
        PmoParams(**kwargs)

    assert exc_info.value.parameter == parameter
    assert str(exc_info.value).startswith(message)


def test_pmo_params_rejects_non_int_periods() -> None:
    with pytest.raises(InvalidParameterError):
        PmoParams(time_period=True)  # type: ignore[arg-type]
    with pytest.raises(InvalidParameterError):
        PmoParams(signal_period=2.5)  # type: ignore[arg-type]


def test_pmo_params_accepts_smallest_valid_periods() -> None:
    params = PmoParams(time_period=2, smoothing_period=1, signal_period=1)

    assert params.min_history == 3
    assert params.signal_start == 3


def test_validate_history_excludes_signal_period_from_minimum() -> None:
    """
    Verify exactly `time_period + smoothing_period` bars pass and one fewer fails.

    Args:
        None.
    Returns:
        None.
    Assumptions:
        Signal period does not affect the hard minimum.
    Raises:
        AssertionError: If the threshold is off by one or includes signal.
    Side Effects:
        None.
    """
    params = PmoParams(time_period=10, smoothing_period=5, signal_period=50)

    params.validate_history(count=15)

    with pytest.raises(InsufficientHistoryError) as exc_info:
        params.validate_history(count=14)

    error = exc_info.value
    assert isinstance(error, BadHistoryError)
    assert error.provided == 14
    assert error.required == 15
    assert error.recommended == 315
    assert "You provided 14 periods of history when at least 15 is required." in str(error)
    assert "we recommend you use at least 315 data points" in str(error)
