"""
Validated period set for the Price Momentum Oscillator cascade.

Related: ..services.pmo_cascade,
  ...application.use_cases.compute_pmo,
  ...adapters.outbound.compute_numba.pmo_kernels
"""

from __future__ import annotations

from dataclasses import dataclass

from pmo_indicators.contexts.indicators.domain.errors import (
    InsufficientHistoryError,
    InvalidParameterError,
)

DEFAULT_TIME_PERIOD = 35
DEFAULT_SMOOTHING_PERIOD = 20
DEFAULT_SIGNAL_PERIOD = 10

# Extra bars suggested on top of the hard minimum so the cascade converges.
RECOMMENDED_HISTORY_PADDING = 250


@dataclass(frozen=True, slots=True)
class PmoParams:
    """
    PMO periods with fail-fast bounds validation.

    Related: ..errors.invalid_parameter_error, ..errors.insufficient_history_error
    """

    time_period: int = DEFAULT_TIME_PERIOD
    smoothing_period: int = DEFAULT_SMOOTHING_PERIOD
    signal_period: int = DEFAULT_SIGNAL_PERIOD

    def __post_init__(self) -> None:
        """
        Validate period bounds.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Periods are plain integers; `bool` is rejected.
        Raises:
            InvalidParameterError: If any period violates its minimum bound.
        Side Effects:
            None.
        """
        for name in ("time_period", "smoothing_period", "signal_period"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidParameterError(
                    f"{name} must be an int, got {type(value).__name__}",
                    parameter=name,
                    value=value,
                )

        if self.time_period <= 1:
            raise InvalidParameterError(
                "Time period must be greater than 1 for PMO.",
                parameter="time_period",
                value=self.time_period,
            )
        if self.smoothing_period <= 0:
            raise InvalidParameterError(
                "Smoothing period must be greater than 0 for PMO.",
                parameter="smoothing_period",
                value=self.smoothing_period,
            )
        if self.signal_period <= 0:
            raise InvalidParameterError(
                "Signal period must be greater than 0 for PMO.",
                parameter="signal_period",
                value=self.signal_period,
            )

    @property
    def roc_ema_start(self) -> int:
        """First 1-based index carrying `roc_ema`."""
        return self.time_period + 1

    @property
    def pmo_start(self) -> int:
        """First 1-based index carrying `pmo`."""
        return self.time_period + self.smoothing_period

    @property
    def signal_start(self) -> int:
        """First 1-based index carrying `signal`."""
        return self.time_period + self.smoothing_period + self.signal_period - 1

    @property
    def min_history(self) -> int:
        # signal_period is intentionally excluded from the hard minimum.
        return self.time_period + self.smoothing_period

    @property
    def recommended_history(self) -> int:
        return self.min_history + self.signal_period + RECOMMENDED_HISTORY_PADDING

    def validate_history(self, *, count: int) -> None:
        """
        Require at least `time_period + smoothing_period` bars.

        Args:
            count: Number of bars provided.
        Returns:
            None.
        Assumptions:
            `count` is the length of the cleaned history.
        Raises:
            InsufficientHistoryError: If `count` is below the hard minimum.
        Side Effects:
            None.
        """
        if count >= self.min_history:
            return
        raise InsufficientHistoryError(
            "Insufficient history provided for PMO.  "
            f"You provided {count} periods of history when at least {self.min_history} "
            "is required.  Since this uses several smoothing operations, "
            f"we recommend you use at least {self.recommended_history} data points "
            "prior to the intended usage date for maximum precision.",
            provided=count,
            required=self.min_history,
            recommended=self.recommended_history,
        )

    def as_dict(self) -> dict[str, int]:
        return {
            "time_period": self.time_period,
            "smoothing_period": self.smoothing_period,
            "signal_period": self.signal_period,
        }
