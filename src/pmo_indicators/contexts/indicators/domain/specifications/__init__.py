from .pmo_params import (
    DEFAULT_SIGNAL_PERIOD,
    DEFAULT_SMOOTHING_PERIOD,
    DEFAULT_TIME_PERIOD,
    RECOMMENDED_HISTORY_PADDING,
    PmoParams,
)

__all__ = [
    "DEFAULT_SIGNAL_PERIOD",
    "DEFAULT_SMOOTHING_PERIOD",
    "DEFAULT_TIME_PERIOD",
    "RECOMMENDED_HISTORY_PADDING",
    "PmoParams",
]
