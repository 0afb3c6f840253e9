from __future__ import annotations

from pmo_indicators.contexts.indicators.domain.specifications import PmoParams
from pmo_indicators.platform.config import PmoRuntimeConfig


def build_cli_pmo_params(
    *,
    config: PmoRuntimeConfig,
    time_period: int | None,
    smoothing_period: int | None,
    signal_period: int | None,
) -> PmoParams:
    """
    Merge command-line period flags over configured defaults.

    Args:
        config: Loaded runtime config.
        time_period: `--time-period` value or None.
        smoothing_period: `--smoothing-period` value or None.
        signal_period: `--signal-period` value or None.
    Returns:
        PmoParams: Validated effective periods.
    Assumptions:
        A flag left unset falls back to config.
    Raises:
        InvalidParameterError: If merged periods violate bounds.
    Side Effects:
        None.
    """
    return PmoParams(
        time_period=config.time_period if time_period is None else time_period,
        smoothing_period=(
            config.smoothing_period if smoothing_period is None else smoothing_period
        ),
        signal_period=config.signal_period if signal_period is None else signal_period,
    )
