from __future__ import annotations

import pytest

from apps.cli.wiring.modules.indicators import build_cli_pmo_params
from pmo_indicators.contexts.indicators.domain.errors import InvalidParameterError
from pmo_indicators.platform.config import PmoRuntimeConfig


def test_build_cli_pmo_params_prefers_flags_over_config() -> None:
    config = PmoRuntimeConfig(time_period=30, smoothing_period=15, signal_period=8)

    params = build_cli_pmo_params(
        config=config,
        time_period=12,
        smoothing_period=None,
        signal_period=None,
    )

    assert params.as_dict() == {"time_period": 12, "smoothing_period": 15, "signal_period": 8}


def test_build_cli_pmo_params_rejects_invalid_flags() -> None:
    with pytest.raises(InvalidParameterError):
        build_cli_pmo_params(
            config=PmoRuntimeConfig(),
            time_period=None,
            smoothing_period=0,
            signal_period=None,
        )
