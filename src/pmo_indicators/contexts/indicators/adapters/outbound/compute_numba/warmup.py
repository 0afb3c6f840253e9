"""
Numba runtime configuration and warmup runner for PMO grid kernels.

Related: .pmo_kernels, pmo_indicators.platform.config.pmo_runtime
"""

from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, cast

import numba
import numpy as np

from pmo_indicators.platform.config import PmoRuntimeConfig

from .pmo_kernels import compute_pmo_grid_f64

log = logging.getLogger(__name__)


def apply_numba_runtime_config(*, config: PmoRuntimeConfig) -> int:
    """
    Apply numba threads/cache settings and validate cache directory writability.

    Args:
        config: Validated PMO runtime config.
    Returns:
        int: Effective numba thread count after applying configuration.
    Assumptions:
        Numba runtime is available in current interpreter.
    Raises:
        ValueError: If cache directory is not writable.
    Side Effects:
        Mutates process env (`NUMBA_CACHE_DIR`) and numba runtime state.
    """
    os.environ["NUMBA_CACHE_DIR"] = str(config.numba_cache_dir)

    cache_dir = ensure_numba_cache_dir_writable(path=config.numba_cache_dir)
    numba_config = cast(Any, numba.config)
    setattr(numba_config, "CACHE_DIR", str(cache_dir))
    numba.set_num_threads(min(config.numba_num_threads, numba.config.NUMBA_NUM_THREADS))
    return int(numba.get_num_threads())


def ensure_numba_cache_dir_writable(*, path: Path) -> Path:
    """
    Ensure provided cache directory exists and supports write operations.

    Args:
        path: Candidate Numba cache directory.
    Returns:
        Path: Normalized cache directory path.
    Assumptions:
        Caller passes path resolved from runtime config.
    Raises:
        ValueError: If path cannot be created or written.
    Side Effects:
        Creates directory tree when missing and touches a short-lived probe file.
    """
    normalized = Path(path)
    try:
        normalized.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            prefix=".numba_write_probe_",
            dir=normalized,
            delete=True,
            encoding="utf-8",
        ) as probe:
            probe.write("ok")
            probe.flush()
    except OSError as error:
        raise ValueError(f"NUMBA_CACHE_DIR is not writable: {normalized}") from error
    return normalized


class PmoNumbaWarmupRunner:
    """
    Idempotent warmup runner compiling PMO grid kernels before first request.

    Related: .pmo_kernels, apps.api.wiring.modules.indicators
    """

    def __init__(self, *, config: PmoRuntimeConfig) -> None:
        self._config = config
        self._is_warm = False

    @property
    def is_warm(self) -> bool:
        return self._is_warm

    def warmup(self) -> None:
        """
        Apply runtime config and eagerly compile PMO kernels.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Warmup inputs are deterministic and side-effect free for business logic.
        Raises:
            ValueError: If runtime config cannot be applied.
        Side Effects:
            JIT-compiles Numba kernels and emits one log record.
        """
        if self._is_warm:
            return

        warmup_started = time.perf_counter()
        effective_threads = apply_numba_runtime_config(config=self._config)
        self._run_kernel_warmup()
        elapsed_seconds = time.perf_counter() - warmup_started
        log.info(
            "compute_numba warmup complete",
            extra={
                "warmup_done": True,
                "warmup_seconds": round(elapsed_seconds, 6),
                "numba_num_threads_effective": effective_threads,
                "numba_cache_dir": str(self._config.numba_cache_dir),
                "kernels": ["compute_pmo_grid_f64"],
            },
        )
        self._is_warm = True

    def _run_kernel_warmup(self) -> None:
        config = self._config
        t_size = max(256, config.time_period + config.smoothing_period + config.signal_period)
        close = np.linspace(100.0, 110.0, t_size, dtype=np.float64)
        _ = compute_pmo_grid_f64(
            close=close,
            time_periods=np.array([config.time_period], dtype=np.int64),
            smoothing_periods=np.array([config.smoothing_period], dtype=np.int64),
            signal_periods=np.array([config.signal_period], dtype=np.int64),
        )
