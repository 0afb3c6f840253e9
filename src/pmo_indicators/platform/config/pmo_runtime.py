"""
Runtime config loader for PMO compute: default periods, decimal precision, numba.

Related: pmo_indicators.contexts.indicators.adapters.outbound.compute_numba.warmup,
  apps.api.wiring.modules.indicators, apps.cli.commands.compute_pmo
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import yaml

_ENV_NAME_KEY = "PMO_ENV"
_CONFIG_PATH_KEY = "PMO_CONFIG"
_ALLOWED_ENVS = ("dev", "prod", "test")

_TIME_PERIOD_ENV_KEYS = ("PMO_TIME_PERIOD",)
_SMOOTHING_PERIOD_ENV_KEYS = ("PMO_SMOOTHING_PERIOD",)
_SIGNAL_PERIOD_ENV_KEYS = ("PMO_SIGNAL_PERIOD",)
_PRECISION_ENV_KEYS = ("PMO_DECIMAL_PRECISION",)
_THREADS_ENV_KEYS = ("PMO_NUMBA_NUM_THREADS", "NUMBA_NUM_THREADS")
_CACHE_DIR_ENV_KEYS = ("PMO_NUMBA_CACHE_DIR", "NUMBA_CACHE_DIR")

_DEFAULT_TIME_PERIOD = 35
_DEFAULT_SMOOTHING_PERIOD = 20
_DEFAULT_SIGNAL_PERIOD = 10
_DEFAULT_DECIMAL_PRECISION = 28
_DEFAULT_NUMBA_NUM_THREADS = max(1, min(os.cpu_count() or 1, 16))
_DEFAULT_NUMBA_CACHE_DIR = Path(".cache/numba")


@dataclass(frozen=True, slots=True)
class PmoRuntimeConfig:
    """
    Immutable runtime config for PMO compute entrypoints.

    Related: pmo_indicators.contexts.indicators.domain.specifications.pmo_params,
      pmo_indicators.contexts.indicators.adapters.outbound.compute_numba.warmup
    """

    time_period: int = _DEFAULT_TIME_PERIOD
    smoothing_period: int = _DEFAULT_SMOOTHING_PERIOD
    signal_period: int = _DEFAULT_SIGNAL_PERIOD
    decimal_precision: int = _DEFAULT_DECIMAL_PRECISION
    numba_num_threads: int = _DEFAULT_NUMBA_NUM_THREADS
    numba_cache_dir: Path = _DEFAULT_NUMBA_CACHE_DIR

    def __post_init__(self) -> None:
        """
        Validate runtime config invariants.

        Args:
            None.
        Returns:
            None.
        Assumptions:
            Period-specific bounds (`time_period > 1`) are enforced by `PmoParams`.
        Raises:
            ValueError: If any value violates required bounds.
        Side Effects:
            Normalizes cache directory path to `Path`.
        """
        for name in (
            "time_period",
            "smoothing_period",
            "signal_period",
            "decimal_precision",
            "numba_num_threads",
        ):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be > 0, got {value}")
        if not str(self.numba_cache_dir).strip():
            raise ValueError("numba_cache_dir must be a non-empty path")
        object.__setattr__(self, "numba_cache_dir", Path(self.numba_cache_dir))


def load_pmo_runtime_config(*, environ: Mapping[str, str]) -> PmoRuntimeConfig:
    """
    Load PMO runtime config from YAML and env overrides.

    Args:
        environ: Environment mapping used to resolve env and override values.
    Returns:
        PmoRuntimeConfig: Validated runtime settings.
    Assumptions:
        Sections `pmo.defaults`, `pmo.decimal` and `compute.numba` are optional.
    Raises:
        FileNotFoundError: If `PMO_CONFIG` points to a missing file.
        ValueError: If YAML or environment values are invalid.
    Side Effects:
        Reads at most one YAML file from disk.
    """
    config_path, explicit = _resolve_config_path(environ=environ)
    raw = _load_optional_yaml(path=config_path, required=explicit)

    defaults_payload = _section(raw, path=("pmo", "defaults"))
    decimal_payload = _section(raw, path=("pmo", "decimal"))
    numba_payload = _section(raw, path=("compute", "numba"))

    return PmoRuntimeConfig(
        time_period=_resolve_int_setting(
            environ=environ,
            env_keys=_TIME_PERIOD_ENV_KEYS,
            payload=defaults_payload,
            payload_key="time_period",
            yaml_path="pmo.defaults",
            default=_DEFAULT_TIME_PERIOD,
        ),
        smoothing_period=_resolve_int_setting(
            environ=environ,
            env_keys=_SMOOTHING_PERIOD_ENV_KEYS,
            payload=defaults_payload,
            payload_key="smoothing_period",
            yaml_path="pmo.defaults",
            default=_DEFAULT_SMOOTHING_PERIOD,
        ),
        signal_period=_resolve_int_setting(
            environ=environ,
            env_keys=_SIGNAL_PERIOD_ENV_KEYS,
            payload=defaults_payload,
            payload_key="signal_period",
            yaml_path="pmo.defaults",
            default=_DEFAULT_SIGNAL_PERIOD,
        ),
        decimal_precision=_resolve_int_setting(
            environ=environ,
            env_keys=_PRECISION_ENV_KEYS,
            payload=decimal_payload,
            payload_key="precision",
            yaml_path="pmo.decimal",
            default=_DEFAULT_DECIMAL_PRECISION,
        ),
        numba_num_threads=_resolve_int_setting(
            environ=environ,
            env_keys=_THREADS_ENV_KEYS,
            payload=numba_payload,
            payload_key="numba_num_threads",
            yaml_path="compute.numba",
            default=_DEFAULT_NUMBA_NUM_THREADS,
        ),
        numba_cache_dir=_resolve_path_setting(
            environ=environ,
            env_keys=_CACHE_DIR_ENV_KEYS,
            payload=numba_payload,
            payload_key="numba_cache_dir",
            yaml_path="compute.numba",
            default=_DEFAULT_NUMBA_CACHE_DIR,
        ),
    )


def _resolve_config_path(*, environ: Mapping[str, str]) -> tuple[Path, bool]:
    """
    Resolve PMO YAML path using explicit override or `PMO_ENV`.

    Args:
        environ: Environment mapping.
    Returns:
        tuple[Path, bool]: Config path and whether it was set explicitly.
    Assumptions:
        `PMO_CONFIG` has priority over env-derived path.
    Raises:
        ValueError: If env value is invalid.
    Side Effects:
        None.
    """
    override = environ.get(_CONFIG_PATH_KEY, "").strip()
    if override:
        return Path(override), True

    env_name = _resolve_env_name(environ=environ)
    return Path("configs") / env_name / "pmo.yaml", False


def _resolve_env_name(*, environ: Mapping[str, str]) -> str:
    """
    Resolve normalized runtime environment name.

    Args:
        environ: Environment mapping.
    Returns:
        str: One of `dev`, `prod`, `test`.
    Assumptions:
        Missing env falls back to `dev`.
    Raises:
        ValueError: If value is outside allowed set.
    Side Effects:
        None.
    """
    raw_env = environ.get(_ENV_NAME_KEY, "dev").strip().lower()
    if raw_env not in _ALLOWED_ENVS:
        raise ValueError(
            f"{_ENV_NAME_KEY} must be one of {_ALLOWED_ENVS}, got {raw_env!r}"
        )
    return raw_env


def _load_optional_yaml(*, path: Path, required: bool) -> Mapping[str, Any]:
    """
    Load top-level YAML mapping, or empty mapping for an absent implicit file.

    Args:
        path: Config path.
        required: Whether a missing file is an error.
    Returns:
        Mapping[str, Any]: Top-level mapping.
    Assumptions:
        Unknown keys are ignored by this loader.
    Raises:
        FileNotFoundError: If a required file does not exist.
        ValueError: If YAML top-level is not a mapping.
    Side Effects:
        Reads one UTF-8 file from disk when present.
    """
    if not path.exists():
        if required:
            raise FileNotFoundError(f"pmo config not found: {path}")
        return {}
    raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ValueError("pmo config must be a mapping at top-level")
    return raw


def _section(raw: Mapping[str, Any], *, path: tuple[str, ...]) -> Mapping[str, Any]:
    """
    Walk nested optional mappings.

    Args:
        raw: Top-level YAML mapping.
        path: Keys to follow.
    Returns:
        Mapping[str, Any]: Nested mapping, or empty mapping when absent.
    Assumptions:
        None.
    Raises:
        ValueError: If an intermediate value is not a mapping.
    Side Effects:
        None.
    """
    current: Mapping[str, Any] = raw
    for depth, key in enumerate(path):
        value = current.get(key)
        if value is None:
            return {}
        if not isinstance(value, dict):
            dotted = ".".join(path[: depth + 1])
            raise ValueError(f"{dotted} section must be a mapping")
        current = value
    return current


def _resolve_int_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    yaml_path: str,
    default: int,
) -> int:
    """
    Resolve integer setting from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        env_keys: Candidate env variable names by priority.
        payload: Parsed YAML subsection.
        payload_key: YAML key name.
        yaml_path: Dot-path of the subsection for error messages.
        default: Fallback default value.
    Returns:
        int: Resolved integer value.
    Assumptions:
        String env values use base-10 integer format.
    Raises:
        ValueError: If provided value cannot be parsed as positive int.
    Side Effects:
        None.
    """
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return _parse_positive_int(raw, key=env_key)

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default

    if isinstance(payload_value, bool) or not isinstance(payload_value, int):
        raise ValueError(
            f"expected int for {yaml_path}.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    if payload_value <= 0:
        raise ValueError(f"{yaml_path}.{payload_key} must be > 0, got {payload_value}")
    return payload_value


def _resolve_path_setting(
    *,
    environ: Mapping[str, str],
    env_keys: tuple[str, ...],
    payload: Mapping[str, Any],
    payload_key: str,
    yaml_path: str,
    default: Path,
) -> Path:
    """
    Resolve path setting from env -> payload -> default precedence.

    Args:
        environ: Environment mapping.
        env_keys: Candidate env variable names by priority.
        payload: Parsed YAML subsection.
        payload_key: YAML key name.
        yaml_path: Dot-path of the subsection for error messages.
        default: Fallback default path.
    Returns:
        Path: Resolved non-empty path.
    Assumptions:
        Relative paths are allowed and resolved by caller context.
    Raises:
        ValueError: If provided path is blank or non-string in YAML.
    Side Effects:
        None.
    """
    for env_key in env_keys:
        raw = environ.get(env_key, "").strip()
        if raw:
            return Path(raw)

    payload_value = payload.get(payload_key)
    if payload_value is None:
        return default
    if not isinstance(payload_value, str):
        raise ValueError(
            f"expected string for {yaml_path}.{payload_key}, "
            f"got {type(payload_value).__name__}"
        )
    normalized = payload_value.strip()
    if not normalized:
        raise ValueError(f"{yaml_path}.{payload_key} must be non-empty")
    return Path(normalized)


def _parse_positive_int(raw: str, *, key: str) -> int:
    """
    Parse positive integer from environment string.

    Args:
        raw: Raw env string.
        key: Env key name for diagnostics.
    Returns:
        int: Parsed positive integer.
    Assumptions:
        Input value is stripped before parsing.
    Raises:
        ValueError: If value is not a positive base-10 integer.
    Side Effects:
        None.
    """
    try:
        value = int(raw)
    except ValueError as error:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from error
    if value <= 0:
        raise ValueError(f"{key} must be > 0, got {value}")
    return value
