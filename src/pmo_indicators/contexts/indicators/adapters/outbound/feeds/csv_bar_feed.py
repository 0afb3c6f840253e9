from __future__ import annotations

import csv
import logging
from decimal import Decimal, InvalidOperation
from pathlib import Path

from pmo_indicators.shared_kernel.primitives import Bar, UtcTimestamp

log = logging.getLogger(__name__)


_REQUIRED_COLUMNS = ("timestamp", "close")
_OPTIONAL_PRICE_COLUMNS = ("open", "high", "low")


def load_bars_from_csv(path: str | Path) -> list[Bar]:
    """
    Load bars from a header CSV file.

    Contract:
    - required columns: timestamp,close
    - optional columns: open,high,low (default to close), volume (default 0)
    - timestamp: ISO-8601; naive values are read as UTC
    - prices: decimal text, parsed without float rounding
    - row order is preserved; ordering is the history preparer's job
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"bars csv not found: {p}")

    with p.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        if reader.fieldnames is None:
            raise ValueError("bars csv must have a header row")

        fieldnames = [name.strip() for name in reader.fieldnames]
        reader.fieldnames = fieldnames
        missing = [c for c in _REQUIRED_COLUMNS if c not in fieldnames]
        if missing:
            raise ValueError(f"bars csv missing required columns: {missing}; got columns={fieldnames}")  # noqa: E501

        bars: list[Bar] = []
        for idx, raw in enumerate(reader, start=2):  # header is line 1
            try:
                bars.append(_parse_row(raw))
            except (TypeError, ValueError) as e:
                raise ValueError(f"invalid bars row at line {idx}: {e}") from e

    log.debug("loaded bars from csv: path=%s count=%s", p, len(bars))
    return bars


def _parse_row(raw: dict[str, str | None]) -> Bar:
    timestamp = UtcTimestamp.parse(_parse_str(raw.get("timestamp"), field="timestamp"))
    close = _parse_decimal(raw.get("close"), field="close")

    prices: dict[str, Decimal] = {}
    for field in _OPTIONAL_PRICE_COLUMNS:
        value = raw.get(field)
        prices[field] = close if _is_blank(value) else _parse_decimal(value, field=field)

    volume_raw = raw.get("volume")
    volume = Decimal(0) if _is_blank(volume_raw) else _parse_decimal(volume_raw, field="volume")

    return Bar(
        timestamp=timestamp,
        open=prices["open"],
        high=prices["high"],
        low=prices["low"],
        close=close,
        volume=volume,
    )


def _is_blank(v: str | None) -> bool:
    return v is None or not v.strip()


def _parse_str(v: str | None, *, field: str) -> str:
    if v is None:
        raise ValueError(f"{field} is required")
    s = v.strip()
    if not s:
        raise ValueError(f"{field} must be non-empty")
    return s


def _parse_decimal(v: str | None, *, field: str) -> Decimal:
    s = _parse_str(v, field=field)
    try:
        value = Decimal(s)
    except InvalidOperation as e:
        raise ValueError(f"{field} must be a decimal, got {v!r}") from e
    if not value.is_finite():
        raise ValueError(f"{field} must be finite, got {v!r}")
    return value
