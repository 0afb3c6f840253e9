from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone


@dataclass(frozen=True, slots=True, order=True)
class UtcTimestamp:
    """
    UtcTimestamp: bar time with a strict UTC requirement.

    Rules:
    - input datetime must be timezone-aware (naive is rejected)
    - value is stored in UTC at full microsecond precision
    """

    value: datetime

    def __post_init__(self) -> None:
        dt = self.value

        # tzinfo may be set while utcoffset() still returns None.
        if dt.tzinfo is None or dt.utcoffset() is None:
            raise ValueError("UtcTimestamp requires a timezone-aware datetime (naive datetime is forbidden)")  # noqa: E501

        object.__setattr__(self, "value", dt.astimezone(timezone.utc))

    @classmethod
    def parse(cls, raw: str) -> "UtcTimestamp":
        """
        Parse ISO-8601 text; date-only and naive values are read as UTC.
        A trailing `Z` suffix is accepted.
        """
        text = raw.strip()
        if not text:
            raise ValueError("timestamp must be non-empty")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(text)
        except ValueError as e:
            raise ValueError(f"timestamp must be ISO-8601, got {raw!r}") from e
        if dt.tzinfo is None or dt.utcoffset() is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return cls(dt)

    def __str__(self) -> str:
        """
        ISO form in UTC with a `Z` suffix.
        Milliseconds by default; microseconds when the value carries them.
        Example: 2026-02-04T12:34:56.789Z
        """
        timespec = "milliseconds" if self.value.microsecond % 1000 == 0 else "microseconds"
        s = self.value.isoformat(timespec=timespec)
        if s.endswith("+00:00"):
            s = s[:-6] + "Z"
        return s
