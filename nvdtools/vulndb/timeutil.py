"""Timestamps in the NVD CVE JSON layout (``YYYY-MM-DDTHH:MMZ``)."""

from __future__ import annotations

import re
from datetime import datetime, timezone

TIME_LAYOUT = "%Y-%m-%dT%H:%MZ"
ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})Z")


def parse_time(s: str) -> datetime:
    """Parse an NVD timestamp into a UTC datetime."""
    m = _PATTERN.fullmatch(s)
    if not m:
        raise ValueError(f"cannot parse {s!r} as time in layout {TIME_LAYOUT!r}")
    year, month, day, hour, minute = (int(g) for g in m.groups())
    try:
        return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)
    except ValueError as e:
        raise ValueError(f"cannot parse {s!r} as time: {e}") from e


def format_time(t: datetime | str | None) -> str:
    """Format a timestamp in the NVD layout.

    ``None`` stands for the zero time, and ISO strings as returned by some
    database drivers are accepted as well as datetimes.
    """
    if t is None:
        t = ZERO_TIME
    elif isinstance(t, str):
        try:
            t = datetime.fromisoformat(t)
        except ValueError:
            t = parse_time(t)
    if t.tzinfo is not None:
        t = t.astimezone(timezone.utc)
    return f"{t.year:04d}-{t.month:02d}-{t.day:02d}T{t.hour:02d}:{t.minute:02d}Z"