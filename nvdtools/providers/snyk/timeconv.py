"""Conversion of advisory timestamps to the NVD layout."""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone

from nvdtools.vulndb.timeutil import format_time

_log = logging.getLogger(__name__)

# Seconds may be followed by a fractional part, as in both accepted layouts.
_PATTERN = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.\d+)?Z")


def snyk_time_to_nvd(s: str) -> str:
    """Convert ``YYYY-MM-DDTHH:MM:SS[.ffffff]Z`` to the NVD layout.

    Strings that cannot be parsed are logged and returned unchanged.
    """
    m = _PATTERN.fullmatch(s)
    if m:
        try:
            t = datetime(*(int(g) for g in m.groups()), tzinfo=timezone.utc)
        except ValueError as e:
            _log.warning("cannot parse snyk time: %s", e)
            return s
        return format_time(t)
    _log.warning("cannot parse snyk time: %r", s)
    return s