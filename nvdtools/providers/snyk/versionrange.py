"""Parsing of vulnerable version ranges.

Ranges come either in interval notation, e.g. ``[0,5), [,3], (8,)``, or as
comparisons such as ``>=1.0 <2.0 || =3.0``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

_CMP = re.compile(r"([<>](:?=)?)\s*(\S+)")


@dataclass(frozen=True)
class VersionRange:
    """Version bounds; an empty string means the bound is absent."""

    min_ver_incl: str = ""
    min_ver_excl: str = ""
    max_ver_incl: str = ""
    max_ver_excl: str = ""


def parse_version_range(range_str: str) -> list[VersionRange]:
    """Parse a range in either notation."""
    if looks_like_paren_range(range_str):
        return parse_paren_ranges(range_str)
    return parse_cmp_ranges(range_str)


def looks_like_paren_range(s: str) -> bool:
    """Report whether ``s`` looks like interval notation."""
    s = s.strip()
    if not s:
        return False
    return s[0] in "[(" and s[-1] in "])"


def _index_any(s: str, chars: str) -> int:
    return next((i for i, ch in enumerate(s) if ch in chars), -1)


def parse_paren_ranges(s: str) -> list[VersionRange]:
    """Parse intervals in interval notation.

    A single bound inside brackets means an exact version.
    """
    ranges: list[VersionRange] = []
    while s:
        left = _index_any(s, "([")
        right = _index_any(s, ")]")
        if left == -1 or right == -1 or right < left:
            raise ValueError(f"invalid range {s!r}")
        boundaries = s[left + 1 : right].split(",")
        if len(boundaries) == 1:
            version = boundaries[0].strip()
            ranges.append(VersionRange(min_ver_incl=version, max_ver_incl=version))
            s = s[right + 1 :]
            continue
        if len(boundaries) != 2:
            raise ValueError(f"invalid range {s!r}")
        low, high = boundaries[0].strip(), boundaries[1].strip()
        bounds: dict[str, str] = {}
        bounds["min_ver_excl" if s[left] == "(" else "min_ver_incl"] = low
        bounds["max_ver_excl" if s[right] == ")" else "max_ver_incl"] = high
        ranges.append(VersionRange(**bounds))
        suffix = s[right + 1 :]
        skipped = len(suffix) - len(suffix.lstrip())
        s = s[right + 1 + skipped :]
    return ranges


def parse_cmp_ranges(s: str) -> list[VersionRange]:
    """Parse comparison ranges (``<``, ``<=``, ``=``, ``>``, ``>=``) joined by ``||``."""
    ranges: list[VersionRange] = []
    for part in s.split("||"):
        part = part.strip()
        if not part:
            continue
        if part[0] == "=":
            version = part[1:].strip()
            ranges.append(VersionRange(min_ver_incl=version, max_ver_incl=version))
            continue
        bounds: dict[str, str] = {}
        for m in _CMP.finditer(part):
            match = m.group(0)
            if match[0] == "<":
                if match[1] == "=":
                    bounds["max_ver_incl"] = match[2:].strip()
                else:
                    bounds["max_ver_excl"] = match[1:].strip()
            else:
                if match[1] == "=":
                    bounds["min_ver_incl"] = match[2:].strip()
                else:
                    bounds["min_ver_excl"] = match[1:].strip()
        ranges.append(VersionRange(**bounds))
    return ranges