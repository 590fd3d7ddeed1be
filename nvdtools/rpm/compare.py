"""Ordering of RPM versions and labels, following rpmvercmp."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from nvdtools.rpm.parse import Label


def _is_alnum_or_tilde(ch: str) -> bool:
    return ch.isalpha() or ch.isdecimal() or ch == "~"


def _trim_left(s: str, keep: Callable[[str], bool]) -> str:
    for i, ch in enumerate(s):
        if keep(ch):
            return s[i:]
    return ""


def _take_while(s: str, pred: Callable[[str], bool]) -> tuple[str, str]:
    for i, ch in enumerate(s):
        if not pred(ch):
            return s[:i], s[i:]
    return s, ""


def _compare_len(s1: str, s2: str) -> int:
    return (len(s1) > len(s2)) - (len(s1) < len(s2))


def version_compare(v1: str, v2: str) -> int:
    """Compare two version strings; return -1, 0 or 1."""
    if v1 == v2:
        return 0

    while True:
        v1 = _trim_left(v1, _is_alnum_or_tilde)
        v2 = _trim_left(v2, _is_alnum_or_tilde)

        t1 = v1.startswith("~")
        t2 = v2.startswith("~")
        if t1 and t2:
            v1, v2 = v1[1:], v2[1:]
            continue
        if t1:
            return -1
        if t2:
            return 1

        if not v1 or not v2:
            break

        numeric = v1[0].isdecimal()
        pred = str.isdecimal if numeric else str.isalpha

        seg1, v1 = _take_while(v1, pred)
        seg2, v2 = _take_while(v2, pred)

        if not seg2:
            return 1 if numeric else -1

        if numeric:
            seg1 = seg1.lstrip("0")
            seg2 = seg2.lstrip("0")
            c = _compare_len(seg1, seg2)
            if c:
                return c

        if seg1 < seg2:
            return -1
        if seg1 > seg2:
            return 1

    return _compare_len(v1, v2)


def label_compare(l1: Label, l2: Label) -> int:
    """Compare two labels by epoch, then version, then release."""
    if not l1.epoch:
        l1 = replace(l1, epoch="0")
    if not l2.epoch:
        l2 = replace(l2, epoch="0")
    for a, b in (
        (l1.epoch, l2.epoch),
        (l1.version, l2.version),
        (l1.release, l2.release),
    ):
        c = version_compare(a, b)
        if c:
            return c
    return 0