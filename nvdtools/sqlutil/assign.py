"""Assignment lists for the SET part of UPDATE statements."""

from __future__ import annotations

from typing import Any


class AssignmentList:
    """An ordered list of ``column=?`` assignments and literal fragments."""

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._args: list[Any] = []

    def literal(self, l: str) -> AssignmentList:
        """Append the literal string ``l``."""
        self._parts.append(l)
        return self

    def equal(self, k: str, v: Any) -> AssignmentList:
        """Append ``k=?`` bound to ``v``."""
        self._parts.append(f"{k}=?")
        self._args.append(v)
        return self

    def values(self) -> list[Any]:
        """Return the values bound to the assignments, in order."""
        return list(self._args)

    def __str__(self) -> str:
        return ", ".join(self._parts)


def assign() -> AssignmentList:
    """Return an empty assignment list."""
    return AssignmentList()