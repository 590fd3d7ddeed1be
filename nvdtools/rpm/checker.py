"""Checkers that decide whether a package is fixed for a CVE on a distribution."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from nvdtools.rpm.parse import Package


class Checker(ABC):
    """Decides whether a package on a distribution is fixed for a CVE."""

    @abstractmethod
    def check(self, pkg: Package | None, distro: Any, cve: str) -> bool:
        """Return True if ``pkg`` on ``distro`` is fixed for ``cve``."""


class _AnyChecker(Checker):
    def __init__(self, checkers: tuple[Checker, ...]) -> None:
        self._checkers = checkers

    def check(self, pkg: Package | None, distro: Any, cve: str) -> bool:
        return any(c.check(pkg, distro, cve) for c in self._checkers)


class _AllChecker(Checker):
    def __init__(self, checkers: tuple[Checker, ...]) -> None:
        self._checkers = checkers

    def check(self, pkg: Package | None, distro: Any, cve: str) -> bool:
        if not self._checkers:
            return False
        return all(c.check(pkg, distro, cve) for c in self._checkers)


def check_any(*args: Checker) -> Checker:
    """Return a checker that passes if any of ``args`` passes."""
    return _AnyChecker(args)


def check_all(*args: Checker) -> Checker:
    """Return a checker that passes if all of ``args`` pass; False when empty."""
    return _AllChecker(args)