"""Thread-safe counters and accumulated values, written out as CSV."""

from __future__ import annotations

import argparse
import csv
import logging
import sys
import threading
import time
from typing import Any, TextIO

_log = logging.getLogger(__name__)


def _store_into(target: Any, attr: str, const: Any = None) -> type[argparse.Action]:
    class _Store(argparse.Action):
        def __call__(self, parser, namespace, values, option_string=None):
            value = const if self.nargs == 0 else values
            setattr(namespace, self.dest, value)
            setattr(target, attr, value)

    return _Store


class Stats:
    """Counters and float values keyed by name."""

    def __init__(self, output_file: str = "", log_to_stderr: bool = False) -> None:
        self.output_file = output_file
        self.log_to_stderr = log_to_stderr
        self._counters_lock = threading.Lock()
        self._values_lock = threading.Lock()
        self._counters: dict[str, int] = {}
        self._values: dict[str, float] = {}

    def are_logged(self) -> bool:
        """Return whether these stats are written anywhere."""
        return self.log_to_stderr or bool(self.output_file)

    def add_arguments(self, parser: argparse.ArgumentParser) -> None:
        """Add ``--output_stats`` and ``--log_stats`` options bound to this object."""
        parser.add_argument(
            "-output_stats",
            "--output_stats",
            default="",
            action=_store_into(self, "output_file"),
            help="output stats to this file",
        )
        parser.add_argument(
            "-log_stats",
            "--log_stats",
            default=False,
            nargs=0,
            action=_store_into(self, "log_to_stderr", True),
            help="log stats to stderr",
        )

    def increment_counter(self, key: str) -> None:
        """Increment the counter ``key`` by one."""
        self.increment_counter_by(key, 1)

    def increment_counter_by(self, key: str, value: int) -> None:
        """Increment the counter ``key`` by ``value``."""
        with self._counters_lock:
            self._counters[key] = self._counters.get(key, 0) + value

    def add_to_value(self, key: str, value: float) -> None:
        """Add ``value`` to the value ``key``."""
        with self._values_lock:
            self._values[key] = self._values.get(key, 0.0) + value

    def track_time(self, key: str, start: float, unit: float) -> None:
        """Add the whole units elapsed since ``start`` to the value ``key``.

        ``start`` is a ``time.monotonic()`` reading and ``unit`` is in seconds.
        """
        elapsed = time.monotonic() - start
        self.add_to_value(key, float(elapsed // unit))

    def get_counter(self, key: str) -> int:
        """Return the counter ``key``, zero if never incremented."""
        with self._counters_lock:
            return self._counters.get(key, 0)

    def get_value(self, key: str) -> float:
        """Return the value ``key``, zero if never added to."""
        with self._values_lock:
            return self._values.get(key, 0.0)

    def clear(self) -> None:
        """Reset all counters and values to zero."""
        with self._counters_lock:
            self._counters = {}
        with self._values_lock:
            self._values = {}

    def write(self) -> None:
        """Write the stats to stderr and/or append them to ``output_file``."""
        if self.log_to_stderr:
            try:
                self.write_csv(sys.stderr)
            except OSError as e:
                raise OSError(f"failed to write stats to stderr: {e}") from e
        if self.output_file:
            try:
                f = open(self.output_file, "a", newline="", encoding="utf-8")
            except OSError as e:
                raise OSError(f"failed to open stats file: {e}") from e
            with f:
                try:
                    self.write_csv(f)
                except OSError as e:
                    raise OSError(f"failed to write stats to file: {e}") from e

    def write_and_log_error(self) -> None:
        """Write the stats, logging rather than raising on failure."""
        try:
            self.write()
        except OSError as e:
            _log.error("failed to write stats: %s", e)

    def write_csv(self, stream: TextIO) -> None:
        """Write counters then values to ``stream`` as ``key,value`` CSV rows."""
        with self._counters_lock:
            counters = list(self._counters.items())
        with self._values_lock:
            values = list(self._values.items())
        writer = csv.writer(stream, lineterminator="\n")
        writer.writerows((key, str(counter)) for key, counter in counters)
        writer.writerows((key, f"{value:.2f}") for key, value in values)
        stream.flush()


_global = Stats()


def are_logged() -> bool:
    """Return whether the global stats are written anywhere."""
    return _global.are_logged()


def add_arguments(parser: argparse.ArgumentParser) -> None:
    """Add the stats options for the global stats to ``parser``."""
    _global.add_arguments(parser)


def increment_counter(key: str) -> None:
    """Increment the global counter ``key`` by one."""
    _global.increment_counter(key)


def increment_counter_by(key: str, value: int) -> None:
    """Increment the global counter ``key`` by ``value``."""
    _global.increment_counter_by(key, value)


def add_to_value(key: str, value: float) -> None:
    """Add ``value`` to the global value ``key``."""
    _global.add_to_value(key, value)


def track_time(key: str, start: float, unit: float) -> None:
    """Add the whole units elapsed since ``start`` to the global value ``key``."""
    _global.track_time(key, start, unit)


def get_counter(key: str) -> int:
    """Return the global counter ``key``."""
    return _global.get_counter(key)


def get_value(key: str) -> float:
    """Return the global value ``key``."""
    return _global.get_value(key)


def clear() -> None:
    """Reset the global stats."""
    _global.clear()


def write() -> None:
    """Write the global stats."""
    _global.write()


def write_and_log_error() -> None:
    """Write the global stats, logging rather than raising on failure."""
    _global.write_and_log_error()