"""A timestamp that may be NULL in the database."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class NullTime:
    """A datetime that may be absent; ``valid`` is False for NULL."""

    time: datetime | None = None
    valid: bool = False

    def scan(self, value: Any) -> None:
        """Load a database value; anything but a datetime becomes NULL."""
        if isinstance(value, datetime):
            self.time, self.valid = value, True
        else:
            self.time, self.valid = None, False

    def value(self) -> datetime | None:
        """Return the value to store: the datetime, or None for NULL."""
        if not self.valid:
            return None
        return self.time