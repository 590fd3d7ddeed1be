"""Mapping of dataclass instances to database records."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Iterable

_TAG = "sql"


def column(name: str, **kwargs: Any) -> Any:
    """Declare a dataclass field stored in the table column ``name``."""
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[_TAG] = name
    return dataclasses.field(metadata=metadata, **kwargs)


def _exported_fields(obj: Any) -> list[dataclasses.Field]:
    return [f for f in dataclasses.fields(obj) if not f.name.startswith("_")]


def _column_name(f: dataclasses.Field) -> str:
    return f.metadata.get(_TAG) or f.name


@dataclass(frozen=True)
class _RecordSubset:
    cols: tuple[str, ...]
    vals: tuple[Any, ...]

    @classmethod
    def build(
        cls, cols: list[str], vals: list[Any], wanted: tuple[str, ...]
    ) -> _RecordSubset:
        if len(cols) != len(vals):
            raise ValueError("columns and values have different lengths")
        selected = [(c, v) for c, v in zip(cols, vals) if c in wanted]
        return cls(tuple(c for c, _ in selected), tuple(v for _, v in selected))

    def subset(self, *args: str) -> _RecordSubset:
        return _RecordSubset.build(list(self.cols), list(self.vals), args)

    def fields(self) -> list[str]:
        return list(self.cols)

    def values(self) -> list[Any]:
        return list(self.vals)


@dataclass(frozen=True)
class RecordType:
    """A record backed by a dataclass; column names come from ``column``."""

    record: Any

    def __post_init__(self) -> None:
        if not dataclasses.is_dataclass(self.record):
            raise TypeError(
                f"record is not a dataclass: {type(self.record).__name__}"
            )

    def subset(self, *args: str) -> _RecordSubset:
        """Return the record restricted to the named columns, in field order."""
        return _RecordSubset.build(self.fields(), self.values(), args)

    def fields(self) -> list[str]:
        """Return the table column names of the public fields."""
        return [_column_name(f) for f in _exported_fields(self.record)]

    def values(self) -> list[Any]:
        """Return the values of the public fields."""
        return [getattr(self.record, f.name) for f in _exported_fields(self.record)]


class Records(list):
    """A list of records treated as one multi-row record."""

    def subset(self, *args: str) -> Records:
        """Return every record restricted to the named columns."""
        return Records(r.subset(*args) for r in self)

    def fields(self) -> list[str]:
        """Return the column names of the first record."""
        if not self:
            return []
        return self[0].fields()

    def values(self) -> list[Any]:
        """Return the values of all records, one after another."""
        return [v for record in self for v in record.values()]


def new_records(items: Iterable[Any]) -> Records:
    """Wrap each dataclass instance of ``items`` as a record."""
    return Records(RecordType(item) for item in items)