"""Reading and writing NVD CVE JSON 1.0 feeds."""

from __future__ import annotations

import gzip
import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, BinaryIO, TextIO

from nvdtools.vulndb.timeutil import ZERO_TIME, parse_time

_GZIP_MAGIC = b"\x1f\x8b"


class VulnDBError(Exception):
    """Raised when a vulnerability database operation fails."""


class FeedError(VulnDBError):
    """Raised when an NVD CVE JSON feed or payload cannot be read."""


def _get(d: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(d, dict):
            return None
        d = d.get(key)
    return d


@dataclass
class CVEFile:
    """A collection of CVE items to be written out as an NVD feed."""

    items: list[dict[str, Any]] = field(default_factory=list)

    def add(self, cve: str, nvdjson: bytes | str) -> None:
        """Decode one JSON CVE item and add it to the file."""
        if isinstance(nvdjson, memoryview):
            nvdjson = nvdjson.tobytes()
        try:
            item = json.loads(nvdjson)
        except (ValueError, TypeError) as e:
            raise FeedError(f"{cve} json payload is corrupted: {e}") from e
        self.items.append(item)

    def _document(self) -> dict[str, Any]:
        return {"CVE_Items": self.items}

    def encode_json(self, stream: TextIO) -> None:
        """Write the feed as compact JSON followed by a newline."""
        try:
            text = json.dumps(
                self._document(), separators=(",", ":"), ensure_ascii=False
            )
            stream.write(text + "\n")
        except (TypeError, ValueError, OSError) as e:
            raise VulnDBError(f"cannot encode NVD CVE JSON file: {e}") from e

    def encode_indented_json(self, stream: TextIO, prefix: str, indent: str) -> None:
        """Write the feed as indented JSON; each new line starts with ``prefix``."""
        try:
            text = json.dumps(self._document(), indent=indent, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise VulnDBError(f"cannot encode NVD CVE JSON file: {e}") from e
        if prefix:
            text = text.replace("\n", "\n" + prefix)
        try:
            stream.write(text + "\n")
        except OSError as e:
            raise VulnDBError(f"cannot copy indented NVD CVE JSON file: {e}") from e


@dataclass(frozen=True)
class CVEItem:
    """Accessors for the fields of one NVD CVE item."""

    item: dict[str, Any]

    def id(self) -> str:
        """Return the CVE ID, or an empty string."""
        return _get(self.item, "cve", "CVE_data_meta", "ID") or ""

    def _time(self, key: str) -> datetime:
        try:
            return parse_time(self.item.get(key) or "")
        except ValueError:
            return ZERO_TIME

    def published(self) -> datetime:
        """Return the published date, or the zero time."""
        return self._time("publishedDate")

    def modified(self) -> datetime:
        """Return the last modified date, or the zero time."""
        return self._time("lastModifiedDate")

    def summary(self) -> str:
        """Return the first description, or an empty string."""
        data = _get(self.item, "cve", "description", "description_data")
        if data:
            return _get(data[0], "value") or ""
        return ""

    def base_score(self) -> float:
        """Return the CVSS v3 base score if positive, else the v2 one, else 0."""
        v3 = _get(self.item, "impact", "baseMetricV3", "cvssV3", "baseScore")
        if v3 is not None and v3 > 0:
            return float(v3)
        v2 = _get(self.item, "impact", "baseMetricV2", "cvssV2")
        if isinstance(v2, dict):
            return float(v2.get("baseScore") or 0)
        return 0.0

    def json(self) -> str:
        """Return the item as compact JSON."""
        return json.dumps(self.item, separators=(",", ":"), ensure_ascii=False)


def read_nvd_cve_json(filename: str) -> dict[str, Any]:
    """Read an NVD CVE JSON feed from a file, gzipped or not."""
    with open(filename, "rb") as f:
        return parse_nvd_cve_json(f)


def parse_nvd_cve_json(stream: BinaryIO) -> dict[str, Any]:
    """Parse an NVD CVE JSON feed from ``stream``, decompressing gzip data."""
    data = stream.read()
    if isinstance(data, str):
        data = data.encode("utf-8")
    if len(data) < 2:
        raise FeedError("cannot peek into NVD CVE JSON feed: unexpected EOF")

    if data[:2] == _GZIP_MAGIC:
        try:
            data = gzip.decompress(data)
        except (OSError, EOFError) as e:
            raise FeedError(f"cannot gunzip NVD CVE JSON feed: {e}") from e

    try:
        feed = json.loads(data)
    except json.JSONDecodeError as e:
        raise FeedError(
            "cannot decode NVD CVE JSON feed: "
            f"syntax error on line {e.lineno} and column {e.colno}: {e.msg}"
        ) from e
    except UnicodeDecodeError as e:
        raise FeedError(f"cannot decode NVD CVE JSON feed: {e}") from e

    if not isinstance(feed, dict):
        raise FeedError("cannot decode NVD CVE JSON feed: expected a JSON object")
    items = feed.get("CVE_Items")
    if items is None:
        feed["CVE_Items"] = []
    elif not isinstance(items, list):
        raise FeedError("cannot decode NVD CVE JSON feed: CVE_Items is not a list")
    return feed