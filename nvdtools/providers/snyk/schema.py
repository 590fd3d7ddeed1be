"""The advisory feed schema: advisories grouped by language."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Mapping


def _lookup(d: Mapping[str, Any], key: str) -> Any:
    if key in d:
        return d[key]
    lower = key.lower()
    for k, v in d.items():
        if isinstance(k, str) and k.lower() == lower:
            return v
    return None


def _str(v: Any, key: str) -> str:
    if v is None:
        return ""
    if not isinstance(v, str):
        raise ValueError(f"field {key!r}: expected string, got {type(v).__name__}")
    return v


def _float(v: Any, key: str) -> float:
    if v is None:
        return 0.0
    if isinstance(v, bool) or not isinstance(v, (int, float)):
        raise ValueError(f"field {key!r}: expected number, got {type(v).__name__}")
    return float(v)


def _bool(v: Any, key: str) -> bool:
    if v is None:
        return False
    if not isinstance(v, bool):
        raise ValueError(f"field {key!r}: expected boolean, got {type(v).__name__}")
    return v


def _list(v: Any, key: str) -> list:
    if v is None:
        return []
    if not isinstance(v, list):
        raise ValueError(f"field {key!r}: expected array, got {type(v).__name__}")
    return v


def _strs(v: Any, key: str) -> list[str]:
    return [_str(s, key) for s in _list(v, key)]


def _obj(v: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(v, Mapping):
        raise ValueError(f"{what}: expected object, got {type(v).__name__}")
    return v


@dataclass
class Reference:
    """A titled link related to an advisory."""

    title: str = ""
    url: str = ""


@dataclass
class Advisory:
    """One vulnerability advisory."""

    cvss_v3: str = ""
    creation_time: str = ""
    credit: list[str] = field(default_factory=list)
    cves: list[str] = field(default_factory=list)
    cvss_score: float = 0.0
    cwes: list[str] = field(default_factory=list)
    description: str = ""
    disclosure_time: str = ""
    exploit: str = ""
    fixable: bool = False
    hashes_range: list[str] = field(default_factory=list)
    snyk_id: str = ""
    language: str = ""
    modification_time: str = ""
    package: str = ""
    patch_exists: bool = False
    publication_time: str = ""
    references: list[Reference] = field(default_factory=list)
    severity: str = ""
    title: str = ""
    url: str = ""
    vulnerable_hashes: list[str] = field(default_factory=list)
    vulnerable_versions: list[str] = field(default_factory=list)


_STR_FIELDS = {
    "cvss_v3": "cvssV3",
    "creation_time": "creationTime",
    "description": "description",
    "disclosure_time": "disclosureTime",
    "exploit": "exploit",
    "snyk_id": "id",
    "language": "language",
    "modification_time": "modificationTime",
    "package": "package",
    "publication_time": "publicationTime",
    "severity": "severity",
    "title": "title",
    "url": "url",
}
_LIST_FIELDS = {
    "credit": "credit",
    "cves": "cves",
    "cwes": "cwes",
    "hashes_range": "hashesRange",
    "vulnerable_hashes": "vulnerableHashes",
    "vulnerable_versions": "vulnerableVersions",
}
_BOOL_FIELDS = {"fixable": "fixable", "patch_exists": "patchExists"}


def _reference(data: Any) -> Reference:
    d = _obj(data, "reference")
    return Reference(
        title=_str(_lookup(d, "title"), "title"),
        url=_str(_lookup(d, "url"), "url"),
    )


def _advisory(data: Any) -> Advisory:
    d = _obj(data, "advisory")
    kwargs: dict[str, Any] = {}
    for attr, key in _STR_FIELDS.items():
        kwargs[attr] = _str(_lookup(d, key), key)
    for attr, key in _LIST_FIELDS.items():
        kwargs[attr] = _strs(_lookup(d, key), key)
    for attr, key in _BOOL_FIELDS.items():
        kwargs[attr] = _bool(_lookup(d, key), key)
    kwargs["cvss_score"] = _float(_lookup(d, "cvssScore"), "cvssScore")
    kwargs["references"] = [
        _reference(r) for r in _list(_lookup(d, "references"), "references")
    ]
    return Advisory(**kwargs)


def load_advisories(data: str | bytes | Mapping[str, Any]) -> dict[str, list[Advisory]]:
    """Load advisories keyed by language from JSON text or a decoded object."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    top = _obj(data, "advisories")
    return {
        str(language): [_advisory(a) for a in _list(advs, str(language))]
        for language, advs in top.items()
    }