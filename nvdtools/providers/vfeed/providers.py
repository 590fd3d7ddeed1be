"""Building NVD CVE JSON items from provider data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

from nvdtools.vulndb.timeutil import format_time

DATA_FORMAT = "MITRE"
DATA_TYPE = "CVE"
DATA_LANG = "en"
DATA_VERSION = "4.0"


class ValidationError(ValueError):
    """Raised when a provider item lacks mandatory fields."""


def _compact(d: dict[str, Any]) -> dict[str, Any]:
    """Drop absent values, empty strings and empty lists, as the feed omits them."""
    return {k: v for k, v in d.items() if v is not None and v != "" and v != []}


def convert_str_time(layout: str, str_time: str) -> Optional[datetime]:
    """Parse ``str_time`` with a strptime ``layout``; None for an empty string.

    Times without a zone are taken as UTC.
    """
    if not str_time:
        return None
    t = datetime.strptime(str_time, layout)
    if t.tzinfo is None:
        t = t.replace(tzinfo=timezone.utc)
    return t


def _convert_time(t: Optional[datetime]) -> str:
    return "" if t is None else format_time(t)


@dataclass
class ProvidersCVSS:
    """CVSS version 2 or 3 data."""

    base_score: float = 0.0
    temporal_score: float = 0.0
    vector: str = ""

    def _to_nvd(self) -> dict[str, Any]:
        d: dict[str, Any] = {"baseScore": self.base_score}
        if self.temporal_score:
            d["temporalScore"] = self.temporal_score
        d["vectorString"] = self.vector
        return _compact(d)


@dataclass
class ProvidersReferences:
    """References related to a CVE."""

    reference_data: list[dict[str, Any]] = field(default_factory=list)

    def add(self, name: str, url: str) -> None:
        """Add a named reference."""
        self.reference_data.append(_compact({"name": name, "url": url}))


@dataclass
class ProvidersMatch:
    """Software versions that match a CPE."""

    cpe22_uri: str = ""
    cpe23_uri: str = ""
    vulnerable: bool = False
    version_start_excluding: str = ""
    version_start_including: str = ""
    version_end_excluding: str = ""
    version_end_including: str = ""

    def add_version_start(self, version: str, excluding: bool) -> None:
        """Set the starting version, included or excluded from the match."""
        if excluding:
            self.version_start_excluding = version
        else:
            self.version_start_including = version

    def add_version_end(self, version: str, excluding: bool) -> None:
        """Set the ending version, included or excluded from the match."""
        if excluding:
            self.version_end_excluding = version
        else:
            self.version_end_including = version

    def _to_nvd(self) -> dict[str, Any]:
        return _compact(
            {
                "cpe22Uri": self.cpe22_uri,
                "cpe23Uri": self.cpe23_uri,
                "versionStartExcluding": self.version_start_excluding,
                "versionStartIncluding": self.version_start_including,
                "versionEndExcluding": self.version_end_excluding,
                "versionEndIncluding": self.version_end_including,
                "vulnerable": self.vulnerable,
            }
        )


@dataclass
class ProvidersNode:
    """A set of matches; with conditional matches, one of those must match too."""

    matches: list[dict[str, Any]] = field(default_factory=list)
    conditional_matches: list[dict[str, Any]] = field(default_factory=list)

    def add_match(self, m: ProvidersMatch) -> None:
        """Add a match as it stands now."""
        self.matches.append(m._to_nvd())

    def add_conditional_match(self, m: ProvidersMatch) -> None:
        """Add a conditional match as it stands now."""
        self.conditional_matches.append(m._to_nvd())

    def _to_nvd(self) -> dict[str, Any]:
        if self.conditional_matches:
            return {
                "operator": "AND",
                "children": [
                    _compact({"operator": "OR", "cpe_match": list(self.matches)}),
                    _compact(
                        {"operator": "OR", "cpe_match": list(self.conditional_matches)}
                    ),
                ],
            }
        return _compact({"operator": "OR", "cpe_match": list(self.matches)})


@dataclass
class ProvidersConfiguration:
    """Which software versions are vulnerable."""

    nodes: list[ProvidersNode] = field(default_factory=list)

    def new_node(self) -> ProvidersNode:
        """Create a node and append it to the configuration."""
        node = ProvidersNode()
        self.nodes.append(node)
        return node

    def _to_nvd(self) -> dict[str, Any]:
        return _compact(
            {
                "CVE_data_version": DATA_VERSION,
                "nodes": [node._to_nvd() for node in self.nodes],
            }
        )


@dataclass
class ProvidersItem:
    """Top-level CVE information from a provider."""

    vendor: str = ""
    id: str = ""
    description: str = ""
    cwes: Optional[list[str]] = None
    references: Optional[ProvidersReferences] = None
    configuration: Optional[ProvidersConfiguration] = None
    cvss2: Optional[ProvidersCVSS] = None
    cvss3: Optional[ProvidersCVSS] = None
    last_modified_date: Optional[datetime] = None
    published_date: Optional[datetime] = None

    def _validate(self) -> None:
        if not self.id or not self.vendor or not self.description:
            raise ValidationError(
                "validation error: id, vendor and description can't be empty"
            )
        if self.configuration is None:
            raise ValidationError("validation error: Configuration can't be nil")

    def _problem_type(self) -> Optional[dict[str, Any]]:
        if self.cwes is None:
            return None
        weaknesses = [{"lang": DATA_LANG, "value": cwe} for cwe in self.cwes]
        return {"problemtype_data": [_compact({"description": weaknesses})]}

    def _references(self) -> Optional[dict[str, Any]]:
        if self.references is None or not self.references.reference_data:
            return None
        return {"reference_data": list(self.references.reference_data)}

    def _impact(self) -> dict[str, Any]:
        v2 = {} if self.cvss2 is None else {"cvssV2": self.cvss2._to_nvd()}
        v3 = {} if self.cvss3 is None else {"cvssV3": self.cvss3._to_nvd()}
        return {"baseMetricV2": v2, "baseMetricV3": v3}


def new_item(item: ProvidersItem) -> dict[str, Any]:
    """Build an NVD CVE JSON item; raises ValidationError on missing fields."""
    item._validate()
    assert item.configuration is not None
    cve = _compact(
        {
            "CVE_data_meta": {"ID": item.id, "ASSIGNER": item.vendor},
            "data_format": DATA_FORMAT,
            "data_type": DATA_TYPE,
            "data_version": DATA_VERSION,
            "description": {
                "description_data": [{"lang": DATA_LANG, "value": item.description}]
            },
            "problemtype": item._problem_type(),
            "references": item._references(),
        }
    )
    return _compact(
        {
            "cve": cve,
            "configurations": item.configuration._to_nvd(),
            "impact": item._impact(),
            "lastModifiedDate": _convert_time(item.last_modified_date),
            "publishedDate": _convert_time(item.published_date),
        }
    )