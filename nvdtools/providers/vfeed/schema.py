"""The vulnerability item schema of the vfeed provider."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional, TypeVar

VENDOR = "vfeed"
TIME_LAYOUT = "%Y-%m-%dT%H:%MZ"
# Assumed to contain no whitespace.
EXCLUSION_STRING = "(excluding)"
# Value of every CVSS field when the data is not available.
CVSS_UNDEFINED = "NOT_DEFINED"

_T = TypeVar("_T")


def _lookup(d: Mapping[str, Any], key: str) -> Any:
    if key in d:
        return d[key]
    lower = key.lower()
    for k, v in d.items():
        if isinstance(k, str) and k.lower() == lower:
            return v
    return None


def _obj(v: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(v, Mapping):
        raise ValueError(f"{what}: expected object, got {type(v).__name__}")
    return v


def _str(d: Mapping[str, Any], key: str) -> str:
    v = _lookup(d, key)
    if v is None:
        return ""
    if not isinstance(v, str):
        raise ValueError(f"field {key!r}: expected string, got {type(v).__name__}")
    return v


def _int(d: Mapping[str, Any], key: str) -> int:
    v = _lookup(d, key)
    if v is None:
        return 0
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"field {key!r}: expected integer, got {type(v).__name__}")
    return v


def _opt(d: Mapping[str, Any], key: str, load: Callable[[Any], _T]) -> Optional[_T]:
    v = _lookup(d, key)
    return None if v is None else load(v)


def _opt_list(
    d: Mapping[str, Any], key: str, load: Callable[[Any], _T]
) -> Optional[list[_T]]:
    v = _lookup(d, key)
    if v is None:
        return None
    if not isinstance(v, list):
        raise ValueError(f"field {key!r}: expected array, got {type(v).__name__}")
    return [load(e) for e in v]


@dataclass
class DescParameter:
    """CVE metadata."""

    published: str = ""
    modified: str = ""
    summary: str = ""


@dataclass
class Description:
    """A CVE ID and its metadata."""

    id: str = ""
    parameters: Optional[DescParameter] = None


@dataclass
class Reference:
    """A pointer related to the CVE."""

    vendor: str = ""
    url: str = ""


@dataclass
class Information:
    """CVE data."""

    descriptions: Optional[list[Description]] = None
    references: Optional[list[Reference]] = None


@dataclass
class VersionAffected:
    """Version bounds, each possibly followed by a qualifier."""

    from_: str = ""
    to: str = ""


@dataclass
class TargetParameter:
    """Configuration match data."""

    title: str = ""
    cpe22: str = ""
    cpe23: str = ""
    version_affected: VersionAffected = field(default_factory=VersionAffected)
    running_on: Optional[list[TargetParameter]] = None


@dataclass
class Target:
    """Configuration information."""

    id: int = 0
    parameters: Optional[list[TargetParameter]] = None


@dataclass
class Weakness:
    """CWE data."""

    id: str = ""


@dataclass
class Classification:
    """Targets and weaknesses."""

    targets: Optional[list[Target]] = None
    weaknesses: Optional[list[Weakness]] = None


@dataclass
class CVSS2:
    """CVSS version 2 data."""

    vector: str = ""
    base_score: str = ""
    impact_score: str = ""
    exploit_score: str = ""
    access_vector: str = ""
    access_complexity: str = ""
    authentication: str = ""
    confidentiality_impact: str = ""
    integrity_impact: str = ""
    availability_impact: str = ""


@dataclass
class CVSS3:
    """CVSS version 3 data."""

    vector: str = ""
    base_score: str = ""
    impact_score: str = ""
    exploit_score: str = ""
    access_vector: str = ""
    access_complexity: str = ""
    privileges_required: str = ""
    user_interaction: str = ""
    score: str = ""
    confidentiality_impact: str = ""
    integrity_impact: str = ""
    availability_impact: str = ""


@dataclass
class CVSS:
    """CVSS version 2 and 3 data."""

    cvss2: Optional[CVSS2] = None
    cvss3: Optional[CVSS3] = None


@dataclass
class Risk:
    """All CVSS data."""

    cvss: Optional[CVSS] = None


@dataclass
class Item:
    """One vulnerability item."""

    information: Optional[Information] = None
    classification: Optional[Classification] = None
    risk: Optional[Risk] = None

    def id(self) -> str:
        """Return the ID of the first description, or ``unknown``."""
        if self.information is not None and self.information.descriptions:
            return self.information.descriptions[0].id
        return "unknown"


_CVSS_COMMON = {
    "vector": "vector",
    "base_score": "base_score",
    "impact_score": "impact_score",
    "exploit_score": "exploit_score",
    "access_vector": "access_vector",
    "access_complexity": "access_complexity",
    "confidentiality_impact": "confidentiality_impack",
    "integrity_impact": "integrety_impact",
    "availability_impact": "availability_impact",
}


def _desc_parameter(v: Any) -> DescParameter:
    d = _obj(v, "description parameters")
    return DescParameter(
        published=_str(d, "published"),
        modified=_str(d, "modified"),
        summary=_str(d, "summary"),
    )


def _description(v: Any) -> Description:
    d = _obj(v, "description")
    return Description(id=_str(d, "id"), parameters=_opt(d, "parameters", _desc_parameter))


def _reference(v: Any) -> Reference:
    d = _obj(v, "reference")
    return Reference(vendor=_str(d, "vendor"), url=_str(d, "url"))


def _information(v: Any) -> Information:
    d = _obj(v, "information")
    return Information(
        descriptions=_opt_list(d, "description", _description),
        references=_opt_list(d, "references", _reference),
    )


def _version_affected(v: Any) -> VersionAffected:
    d = _obj(v, "version_affected")
    return VersionAffected(from_=_str(d, "from"), to=_str(d, "to"))


def _target_parameter(v: Any) -> TargetParameter:
    d = _obj(v, "target parameter")
    affected = _lookup(d, "version_affected")
    return TargetParameter(
        title=_str(d, "title"),
        cpe22=_str(d, "cpe2.2"),
        cpe23=_str(d, "cpe2.3"),
        version_affected=(
            VersionAffected() if affected is None else _version_affected(affected)
        ),
        running_on=_opt_list(d, "running_on", _target_parameter),
    )


def _target(v: Any) -> Target:
    d = _obj(v, "target")
    return Target(id=_int(d, "id"), parameters=_opt_list(d, "parameters", _target_parameter))


def _weakness(v: Any) -> Weakness:
    return Weakness(id=_str(_obj(v, "weakness"), "ID"))


def _classification(v: Any) -> Classification:
    d = _obj(v, "classification")
    return Classification(
        targets=_opt_list(d, "targets", _target),
        weaknesses=_opt_list(d, "weaknesses", _weakness),
    )


def _cvss2(v: Any) -> CVSS2:
    d = _obj(v, "cvss2")
    return CVSS2(**{attr: _str(d, key) for attr, key in _CVSS_COMMON.items()})


def _cvss3(v: Any) -> CVSS3:
    d = _obj(v, "cvss3")
    fields = {attr: _str(d, key) for attr, key in _CVSS_COMMON.items()}
    fields["privileges_required"] = _str(d, "privileges_required")
    fields["user_interaction"] = _str(d, "user_interaction")
    fields["score"] = _str(d, "score")
    return CVSS3(**fields)


def _cvss(v: Any) -> CVSS:
    d = _obj(v, "cvss")
    return CVSS(cvss2=_opt(d, "cvss2", _cvss2), cvss3=_opt(d, "cvss3", _cvss3))


def _risk(v: Any) -> Risk:
    return Risk(cvss=_opt(_obj(v, "risk"), "cvss", _cvss))


def item_from_dict(data: Mapping[str, Any] | str | bytes) -> Item:
    """Build an Item from decoded JSON, or from JSON text."""
    if isinstance(data, (str, bytes, bytearray)):
        data = json.loads(data)
    d = _obj(data, "item")
    return Item(
        information=_opt(d, "information", _information),
        classification=_opt(d, "classification", _classification),
        risk=_opt(d, "risk", _risk),
    )