"""Conversion of vfeed items to NVD CVE JSON items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional

from nvdtools.providers.vfeed.providers import (
    ProvidersConfiguration,
    ProvidersCVSS,
    ProvidersItem,
    ProvidersMatch,
    ProvidersReferences,
    convert_str_time,
    new_item,
)
from nvdtools.providers.vfeed.schema import (
    CVSS_UNDEFINED,
    EXCLUSION_STRING,
    TIME_LAYOUT,
    VENDOR,
    Item,
)


class ConvertError(ValueError):
    """Raised when a vfeed item cannot be converted."""


@dataclass
class _BasicCVEData:
    id: str
    summary: str
    modified: Optional[datetime]
    published: Optional[datetime]


def convert(item: Item) -> dict[str, Any]:
    """Convert a vfeed item to an NVD CVE JSON item."""
    try:
        basic = _basic_cve_data(item)
    except ConvertError as e:
        raise ConvertError(f"failed to extract cve data: {e}") from e

    references = ProvidersReferences()
    if item.information is not None and item.information.references:
        for ref in item.information.references:
            references.add(ref.vendor, ref.url)

    try:
        config = _configuration_data(item)
    except ConvertError as e:
        raise ConvertError(f"failed to extract configuration data: {e}") from e

    try:
        cvss2, cvss3 = _risk_data(item)
    except ConvertError as e:
        raise ConvertError(f"failed to extract risk data: {e}") from e

    return new_item(
        ProvidersItem(
            vendor=VENDOR,
            id=basic.id,
            description=basic.summary,
            references=references,
            configuration=config,
            cwes=_weakness_data(item),
            cvss2=cvss2,
            cvss3=cvss3,
            last_modified_date=basic.modified,
            published_date=basic.published,
        )
    )


def _risk_data(item: Item) -> tuple[Optional[ProvidersCVSS], Optional[ProvidersCVSS]]:
    if item.risk is None or item.risk.cvss is None:
        return None, None
    cvss = item.risk.cvss
    cvss2 = cvss3 = None
    if cvss.cvss2 is not None:
        try:
            cvss2 = _cvss_data(cvss.cvss2.vector, cvss.cvss2.base_score)
        except ConvertError as e:
            raise ConvertError(f"failed to extract cvss2 data: {e}") from e
    if cvss.cvss3 is not None:
        try:
            cvss3 = _cvss_data(cvss.cvss3.vector, cvss.cvss3.base_score)
        except ConvertError as e:
            raise ConvertError(f"failed to extract cvss3 data: {e}") from e
    return cvss2, cvss3


def _cvss_data(vector: str, base_score: str) -> Optional[ProvidersCVSS]:
    if vector == CVSS_UNDEFINED:
        return None
    try:
        score = float(base_score)
    except ValueError as e:
        raise ConvertError(f"failed to parse base score: {e}") from e
    return ProvidersCVSS(vector=vector, base_score=score)


def extract_version(version: str) -> tuple[str, bool]:
    """Split a qualified version such as ``2.1 (excluding)``.

    Returns the version and whether it is excluded; an empty string gives
    ``("", False)``.
    """
    if not version:
        return "", False
    fields = version.split()
    if len(fields) != 2:
        raise ConvertError(
            f"expected two fields in version {version!r}, found {len(fields)}"
        )
    return fields[0], fields[1] == EXCLUSION_STRING


def _weakness_data(item: Item) -> Optional[list[str]]:
    c = item.classification
    if c is None or not c.weaknesses:
        return None
    return [w.id for w in c.weaknesses]


def _basic_cve_data(item: Item) -> _BasicCVEData:
    if item.information is None:
        raise ConvertError("missing information")
    descriptions = item.information.descriptions or []
    # Only one CVE per item is used in practice, and only that is supported.
    if len(descriptions) != 1:
        raise ConvertError(f"we only support 1 CVE per item, found {len(descriptions)}")
    description = descriptions[0]
    params = description.parameters
    if params is None:
        raise ConvertError("missing description parameters")
    try:
        modified = convert_str_time(TIME_LAYOUT, params.modified)
    except ValueError as e:
        raise ConvertError(f"failed to convert last modified date: {e}") from e
    try:
        published = convert_str_time(TIME_LAYOUT, params.published)
    except ValueError as e:
        raise ConvertError(f"failed to convert published date: {e}") from e
    return _BasicCVEData(
        id=description.id,
        summary=params.summary,
        modified=modified,
        published=published,
    )


def _configuration_data(item: Item) -> Optional[ProvidersConfiguration]:
    if item.classification is None:
        return None
    config = ProvidersConfiguration()
    for target in item.classification.targets or []:
        node = config.new_node()
        # Either a list of vulnerable CPEs with versions, or one vulnerable CPE
        # followed by "running_on" conditional CPEs without versions.
        for params in target.parameters or []:
            if params.running_on is not None:
                for running in params.running_on:
                    node.add_conditional_match(
                        ProvidersMatch(
                            cpe22_uri=running.cpe22,
                            cpe23_uri=running.cpe23,
                            vulnerable=False,
                        )
                    )
                continue
            match = ProvidersMatch(
                cpe22_uri=params.cpe22, cpe23_uri=params.cpe23, vulnerable=True
            )
            affected = params.version_affected
            start, excluding = extract_version(affected.from_)
            match.add_version_start(start, excluding)
            end, excluding = extract_version(affected.to)
            match.add_version_end(end, excluding)
            node.add_match(match)
    return config