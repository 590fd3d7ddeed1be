import copy

import pytest

from nvdtools.providers.vfeed.convert import ConvertError, convert, extract_version
from nvdtools.providers.vfeed.providers import ValidationError
from nvdtools.providers.vfeed.schema import item_from_dict

CPE22_P = "cpe:/a:vendor:product"
CPE23_P = "cpe:2.3:a:vendor:product:*:*:*:*:*:*:*:*"
CPE22_Q = "cpe:/a:vendor:other"
CPE23_Q = "cpe:2.3:a:vendor:other:*:*:*:*:*:*:*:*"
CPE22_OS = "cpe:/o:vendor:os"
CPE23_OS = "cpe:2.3:o:vendor:os:*:*:*:*:*:*:*:*"

EXAMPLE = {
    "information": {
        "description": [
            {
                "id": "CVE-2000-0001",
                "parameters": {
                    "published": "2000-01-02T03:04Z",
                    "modified": "2001-02-03T04:05Z",
                    "summary": "a summary",
                },
            }
        ],
        "references": [{"vendor": "ref vendor", "url": "http://example.com/advisory"}],
    },
    "classification": {
        "targets": [
            {
                "id": 1,
                "parameters": [
                    {
                        "title": "product",
                        "cpe2.2": CPE22_P,
                        "cpe2.3": CPE23_P,
                        "version_affected": {
                            "from": "1.0 (including)",
                            "to": "2.0 (excluding)",
                        },
                    }
                ],
            },
            {
                "id": 2,
                "parameters": [
                    {
                        "cpe2.2": CPE22_Q,
                        "cpe2.3": CPE23_Q,
                        "version_affected": {"from": "", "to": "3.0 (including)"},
                    },
                    {"running_on": [{"cpe2.2": CPE22_OS, "cpe2.3": CPE23_OS}]},
                ],
            },
        ],
        "weaknesses": [{"ID": "CWE-79"}],
    },
    "risk": {
        "cvss": {
            "cvss2": {"vector": "AV:N/AC:L/Au:N/C:P/I:P/A:P", "base_score": "7.5"},
            "cvss3": {"vector": "NOT_DEFINED", "base_score": "NOT_DEFINED"},
        }
    },
}

CONVERTED = {
    "cve": {
        "CVE_data_meta": {"ID": "CVE-2000-0001", "ASSIGNER": "vfeed"},
        "data_format": "MITRE",
        "data_type": "CVE",
        "data_version": "4.0",
        "description": {"description_data": [{"lang": "en", "value": "a summary"}]},
        "problemtype": {
            "problemtype_data": [{"description": [{"lang": "en", "value": "CWE-79"}]}]
        },
        "references": {
            "reference_data": [
                {"name": "ref vendor", "url": "http://example.com/advisory"}
            ]
        },
    },
    "configurations": {
        "CVE_data_version": "4.0",
        "nodes": [
            {
                "operator": "OR",
                "cpe_match": [
                    {
                        "cpe22Uri": CPE22_P,
                        "cpe23Uri": CPE23_P,
                        "versionStartIncluding": "1.0",
                        "versionEndExcluding": "2.0",
                        "vulnerable": True,
                    }
                ],
            },
            {
                "operator": "AND",
                "children": [
                    {
                        "operator": "OR",
                        "cpe_match": [
                            {
                                "cpe22Uri": CPE22_Q,
                                "cpe23Uri": CPE23_Q,
                                "versionEndIncluding": "3.0",
                                "vulnerable": True,
                            }
                        ],
                    },
                    {
                        "operator": "OR",
                        "cpe_match": [
                            {
                                "cpe22Uri": CPE22_OS,
                                "cpe23Uri": CPE23_OS,
                                "vulnerable": False,
                            }
                        ],
                    },
                ],
            },
        ],
    },
    "impact": {
        "baseMetricV2": {
            "cvssV2": {"baseScore": 7.5, "vectorString": "AV:N/AC:L/Au:N/C:P/I:P/A:P"}
        },
        "baseMetricV3": {},
    },
    "lastModifiedDate": "2001-02-03T04:05Z",
    "publishedDate": "2000-01-02T03:04Z",
}


def _example():
    return copy.deepcopy(EXAMPLE)


def test_convert_example():
    assert convert(item_from_dict(_example())) == CONVERTED


@pytest.mark.parametrize(
    "version, expected",
    [
        ("", ("", False)),
        ("2.1 (excluding)", ("2.1", True)),
        ("2.1 (including)", ("2.1", False)),
    ],
)
def test_extract_version(version, expected):
    assert extract_version(version) == expected


@pytest.mark.parametrize("version", ["2.1", "2.1 (excluding) extra"])
def test_extract_version_bad_fields(version):
    with pytest.raises(ConvertError):
        extract_version(version)


def test_two_descriptions_rejected():
    data = _example()
    data["information"]["description"].append({"id": "CVE-2000-0002"})
    with pytest.raises(ConvertError):
        convert(item_from_dict(data))


def test_bad_version_rejected():
    data = _example()
    data["classification"]["targets"][0]["parameters"][0]["version_affected"][
        "from"
    ] = "1.0"
    with pytest.raises(ConvertError):
        convert(item_from_dict(data))


def test_bad_base_score_rejected():
    data = _example()
    data["risk"]["cvss"]["cvss2"]["base_score"] = "high"
    with pytest.raises(ConvertError):
        convert(item_from_dict(data))


def test_bad_date_rejected():
    data = _example()
    data["information"]["description"][0]["parameters"]["published"] = "2000"
    with pytest.raises(ConvertError):
        convert(item_from_dict(data))


def test_missing_classification_fails_validation():
    data = _example()
    del data["classification"]
    with pytest.raises(ValidationError):
        convert(item_from_dict(data))


def test_no_risk_gives_empty_impact():
    data = _example()
    del data["risk"]
    out = convert(item_from_dict(data))
    assert out["impact"] == {"baseMetricV2": {}, "baseMetricV3": {}}