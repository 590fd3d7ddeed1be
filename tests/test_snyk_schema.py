import json

import pytest

from nvdtools.providers.snyk.schema import Advisory, Reference, load_advisories

SAMPLE = {
    "js": [
        {
            "id": "npm:foo:1",
            "package": "foo",
            "title": "Prototype Pollution",
            "url": "https://example.com/vuln/1",
            "description": "desc",
            "cvssV3": "CVSS:3.0/AV:N",
            "cvssScore": 5.3,
            "cves": ["CVE-0000-0000"],
            "cwes": ["CWE-400"],
            "fixable": True,
            "patchExists": False,
            "publicationTime": "2018-09-06T17:29:00Z",
            "references": [{"title": "GitHub", "url": "https://example.com/ref"}],
            "vulnerableVersions": ["<1.2.3"],
            "unknownKey": "ignored",
        }
    ],
    "python": [],
}


def test_load_from_text():
    advisories = load_advisories(json.dumps(SAMPLE))
    assert sorted(advisories) == ["js", "python"]
    assert advisories["python"] == []
    adv = advisories["js"][0]
    assert adv.snyk_id == "npm:foo:1"
    assert adv.package == "foo"
    assert adv.cvss_v3 == "CVSS:3.0/AV:N"
    assert adv.cvss_score == 5.3
    assert adv.cves == ["CVE-0000-0000"]
    assert adv.cwes == ["CWE-400"]
    assert adv.fixable is True
    assert adv.patch_exists is False
    assert adv.references == [Reference(title="GitHub", url="https://example.com/ref")]
    assert adv.vulnerable_versions == ["<1.2.3"]


def test_load_from_mapping_matches_text():
    assert load_advisories(SAMPLE) == load_advisories(json.dumps(SAMPLE).encode())


def test_missing_fields_take_defaults():
    advisories = load_advisories({"go": [{"id": "x"}]})
    assert advisories["go"][0] == Advisory(snyk_id="x")


def test_keys_match_case_insensitively():
    advisories = load_advisories({"go": [{"ID": "x", "CVSSSCORE": 1}]})
    assert advisories["go"][0].snyk_id == "x"
    assert advisories["go"][0].cvss_score == 1.0


def test_wrong_type_raises():
    with pytest.raises(ValueError):
        load_advisories({"go": [{"cvssScore": "high"}]})
    with pytest.raises(ValueError):
        load_advisories([])