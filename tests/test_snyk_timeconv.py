import pytest

from nvdtools.providers.snyk.timeconv import snyk_time_to_nvd


@pytest.mark.parametrize(
    "value",
    ["2018-09-06T17:29:00Z", "2018-09-06T17:29:59.000000Z", "2018-09-06T17:29:05.123456Z"],
)
def test_converts_both_layouts(value):
    assert snyk_time_to_nvd(value) == "2018-09-06T17:29Z"


@pytest.mark.parametrize(
    "value", ["", "not a time", "2018-13-06T17:29:00Z", "2018-09-06T17:29Z"]
)
def test_unparsable_returned_unchanged(value):
    assert snyk_time_to_nvd(value) == value