import pytest

from nvdtools.providers.snyk.versionrange import (
    VersionRange,
    looks_like_paren_range,
    parse_cmp_ranges,
    parse_paren_ranges,
    parse_version_range,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", False),
        ("<3.0.0-beta1 >1.12.3 || <1.12.0 >=1.4.0", False),
        ("[3.0.0,3.6.12), [3.7,3.9.14), [3.10.0,3.19.0)", True),
    ],
)
def test_looks_like_paren_range(value, expected):
    assert looks_like_paren_range(value) is expected


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", []),
        ("[,2.8.10)", [VersionRange(max_ver_excl="2.8.10")]),
        ("[1.9.4,)", [VersionRange(min_ver_incl="1.9.4")]),
        (
            " [3.0.0-rc.1]",
            [VersionRange(min_ver_incl="3.0.0-rc.1", max_ver_incl="3.0.0-rc.1")],
        ),
        (
            "(1.9.4,2.8.10] ",
            [VersionRange(min_ver_excl="1.9.4", max_ver_incl="2.8.10")],
        ),
        (
            "[,1.1.0-CR0-3), [1.1.0-CR1,1.1.0-CR3_1), [1.1.0-CR4, 1.3.7-CR1_2), "
            "[1.4.0,1.4.2-CR4_1), [1.5.0,1.5.4-CR6_2), [1.5.4-CR7,1.5.4-CR7_1], "
            "[1.5.5,1.5.7_9)",
            [
                VersionRange(max_ver_excl="1.1.0-CR0-3"),
                VersionRange(min_ver_incl="1.1.0-CR1", max_ver_excl="1.1.0-CR3_1"),
                VersionRange(min_ver_incl="1.1.0-CR4", max_ver_excl="1.3.7-CR1_2"),
                VersionRange(min_ver_incl="1.4.0", max_ver_excl="1.4.2-CR4_1"),
                VersionRange(min_ver_incl="1.5.0", max_ver_excl="1.5.4-CR6_2"),
                VersionRange(min_ver_incl="1.5.4-CR7", max_ver_incl="1.5.4-CR7_1"),
                VersionRange(min_ver_incl="1.5.5", max_ver_excl="1.5.7_9"),
            ],
        ),
    ],
)
def test_parse_paren_ranges(value, expected):
    assert parse_paren_ranges(value) == expected


@pytest.mark.parametrize("value", ["[1,2,3]", ")1,2(", "1,2", "[1,2"])
def test_parse_paren_ranges_invalid(value):
    with pytest.raises(ValueError, match="invalid range"):
        parse_paren_ranges(value)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("", []),
        ("<3.0.1", [VersionRange(max_ver_excl="3.0.1")]),
        ("<=3.0.1", [VersionRange(max_ver_incl="3.0.1")]),
        (">3.0.0", [VersionRange(min_ver_excl="3.0.0")]),
        (">=3.0.0", [VersionRange(min_ver_incl="3.0.0")]),
        (">=3.0.0  <3.0.1", [VersionRange(min_ver_incl="3.0.0", max_ver_excl="3.0.1")]),
        (">3.0.0  <=3.0.1", [VersionRange(min_ver_excl="3.0.0", max_ver_incl="3.0.1")]),
        (
            "=3.0.0-rc.1",
            [VersionRange(min_ver_incl="3.0.0-rc.1", max_ver_incl="3.0.0-rc.1")],
        ),
        (
            "< 1.12.4 || >= 2.0.0 <2.0.2",
            [
                VersionRange(max_ver_excl="1.12.4"),
                VersionRange(min_ver_incl="2.0.0", max_ver_excl="2.0.2"),
            ],
        ),
    ],
)
def test_parse_cmp_ranges(value, expected):
    assert parse_cmp_ranges(value) == expected


def test_parse_version_range_dispatches():
    assert parse_version_range("[,2.8.10)") == [VersionRange(max_ver_excl="2.8.10")]
    assert parse_version_range("<3.0.1") == [VersionRange(max_ver_excl="3.0.1")]