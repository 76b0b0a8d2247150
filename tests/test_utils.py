import pytest

from rollup.utils import (
    round2,
    parse_number,
    format_percent,
    variance_percent,
    format_variance,
    categorize_validation_issues,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (220.00000000000003, 220.0),
        (1.005, 1.01),
        (2.675, 2.68),
        (0.125, 0.13),
        (-1.005, -1.01),
        (3.3333333333333335, 3.33),
        (0.1 + 0.2, 0.3),
        (42, 42.0),
    ],
)
def test_round2_rounds_half_up_on_the_written_value(value, expected):
    assert round2(value) == expected


def test_round2_normalises_negative_zero():
    result = round2(-0.001)
    assert result == 0.0
    assert str(result) == "0.0"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("10", 10.0),
        (" 12.5 ", 12.5),
        ("10%", 10.0),
        ("-3", -3.0),
        ("+7", 7.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("1e3", 1000.0),
        ("1,000", 1.0),
        ("abc", None),
        ("", None),
        ("   ", None),
        ("-", None),
        ("nan", None),
        ("1e400", None),
        (None, None),
    ],
)
def test_parse_number(text, expected):
    assert parse_number(text) == expected


@pytest.mark.parametrize(
    "percent, expected",
    [
        (10, "10.00%"),
        (12.345, "12.35%"),
        (-50, "-50.00%"),
        (-0.001, "0.00%"),
        (0, "0.00%"),
    ],
)
def test_format_percent(percent, expected):
    assert format_percent(percent) == expected


def test_variance_percent_zero_baseline_is_zero():
    assert variance_percent(100, 0) == 0.0
    assert format_variance(100, 0) == "0.00%"


def test_variance_percent():
    assert variance_percent(250, 200) == 25.0
    assert format_variance(150, 300) == "-50.00%"


def test_categorize_validation_issues():
    issues = [
        "❌ ROLLUP: group g1 value 10.00 differs from item sum 9.00",
        "❌ ROLLUP: group g1 baseline 10.00 differs from item baseline sum 9.00",
        "❌ BASELINE: row a baseline changed from 1.0 to 2.0",
        "⚠️ ORPHAN: item x references unknown group y",
        "❌ ORDER: item b is outside the block of group g1",
        "❌ DUPLICATE: row id a appears more than once",
        "something else",
    ]
    assert categorize_validation_issues(issues) == {
        'rollup_mismatches': 2,
        'baseline_changes': 1,
        'orphaned_items': 1,
        'ordering_errors': 1,
        'duplicate_ids': 1,
        'other': 1,
    }
