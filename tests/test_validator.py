from rollup.allocation import AllocationValidator
from rollup.models import Row


def test_clean_table_has_no_issues(baseline):
    assert AllocationValidator(baseline).validate(baseline) == []


def test_validator_cases(baseline):
    """Table-driven cases: each mutates the baseline rows and names the expected issue tag."""

    def with_row(rows, index, **changes):
        rows = list(rows)
        rows[index] = rows[index].replace(**changes)
        return rows

    cases = [
        {
            "name": "group_value_off",
            "rows": with_row(baseline, 0, value=999.0),
            "expected": ["ROLLUP"],
        },
        {
            "name": "baseline_changed",
            "rows": with_row(baseline, 4, base_value=50.0),
            # the group's baseline no longer matches its items either
            "expected": ["BASELINE", "ROLLUP"],
        },
        {
            "name": "item_out_of_block",
            "rows": [baseline[0], baseline[1], baseline[3], baseline[2], baseline[4], baseline[5]],
            "expected": ["ORDER"],
        },
        {
            "name": "duplicate_id",
            "rows": list(baseline) + [baseline[5]],
            "expected": ["DUPLICATE", "ROLLUP", "ROLLUP"],
        },
        {
            "name": "missing_row",
            "rows": list(baseline[:5]),
            "expected": ["BASELINE", "ROLLUP", "ROLLUP"],
        },
        {
            "name": "orphan",
            "rows": list(baseline) + [Row("x", "X", 0.0, is_child=True, parent_id="nope")],
            "expected": ["BASELINE", "ORPHAN"],
        },
    ]

    validator = AllocationValidator(baseline)
    for case in cases:
        issues = validator.validate(case["rows"])
        tags = sorted(
            next(tag for tag in ("ROLLUP", "BASELINE", "ORPHAN", "ORDER", "DUPLICATE") if tag in issue)
            for issue in issues
        )
        assert tags == sorted(case["expected"]), f"{case['name']}: {issues}"


def test_pinned_group_skips_value_check_only(baseline):
    rows = list(baseline)
    rows[0] = rows[0].replace(value=999.0, base_value=1.0)
    issues = AllocationValidator(baseline).validate(rows, pinned_group_ids={"g1"})

    assert not any("value 999.00" in issue for issue in issues)
    assert any("baseline 1.00" in issue for issue in issues)
