import pytest

from rollup.allocation import AllocationEngine, flatten_dataset
from rollup.models import parse_dataset


def make_dataset(*groups):
    """Build the nested dataset shape from (group_id, [(item_id, value), ...]) tuples"""
    return {
        "rows": [
            {
                "id": group_id,
                "label": group_id.upper(),
                "children": [
                    {"id": item_id, "label": item_id.upper(), "value": value}
                    for item_id, value in items
                ],
            }
            for group_id, items in groups
        ]
    }


@pytest.fixture
def dataset():
    # rows: g1, a, b, g2, c, d
    return make_dataset(
        ("g1", [("a", 300), ("b", 700)]),
        ("g2", [("c", 100), ("d", 100)]),
    )


@pytest.fixture
def baseline(dataset):
    return flatten_dataset(parse_dataset(dataset))


@pytest.fixture
def engine(baseline):
    return AllocationEngine(baseline, distribute_group_percent=False)


def row_by_id(rows, row_id):
    return next(r for r in rows if r.id == row_id)
