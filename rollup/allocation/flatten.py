# rollup/allocation/flatten.py
"""Flattening of the nested dataset into table rows"""
from typing import List, Iterable, Union, Dict, Any

from rollup.config import INITIAL_VARIANCE
from rollup.models import Row, Group
from rollup.utils import round2


def flatten_dataset(groups: Iterable[Union[Group, Dict[str, Any]]]) -> List[Row]:
    """
    Turn groups of items into a flat row list.
    Each group row is followed by its item rows; the group's value and
    baseline are the rounded sum of its items' values.
    """
    rows = []

    for group in groups:
        if not isinstance(group, Group):
            group = Group(group)

        children = [
            Row(
                row_id=item.id,
                label=item.label,
                value=item.value,
                base_value=item.value,
                variance_percent=INITIAL_VARIANCE,
                is_child=True,
                parent_id=group.id,
            )
            for item in group.children
        ]

        total = round2(sum(child.value for child in children))
        rows.append(Row(
            row_id=group.id,
            label=group.label,
            value=total,
            base_value=total,
            variance_percent=INITIAL_VARIANCE,
        ))
        rows.extend(children)

    return rows
