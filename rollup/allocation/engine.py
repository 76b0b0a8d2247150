# rollup/allocation/engine.py
"""Main allocation engine"""
import math
from typing import Dict, Any, List, Tuple, Optional, Iterable, FrozenSet

from rollup.allocation.flatten import flatten_dataset
from rollup.config import DISTRIBUTE_GROUP_PERCENT
from rollup.models import Row, parse_dataset
from rollup.utils import round2, parse_number, format_percent, variance_percent


class AllocationEngine:
    """
    Owns the flat row sequence and applies user allocations to it.

    Every mutating call builds a new tuple of rows and swaps it in once the
    whole operation is done, so a caller holding the previous tuple can
    detect a change by identity. A call that changes nothing returns the
    current tuple untouched. None of the operations raise: unparsable input,
    out-of-range indices and missing parents are absorbed as no-ops.
    """

    def __init__(self, rows: Iterable[Row], distribute_group_percent: Optional[bool] = None):
        self._rows: Tuple[Row, ...] = tuple(rows)
        self._pinned: FrozenSet[str] = frozenset()
        if distribute_group_percent is None:
            distribute_group_percent = DISTRIBUTE_GROUP_PERCENT
        self.distribute_group_percent = distribute_group_percent

    @classmethod
    def from_dataset(cls, data: Dict[str, Any], **kwargs) -> 'AllocationEngine':
        """Build an engine from the nested {'rows': [...]} dataset"""
        return cls(flatten_dataset(parse_dataset(data)), **kwargs)

    # ------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------
    @property
    def rows(self) -> Tuple[Row, ...]:
        return self._rows

    @property
    def pinned_group_ids(self) -> FrozenSet[str]:
        """Groups whose value was set directly rather than summed from items"""
        return self._pinned

    def index_of(self, row_id: str) -> Optional[int]:
        for i, row in enumerate(self._rows):
            if row.id == row_id:
                return i
        return None

    def children_of(self, group_id: str) -> List[Row]:
        return [r for r in self._rows if r.is_child and r.parent_id == group_id]

    # ------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------
    def set_input(self, row_index: int, text: str) -> Tuple[Row, ...]:
        """Store the raw input text of a row, unparsed"""
        if not self._in_range(row_index):
            return self._rows

        updated = list(self._rows)
        updated[row_index] = updated[row_index].replace(input=text)
        return self._commit(updated)

    def allocate_by_percent(self, row_index: int) -> Tuple[Row, ...]:
        """Set a row to its baseline plus the entered percent of that baseline"""
        if not self._in_range(row_index):
            return self._rows

        row = self._rows[row_index]
        percent = parse_number(row.input)
        if percent is None:
            return self._rows

        target = row.base_value + (percent / 100) * row.base_value
        if not math.isfinite(target):
            return self._rows

        if row.is_group and self.distribute_group_percent:
            return self._distribute(row_index, target, variance=format_percent(percent))

        updated = list(self._rows)
        updated[row_index] = row.replace(
            value=round2(target),
            variance_percent=format_percent(percent),
        )

        if row.is_group:
            return self._commit(updated, pin=row.id)
        return self._commit_rollup(updated, row.parent_id)

    def allocate_by_value(self, row_index: int) -> Tuple[Row, ...]:
        """Set a row to the entered absolute value, splitting it across items for a group"""
        if not self._in_range(row_index):
            return self._rows

        row = self._rows[row_index]
        entered = parse_number(row.input)
        if entered is None:
            return self._rows

        if row.is_group:
            return self._distribute(row_index, entered)

        variance = self._variance_text(entered, row.base_value)
        if variance is None:
            return self._rows

        updated = list(self._rows)
        updated[row_index] = row.replace(value=round2(entered), variance_percent=variance)
        return self._commit_rollup(updated, row.parent_id)


    # ------------------------------------------------------------
    # Propagation
    # ------------------------------------------------------------
    def _distribute(self, group_index: int, total: float,
                    variance: Optional[str] = None) -> Tuple[Row, ...]:
        """
        Split a new group total across its items by baseline share.
        `variance` overrides the group's recomputed variance text.
        """
        updated = list(self._rows)
        group = updated[group_index]

        child_indices = [
            i for i, r in enumerate(updated)
            if r.is_child and r.parent_id == group.id
        ]
        base_total = sum(updated[i].base_value for i in child_indices)

        # nothing to split proportionally when every item has a zero baseline
        if base_total != 0:
            for i in child_indices:
                child = updated[i]
                new_value = round2(total * (child.base_value / base_total))
                child_variance = self._variance_text(new_value, child.base_value)
                if not math.isfinite(new_value) or child_variance is None:
                    return self._rows
                updated[i] = child.replace(value=new_value, variance_percent=child_variance)

        if variance is None:
            variance = self._variance_text(total, group.base_value)
            if variance is None:
                return self._rows

        updated[group_index] = group.replace(value=round2(total), variance_percent=variance)
        return self._commit(updated, pin=group.id)

    @classmethod
    def _rollup(cls, updated: List[Row], parent_id: Optional[str]) -> Optional[List[Row]]:
        """
        Recompute a group's value and variance from its items' current values.
        Returns None when the new total or its variance overflows.
        """
        parent_index = next(
            (i for i, r in enumerate(updated) if r.is_group and r.id == parent_id),
            None
        )
        if parent_index is None:
            return updated

        parent = updated[parent_index]
        total = round2(sum(
            r.value for r in updated
            if r.is_child and r.parent_id == parent_id
        ))
        variance = cls._variance_text(total, parent.base_value)
        if not math.isfinite(total) or variance is None:
            return None

        updated[parent_index] = parent.replace(value=total, variance_percent=variance)
        return updated

    # ------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------
    @staticmethod
    def _variance_text(value: float, base_value: float) -> Optional[str]:
        """Formatted variance, or None if it is not a finite number"""
        percent = variance_percent(value, base_value)
        if not math.isfinite(percent):
            return None
        return format_percent(percent)

    def _in_range(self, row_index: int) -> bool:
        return isinstance(row_index, int) and 0 <= row_index < len(self._rows)

    def _commit_rollup(self, updated: List[Row], parent_id: Optional[str]) -> Tuple[Row, ...]:
        rolled = self._rollup(updated, parent_id)
        if rolled is None:
            return self._rows
        return self._commit(rolled, unpin=parent_id)

    def _commit(self, updated: List[Row], pin: Optional[str] = None,
                unpin: Optional[str] = None) -> Tuple[Row, ...]:
        pinned = set(self._pinned)
        if pin is not None:
            pinned.add(pin)
        if unpin is not None:
            pinned.discard(unpin)
        self._pinned = frozenset(pinned)
        self._rows = tuple(updated)
        return self._rows
