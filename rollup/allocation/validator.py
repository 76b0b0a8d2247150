# rollup/allocation/validator.py
"""Allocation validation"""
from typing import List, Dict, Iterable, Sequence

from rollup.config import ROLLUP_TOLERANCE
from rollup.models import Row
from rollup.utils import round2


class AllocationValidator:
    """Validates a row sequence against the table invariants"""

    def __init__(self, baseline_rows: Sequence[Row]):
        self.baseline_map: Dict[str, float] = {r.id: r.base_value for r in baseline_rows}

    def validate(self, rows: Sequence[Row], pinned_group_ids: Iterable[str] = ()) -> List[str]:
        """Validate rows against the rollup, baseline and ordering invariants"""
        issues = []
        pinned = set(pinned_group_ids)

        issues.extend(self._check_duplicates(rows))
        issues.extend(self._check_baselines(rows))

        group_ids = {r.id for r in rows if r.is_group}
        children_by_group: Dict[str, List[Row]] = {gid: [] for gid in group_ids}
        current_group = None

        for row in rows:
            if row.is_group:
                current_group = row.id
                continue

            if row.parent_id not in group_ids:
                issues.append(
                    f"⚠️ ORPHAN: item {row.id} references unknown group {row.parent_id}"
                )
                continue

            children_by_group[row.parent_id].append(row)
            if row.parent_id != current_group:
                issues.append(
                    f"❌ ORDER: item {row.id} is outside the block of group {row.parent_id}"
                )

        for row in rows:
            if not row.is_group:
                continue
            children = children_by_group.get(row.id, [])

            base_sum = round2(sum(c.base_value for c in children))
            if abs(row.base_value - base_sum) > ROLLUP_TOLERANCE:
                issues.append(
                    f"❌ ROLLUP: group {row.id} baseline {row.base_value:.2f} "
                    f"differs from item baseline sum {base_sum:.2f}"
                )

            if row.id in pinned:
                continue

            value_sum = round2(sum(c.value for c in children))
            if abs(row.value - value_sum) > ROLLUP_TOLERANCE:
                issues.append(
                    f"❌ ROLLUP: group {row.id} value {row.value:.2f} "
                    f"differs from item sum {value_sum:.2f}"
                )

        return issues

    def _check_duplicates(self, rows: Sequence[Row]) -> List[str]:
        issues = []
        seen = set()
        for row in rows:
            if row.id in seen:
                issues.append(f"❌ DUPLICATE: row id {row.id} appears more than once")
            seen.add(row.id)
        return issues

    def _check_baselines(self, rows: Sequence[Row]) -> List[str]:
        issues = []
        current_ids = {r.id for r in rows}

        for row in rows:
            if row.id not in self.baseline_map:
                issues.append(f"❌ BASELINE: row {row.id} was not in the original table")
            elif row.base_value != self.baseline_map[row.id]:
                issues.append(
                    f"❌ BASELINE: row {row.id} baseline changed from "
                    f"{self.baseline_map[row.id]} to {row.base_value}"
                )

        for row_id in self.baseline_map:
            if row_id not in current_ids:
                issues.append(f"❌ BASELINE: row {row_id} is missing from the table")

        return issues
