# rollup/analysis/analyzer.py
"""Table metrics"""
from typing import Dict, Any, Sequence, Optional

from rollup.models import Row
from rollup.utils import round2, format_variance


class MetricsCalculator:
    """Calculates summary metrics from a row sequence"""

    @staticmethod
    def calculate(rows: Sequence[Row]) -> Dict[str, Any]:
        """Calculate totals and variance figures for the table"""
        groups = [r for r in rows if r.is_group]
        items = [r for r in rows if r.is_child]

        total_base = round2(sum(g.base_value for g in groups))
        total_value = round2(sum(g.value for g in groups))

        largest_increase: Optional[Dict[str, Any]] = None
        largest_decrease: Optional[Dict[str, Any]] = None
        for item in items:
            change = round2(item.value - item.base_value)
            if change > 0 and (largest_increase is None or change > largest_increase['change']):
                largest_increase = {'id': item.id, 'label': item.label, 'change': change}
            if change < 0 and (largest_decrease is None or change < largest_decrease['change']):
                largest_decrease = {'id': item.id, 'label': item.label, 'change': change}

        return {
            'group_count': len(groups),
            'item_count': len(items),
            'total_base_value': total_base,
            'total_value': total_value,
            'total_change': round2(total_value - total_base),
            'total_variance_percent': format_variance(total_value, total_base),
            'groups_changed': sum(1 for g in groups if g.value != g.base_value),
            'items_changed': sum(1 for i in items if i.value != i.base_value),
            'largest_increase': largest_increase,
            'largest_decrease': largest_decrease
        }
