# rollup/utils.py
"""Utility functions"""
import math
import re
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import List, Dict, Optional

from rollup.config import DECIMAL_PLACES

_LEADING_NUMBER = re.compile(r'^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)')
_QUANTUM = Decimal(1).scaleb(-DECIMAL_PLACES)


def round2(value: float) -> float:
    """Round half-up to the configured number of decimal places"""
    if not math.isfinite(value):
        return float(value)
    with localcontext() as ctx:
        # wide enough to quantize any finite float
        ctx.prec = 350
        rounded = Decimal(repr(float(value))).quantize(_QUANTUM, rounding=ROUND_HALF_UP)
    # + 0.0 turns -0.0 into 0.0
    return float(rounded) + 0.0


def parse_number(text: Optional[str]) -> Optional[float]:
    """Parse the leading number of user-entered text, or None"""
    if text is None:
        return None
    match = _LEADING_NUMBER.match(str(text))
    if not match:
        return None
    number = float(match.group(1))
    if not math.isfinite(number):
        return None
    return number


def format_percent(percent: float) -> str:
    """Format a percentage with two decimals and a trailing %"""
    return f"{round2(percent):.{DECIMAL_PLACES}f}%"


def variance_percent(value: float, base_value: float) -> float:
    """Percent change of value relative to base_value; 0 for a zero baseline"""
    if base_value == 0:
        return 0.0
    return (value - base_value) / base_value * 100


def format_variance(value: float, base_value: float) -> str:
    """Variance of value from base_value as percent text"""
    return format_percent(variance_percent(value, base_value))


def categorize_validation_issues(issues: List[str]) -> Dict[str, int]:
    """Categorize and count validation issues"""
    categories = {
        'rollup_mismatches': 0,
        'baseline_changes': 0,
        'orphaned_items': 0,
        'ordering_errors': 0,
        'duplicate_ids': 0,
        'other': 0
    }

    for issue in issues:
        if 'ROLLUP' in issue:
            categories['rollup_mismatches'] += 1
        elif 'BASELINE' in issue:
            categories['baseline_changes'] += 1
        elif 'ORPHAN' in issue:
            categories['orphaned_items'] += 1
        elif 'ORDER' in issue:
            categories['ordering_errors'] += 1
        elif 'DUPLICATE' in issue:
            categories['duplicate_ids'] += 1
        else:
            categories['other'] += 1

    return categories
