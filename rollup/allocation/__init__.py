# rollup/allocation/__init__.py
"""Allocation logic"""

from .flatten import flatten_dataset
from .engine import AllocationEngine
from .validator import AllocationValidator

__all__ = ['flatten_dataset', 'AllocationEngine', 'AllocationValidator']
