# rollup/models/__init__.py
"""Data models for table rows and the nested dataset"""

from .row import Row
from .dataset import Group, Item, DatasetError, parse_dataset

__all__ = ['Row', 'Group', 'Item', 'DatasetError', 'parse_dataset']
