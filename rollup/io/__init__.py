# rollup/io/__init__.py
"""Input operations"""

from .loader import DataLoader

__all__ = ['DataLoader']
