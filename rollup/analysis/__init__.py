# rollup/analysis/__init__.py
"""Analysis functionality"""

from .analyzer import MetricsCalculator

__all__ = ['MetricsCalculator']
