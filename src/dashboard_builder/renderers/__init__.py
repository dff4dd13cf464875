"""
Renderers Package

One rendering strategy per component type.
"""

from .base import BaseRenderer, FallbackRenderer, NO_DATA_MESSAGE, UNKNOWN_TYPE_MESSAGE
from .chart import ChartRenderer, aggregate_rows
from .table import TableRenderer
from .metric import MetricRenderer
from .text import TextRenderer

__all__ = [
    'BaseRenderer',
    'FallbackRenderer',
    'NO_DATA_MESSAGE',
    'UNKNOWN_TYPE_MESSAGE',
    'ChartRenderer',
    'aggregate_rows',
    'TableRenderer',
    'MetricRenderer',
    'TextRenderer',
]
