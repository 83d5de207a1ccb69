# keymeow/__init__.py
"""
Keyboard Layout Assignment

Translates declarative keyboard layout documents into the flat matrices used
for layout analysis, and back.
"""

__version__ = "0.1.0"

# Import main classes for easy access
from .analysis import Analyzer, Layout, NgramType, Swap
from .assignment import resolve_layout
from .context import Metric, MetricContext, MetricData
from .corpus import EMPTY_CHAR, EMPTY_SYMBOL, Corpus
from .exceptions import GeometryIntegrityError, KeymeowError, LayoutFormatError, MetricDataError
from .geometry import Finger, Keyboard
from .layout_data import FixedFormat, FlexibleFormat, KeyComponent, LayoutData

__all__ = [
    'Analyzer',
    'Corpus',
    'EMPTY_CHAR',
    'EMPTY_SYMBOL',
    'Finger',
    'FixedFormat',
    'FlexibleFormat',
    'GeometryIntegrityError',
    'KeyComponent',
    'Keyboard',
    'KeymeowError',
    'Layout',
    'LayoutData',
    'LayoutFormatError',
    'Metric',
    'MetricContext',
    'MetricData',
    'MetricDataError',
    'NgramType',
    'Swap',
    'resolve_layout',
]
