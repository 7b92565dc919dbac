"""
Utilities package for pointer geometry and event logging.

This package provides shared helpers used by the grid, the state
machine and the touchscreen listener.
"""

from .logger import PatternLogger
from .gesture_utils import (
    Point,
    GeometryUtils,
    DataValidator
)

__all__ = [
    'Point',
    'GeometryUtils',
    'DataValidator',
    'PatternLogger'
]
