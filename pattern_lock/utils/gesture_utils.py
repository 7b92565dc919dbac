"""
Shared geometry utilities for pointer handling.

This module provides the point type and the small geometric helpers used
by the grid, the hit tester and the state machine.
"""

import math
import numbers
import time
from typing import Optional, Sequence, Tuple, Union


class Point:
    """Represents a 2D point with optional timestamp."""

    def __init__(self, x: float, y: float, timestamp: Optional[float] = None):
        self.x = float(x)
        self.y = float(y)
        self.t = timestamp if timestamp is not None else time.time()
        self.timestamp = self.t  # Alias for compatibility

    def __repr__(self):
        return f"Point({self.x:.1f}, {self.y:.1f})"

    def __eq__(self, other):
        if not isinstance(other, Point):
            return False
        return abs(self.x - other.x) < 1e-10 and abs(self.y - other.y) < 1e-10

    def __hash__(self):
        return hash((round(self.x, 9), round(self.y, 9)))

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: 'Point') -> float:
        """Calculate Euclidean distance to another point."""
        return math.sqrt((self.x - other.x) ** 2 + (self.y - other.y) ** 2)


class GeometryUtils:
    """Utility class for geometric calculations."""

    @staticmethod
    def square_side(viewport: Union[float, Sequence[float]]) -> float:
        """Side of the square layout for a viewport.

        Accepts a single size or a (width, height) pair; for a pair the
        smaller side wins.
        """
        if isinstance(viewport, numbers.Real):
            return float(viewport)
        width, height = viewport
        return float(min(width, height))


class DataValidator:
    """Utility class for validating geometry input."""

    @staticmethod
    def is_usable_size(size: float) -> bool:
        """A viewport size is usable when it is finite and strictly positive."""
        try:
            size = float(size)
        except (TypeError, ValueError):
            return False
        return math.isfinite(size) and size > 0
