"""
Configuration settings for the pattern lock engine.
"""

import math
import numbers
from typing import Any


class PatternConfigError(ValueError):
    """Raised when a configuration value is unknown or out of range."""


def _is_number(value) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool) and math.isfinite(value)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


class PatternConfig:
    """Configuration constants for grid pattern input.

    Class attributes are the defaults. Any of them can be overridden per
    instance with keyword arguments::

        config = PatternConfig(GRID_SIZE=4, MIN_PATTERN_LENGTH=6)
    """

    # Grid layout
    GRID_SIZE = 3

    # Hit radius in density-independent units, scaled by DENSITY (px per dp)
    HIT_RADIUS_DP = 15
    DENSITY = 1.0

    # When set, the radius is this fraction of the viewport size instead
    RADIUS_FRACTION = None

    # Minimum number of distinct nodes for an accepted pattern
    MIN_PATTERN_LENGTH = 5

    # ARGB colors
    NORMAL_COLOR = 0xFF70DBDB
    SELECTED_COLOR = 0xFFC0C0C0

    # Stroke width for path segments (px)
    LINE_WIDTH = 15

    # Joins node numbers into the finalized value ("12357")
    VALUE_SEPARATOR = ""

    def __init__(self, **overrides: Any):
        for key, value in overrides.items():
            if key.startswith("_") or not key.isupper() or not hasattr(PatternConfig, key):
                raise PatternConfigError(f"Unknown configuration option: {key}")
            setattr(self, key, value)
        self.validate()

    def validate(self):
        """Check that every option holds a usable value."""
        if not _is_integer(self.GRID_SIZE) or self.GRID_SIZE < 2:
            raise PatternConfigError(f"GRID_SIZE must be an integer >= 2, got {self.GRID_SIZE!r}")
        if not _is_number(self.HIT_RADIUS_DP) or self.HIT_RADIUS_DP <= 0:
            raise PatternConfigError(f"HIT_RADIUS_DP must be positive, got {self.HIT_RADIUS_DP!r}")
        if not _is_number(self.DENSITY) or self.DENSITY <= 0:
            raise PatternConfigError(f"DENSITY must be positive, got {self.DENSITY!r}")
        if self.RADIUS_FRACTION is not None and (
                not _is_number(self.RADIUS_FRACTION) or not 0 < self.RADIUS_FRACTION <= 0.5):
            raise PatternConfigError(
                f"RADIUS_FRACTION must be in (0, 0.5], got {self.RADIUS_FRACTION!r}"
            )
        if not _is_integer(self.MIN_PATTERN_LENGTH) or not 2 <= self.MIN_PATTERN_LENGTH <= self.GRID_SIZE ** 2:
            raise PatternConfigError(
                f"MIN_PATTERN_LENGTH must be between 2 and {self.GRID_SIZE ** 2}, "
                f"got {self.MIN_PATTERN_LENGTH!r}"
            )
        if not _is_number(self.LINE_WIDTH) or self.LINE_WIDTH <= 0:
            raise PatternConfigError(f"LINE_WIDTH must be positive, got {self.LINE_WIDTH!r}")
        for name in ("NORMAL_COLOR", "SELECTED_COLOR"):
            if not _is_integer(getattr(self, name)):
                raise PatternConfigError(f"{name} must be an ARGB integer, got {getattr(self, name)!r}")
        if not isinstance(self.VALUE_SEPARATOR, str):
            raise PatternConfigError(f"VALUE_SEPARATOR must be a string, got {self.VALUE_SEPARATOR!r}")

    @property
    def hit_radius(self) -> float:
        """Hit radius in pixels for the absolute (dp based) sizing mode."""
        return float(self.HIT_RADIUS_DP) * float(self.DENSITY)

    def __repr__(self):
        return (
            f"PatternConfig(GRID_SIZE={self.GRID_SIZE}, HIT_RADIUS_DP={self.HIT_RADIUS_DP}, "
            f"DENSITY={self.DENSITY}, MIN_PATTERN_LENGTH={self.MIN_PATTERN_LENGTH})"
        )
