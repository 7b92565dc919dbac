"""
Grid geometry and hit testing.
"""

from .geometry import Grid, Node, compute_grid
from .hit_test import hit_test

__all__ = ["Grid", "Node", "compute_grid", "hit_test"]
