"""
Grid geometry: node centers and hit radius for an N x N lattice.

Node (i, j), with i and j in [1..N], sits at
``(side / (N + 1) * i, side / (N + 1) * j)``: i counts along x and j
along y. Nodes are scanned with i in the outer loop. All nodes share one
radius.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple, Union

import numpy as np

from ..config.settings import PatternConfig
from ..utils.gesture_utils import DataValidator, GeometryUtils, Point

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Node:
    """One selectable grid point. Identity is its (i, j)."""
    i: int
    j: int
    cx: float = field(compare=False)
    cy: float = field(compare=False)
    radius: float = field(compare=False)
    number: int = field(compare=False, default=0)

    @property
    def node_id(self) -> Tuple[int, int]:
        return (self.i, self.j)

    @property
    def center(self) -> Point:
        return Point(self.cx, self.cy, 0.0)

    def __repr__(self):
        return f"Node({self.i}, {self.j})"


class Grid:
    """N x N arrangement (i outer, j inner) of nodes sharing one radius."""

    def __init__(self, size: int, side: float, radius: float, nodes: Sequence[Node] = ()):
        self.size = size
        self.side = side
        self.radius = radius
        self.nodes: Tuple[Node, ...] = tuple(nodes)
        # (k, 2) array of centers in the same scan order as nodes
        self.centers = np.array([(n.cx, n.cy) for n in self.nodes], dtype=float).reshape(-1, 2)

    def __iter__(self) -> Iterator[Node]:
        return iter(self.nodes)

    def __len__(self):
        return len(self.nodes)

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (
            self.size == other.size
            and self.side == other.side
            and self.radius == other.radius
            and np.array_equal(self.centers, other.centers)
            and self.nodes == other.nodes
        )

    def __repr__(self):
        return f"Grid(size={self.size}, side={self.side:.1f}, radius={self.radius:.1f}, nodes={len(self.nodes)})"

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def node_at(self, i: int, j: int) -> Optional[Node]:
        """Look up a node by its grid coordinates (1-based)."""
        if self.is_empty or not (1 <= i <= self.size and 1 <= j <= self.size):
            return None
        return self.nodes[(i - 1) * self.size + (j - 1)]

    @classmethod
    def empty(cls, size: int) -> 'Grid':
        return cls(size=size, side=0.0, radius=0.0)


def compute_grid(viewport: Union[float, Sequence[float]], config: Optional[PatternConfig] = None) -> Grid:
    """Compute node centers and radius for a square viewport.

    Args:
        viewport: Side length, or a (width, height) pair of which the
                  smaller side is used.
        config: Grid options; defaults to ``PatternConfig()``.

    Returns:
        The grid. A zero, negative or non-finite viewport yields an empty
        grid that no point can hit.
    """
    config = config or PatternConfig()
    n = config.GRID_SIZE

    try:
        side = GeometryUtils.square_side(viewport)
    except (TypeError, ValueError):
        side = float('nan')

    if not DataValidator.is_usable_size(side):
        logger.debug(f"Unusable viewport {viewport!r}, producing empty grid")
        return Grid.empty(n)

    step = side / (n + 1)
    if config.RADIUS_FRACTION is not None:
        radius = side * config.RADIUS_FRACTION
    else:
        radius = config.hit_radius

    nodes = []
    for i in range(1, n + 1):
        for j in range(1, n + 1):
            nodes.append(Node(
                i=i,
                j=j,
                cx=step * i,
                cy=step * j,
                radius=radius,
                number=(i - 1) * n + j,
            ))

    return Grid(size=n, side=side, radius=radius, nodes=nodes)
