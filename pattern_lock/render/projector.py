"""
Render projection: turn grid, path and drag state into drawing instructions.

The draw list is order significant. Circles come first in grid scan
order, then one segment per consecutive pair of path nodes, then the
optional trailing segment from the last node to the live pointer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Union

from ..config.settings import PatternConfig
from ..grid.geometry import Grid, Node
from ..utils.gesture_utils import Point


class ColorState(Enum):
    NORMAL = "normal"
    SELECTED = "selected"


@dataclass(frozen=True)
class CircleInstruction:
    center: Point
    radius: float
    color_state: ColorState
    color: int


@dataclass(frozen=True)
class LineInstruction:
    start: Point
    end: Point
    color: int
    width: float
    trailing: bool = False


DrawInstruction = Union[CircleInstruction, LineInstruction]
DrawList = List[DrawInstruction]


def project(grid: Grid, path: Sequence[Node], drag_state=None,
            config: Optional[PatternConfig] = None) -> DrawList:
    """Build the draw list for one frame.

    Args:
        grid: Current geometry.
        path: Selected nodes in selection order.
        drag_state: Anything with ``moving_without_node`` and ``pointer``
                    attributes (normally a ``DragState``); None means idle.
        config: Supplies colors and line width.
    """
    config = config or PatternConfig()
    selected = {node.node_id for node in path}
    draw_list: DrawList = []

    for node in grid:
        if node.node_id in selected:
            state, color = ColorState.SELECTED, config.SELECTED_COLOR
        else:
            state, color = ColorState.NORMAL, config.NORMAL_COLOR
        draw_list.append(CircleInstruction(node.center, node.radius, state, color))

    for previous, current in zip(path, path[1:]):
        draw_list.append(LineInstruction(previous.center, current.center,
                                         config.SELECTED_COLOR, config.LINE_WIDTH))

    if (path and drag_state is not None and drag_state.moving_without_node
            and drag_state.pointer is not None):
        pointer = drag_state.pointer
        draw_list.append(LineInstruction(path[-1].center, Point(pointer.x, pointer.y, pointer.t),
                                         config.SELECTED_COLOR, config.LINE_WIDTH, trailing=True))

    return draw_list
