"""
Pattern state machine.

Consumes pointer down/move/up/cancel events, turns them into an ordered,
duplicate-free path of grid nodes and classifies the finished path as
accepted or rejected. Lifecycle: IDLE -> ACTIVE -> FINISHED -> IDLE.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Set, Tuple, Union

from ..config.settings import PatternConfig
from ..grid.geometry import Grid, Node, compute_grid
from ..grid.hit_test import hit_test
from ..render.projector import DrawList, project
from ..utils.gesture_utils import Point

logger = logging.getLogger(__name__)


class DragPhase(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    FINISHED = "finished"


@dataclass
class DragState:
    """Lifecycle of the current drag.

    ``anchor`` is the most recently selected node, ``pointer`` the last
    known pointer position and ``moving_without_node`` is set while the
    pointer is not over any node.
    """
    phase: DragPhase = DragPhase.IDLE
    anchor: Optional[Node] = None
    pointer: Optional[Point] = None
    moving_without_node: bool = False

    @property
    def is_active(self) -> bool:
        return self.phase is DragPhase.ACTIVE


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"
    CANCEL = "cancel"


@dataclass(frozen=True)
class PointerEvent:
    """A single pointer sample in viewport coordinates."""
    action: PointerAction
    x: float = 0.0
    y: float = 0.0
    t: Optional[float] = None

    @property
    def point(self) -> Point:
        return Point(self.x, self.y, self.t)


class RejectReason(Enum):
    TOO_SHORT = "too_short"


@dataclass(frozen=True)
class PatternResult:
    """Outcome of a finalized drag."""
    nodes: Tuple[Node, ...]
    accepted: bool
    reason: Optional[RejectReason] = None
    separator: str = field(default="", compare=False)

    @property
    def value(self) -> Optional[str]:
        """Node numbers joined in selection order, or None when rejected."""
        if not self.accepted:
            return None
        return self.separator.join(str(node.number) for node in self.nodes)

    @property
    def node_ids(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(node.node_id for node in self.nodes)

    def __len__(self):
        return len(self.nodes)


DragStartedCallback = Callable[[bool], None]
PatternResultCallback = Callable[[PatternResult], None]
InvalidateCallback = Callable[[], None]


class PatternStateMachine:
    """Tracks one drag at a time over a grid of nodes.

    Hosts feed pointer events and receive two notifications:
    ``on_drag_started(True)`` once per pointer down, and
    ``on_pattern_result(result)`` once per pointer up or cancel when at
    least one node was selected. ``on_invalidate()`` is called after every
    state change so the host can repaint.
    """

    def __init__(self, viewport: Union[float, Sequence[float], None] = None,
                 config: Optional[PatternConfig] = None,
                 on_drag_started: Optional[DragStartedCallback] = None,
                 on_pattern_result: Optional[PatternResultCallback] = None,
                 on_invalidate: Optional[InvalidateCallback] = None,
                 grid: Optional[Grid] = None):
        self.config = config or PatternConfig()
        if grid is None:
            grid = compute_grid(viewport if viewport is not None else 0, self.config)
        self.grid = grid
        self.on_drag_started = on_drag_started
        self.on_pattern_result = on_pattern_result
        self.on_invalidate = on_invalidate

        self.drag_state = DragState()
        self.last_result: Optional[PatternResult] = None
        self._path: List[Node] = []
        self._selected: Set[Tuple[int, int]] = set()
        self._pending_grid: Optional[Grid] = None

    @property
    def path(self) -> Tuple[Node, ...]:
        return tuple(self._path)

    @property
    def phase(self) -> DragPhase:
        return self.drag_state.phase

    # Pointer events

    def handle(self, event: PointerEvent) -> Optional[PatternResult]:
        """Dispatch a pointer event. Returns the result for up/cancel."""
        if event.action is PointerAction.DOWN:
            self.pointer_down(event.x, event.y, event.t)
        elif event.action is PointerAction.MOVE:
            self.pointer_move(event.x, event.y, event.t)
        elif event.action is PointerAction.UP:
            return self.pointer_up(event.x, event.y, event.t)
        elif event.action is PointerAction.CANCEL:
            return self.cancel()
        return None

    def pointer_down(self, x: float, y: float, t: Optional[float] = None):
        """Start a fresh drag, selecting the node under the pointer if any."""
        self._apply_pending_grid()
        self._clear_path()

        point = Point(x, y, t)
        node = hit_test(point, self.grid)
        self.drag_state = DragState(phase=DragPhase.ACTIVE, pointer=point)
        if node is not None:
            self._select(node)
        else:
            self.drag_state.moving_without_node = True

        if self.on_drag_started:
            self.on_drag_started(True)
        self._invalidate()

    def pointer_move(self, x: float, y: float, t: Optional[float] = None):
        """Extend the path with the node under the pointer if it is new."""
        if not self.drag_state.is_active:
            return

        point = Point(x, y, t)
        self.drag_state.pointer = point
        node = hit_test(point, self.grid)
        if node is None:
            self.drag_state.moving_without_node = True
        else:
            self.drag_state.moving_without_node = False
            if node.node_id not in self._selected:
                self._select(node)
        self._invalidate()

    def pointer_up(self, x: float, y: float, t: Optional[float] = None) -> Optional[PatternResult]:
        """Finish the drag and classify the path."""
        if not self.drag_state.is_active:
            return None

        point = Point(x, y, t)
        self.drag_state.pointer = point
        # Released nodes were already captured by moves; the path is left alone
        node = hit_test(point, self.grid)
        logger.debug(f"Pointer up at {point} over {node}")
        return self._finalize()

    def cancel(self) -> Optional[PatternResult]:
        """Finish the drag after the host lost the pointer (capture loss)."""
        if not self.drag_state.is_active:
            return None
        logger.debug("Drag cancelled, finalizing current path")
        return self._finalize()

    # Host operations

    def reset(self):
        """Return to idle with an empty path, without notifications."""
        self._clear_path()
        self.drag_state = DragState()
        self.last_result = None
        self._apply_pending_grid()
        self._invalidate()

    def resize(self, viewport: Union[float, Sequence[float]]):
        """Recompute geometry. Deferred to the next drag while one is active."""
        grid = compute_grid(viewport, self.config)
        if self.drag_state.is_active:
            logger.debug(f"Deferring resize to {viewport!r} until the drag ends")
            self._pending_grid = grid
            return
        self._pending_grid = None
        self.grid = grid
        self._invalidate()

    def draw_list(self) -> DrawList:
        """Drawing instructions for the current state."""
        return project(self.grid, self._path, self.drag_state, self.config)

    # Internals

    def _select(self, node: Node):
        self._path.append(node)
        self._selected.add(node.node_id)
        self.drag_state.anchor = node
        logger.debug(f"Selected {node} ({len(self._path)} in path)")

    def _clear_path(self):
        self._path = []
        self._selected = set()

    def _apply_pending_grid(self):
        if self._pending_grid is None:
            return
        self.grid = self._pending_grid
        self._pending_grid = None
        # A retained path follows its nodes onto the new geometry
        moved = [self.grid.node_at(node.i, node.j) for node in self._path]
        self._path = [node for node in moved if node is not None]
        self._selected = {node.node_id for node in self._path}
        if self.drag_state.anchor is not None:
            self.drag_state.anchor = self._path[-1] if self._path else None

    def _finalize(self) -> Optional[PatternResult]:
        self.drag_state.phase = DragPhase.FINISHED
        nodes = tuple(self._path)

        result = None
        if len(nodes) >= self.config.MIN_PATTERN_LENGTH:
            result = PatternResult(nodes=nodes, accepted=True,
                                   separator=self.config.VALUE_SEPARATOR)
        elif nodes:
            result = PatternResult(nodes=nodes, accepted=False,
                                   reason=RejectReason.TOO_SHORT,
                                   separator=self.config.VALUE_SEPARATOR)
            self._clear_path()

        self.drag_state.phase = DragPhase.IDLE
        self.drag_state.moving_without_node = False
        self._apply_pending_grid()
        self.last_result = result

        if result is not None and self.on_pattern_result:
            self.on_pattern_result(result)
        self._invalidate()
        return result

    def _invalidate(self):
        if self.on_invalidate:
            self.on_invalidate()
