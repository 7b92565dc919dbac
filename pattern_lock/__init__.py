"""
Pattern Lock Package
A grid pattern input engine: drag across an N x N grid of dots to enter an
ordered, duplicate-free pattern.
"""

from .config.settings import PatternConfig, PatternConfigError
from .core.state_machine import (
    DragPhase,
    DragState,
    PatternResult,
    PatternStateMachine,
    PointerAction,
    PointerEvent,
    RejectReason,
)
from .grid.geometry import Grid, Node, compute_grid
from .grid.hit_test import hit_test
from .render.projector import CircleInstruction, ColorState, LineInstruction, project

__version__ = "1.0.0"
__all__ = [
    "PatternConfig",
    "PatternConfigError",
    "DragPhase",
    "DragState",
    "PatternResult",
    "PatternStateMachine",
    "PointerAction",
    "PointerEvent",
    "RejectReason",
    "Grid",
    "Node",
    "compute_grid",
    "hit_test",
    "CircleInstruction",
    "ColorState",
    "LineInstruction",
    "project",
]
