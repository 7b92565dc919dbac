"""
Pattern state machine and the touchscreen listener that drives it.
"""

from .state_machine import (
    DragPhase,
    DragState,
    PatternResult,
    PatternStateMachine,
    PointerAction,
    PointerEvent,
    RejectReason,
)

__all__ = [
    "DragPhase",
    "DragState",
    "PatternResult",
    "PatternStateMachine",
    "PointerAction",
    "PointerEvent",
    "RejectReason",
]
