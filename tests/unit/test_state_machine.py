"""Unit tests for PatternStateMachine."""

import pytest

from pattern_lock import PatternConfig, PatternStateMachine
from pattern_lock.core.state_machine import (
    DragPhase,
    PointerAction,
    PointerEvent,
    RejectReason,
)
from tests.conftest import center, drag


def ids(nodes):
    return [node.node_id for node in nodes]


class TestPointerDown:
    """Tests for starting a drag."""

    def test_down_on_node_selects_it(self, machine, recorder):
        machine.pointer_down(*center(2, 2))

        assert machine.phase is DragPhase.ACTIVE
        assert ids(machine.path) == [(2, 2)]
        assert machine.drag_state.anchor.node_id == (2, 2)
        assert not machine.drag_state.moving_without_node
        assert recorder.drag_started == [True]

    def test_down_off_node(self, machine, recorder):
        machine.pointer_down(150, 150)

        assert machine.phase is DragPhase.ACTIVE
        assert machine.path == ()
        assert machine.drag_state.anchor is None
        assert machine.drag_state.moving_without_node
        assert recorder.drag_started == [True]

    def test_down_while_active_restarts(self, machine, recorder):
        drag(machine, [(1, 1), (1, 2), (1, 3)], finish=False)
        machine.pointer_down(*center(3, 3))

        assert ids(machine.path) == [(3, 3)]
        assert recorder.drag_started == [True, True]
        assert recorder.results == []

    def test_down_records_pointer(self, machine):
        machine.pointer_down(12.5, 7.25)
        assert machine.drag_state.pointer.as_tuple() == (12.5, 7.25)


class TestPointerMove:
    """Tests for growing the path."""

    def test_move_appends_new_nodes_in_first_touch_order(self, machine):
        drag(machine, [(1, 1), (2, 2), (3, 3)], finish=False)
        assert ids(machine.path) == [(1, 1), (2, 2), (3, 3)]

    def test_revisit_is_noop(self, machine):
        drag(machine, [(1, 1), (1, 2), (1, 1), (1, 2), (1, 3)], finish=False)
        assert ids(machine.path) == [(1, 1), (1, 2), (1, 3)]

    def test_repeated_samples_on_same_node(self, machine):
        machine.pointer_down(*center(1, 1))
        for dx in (0, 3, -3, 5, 0):
            machine.pointer_move(100 + dx, 100)
        assert ids(machine.path) == [(1, 1)]

    def test_move_off_node_sets_flag_and_pointer(self, machine):
        machine.pointer_down(*center(1, 1))
        machine.pointer_move(160, 130)

        assert machine.drag_state.moving_without_node
        assert machine.drag_state.pointer.as_tuple() == (160.0, 130.0)
        assert ids(machine.path) == [(1, 1)]

    def test_move_back_onto_visited_node_clears_flag(self, machine):
        machine.pointer_down(*center(1, 1))
        machine.pointer_move(160, 130)
        machine.pointer_move(*center(1, 1))
        assert not machine.drag_state.moving_without_node

    def test_move_when_idle_is_ignored(self, machine, recorder):
        machine.pointer_move(*center(1, 1))

        assert machine.phase is DragPhase.IDLE
        assert machine.path == ()
        assert recorder.invalidations == 0

    def test_down_off_node_then_move_onto_node(self, machine):
        machine.pointer_down(5, 5)
        machine.pointer_move(*center(3, 1))

        assert ids(machine.path) == [(3, 1)]
        assert machine.drag_state.anchor.node_id == (3, 1)

    def test_path_never_exceeds_node_count(self, machine):
        every = [(r, c) for r in range(1, 4) for c in range(1, 4)]
        drag(machine, every + every[::-1], finish=False)
        assert len(machine.path) == 9
        assert len(set(ids(machine.path))) == 9


class TestFinalize:
    """Tests for pointer up and cancel."""

    def test_five_nodes_accepted_in_order(self, machine, recorder):
        nodes = [(1, 1), (2, 2), (3, 3), (1, 2), (2, 1)]
        result = drag(machine, nodes)

        assert result.accepted
        assert result.reason is None
        assert list(result.node_ids) == nodes
        assert result.value == "15924"
        assert recorder.results == [result]
        assert machine.phase is DragPhase.IDLE
        assert not machine.drag_state.moving_without_node

    def test_accepted_path_is_retained_until_next_drag(self, machine):
        drag(machine, [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)])
        assert len(machine.path) == 5

        machine.pointer_down(150, 150)
        assert machine.path == ()

    def test_two_nodes_rejected_and_cleared(self, machine, recorder):
        result = drag(machine, [(1, 1), (1, 2)])

        assert not result.accepted
        assert result.reason is RejectReason.TOO_SHORT
        assert result.value is None
        assert list(result.node_ids) == [(1, 1), (1, 2)]
        assert machine.path == ()
        assert recorder.results == [result]

    @pytest.mark.parametrize("count", [2, 3, 4])
    def test_below_minimum_rejected(self, machine, count):
        nodes = [(1, 1), (1, 2), (1, 3), (2, 3)][:count]
        result = drag(machine, nodes)
        assert not result.accepted
        assert machine.path == ()

    def test_single_tap_rejected(self, machine, recorder):
        machine.pointer_down(*center(2, 2))
        result = machine.pointer_up(*center(2, 2))

        assert not result.accepted
        assert result.reason is RejectReason.TOO_SHORT
        assert machine.path == ()
        assert len(recorder.results) == 1

    def test_empty_drag_reports_nothing(self, machine, recorder):
        machine.pointer_down(150, 150)
        machine.pointer_move(250, 250)
        result = machine.pointer_up(250, 250)

        assert result is None
        assert recorder.results == []
        assert recorder.drag_started == [True]
        assert machine.phase is DragPhase.IDLE
        assert machine.last_result is None

    def test_up_off_node_does_not_change_path(self, machine):
        drag(machine, [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)], finish=False)
        result = machine.pointer_up(390, 390)
        assert list(result.node_ids) == [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)]

    def test_up_over_untouched_node_does_not_add_it(self, machine):
        drag(machine, [(1, 1), (1, 2), (1, 3), (2, 3)], finish=False)
        result = machine.pointer_up(*center(3, 3))
        assert not result.accepted
        assert len(result) == 4

    def test_up_when_idle_is_ignored(self, machine, recorder):
        assert machine.pointer_up(*center(1, 1)) is None
        assert recorder.results == []

    def test_cancel_finalizes_like_up(self, machine, recorder):
        drag(machine, [(3, 1), (3, 2), (3, 3), (2, 3), (1, 3)], finish=False)
        result = machine.cancel()

        assert result.accepted
        assert result.value == "78963"
        assert machine.phase is DragPhase.IDLE
        assert recorder.results == [result]

    def test_cancel_short_drag_rejected(self, machine):
        drag(machine, [(1, 1), (2, 2)], finish=False)
        result = machine.cancel()
        assert not result.accepted
        assert machine.path == ()

    def test_cancel_when_idle(self, machine):
        assert machine.cancel() is None

    def test_next_drag_starts_fresh_after_each_outcome(self, machine):
        drag(machine, [(1, 1), (1, 2)])
        machine.pointer_down(*center(3, 3))
        assert ids(machine.path) == [(3, 3)]
        machine.pointer_up(*center(3, 3))

        drag(machine, [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)])
        machine.pointer_down(*center(2, 1))
        assert ids(machine.path) == [(2, 1)]

    def test_custom_minimum_and_separator(self, recorder):
        cfg = PatternConfig(MIN_PATTERN_LENGTH=3, VALUE_SEPARATOR="-")
        sm = PatternStateMachine(400, cfg, on_pattern_result=recorder.on_pattern_result)
        result = drag(sm, [(1, 1), (2, 1), (3, 1)])

        assert result.accepted
        assert result.value == "1-4-7"


class TestHandle:
    """Tests for event dispatch."""

    def test_event_stream(self, machine, recorder):
        stream = [
            PointerEvent(PointerAction.DOWN, *center(1, 1)),
            PointerEvent(PointerAction.MOVE, *center(1, 2)),
            PointerEvent(PointerAction.MOVE, *center(1, 1)),
            PointerEvent(PointerAction.MOVE, *center(1, 3)),
            PointerEvent(PointerAction.MOVE, *center(2, 2)),
            PointerEvent(PointerAction.MOVE, *center(3, 1)),
            PointerEvent(PointerAction.UP, *center(3, 1)),
        ]
        results = [machine.handle(event) for event in stream]

        assert results[:-1] == [None] * 6
        assert results[-1].value == "12357"
        assert recorder.results == [results[-1]]

    def test_cancel_event(self, machine):
        machine.handle(PointerEvent(PointerAction.DOWN, *center(1, 1)))
        machine.handle(PointerEvent(PointerAction.MOVE, *center(2, 1)))
        result = machine.handle(PointerEvent(PointerAction.CANCEL))
        assert not result.accepted


class TestResetAndResize:
    """Tests for host operations."""

    def test_reset(self, machine, recorder):
        drag(machine, [(1, 1), (1, 2)], finish=False)
        machine.reset()

        assert machine.phase is DragPhase.IDLE
        assert machine.path == ()
        assert not machine.drag_state.moving_without_node
        assert recorder.results == []

    def test_independent_instances(self, config):
        a = PatternStateMachine(400, config)
        b = PatternStateMachine(400, config)
        a.pointer_down(*center(1, 1))

        assert len(a.path) == 1
        assert b.path == ()
        assert b.phase is DragPhase.IDLE

    def test_resize_when_idle_applies_immediately(self, machine):
        machine.resize(800)
        assert machine.grid.side == 800.0
        assert machine.grid.node_at(1, 1).cx == 200.0

    def test_resize_during_drag_is_deferred(self, machine):
        old_grid = machine.grid
        machine.pointer_down(*center(1, 1))
        machine.resize(800)

        assert machine.grid is old_grid
        machine.pointer_move(*center(1, 2))
        assert ids(machine.path) == [(1, 1), (1, 2)]

        machine.pointer_up(*center(1, 2))
        assert machine.grid.side == 800.0

    def test_retained_path_moves_to_new_geometry(self, machine):
        drag(machine, [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)], finish=False)
        machine.resize(800)
        machine.pointer_up(*center(3, 3))

        assert machine.path[0].cx == 200.0
        assert ids(machine.path) == [(1, 1), (1, 2), (1, 3), (2, 3), (3, 3)]

    def test_degenerate_geometry_never_selects(self, recorder):
        sm = PatternStateMachine(0, on_pattern_result=recorder.on_pattern_result)
        sm.pointer_down(0, 0)
        sm.pointer_move(10, 10)
        assert sm.pointer_up(10, 10) is None
        assert sm.phase is DragPhase.IDLE
        assert recorder.results == []

    def test_invalidate_on_each_change(self, machine, recorder):
        machine.pointer_down(*center(1, 1))
        machine.pointer_move(*center(1, 2))
        machine.pointer_up(*center(1, 2))
        assert recorder.invalidations == 3
