"""
Pytest configuration and shared fixtures.
"""

import pytest

from pattern_lock import PatternConfig, PatternStateMachine, compute_grid


VIEWPORT = 400.0  # step 100px between nodes, radius 15px


@pytest.fixture
def config():
    """Default 3x3 configuration."""
    return PatternConfig()


@pytest.fixture
def grid(config):
    """Default 3x3 grid in a 400px square."""
    return compute_grid(VIEWPORT, config)


class Recorder:
    """Collects host notifications."""

    def __init__(self):
        self.drag_started = []
        self.results = []
        self.invalidations = 0

    def on_drag_started(self, started):
        self.drag_started.append(started)

    def on_pattern_result(self, result):
        self.results.append(result)

    def on_invalidate(self):
        self.invalidations += 1


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def machine(config, recorder):
    """State machine wired to a recorder."""
    return PatternStateMachine(
        viewport=VIEWPORT,
        config=config,
        on_drag_started=recorder.on_drag_started,
        on_pattern_result=recorder.on_pattern_result,
        on_invalidate=recorder.on_invalidate,
    )


def center(i, j, step=100.0):
    """Pixel center of node (i, j) in the default fixture grid."""
    return (step * i, step * j)


def drag(machine, nodes, finish=True):
    """Drag through node coordinates, with an off-node move between each."""
    first, rest = nodes[0], nodes[1:]
    machine.pointer_down(*center(*first))
    for node in rest:
        x, y = center(*node)
        machine.pointer_move(x - 40, y - 40)
        machine.pointer_move(x, y)
    if finish:
        return machine.pointer_up(*center(*nodes[-1]))
    return None
