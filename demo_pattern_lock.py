#!/usr/bin/env python3
"""Pattern Lock Demo with Visual Feedback.

Drag across the dots with the mouse to enter a pattern. The engine's draw
list is painted with pygame and the hint line shows the result.
"""

import logging
from typing import Tuple

import pygame

from pattern_lock import (
    CircleInstruction,
    LineInstruction,
    PatternConfig,
    PatternResult,
    PatternStateMachine,
)
from pattern_lock.utils.logger import PatternLogger


def argb_to_rgb(color: int) -> Tuple[int, int, int]:
    """Convert a 0xAARRGGBB int to a pygame RGB tuple."""
    return ((color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF)


class PatternLockDemo:
    """Interactive demo for grid pattern input."""

    def __init__(self, size: int = 600) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((size, size + 80), pygame.RESIZABLE)
        pygame.display.set_caption("Pattern Lock Demo")

        self.config = PatternConfig(DENSITY=2.0)
        self.logger = PatternLogger()
        self.hint = "Draw an unlock pattern"
        self.needs_redraw = True

        self.state_machine = PatternStateMachine(
            viewport=(size, size),
            config=self.config,
            on_drag_started=self.on_drag_started,
            on_pattern_result=self.on_pattern_result,
            on_invalidate=self.invalidate,
        )

        # Colors
        self.BLACK = (0, 0, 0)
        self.WHITE = (255, 255, 255)
        self.GREEN = (0, 160, 0)
        self.RED = (200, 0, 0)
        self.hint_color = self.BLACK

        # Fonts
        self.font = pygame.font.Font(None, 40)

    def on_drag_started(self, started: bool) -> None:
        self.logger.log_drag_started(started)
        if started:
            self.hint = "Draw an unlock pattern"
            self.hint_color = self.BLACK

    def on_pattern_result(self, result: PatternResult) -> None:
        self.logger.log_pattern_result(result)
        if result.accepted:
            self.hint = f"Pattern: {result.value}"
            self.hint_color = self.GREEN
        else:
            self.hint = f"Connect at least {self.config.MIN_PATTERN_LENGTH} dots"
            self.hint_color = self.RED

    def invalidate(self) -> None:
        self.needs_redraw = True

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN:
                    if event.button == 1:  # Left click
                        self.state_machine.pointer_down(*event.pos)
                elif event.type == pygame.MOUSEMOTION:
                    if event.buttons[0]:
                        self.state_machine.pointer_move(*event.pos)
                elif event.type == pygame.MOUSEBUTTONUP:
                    if event.button == 1:
                        self.state_machine.pointer_up(*event.pos)
                elif event.type == pygame.WINDOWFOCUSLOST:
                    self.state_machine.cancel()
                elif event.type == pygame.VIDEORESIZE:
                    self.state_machine.resize((event.w, event.h - 80))
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_c:
                        self.state_machine.reset()
                        self.hint = "Draw an unlock pattern"
                        self.hint_color = self.BLACK
                    elif event.key == pygame.K_ESCAPE:
                        return

            if self.needs_redraw:
                self.draw()
                self.needs_redraw = False
            clock.tick(60)

    def draw(self) -> None:
        """Paint the draw list and the hint line."""
        self.screen.fill(self.WHITE)
        for instruction in self.state_machine.draw_list():
            if isinstance(instruction, CircleInstruction):
                pygame.draw.circle(
                    self.screen,
                    argb_to_rgb(instruction.color),
                    (int(instruction.center.x), int(instruction.center.y)),
                    int(instruction.radius),
                )
            elif isinstance(instruction, LineInstruction):
                pygame.draw.line(
                    self.screen,
                    argb_to_rgb(instruction.color),
                    instruction.start.as_tuple(),
                    instruction.end.as_tuple(),
                    int(instruction.width),
                )
        side = int(self.state_machine.grid.side)
        self.screen.blit(self.font.render(self.hint, True, self.hint_color), (20, side + 20))
        pygame.display.flip()


def main() -> None:
    """Entry point for the demo."""
    logging.basicConfig(level=logging.INFO)
    demo = PatternLockDemo()
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        demo.logger.close()
        pygame.quit()


if __name__ == "__main__":
    main()
