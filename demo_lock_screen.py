#!/usr/bin/env python3
"""Lock Screen Demo with Visual Feedback.

Simulates the lock overlay in a pygame window. Drag with the left mouse
button to draw the U shape, or click the red text at the bottom repeatedly
to use the emergency exit.
"""

import argparse
from typing import List, Optional, Tuple

import pygame

from screen_guard.config.settings import GestureConfig, load_config
from screen_guard.core.router import TouchRouter, UnlockSignal
from screen_guard.gestures.u_shape_classifier import Phase


class LockScreenDemo:
    """Interactive overlay driven by mouse events."""

    def __init__(self, config: GestureConfig, size: Tuple[int, int] = (600, 1000)) -> None:
        pygame.init()
        self.width, self.height = size
        self.screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Screen Guard Demo")

        self.router = TouchRouter(config, clock=lambda: float(pygame.time.get_ticks()))
        self.router.resize(self.width, self.height)

        self.trail: List[Tuple[int, int]] = []
        self.is_touching = False
        self.unlock_signal: Optional[UnlockSignal] = None
        self.last_phase = Phase.IDLE

        # Colors
        self.BACKGROUND = (20, 20, 20)
        self.WHITE = (255, 255, 255)
        self.DIM = (150, 150, 150)
        self.GUIDE = (110, 110, 110)
        self.TRAIL = (0, 200, 255)
        self.GREEN = (0, 220, 120)

        # Fonts
        self.title_font = pygame.font.Font(None, 56)
        self.font = pygame.font.Font(None, 30)
        self.small_font = pygame.font.Font(None, 22)

    def run(self) -> None:
        """Run the demo loop."""
        clock = pygame.time.Clock()
        while True:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    return
                elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                    self.pointer_down(event.pos)
                elif event.type == pygame.MOUSEMOTION and self.is_touching:
                    self.pointer_move(event.pos)
                elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                    self.pointer_up(event.pos)
                elif event.type == pygame.WINDOWLEAVE and self.is_touching:
                    self.pointer_cancel(pygame.mouse.get_pos())
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                    self.relock()

            self.draw()
            clock.tick(60)

    def pointer_down(self, pos: Tuple[int, int]) -> None:
        if self.unlock_signal:
            return
        self.is_touching = True
        self.trail = [pos]
        self._handle(self.router.on_pointer_down(*pos))

    def pointer_move(self, pos: Tuple[int, int]) -> None:
        self.trail.append(pos)
        self._handle(self.router.on_pointer_move(*pos))

    def pointer_up(self, pos: Tuple[int, int]) -> None:
        if not self.is_touching:
            return
        self.is_touching = False
        self.trail = []
        self._handle(self.router.on_pointer_up(*pos))

    def pointer_cancel(self, pos: Tuple[int, int]) -> None:
        self.is_touching = False
        self.trail = []
        self._handle(self.router.on_pointer_cancel(*pos))

    def relock(self) -> None:
        """Bring the overlay back after an unlock."""
        self.unlock_signal = None
        self.router.reset_gesture()
        self.router.reset_emergency()

    def _handle(self, signal: Optional[UnlockSignal]) -> None:
        phase = self.router.phase
        if phase != self.last_phase:
            print(f"Phase: {phase.value}")
            self.last_phase = phase
        if signal:
            print(f"Unlocked by {signal.reason.value}")
            self.unlock_signal = signal

    def draw(self) -> None:
        """Render the overlay and current trail."""
        h = self.height
        if self.unlock_signal:
            self.screen.fill(self.WHITE)
            self._centered(self.title_font, "Unlocked", self.GREEN, h * 0.45)
            self._centered(self.font, f"via {self.unlock_signal.reason.value}", self.DIM, h * 0.52)
            self._centered(self.small_font, "R: lock again", self.DIM, h * 0.6)
            pygame.display.flip()
            return

        self.screen.fill(self.BACKGROUND)
        self._centered(self.title_font, "Screen Locked", self.WHITE, h * 0.18)
        self._centered(self.font, "Swipe in a U-shape to unlock", self.DIM, h * 0.25)
        self.draw_guide()

        if len(self.trail) > 1:
            pygame.draw.lines(self.screen, self.TRAIL, False, self.trail, 8)

        # Emergency exit text, pulsing
        pulse = 140 + int(115 * abs((pygame.time.get_ticks() % 2400) / 1200 - 1))
        red = (pulse, 30, 30)
        required = self.router.config.emergency_required_taps
        self._centered(self.small_font, f"Tap on this text {required} times to emergency exit",
                       red, h * 0.93)
        count = self.router.emergency_count
        if count > 0:
            self._centered(self.small_font, f"({count} / {required})", red, h * 0.97)

        pygame.display.flip()

    def draw_guide(self) -> None:
        """Dashed U with START and END labels."""
        w, h = self.width, self.height
        left, right = w * 0.25, w * 0.75
        top, bottom = h * 0.35, h * 0.65
        segments = [((left, top), (left, bottom)),
                    ((left, bottom), (right, bottom)),
                    ((right, bottom), (right, top))]
        for start, end in segments:
            self._dashed_line(start, end)

        pygame.draw.polygon(self.screen, self.GUIDE,
                            [(left - 12, top + 10), (left, top + 30), (left + 12, top + 10)])
        self._centered(self.small_font, "START", self.GUIDE, top - 16, x=left)
        self._centered(self.small_font, "END", self.GUIDE, top - 16, x=right)

    def _dashed_line(self, start, end, dash: float = 20, gap: float = 15) -> None:
        (x1, y1), (x2, y2) = start, end
        length = ((x2 - x1) ** 2 + (y2 - y1) ** 2) ** 0.5
        if length == 0:
            return
        dx, dy = (x2 - x1) / length, (y2 - y1) / length
        pos = 0.0
        while pos < length:
            seg_end = min(pos + dash, length)
            pygame.draw.line(self.screen, self.GUIDE,
                             (x1 + dx * pos, y1 + dy * pos),
                             (x1 + dx * seg_end, y1 + dy * seg_end), 4)
            pos = seg_end + gap

    def _centered(self, font, text: str, color, y: float, x: Optional[float] = None) -> None:
        surface = font.render(text, True, color)
        rect = surface.get_rect(center=(x if x is not None else self.width / 2, y))
        self.screen.blit(surface, rect)


def main() -> None:
    """Entry point for the demo."""
    parser = argparse.ArgumentParser(description="Simulate the lock overlay with the mouse.")
    parser.add_argument("--config", help="JSON file overriding gesture zones and thresholds")
    args = parser.parse_args()

    config = load_config(args.config) if args.config else GestureConfig()
    demo = LockScreenDemo(config)
    try:
        demo.run()
    except KeyboardInterrupt:
        pass
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
