"""
U-Shape Gesture Classifier

Recognizes the unlock gesture: a continuous swipe that starts in the top-left
of the surface, descends, crosses the bottom, and rises into the top-right.

The recognizer is a finite-state machine gated only by zone membership, so it
tolerates jitter while rejecting straight swipes and shallow U shapes. The
transitions are pure functions over an immutable GestureState; the
UShapeClassifier class keeps one state per overlay and reuses it across
attempts.
"""

import logging
import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Optional, Tuple

from ..config.settings import GestureConfig
from ..utils.gesture_utils import Surface

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Progress through the U shape."""
    IDLE = 'idle'
    DESCENDING = 'descending'
    CROSSING = 'crossing'
    ASCENDING = 'ascending'
    COMPLETE = 'complete'


@dataclass(frozen=True)
class GestureState:
    """
    Snapshot of one gesture attempt.

    The y fields are only meaningful while phase is not IDLE; every transition
    back to IDLE yields the neutral IDLE_STATE.
    """
    phase: Phase = Phase.IDLE
    surface: Optional[Surface] = None
    max_y_reached: float = 0.0
    min_y_at_start: float = 0.0
    min_y_at_end: float = math.inf

    @property
    def vertical_travel(self) -> float:
        """Net vertical excursion of the path recorded so far."""
        return self.max_y_reached - min(self.min_y_at_start, self.min_y_at_end)


IDLE_STATE = GestureState()


def _in_left_band(x: float, surface: Surface, config: GestureConfig) -> bool:
    return x < surface.width * config.left_zone_max_x


def _in_right_band(x: float, surface: Surface, config: GestureConfig) -> bool:
    return x > surface.width * config.right_zone_min_x


def _in_top_band(y: float, surface: Surface, config: GestureConfig) -> bool:
    return y < surface.height * config.top_zone_max_y


def _in_bottom_band(y: float, surface: Surface, config: GestureConfig) -> bool:
    return y > surface.height * config.bottom_zone_min_y


def _completes(state: GestureState, x: float, y: float, config: GestureConfig) -> bool:
    """Check the ASCENDING -> COMPLETE condition for a sample."""
    surface = state.surface
    if not (_in_right_band(x, surface, config) and _in_top_band(y, surface, config)):
        return False
    return state.vertical_travel > surface.height * config.min_vertical_travel_fraction


def start_gesture_state(x: float, y: float, surface: Surface,
                        config: GestureConfig) -> GestureState:
    """
    Begin an attempt at pointer-down.

    Only a touch in the top-left zone starts tracking; any other touch
    leaves the attempt idle.
    """
    if _in_left_band(x, surface, config) and _in_top_band(y, surface, config):
        return GestureState(
            phase=Phase.DESCENDING,
            surface=surface,
            max_y_reached=y,
            min_y_at_start=y,
        )
    return IDLE_STATE


def advance(state: GestureState, x: float, y: float,
            config: GestureConfig) -> GestureState:
    """
    Apply one pointer-move sample.

    Each phase checks its advance condition first and its abort condition
    second, so an abort wins when both hold for the same sample.
    """
    phase = state.phase
    surface = state.surface

    if phase == Phase.DESCENDING:
        # max() keeps the recorded value when y is NaN
        state = replace(state, max_y_reached=max(state.max_y_reached, y))
        if _in_bottom_band(y, surface, config):
            state = replace(state, phase=Phase.CROSSING)
        if _in_right_band(x, surface, config):
            return IDLE_STATE
        return state

    if phase == Phase.CROSSING:
        state = replace(state, max_y_reached=max(state.max_y_reached, y))
        if _in_right_band(x, surface, config) and _in_bottom_band(y, surface, config):
            state = replace(state, phase=Phase.ASCENDING, min_y_at_end=y)
        # No left-drift abort here, only a rise back into the top band.
        if _in_top_band(y, surface, config):
            return IDLE_STATE
        return state

    if phase == Phase.ASCENDING:
        state = replace(state, min_y_at_end=min(state.min_y_at_end, y))
        if _completes(state, x, y, config):
            state = replace(state, phase=Phase.COMPLETE)
        if _in_left_band(x, surface, config):
            return IDLE_STATE
        return state

    # IDLE and COMPLETE ignore samples
    return state


def finish(state: GestureState, x: float, y: float,
           config: GestureConfig) -> GestureState:
    """Re-check completion with the lift-off coordinate."""
    if state.phase == Phase.ASCENDING and _completes(state, x, y, config):
        return replace(state, phase=Phase.COMPLETE)
    return state


def replay(samples: Iterable[Tuple[float, float]], surface: Surface,
           config: Optional[GestureConfig] = None) -> GestureState:
    """
    Run a whole touch stream through the state machine.

    The first sample is the pointer-down, the last one the pointer-up and
    everything in between pointer-moves. A single sample is both.
    """
    config = config or GestureConfig()
    samples = list(samples)
    if not samples:
        return IDLE_STATE

    x, y = samples[0]
    state = start_gesture_state(x, y, surface, config)
    for x, y in samples[1:-1]:
        state = advance(state, x, y, config)
    x, y = samples[-1]
    return finish(state, x, y, config)


class UShapeClassifier:
    """Stateful wrapper used by the touch router, one per overlay."""

    def __init__(self, config: Optional[GestureConfig] = None):
        self.config = config or GestureConfig()
        self._state = IDLE_STATE

    @property
    def state(self) -> GestureState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    def on_start(self, x: float, y: float, width: float, height: float):
        """Start a new attempt, re-capturing the surface size."""
        self.reset()
        self._set_state(start_gesture_state(x, y, Surface(width, height), self.config))

    def on_move(self, x: float, y: float):
        self._set_state(advance(self._state, x, y, self.config))

    def on_end(self, x: float, y: float) -> bool:
        """Finalize the attempt and report whether the U shape was completed."""
        self._set_state(finish(self._state, x, y, self.config))
        return self.is_complete()

    def is_complete(self) -> bool:
        return self._state.phase == Phase.COMPLETE

    def reset(self):
        self._state = IDLE_STATE

    def _set_state(self, new_state: GestureState):
        if new_state.phase != self._state.phase:
            logger.debug(f"Gesture phase {self._state.phase.value} -> {new_state.phase.value}")
        self._state = new_state
