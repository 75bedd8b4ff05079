"""
Touch router that feeds pointer events to the gesture classifier and the
emergency counter and turns either of them into a single unlock signal.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config.settings import GestureConfig, GuardConfig
from ..gestures.emergency_counter import EmergencyCounter
from ..gestures.u_shape_classifier import Phase, UShapeClassifier
from ..utils.gesture_utils import Surface

logger = logging.getLogger(__name__)

ENGAGED_GESTURE = 'gesture'
ENGAGED_EMERGENCY = 'emergency'


class UnlockReason(Enum):
    GESTURE = 'gesture'
    EMERGENCY = 'emergency'


@dataclass(frozen=True)
class UnlockSignal:
    """Emitted once when the overlay may be torn down."""
    reason: UnlockReason
    timestamp_ms: float


def monotonic_ms() -> float:
    return time.monotonic() * 1000


class TouchRouter:
    """
    Dispatches one touch stream (down, move*, up or cancel).

    The component engaged at pointer-down receives the rest of that touch.
    Every handler returns an UnlockSignal or None and never raises.
    """

    def __init__(self, config: Optional[GestureConfig] = None,
                 surface: Optional[Surface] = None,
                 clock: Optional[Callable[[], float]] = None):
        self.config = config or GestureConfig()
        self.surface = surface or Surface(GuardConfig.DEFAULT_SCREEN_WIDTH,
                                          GuardConfig.DEFAULT_SCREEN_HEIGHT)
        self.clock = clock or monotonic_ms

        self.classifier = UShapeClassifier(self.config)
        self.emergency_counter = EmergencyCounter(
            timeout_ms=self.config.emergency_timeout_ms,
            required_taps=self.config.emergency_required_taps
        )

        self.engaged: Optional[str] = None
        self._emergency_triggered = False

    @property
    def phase(self) -> Phase:
        return self.classifier.phase

    @property
    def emergency_count(self) -> int:
        return self.emergency_counter.count

    def resize(self, width: float, height: float):
        """Record the current surface size; the next pointer-down captures it."""
        self.surface = Surface(width, height)

    # Pointer events

    def on_pointer_down(self, x: float, y: float) -> Optional[UnlockSignal]:
        # A second down without an up abandons the previous touch
        self.classifier.reset()

        if self.config.emergency_region.contains(x, y, self.surface):
            self.engaged = ENGAGED_EMERGENCY
            if self.tap_emergency(self.clock()):
                self._emergency_triggered = True
            return None

        self.engaged = ENGAGED_GESTURE
        self.start_gesture(x, y, self.surface.width, self.surface.height)
        return None

    def on_pointer_move(self, x: float, y: float) -> Optional[UnlockSignal]:
        if self.engaged == ENGAGED_GESTURE:
            self.move_gesture(x, y)
        return None

    def on_pointer_up(self, x: float, y: float) -> Optional[UnlockSignal]:
        return self._release(x, y, cancelled=False)

    def on_pointer_cancel(self, x: float, y: float) -> Optional[UnlockSignal]:
        return self._release(x, y, cancelled=True)

    def _release(self, x: float, y: float, cancelled: bool) -> Optional[UnlockSignal]:
        engaged = self.engaged
        self.engaged = None
        if engaged is None:
            return None

        # The threshold tap was counted at down; the unlock fires on release
        if self._emergency_triggered:
            self._emergency_triggered = False
            self.reset_gesture()
            self.reset_emergency()
            return self._unlock(UnlockReason.EMERGENCY)

        if engaged == ENGAGED_GESTURE:
            # Completion is only evaluated on an explicit up
            completed = False if cancelled else self.end_gesture(x, y)
            self.reset_gesture()
            if completed:
                return self._unlock(UnlockReason.GESTURE)
            if cancelled:
                logger.debug("Gesture touch cancelled")
        return None

    def _unlock(self, reason: UnlockReason) -> UnlockSignal:
        logger.info(f"Unlock triggered by {reason.value}")
        return UnlockSignal(reason=reason, timestamp_ms=self.clock())

    # Direct access to the classifier and counter

    def start_gesture(self, x: float, y: float, surface_width: float, surface_height: float):
        self.classifier.on_start(x, y, surface_width, surface_height)

    def move_gesture(self, x: float, y: float):
        self.classifier.on_move(x, y)

    def end_gesture(self, x: float, y: float) -> bool:
        return self.classifier.on_end(x, y)

    def reset_gesture(self):
        self.classifier.reset()

    def tap_emergency(self, now_ms: float) -> bool:
        return self.emergency_counter.on_tap(now_ms)

    def reset_emergency(self):
        self.emergency_counter.reset()
