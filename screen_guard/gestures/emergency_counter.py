"""
Emergency exit tap counter.
"""

import logging

logger = logging.getLogger(__name__)


class EmergencyCounter:
    """Counts taps that arrive within a rolling timeout of each other."""

    def __init__(self, timeout_ms: float = 5000, required_taps: int = 20):
        self.timeout_ms = timeout_ms
        self.required_taps = required_taps
        self.count = 0
        self.last_tap_time = 0.0

    @property
    def remaining(self) -> int:
        """Taps still needed before the exit triggers."""
        return max(self.required_taps - self.count, 0)

    def on_tap(self, now_ms: float) -> bool:
        """Register a tap; return True once the required count is reached."""
        if self.count == 0 or (now_ms - self.last_tap_time) > self.timeout_ms:
            self.count = 1
        else:
            self.count += 1
        self.last_tap_time = now_ms

        logger.debug(f"Emergency tap {self.count}/{self.required_taps}")
        return self.count >= self.required_taps

    def reset(self):
        self.count = 0
        self.last_tap_time = 0.0
