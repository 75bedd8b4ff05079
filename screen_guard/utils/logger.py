"""
Logging utilities for guard sessions, emergency taps and unlocks.
"""

import datetime
import logging
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)


class GuardLogger:
    """Prints user-visible guard events and mirrors them to a debug file."""

    def __init__(self, debug_file: Optional[str] = None):
        self.debug_file = None
        if debug_file:
            try:
                self.debug_file = open(debug_file, 'w')
                self.debug_file.write(f"Debug logging started at {datetime.datetime.now()}\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not open debug file: {e}")

    @staticmethod
    def _timestamp() -> str:
        return datetime.datetime.now().strftime("%H:%M:%S.%f")[:-3]

    def log_guard_started(self, device_info: Dict[str, Any]):
        """Log the surface the guard is protecting."""
        timestamp = self._timestamp()
        print(f"[{timestamp}] 🔒 SCREEN LOCKED")
        print(f"   Surface: {device_info['screen_width']}x{device_info['screen_height']}")
        print("   Swipe in a U-shape to unlock")
        self._write_debug(f"[{timestamp}] locked {device_info}")

    def log_emergency_tap(self, count: int, required: int):
        """Log emergency tap progress."""
        timestamp = self._timestamp()
        print(f"[{timestamp}] 🚨 EMERGENCY TAP ({count} / {required})")
        self._write_debug(f"[{timestamp}] emergency tap {count}/{required}")

    def log_unlock(self, signal: Any):
        """Log an unlock signal."""
        timestamp = self._timestamp()
        reason = signal.reason.value
        if reason == 'emergency':
            print(f"[{timestamp}] 🆘 EMERGENCY EXIT: screen unlocked")
        else:
            print(f"[{timestamp}] 🔓 U-SHAPE RECOGNIZED: screen unlocked")
        self._write_debug(f"[{timestamp}] unlock {signal}")

    def log_guard_stopped(self):
        timestamp = self._timestamp()
        print(f"[{timestamp}] 👋 Guard stopped")
        self._write_debug(f"[{timestamp}] stopped")

    def _write_debug(self, message: str):
        if self.debug_file:
            try:
                self.debug_file.write(message + "\n")
                self.debug_file.flush()
            except OSError as e:
                logger.warning(f"Could not write debug file: {e}")

    def close(self):
        """Close the debug file."""
        if self.debug_file:
            self.debug_file.close()
            self.debug_file = None
