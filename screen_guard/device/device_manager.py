"""
Device management for touchscreen discovery and initialization.
"""

import evdev
from evdev import ecodes
import logging

from ..config.settings import GuardConfig

logger = logging.getLogger(__name__)

class DeviceManager:
    """Finds the multitouch device whose surface the guard locks."""

    def __init__(self):
        self.device = None
        self.screen_width = GuardConfig.DEFAULT_SCREEN_WIDTH
        self.screen_height = GuardConfig.DEFAULT_SCREEN_HEIGHT

    def find_device(self):
        """Find and configure the touchscreen device."""
        devices = [evdev.InputDevice(path) for path in evdev.list_devices()]

        for device in devices:
            caps = device.capabilities()
            if ecodes.EV_ABS not in caps:
                continue

            abs_caps = caps.get(ecodes.EV_ABS, [])
            abs_info = {code: info for code, info in abs_caps}

            # Multitouch slots identify a touchscreen
            if ecodes.ABS_MT_SLOT not in abs_info:
                continue

            if ecodes.ABS_MT_POSITION_X in abs_info:
                self.screen_width = abs_info[ecodes.ABS_MT_POSITION_X].max + 1
            if ecodes.ABS_MT_POSITION_Y in abs_info:
                self.screen_height = abs_info[ecodes.ABS_MT_POSITION_Y].max + 1

            self.device = device
            logger.info(f"Found touchscreen: {device.name}")
            logger.info(f"Screen resolution: {self.screen_width}x{self.screen_height}")
            return device

        logger.error("No touchscreen device found")
        return None

    def get_device_info(self):
        """Get device and surface information."""
        return {
            'device': self.device,
            'name': self.device.name if self.device else None,
            'screen_width': self.screen_width,
            'screen_height': self.screen_height
        }
