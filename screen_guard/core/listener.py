"""
Touchscreen listener that turns evdev multitouch reports into pointer events
for the touch router.
"""

import logging
import threading
from typing import Callable, Dict, List, Optional

from evdev import ecodes

from ..config.settings import GestureConfig, GuardConfig
from ..device.device_manager import DeviceManager
from ..utils.logger import GuardLogger
from .router import ENGAGED_EMERGENCY, TouchRouter, UnlockSignal

logger = logging.getLogger(__name__)


class TouchListener:
    """
    Locks a Linux touchscreen until the router emits an unlock signal.

    Only the first finger placed is tracked as the pointer; other slots are
    ignored until it lifts.
    """

    def __init__(self, config: Optional[GestureConfig] = None,
                 on_unlock: Optional[Callable[[UnlockSignal], None]] = None,
                 device_manager: Optional[DeviceManager] = None,
                 guard_logger: Optional[GuardLogger] = None):
        self.device_manager = device_manager or DeviceManager()
        self.router = TouchRouter(config)
        self.on_unlock = on_unlock
        self.logger = guard_logger or GuardLogger()

        # State management
        self.running = False
        self.unlocked = False
        self.current_slot = 0
        self.slot_data: Dict[int, Dict[str, int]] = {}
        self.pointer_slot: Optional[int] = None
        self._pending_down = False
        self._pending_up = False
        self._moved = False

        # Thread management
        self.thread = None
        self.state_lock = threading.Lock()

    @property
    def is_running(self) -> bool:
        return self.running

    def start(self) -> bool:
        """Start guarding the touchscreen."""
        device = self.device_manager.find_device()
        if not device:
            print("❌ No touchscreen found")
            return False

        device_info = self.device_manager.get_device_info()
        self.router.resize(device_info['screen_width'], device_info['screen_height'])

        self.running = True
        self.unlocked = False
        self.logger.log_guard_started(device_info)

        self.thread = threading.Thread(target=self._event_loop)
        self.thread.daemon = True
        self.thread.start()
        return True

    def stop(self):
        """Stop the listener."""
        self.running = False
        if self.thread and self.thread is not threading.current_thread():
            self.thread.join(timeout=GuardConfig.DEVICE_JOIN_TIMEOUT)
        self.logger.log_guard_stopped()
        self.logger.close()

    def _event_loop(self):
        """Main event processing loop."""
        try:
            event_batch = []
            for event in self.device_manager.device.read_loop():
                if not self.running:
                    break

                event_batch.append(event)

                if event.type == ecodes.EV_SYN and event.code == ecodes.SYN_REPORT:
                    with self.state_lock:
                        self._process_event_batch(event_batch)
                    event_batch = []
        except OSError as e:
            logger.error(f"Error in event loop: {e}")
            with self.state_lock:
                self._cancel_pointer()

    def _process_event_batch(self, event_batch: List):
        """Process one SYN_REPORT worth of events."""
        for ev in event_batch:
            if ev.type == ecodes.EV_ABS:
                self._handle_abs_event(ev)

        self._dispatch_pointer()

    def _handle_abs_event(self, ev):
        """Handle absolute coordinate events."""
        if ev.code == ecodes.ABS_MT_SLOT:
            self.current_slot = ev.value
        elif ev.code == ecodes.ABS_MT_TRACKING_ID:
            self._handle_tracking_id(ev.value)
        elif ev.code == ecodes.ABS_MT_POSITION_X:
            self._handle_position(ev.value, 'x')
        elif ev.code == ecodes.ABS_MT_POSITION_Y:
            self._handle_position(ev.value, 'y')

    def _handle_tracking_id(self, value: int):
        """Handle finger placement (new id) and lift (-1)."""
        slot = self.current_slot

        if value == -1:
            if slot == self.pointer_slot:
                self._pending_up = True
        elif self.pointer_slot is None:
            self.pointer_slot = slot
            self._pending_down = True
            self._pending_up = False
            self._moved = False

        self.slot_data.setdefault(slot, {'x': 0, 'y': 0})

    def _handle_position(self, value: int, axis: str):
        """Handle X or Y coordinate changes."""
        slot = self.current_slot
        self.slot_data.setdefault(slot, {'x': 0, 'y': 0})[axis] = value
        if slot == self.pointer_slot:
            self._moved = True

    def _dispatch_pointer(self):
        """Forward the pointer's state for this report to the router."""
        if self.pointer_slot is None:
            return

        position = self.slot_data[self.pointer_slot]
        x, y = position['x'], position['y']

        if self._pending_down:
            self._pending_down = False
            self._emit(self.router.on_pointer_down(x, y))
            if self.router.engaged == ENGAGED_EMERGENCY:
                self.logger.log_emergency_tap(self.router.emergency_count,
                                              self.router.config.emergency_required_taps)
        elif self._moved:
            self._emit(self.router.on_pointer_move(x, y))
        self._moved = False

        if self._pending_up:
            self._pending_up = False
            self.pointer_slot = None
            self._emit(self.router.on_pointer_up(x, y))

    def _cancel_pointer(self):
        """Abandon the active touch when the device goes away."""
        if self.pointer_slot is None:
            return
        position = self.slot_data.get(self.pointer_slot, {'x': 0, 'y': 0})
        self.pointer_slot = None
        self._pending_down = self._pending_up = self._moved = False
        self._emit(self.router.on_pointer_cancel(position['x'], position['y']))

    def _emit(self, signal: Optional[UnlockSignal]):
        if signal is None or self.unlocked:
            return

        self.unlocked = True
        self.running = False
        self.logger.log_unlock(signal)
        if self.on_unlock:
            self.on_unlock(signal)
