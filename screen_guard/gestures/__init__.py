"""
Gesture recognition for the screen guard.

This module provides the U-shape unlock classifier and the emergency
tap counter.
"""

from .u_shape_classifier import (
    GestureState,
    IDLE_STATE,
    Phase,
    UShapeClassifier,
    advance,
    finish,
    replay,
    start_gesture_state
)
from .emergency_counter import EmergencyCounter

__all__ = [
    'GestureState',
    'IDLE_STATE',
    'Phase',
    'UShapeClassifier',
    'advance',
    'finish',
    'replay',
    'start_gesture_state',
    'EmergencyCounter'
]
