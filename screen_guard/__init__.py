"""
Screen Guard Package
Locks a touch surface until a U-shaped swipe or an emergency tap sequence.
"""

from .config.settings import GestureConfig, load_config
from .core.router import TouchRouter, UnlockReason, UnlockSignal
from .gestures.u_shape_classifier import Phase, UShapeClassifier
from .gestures.emergency_counter import EmergencyCounter

__version__ = "1.0.0"
__all__ = [
    "GestureConfig",
    "load_config",
    "TouchRouter",
    "UnlockReason",
    "UnlockSignal",
    "Phase",
    "UShapeClassifier",
    "EmergencyCounter"
]
