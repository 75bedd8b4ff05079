"""
Utilities package for the screen guard.

Provides the shared geometry types and the console/debug-file logger.
"""

from .gesture_utils import (
    Region,
    Surface
)
from .logger import GuardLogger

__all__ = [
    'Region',
    'Surface',
    'GuardLogger'
]
