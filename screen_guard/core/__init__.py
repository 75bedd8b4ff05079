"""
Pointer routing and the touchscreen listener.
"""

from .router import TouchRouter, UnlockReason, UnlockSignal

__all__ = ['TouchRouter', 'UnlockReason', 'UnlockSignal']
