"""
Configuration for zones, thresholds and listener timing.
"""

from .settings import GestureConfig, GuardConfig, load_config

__all__ = ['GestureConfig', 'GuardConfig', 'load_config']
