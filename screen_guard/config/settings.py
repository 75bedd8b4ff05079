"""
Configuration settings for the screen guard.
"""

import dataclasses
import json
import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict

from ..utils.gesture_utils import Region

logger = logging.getLogger(__name__)


class GuardConfig:
    """Constants for the listener and the presentation collaborators."""

    # Timing configurations (in seconds)
    POLL_INTERVAL = 0.1
    DEVICE_JOIN_TIMEOUT = 1.0

    # Fallback surface when the device reports no resolution
    DEFAULT_SCREEN_WIDTH = 1920
    DEFAULT_SCREEN_HEIGHT = 1080

    DEBUG_LOG_FILE = 'screen_guard_debug.log'


@dataclass(frozen=True)
class GestureConfig:
    """Tunable zones and thresholds, all as fractions of the surface size."""

    # Horizontal bands
    left_zone_max_x: float = 0.35
    right_zone_min_x: float = 0.65

    # Vertical bands
    top_zone_max_y: float = 0.45
    bottom_zone_min_y: float = 0.55

    # Fraction of surface height the U must span
    min_vertical_travel_fraction: float = 0.20

    # Emergency exit
    emergency_timeout_ms: float = 5000
    emergency_required_taps: int = 20
    emergency_region: Region = field(
        default_factory=lambda: Region(0.05, 0.88, 0.95, 1.0)
    )

    def with_overrides(self, **overrides: Any) -> 'GestureConfig':
        """Return a copy with the given fields replaced."""
        return GestureConfig.from_dict({**self.to_dict(), **overrides})

    def to_dict(self) -> Dict[str, Any]:
        data = dataclasses.asdict(self)
        region = self.emergency_region
        data['emergency_region'] = [region.left, region.top, region.right, region.bottom]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GestureConfig':
        """
        Build a config from plain values, e.g. parsed JSON.

        Raises:
            ValueError: On unknown keys, a region without four values, or
                non-numeric values.
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")

        values = {}
        for key, value in data.items():
            if key == 'emergency_region':
                values[key] = _parse_region(value)
            elif key == 'emergency_required_taps':
                values[key] = int(_parse_number(key, value))
            else:
                values[key] = _parse_number(key, value)
        return cls(**values)


def _parse_number(key: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Config value {key} must be numeric, got {value!r}")
    return float(value)


def _parse_region(value: Any) -> Region:
    if isinstance(value, Region):
        return value
    if not isinstance(value, (list, tuple)) or len(value) != 4:
        raise ValueError("emergency_region must be [left, top, right, bottom]")
    left, top, right, bottom = (_parse_number('emergency_region', v) for v in value)
    return Region(left, top, right, bottom)


def load_config(path: str) -> GestureConfig:
    """Load a GestureConfig from a JSON file, falling back to defaults."""
    if not os.path.exists(path):
        logger.warning(f"Config file {path} not found, using defaults")
        return GestureConfig()

    with open(path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")

    config = GestureConfig.from_dict(data)
    logger.info(f"Loaded gesture config from {path}")
    return config
