#!/usr/bin/env python3
"""Tests for gesture configuration loading."""

import json

import pytest

from screen_guard.config.settings import GestureConfig, load_config
from screen_guard.utils.gesture_utils import Region


def test_defaults():
    config = GestureConfig()
    assert config.left_zone_max_x == 0.35
    assert config.right_zone_min_x == 0.65
    assert config.top_zone_max_y == 0.45
    assert config.bottom_zone_min_y == 0.55
    assert config.min_vertical_travel_fraction == 0.20
    assert config.emergency_timeout_ms == 5000
    assert config.emergency_required_taps == 20
    assert config.emergency_region == Region(0.05, 0.88, 0.95, 1.0)


def test_with_overrides_keeps_other_fields():
    config = GestureConfig().with_overrides(emergency_required_taps=5,
                                            emergency_region=[0, 0, 1, 0.1])
    assert config.emergency_required_taps == 5
    assert config.emergency_region == Region(0, 0, 1, 0.1)
    assert config.left_zone_max_x == 0.35


def test_dict_round_trip():
    config = GestureConfig(top_zone_max_y=0.4)
    assert GestureConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize("data", [
    {'unknown_key': 1},
    {'left_zone_max_x': 'wide'},
    {'emergency_required_taps': True},
    {'emergency_region': [0.1, 0.2, 0.3]},
    {'emergency_region': 'bottom'},
])
def test_from_dict_rejects_malformed(data):
    with pytest.raises(ValueError):
        GestureConfig.from_dict(data)


def test_load_config(tmp_path):
    path = tmp_path / "guard.json"
    path.write_text(json.dumps({
        'min_vertical_travel_fraction': 0.3,
        'emergency_timeout_ms': 3000,
        'emergency_region': [0.1, 0.9, 0.9, 1.0]
    }))
    config = load_config(str(path))
    assert config.min_vertical_travel_fraction == 0.3
    assert config.emergency_timeout_ms == 3000
    assert config.emergency_region == Region(0.1, 0.9, 0.9, 1.0)


def test_load_missing_config_returns_defaults(tmp_path):
    assert load_config(str(tmp_path / "missing.json")) == GestureConfig()


@pytest.mark.parametrize("content", ["{not json", "[1, 2]"])
def test_load_invalid_config(tmp_path, content):
    path = tmp_path / "guard.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_config(str(path))
