#!/usr/bin/env python3
"""Tests for the touch router."""

import math

import pytest

from screen_guard.config.settings import GestureConfig
from screen_guard.core.router import TouchRouter, UnlockReason, UnlockSignal
from screen_guard.gestures.u_shape_classifier import Phase
from screen_guard.utils.gesture_utils import Region, Surface

WIDTH, HEIGHT = 1000, 2000
EMERGENCY_POINT = (500, 1900)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock(1000.0)


@pytest.fixture
def router(clock):
    return TouchRouter(surface=Surface(WIDTH, HEIGHT), clock=clock)


def swipe(router, samples, cancel=False):
    """Deliver one touch stream and collect every non-None signal."""
    (x, y), moves, (ux, uy) = samples[0], samples[1:-1], samples[-1]
    signals = [router.on_pointer_down(x, y)]
    signals += [router.on_pointer_move(mx, my) for mx, my in moves]
    release = router.on_pointer_cancel if cancel else router.on_pointer_up
    signals.append(release(ux, uy))
    return [s for s in signals if s is not None]


def tap(router, clock, times, interval=100.0, point=EMERGENCY_POINT):
    signals = []
    for _ in range(times):
        clock.now += interval
        signals += swipe(router, [point, point])
    return signals


GENUINE_U = [(100, 100), (100, 1200), (900, 1200), (900, 200), (900, 200)]


class TestGestureRouting:

    def test_genuine_u_emits_single_unlock(self, router, clock):
        clock.now = 4242.0
        signals = swipe(router, GENUINE_U)
        assert signals == [UnlockSignal(reason=UnlockReason.GESTURE, timestamp_ms=4242.0)]

    def test_failed_gesture_emits_nothing(self, router):
        assert swipe(router, [(100, 900), (900, 900), (900, 900)]) == []

    def test_unlock_only_on_up(self, router):
        router.on_pointer_down(100, 100)
        assert router.on_pointer_move(100, 1200) is None
        assert router.on_pointer_move(900, 1200) is None
        assert router.on_pointer_move(900, 200) is None
        assert router.phase == Phase.COMPLETE
        assert router.on_pointer_up(900, 200).reason == UnlockReason.GESTURE

    def test_classifier_reset_after_each_release(self, router):
        swipe(router, GENUINE_U)
        assert router.phase == Phase.IDLE
        assert router.engaged is None

        swipe(router, [(100, 100), (100, 1200), (100, 1200)])
        assert router.phase == Phase.IDLE

    def test_cancel_is_never_success(self, router):
        assert swipe(router, GENUINE_U, cancel=True) == []
        assert router.phase == Phase.IDLE

    def test_surface_captured_at_down(self, router):
        router.on_pointer_down(100, 100)
        router.resize(100, 100)
        for x, y in GENUINE_U[1:-1]:
            router.on_pointer_move(x, y)
        assert router.on_pointer_up(900, 200) is not None
        assert router.surface == Surface(100, 100)

    def test_resize_applies_to_next_touch(self, router):
        router.resize(WIDTH / 2, HEIGHT / 2)
        samples = [(x / 2, y / 2) for x, y in GENUINE_U]
        assert len(swipe(router, samples)) == 1

    def test_touch_outside_start_zone_engages_gesture_but_never_unlocks(self, router):
        router.on_pointer_down(800, 800)
        assert router.engaged == 'gesture'
        assert router.phase == Phase.IDLE
        assert router.on_pointer_up(900, 200) is None


class TestEmergencyRouting:

    def test_twenty_taps_unlock_on_release_of_twentieth(self, router, clock):
        assert tap(router, clock, 19) == []
        assert router.emergency_count == 19

        clock.now += 100
        assert router.on_pointer_down(*EMERGENCY_POINT) is None
        signal = router.on_pointer_up(*EMERGENCY_POINT)
        assert signal.reason == UnlockReason.EMERGENCY
        assert signal.timestamp_ms == clock.now

    def test_counter_reset_after_emergency_unlock(self, router, clock):
        tap(router, clock, 20)
        assert router.emergency_count == 0

    def test_cancel_of_threshold_tap_still_unlocks(self, router, clock):
        tap(router, clock, 19)
        clock.now += 100
        router.on_pointer_down(*EMERGENCY_POINT)
        assert router.on_pointer_cancel(*EMERGENCY_POINT).reason == UnlockReason.EMERGENCY

    def test_slow_taps_restart_count(self, router, clock):
        tap(router, clock, 10)
        assert tap(router, clock, 1, interval=5001) == []
        assert router.emergency_count == 1
        assert tap(router, clock, 18) == []
        assert len(tap(router, clock, 1)) == 1

    def test_emergency_touch_does_not_start_classifier(self, router):
        router.on_pointer_down(*EMERGENCY_POINT)
        assert router.engaged == 'emergency'
        router.on_pointer_move(100, 100)
        assert router.phase == Phase.IDLE

    def test_emergency_region_is_half_open(self, router):
        router.on_pointer_down(51, 1999)
        assert router.engaged == 'emergency'
        router.on_pointer_up(51, 1999)

        router.on_pointer_down(950, 1900)
        assert router.engaged == 'gesture'
        router.on_pointer_up(950, 1900)

        router.on_pointer_down(49, 1900)
        assert router.engaged == 'gesture'

    def test_gesture_touches_do_not_reset_taps(self, router, clock):
        tap(router, clock, 5)
        swipe(router, [(100, 100), (100, 1200), (100, 1200)])
        assert router.emergency_count == 5

    def test_custom_region_and_threshold(self, clock):
        config = GestureConfig(emergency_region=Region(0.0, 0.0, 0.1, 0.1),
                               emergency_required_taps=2)
        router = TouchRouter(config, surface=Surface(WIDTH, HEIGHT), clock=clock)
        assert tap(router, clock, 1, point=(10, 10)) == []
        assert len(tap(router, clock, 1, point=(10, 10))) == 1


class TestMalformedSequences:

    def test_move_without_down_is_noop(self, router):
        assert router.on_pointer_move(100, 100) is None
        assert router.phase == Phase.IDLE

    def test_up_without_down_is_noop(self, router):
        assert router.on_pointer_up(900, 200) is None
        assert router.on_pointer_cancel(900, 200) is None

    def test_double_up_emits_once(self, router):
        assert len(swipe(router, GENUINE_U)) == 1
        assert router.on_pointer_up(900, 200) is None

    def test_double_down_restarts_gesture(self, router):
        router.on_pointer_down(100, 100)
        router.on_pointer_move(100, 1200)
        assert router.phase == Phase.CROSSING
        router.on_pointer_down(100, 100)
        assert router.phase == Phase.DESCENDING
        assert len(swipe(router, GENUINE_U)) == 1

    def test_down_in_emergency_region_abandons_gesture(self, router):
        router.on_pointer_down(100, 100)
        router.on_pointer_move(100, 1200)
        router.on_pointer_down(*EMERGENCY_POINT)
        assert router.phase == Phase.IDLE
        router.on_pointer_move(900, 1200)
        router.on_pointer_move(900, 200)
        assert router.on_pointer_up(900, 200) is None

    def test_nan_coordinates_never_unlock(self, router):
        nan = math.nan
        assert swipe(router, [(nan, nan), (nan, nan), (nan, nan)]) == []
        assert router.emergency_count == 0


class TestExternalInterface:

    def test_gesture_operations(self, router):
        router.start_gesture(100, 100, WIDTH, HEIGHT)
        router.move_gesture(100, 1200)
        router.move_gesture(900, 1200)
        router.move_gesture(900, 200)
        assert router.end_gesture(900, 200) is True
        router.reset_gesture()
        router.reset_gesture()
        assert router.phase == Phase.IDLE

    def test_emergency_operations(self, router):
        assert not any(router.tap_emergency(i) for i in range(19))
        assert router.tap_emergency(19) is True
        router.reset_emergency()
        assert router.emergency_count == 0

    def test_default_clock_is_monotonic_milliseconds(self):
        router = TouchRouter()
        first = router.clock()
        assert router.clock() >= first
