"""Tests for gesture classification - click vs. drag on the carousel container.

Tests: press/release timing, the 180 ms threshold, the missing-press
precondition and the GestureStateMachine wrapper.
"""

import logging

import pytest

from basemap_carousel.constants import GestureConfig
from basemap_carousel.core.gesture import (
    GestureClassifier,
    GestureState,
    is_drag,
    press_end,
    press_start,
)
from basemap_carousel.ui.state_machine import GestureStateMachine
from conftest import FakeClock


@pytest.fixture
def classifier(clock: FakeClock) -> GestureClassifier:
    return GestureClassifier(clock=clock)


class TestPureFunctions:
    """press_start / press_end / is_drag on explicit GestureState."""

    def test_initial_state_is_not_a_drag(self) -> None:
        """No completed gesture yet means the next click is allowed."""
        assert is_drag(GestureState()) is False

    def test_press_records_timestamp(self) -> None:
        state = press_start(GestureState(), now_ms=500.0)
        assert state.press_timestamp_ms == 500.0
        assert state.is_pressed

    def test_release_collapses_to_duration(self) -> None:
        state = press_end(press_start(GestureState(), now_ms=500.0), now_ms=620.0)
        assert state.press_timestamp_ms is None
        assert state.gesture_duration_ms == 120.0
        assert not state.is_pressed

    def test_press_keeps_previous_duration_until_release(self) -> None:
        """A new press does not erase the last decision before it completes."""
        state = press_end(press_start(GestureState(), now_ms=0.0), now_ms=300.0)
        state = press_start(state, now_ms=1000.0)
        assert state.gesture_duration_ms == 300.0

    def test_release_without_press_uses_zero_baseline(self, caplog: pytest.LogCaptureFixture) -> None:
        """Precondition violation: measured from 0, so any real clock yields a drag."""
        with caplog.at_level(logging.WARNING):
            state = press_end(GestureState(), now_ms=5000.0)
        assert state.gesture_duration_ms == 5000.0
        assert is_drag(state)
        assert "Release without press" in caplog.text


class TestThreshold:
    """The fixed threshold: strictly greater than 180 ms is a drag."""

    @pytest.mark.parametrize(
        "hold_ms, expected_drag",
        [
            (0, False),
            (100, False),
            (GestureConfig.DRAG_THRESHOLD_MS, False),
            (GestureConfig.DRAG_THRESHOLD_MS + 1, True),
            (250, True),
        ],
    )
    def test_hold_duration(
        self, classifier: GestureClassifier, clock: FakeClock, hold_ms: float, expected_drag: bool
    ) -> None:
        classifier.on_press_start()
        clock.advance(hold_ms)
        classifier.on_press_end()
        assert classifier.gesture_duration_ms == hold_ms
        assert classifier.is_drag() is expected_drag

    def test_threshold_constant(self) -> None:
        assert GestureConfig.DRAG_THRESHOLD_MS == 180


class TestGestureClassifier:
    """Clock handling of the stateful wrapper."""

    def test_explicit_timestamps_override_clock(self, classifier: GestureClassifier) -> None:
        classifier.on_press_start(timestamp_ms=100.0)
        classifier.on_press_end(timestamp_ms=400.0)
        assert classifier.gesture_duration_ms == 300.0
        assert classifier.is_drag()

    def test_next_gesture_replaces_decision(self, classifier: GestureClassifier, clock: FakeClock) -> None:
        """A slow press followed by a quick one: the quick one decides."""
        classifier.on_press_start()
        clock.advance(400)
        classifier.on_press_end()
        assert classifier.is_drag()

        classifier.on_press_start()
        clock.advance(20)
        classifier.on_press_end()
        assert not classifier.is_drag()

    def test_reset(self, classifier: GestureClassifier) -> None:
        classifier.on_press_start(timestamp_ms=0.0)
        classifier.on_press_end(timestamp_ms=999.0)
        classifier.reset()
        assert classifier.gesture_duration_ms is None
        assert not classifier.is_drag()


class TestGestureStateMachine:
    """Idle -> Pressed -> Idle cycle."""

    @pytest.fixture
    def sm(self, classifier: GestureClassifier) -> GestureStateMachine:
        return GestureStateMachine(classifier=classifier)

    def test_starts_idle(self, sm: GestureStateMachine) -> None:
        assert sm.idle.is_active
        assert sm.get_state_name() == "Idle"

    def test_press_release_cycle(self, sm: GestureStateMachine, clock: FakeClock) -> None:
        assert sm.try_transition("press", timestamp_ms=None)
        assert sm.is_pressed
        clock.advance(90)
        assert sm.try_transition("release", timestamp_ms=None)
        assert sm.idle.is_active
        assert sm.classifier.gesture_duration_ms == 90
        assert not sm.is_drag()

    def test_release_from_idle_is_rejected(self, sm: GestureStateMachine, caplog: pytest.LogCaptureFixture) -> None:
        """Unpaired release is logged and ignored; no duration is recorded."""
        with caplog.at_level(logging.WARNING):
            assert sm.try_transition("release", timestamp_ms=None) is False
        assert sm.classifier.gesture_duration_ms is None
        assert "not allowed" in caplog.text

    def test_repeated_press_restarts_timing(self, sm: GestureStateMachine, clock: FakeClock) -> None:
        """A press whose release was lost is superseded by the next press."""
        sm.try_transition("press", timestamp_ms=None)
        clock.advance(1000)
        sm.try_transition("press", timestamp_ms=None)
        clock.advance(30)
        sm.try_transition("release", timestamp_ms=None)
        assert sm.classifier.gesture_duration_ms == 30
        assert not sm.is_drag()
