"""Gesture classification - tells a click from a drag on the carousel.

The carousel container is both swipeable and clickable. A press that is held
longer than GestureConfig.DRAG_THRESHOLD_MS before release is taken as a
drag (the user was sliding thumbnails), and the click that follows the
release must not commit a selection.

State flow per gesture:
    press_start: record press_timestamp_ms
    press_end: gesture_duration_ms = now - press_timestamp_ms
    is_drag: gesture_duration_ms > threshold (consulted by the next click)

The functions are pure: they take a GestureState and return a new one.
GestureClassifier wraps them with a clock for UI use.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from basemap_carousel.constants import GestureConfig

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


def monotonic_ms() -> float:
    """Default clock: monotonic time in milliseconds."""
    return time.monotonic() * 1000.0


@dataclass(frozen=True)
class GestureState:
    """Timing of the current or most recent press/release cycle.

    Attributes:
        press_timestamp_ms: Instant of the active press, None when not pressed
        gesture_duration_ms: Duration of the last completed press, None before any
    """

    press_timestamp_ms: Optional[float] = None
    gesture_duration_ms: Optional[float] = None

    @property
    def is_pressed(self) -> bool:
        return self.press_timestamp_ms is not None


def press_start(state: GestureState, now_ms: float) -> GestureState:
    """Start timing a press. A repeated press restarts the timing."""
    return GestureState(press_timestamp_ms=now_ms, gesture_duration_ms=state.gesture_duration_ms)


def press_end(state: GestureState, now_ms: float) -> GestureState:
    """Finish timing and store the gesture duration.

    Precondition: a press_start preceded this call. It is not enforced: a
    release without a press is measured against a zero baseline, which makes
    it a drag for any realistic clock.
    """
    baseline = state.press_timestamp_ms
    if baseline is None:
        logger.warning("[GESTURE] Release without press - measuring against zero baseline")
        baseline = 0.0
    return GestureState(press_timestamp_ms=None, gesture_duration_ms=now_ms - baseline)


def is_drag(state: GestureState, threshold_ms: float = GestureConfig.DRAG_THRESHOLD_MS) -> bool:
    """True iff the last completed gesture lasted longer than the threshold."""
    return state.gesture_duration_ms is not None and state.gesture_duration_ms > threshold_ms


class GestureClassifier:
    """Measures press/release timing on the carousel container.

    Example:
        classifier = GestureClassifier()
        classifier.on_press_start()
        classifier.on_press_end()
        if not classifier.is_drag():
            ...  # handle the click
    """

    def __init__(self, clock: Clock = monotonic_ms) -> None:
        self.clock = clock
        self.state = GestureState()

    def on_press_start(self, timestamp_ms: Optional[float] = None) -> None:
        now = self.clock() if timestamp_ms is None else timestamp_ms
        self.state = press_start(self.state, now_ms=now)
        logger.debug(f"[GESTURE] Press at {now:.1f}ms")

    def on_press_end(self, timestamp_ms: Optional[float] = None) -> None:
        now = self.clock() if timestamp_ms is None else timestamp_ms
        self.state = press_end(self.state, now_ms=now)
        logger.debug(f"[GESTURE] Release after {self.state.gesture_duration_ms:.1f}ms (drag={self.is_drag()})")

    def is_drag(self) -> bool:
        return is_drag(self.state)

    @property
    def gesture_duration_ms(self) -> Optional[float]:
        return self.state.gesture_duration_ms

    def reset(self) -> None:
        self.state = GestureState()
