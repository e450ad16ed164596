"""State Machine Transition Matrix - Parameterized validation of both carousel machines.

Uses pytest.mark.parametrize to create a data-driven truth table for state
transitions, restoring the source state through start_value.

Matrix Reference (from state_machine.py docstring):
    PreviewStateMachine: 3 states x 3 events, 8 valid, 1 invalid
    GestureStateMachine: 2 states x 2 events, 3 valid, 1 invalid
"""

from unittest.mock import patch

import pytest
from statemachine.exceptions import TransitionNotAllowed

from basemap_carousel.core.gesture import GestureClassifier
from basemap_carousel.core.visibility import VisibilityCoordinator
from basemap_carousel.model.layer_ref import LayerRef
from basemap_carousel.ui.context import PreviewContext
from basemap_carousel.ui.state_machine import (
    GestureStateMachine,
    PreviewStateMachine,
    StreamlitUIListener,
)
from conftest import FakeClock


# =============================================================================
# TRUTH TABLES
# =============================================================================
# Format: (event_name, source_state, expected_target_state)

PREVIEW_VALID: list[tuple[str, str, str]] = [
    ("hover_enter", "idle", "previewing"),
    ("hover_enter", "previewing", "previewing"),  # self-loop (move to next thumbnail)
    ("hover_enter", "committed", "previewing"),
    ("hover_leave", "previewing", "idle"),
    ("hover_leave", "committed", "idle"),
    ("commit", "idle", "committed"),
    ("commit", "previewing", "committed"),
    ("commit", "committed", "committed"),  # self-loop (second click)
]

PREVIEW_INVALID: list[tuple[str, str]] = [
    ("hover_leave", "idle"),
]

GESTURE_VALID: list[tuple[str, str, str]] = [
    ("press", "idle", "pressed"),
    ("press", "pressed", "pressed"),  # self-loop (lost release)
    ("release", "pressed", "idle"),
]

GESTURE_INVALID: list[tuple[str, str]] = [
    ("release", "idle"),
]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def layers() -> list[LayerRef]:
    return [LayerRef(id="1", visible=True), LayerRef(id="2")]


def make_preview_sm(layers: list[LayerRef], start_value: str | None = None) -> PreviewStateMachine:
    return PreviewStateMachine(coordinator=VisibilityCoordinator(layers=layers), start_value=start_value)


def preview_kwargs(event: str, layers: list[LayerRef]) -> dict:
    """Hook arguments each preview event expects."""
    if event == "hover_leave":
        return {}
    return {"layer": layers[1]}


# =============================================================================
# PREVIEW STATE MACHINE
# =============================================================================


class TestPreviewTransitions:
    """Truth table for the hover/commit cycle."""

    @pytest.mark.parametrize("event, source, target", PREVIEW_VALID)
    def test_valid_transition(self, layers: list[LayerRef], event: str, source: str, target: str) -> None:
        sm = make_preview_sm(layers, start_value=source)
        sm.send(event, **preview_kwargs(event, layers))
        assert sm.current_state.id == target

    @pytest.mark.parametrize("event, source", PREVIEW_INVALID)
    def test_invalid_transition_raises(self, layers: list[LayerRef], event: str, source: str) -> None:
        sm = make_preview_sm(layers, start_value=source)
        with pytest.raises(TransitionNotAllowed):
            sm.send(event, **preview_kwargs(event, layers))

    @pytest.mark.parametrize("event, source", PREVIEW_INVALID)
    def test_try_transition_returns_false(self, layers: list[LayerRef], event: str, source: str) -> None:
        sm = make_preview_sm(layers, start_value=source)
        assert sm.try_transition(event, **preview_kwargs(event, layers)) is False
        assert sm.current_state.id == source


class TestPreviewContext:
    """Hooks keep the model in sync with the coordinator."""

    def test_starts_idle(self, layers: list[LayerRef]) -> None:
        sm = make_preview_sm(layers)
        assert sm.is_idle
        assert sm.context.state == "idle"

    def test_hover_sets_previewing_id(self, layers: list[LayerRef]) -> None:
        sm = make_preview_sm(layers)
        sm.send("hover_enter", layer=layers[1])
        assert sm.is_previewing
        assert sm.context.previewing_id == "2"
        assert sm.context.is_previewing()

    def test_leave_clears_previewing_id(self, layers: list[LayerRef]) -> None:
        sm = make_preview_sm(layers)
        sm.send("hover_enter", layer=layers[1])
        sm.send("hover_leave")
        assert sm.context.previewing_id is None
        assert [layer.visible for layer in layers] == [True, False]

    def test_commit_records_selection(self, layers: list[LayerRef]) -> None:
        calls: list[str] = []
        sm = make_preview_sm(layers)
        sm.send("hover_enter", layer=layers[1])
        sm.send("commit", layer=layers[1], notify=calls.append)
        assert sm.is_committed
        assert sm.context.selected_id == "2"
        assert sm.context.previewing_id is None
        assert calls == ["2"]

    def test_shared_context_is_model(self, layers: list[LayerRef]) -> None:
        context = PreviewContext()
        sm = PreviewStateMachine(coordinator=VisibilityCoordinator(layers=layers), context=context)
        sm.send("commit", layer=layers[1])
        assert context.state == "committed"
        assert context.selected_id == "2"

    def test_context_clear(self) -> None:
        context = PreviewContext(previewing_id="2", selected_id="1")
        context.clear()
        assert context.previewing_id is None
        assert context.selected_id is None


# =============================================================================
# GESTURE STATE MACHINE
# =============================================================================


class TestGestureTransitions:
    """Truth table for the press/release cycle."""

    @pytest.mark.parametrize("event, source, target", GESTURE_VALID)
    def test_valid_transition(self, event: str, source: str, target: str) -> None:
        sm = GestureStateMachine(classifier=GestureClassifier(clock=FakeClock()), start_value=source)
        sm.send(event, timestamp_ms=None)
        assert sm.current_state.id == target

    @pytest.mark.parametrize("event, source", GESTURE_INVALID)
    def test_invalid_transition_raises(self, event: str, source: str) -> None:
        sm = GestureStateMachine(classifier=GestureClassifier(clock=FakeClock()), start_value=source)
        with pytest.raises(TransitionNotAllowed):
            sm.send(event, timestamp_ms=None)


# =============================================================================
# UI LISTENER
# =============================================================================


class TestStreamlitUIListener:
    """The listener reruns Streamlit after every preview transition."""

    def test_rerun_after_transition(self, layers: list[LayerRef]) -> None:
        sm = make_preview_sm(layers)
        sm.add_listener(StreamlitUIListener())
        with patch("basemap_carousel.ui.infra.trigger_rerun") as rerun:
            sm.send("hover_enter", layer=layers[1])
            sm.send("hover_leave")
        assert rerun.call_count == 2

    def test_rejected_transition_does_not_rerun(self, layers: list[LayerRef]) -> None:
        sm = make_preview_sm(layers)
        sm.add_listener(StreamlitUIListener())
        with patch("basemap_carousel.ui.infra.trigger_rerun") as rerun:
            assert sm.try_transition("hover_leave") is False
        rerun.assert_not_called()
