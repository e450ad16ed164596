"""State machines for the basemap carousel.

Uses python-statemachine for explicit per-cycle state management. Two
machines run independently; a hover can be in progress while a press is
being timed.

PreviewStateMachine (hover / commit cycle)
------------------------------------------
States:
    IDLE: No preview in flight, resting visibility on the map
    PREVIEWING: Pointer is over a thumbnail, its layer is shown temporarily
    COMMITTED: A click committed a layer

Transitions:
    IDLE / PREVIEWING / COMMITTED -> PREVIEWING: hover_enter
    PREVIEWING -> IDLE: hover_leave (restores the snapshot)
    COMMITTED -> IDLE: hover_leave (restores only under REVERT_ON_LEAVE)
    IDLE / PREVIEWING / COMMITTED -> COMMITTED: commit

GestureStateMachine (press / release cycle)
-------------------------------------------
States:
    IDLE: Not pressed; the last duration (if any) decides the next click
    PRESSED: Pointer down on the carousel container

Transitions:
    IDLE -> PRESSED: press
    PRESSED -> PRESSED: press (missed release, timing restarts)
    PRESSED -> IDLE: release (duration recorded)

The before_* hooks delegate to VisibilityCoordinator and GestureClassifier,
which own the actual data. StreamlitUIListener handles the UI refresh after
preview transitions.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from basemap_carousel.core.gesture import GestureClassifier
from basemap_carousel.core.visibility import SelectionCallback, VisibilityCoordinator
from basemap_carousel.ui.context import GestureContext, PreviewContext

if TYPE_CHECKING:
    from basemap_carousel.model.layer_ref import LayerRef

logger = logging.getLogger(__name__)


class TransitionHelpers:
    """Shared helpers for the carousel state machines."""

    def get_state_name(self) -> str:
        """Get current state name for display."""
        return self.current_state.name  # type: ignore[attr-defined]

    def try_transition(self, event: str, **kwargs: Any) -> bool:
        """Attempt a transition, returning success/failure.

        Args:
            event: Transition event name
            **kwargs: Arguments for transition hooks

        Returns:
            True if transition succeeded, False otherwise.
        """
        try:
            self.send(event, **kwargs)  # type: ignore[attr-defined]
            return True
        except TransitionNotAllowed:
            logger.warning(f"Transition '{event}' not allowed from {self.get_state_name()}")
            return False


class StreamlitUIListener:
    """Listener that refreshes the Streamlit UI after preview transitions.

    Usage:
        sm = PreviewStateMachine(coordinator=coordinator)
        sm.add_listener(StreamlitUIListener())
    """

    def after_transition(self, event: str, source: State, target: State) -> None:
        """Log the transition and trigger a Streamlit rerun."""
        logger.info(f"[STATE] {source.name} --({event})--> {target.name}")

        from basemap_carousel.ui.infra import trigger_rerun

        trigger_rerun()


class PreviewStateMachine(TransitionHelpers, StateMachine):
    """Hover-preview and commit cycle of the carousel.

    See module docstring for the transition table. The commit policy of the
    coordinator decides whether a hover_leave from COMMITTED restores the
    previous layer.
    """

    idle = State("Idle", initial=True)
    previewing = State("Previewing")
    committed = State("Committed")

    hover_enter = idle.to(previewing) | previewing.to(previewing) | committed.to(previewing)
    hover_leave = previewing.to(idle) | committed.to(idle)
    commit = idle.to(committed) | previewing.to(committed) | committed.to(committed)

    def __init__(
        self,
        coordinator: VisibilityCoordinator,
        context: PreviewContext | None = None,
        start_value: str | None = None,
    ) -> None:
        """Initialize state machine with model pattern.

        Args:
            coordinator: Applies visibility changes to the LayerSet
            context: Shared context/model (creates new if None)
            start_value: Optional initial state value (for restoring state)
        """
        self.coordinator = coordinator
        super().__init__(model=context or PreviewContext(), start_value=start_value)

    @property
    def context(self) -> PreviewContext:
        """Alias for model."""
        return self.model

    @property
    def is_idle(self) -> bool:
        return self.idle.is_active

    @property
    def is_previewing(self) -> bool:
        return self.previewing.is_active

    @property
    def is_committed(self) -> bool:
        return self.committed.is_active

    # ==========================================================================
    # Transition Actions (before_* hooks)
    # ==========================================================================

    def before_hover_enter(self, layer: LayerRef) -> None:
        self.coordinator.begin_preview(layer)
        self.context.previewing_id = layer.id

    def before_hover_leave(self) -> None:
        self.coordinator.end_preview()
        self.context.previewing_id = None

    def before_commit(self, layer: LayerRef, notify: SelectionCallback | None = None) -> None:
        self.coordinator.commit_selection(layer, notify=notify)
        self.context.previewing_id = None
        self.context.selected_id = layer.id

    def __repr__(self) -> str:
        return f"PreviewStateMachine(state={self.get_state_name()}, model={self.context!r})"


class GestureStateMachine(TransitionHelpers, StateMachine):
    """Press/release cycle on the carousel container."""

    idle = State("Idle", initial=True)
    pressed = State("Pressed")

    press = idle.to(pressed) | pressed.to(pressed)
    release = pressed.to(idle)

    def __init__(
        self,
        classifier: GestureClassifier,
        context: GestureContext | None = None,
        start_value: str | None = None,
    ) -> None:
        self.classifier = classifier
        super().__init__(model=context or GestureContext(), start_value=start_value)

    @property
    def context(self) -> GestureContext:
        return self.model

    @property
    def is_pressed(self) -> bool:
        return self.pressed.is_active

    def before_press(self, timestamp_ms: float | None) -> None:
        self.classifier.on_press_start(timestamp_ms)

    def before_release(self, timestamp_ms: float | None) -> None:
        self.classifier.on_press_end(timestamp_ms)

    def is_drag(self) -> bool:
        """True if the last completed press/release was a drag."""
        return self.classifier.is_drag()

    def __repr__(self) -> str:
        return f"GestureStateMachine(state={self.get_state_name()}, model={self.context!r})"
