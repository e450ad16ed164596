"""Context classes for the carousel state machines.

Contexts are pure data holders used as python-statemachine models: each
state machine stores its current state value in the `state` field of its
context. The visibility and gesture data themselves live in
VisibilityCoordinator and GestureClassifier.

Sub-contexts:
    PreviewContext: Hover/commit cycle (model of PreviewStateMachine)
    GestureContext: Press/release cycle (model of GestureStateMachine)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


class BaseContext(ABC):
    """Abstract base class for all context dataclasses."""

    @abstractmethod
    def clear(self) -> None:
        """Reset context to initial state."""
        ...


@dataclass
class PreviewContext(BaseContext):
    """Hover-preview and commit state.

    Attributes:
        state: Current state value (managed by python-statemachine)
        previewing_id: Layer currently shown as a hover-preview
        selected_id: Layer committed by the last successful click
    """

    state: str | None = None
    previewing_id: str | None = None
    selected_id: str | None = None

    def clear(self) -> None:
        self.previewing_id = None
        self.selected_id = None

    def is_previewing(self) -> bool:
        return self.previewing_id is not None


@dataclass
class GestureContext(BaseContext):
    """Press/release state of the carousel container."""

    state: str | None = None
    ignored_clicks: int = 0  # Clicks suppressed as drags

    def clear(self) -> None:
        self.ignored_clicks = 0


@dataclass
class CarouselContext:
    """Shared context for the carousel controller.

    Sub-contexts:
        preview: Hover/commit cycle
        gesture: Press/release cycle

    render_trigger counts map moves and container selections. It changes
    whenever thumbnails must be rebuilt and carries no other meaning.
    """

    preview: PreviewContext = field(default_factory=PreviewContext)
    gesture: GestureContext = field(default_factory=GestureContext)
    render_trigger: int = 0

    def bump_render_trigger(self) -> int:
        self.render_trigger += 1
        return self.render_trigger

    def __repr__(self) -> str:
        return (
            f"CarouselContext(preview={self.preview.state}, "
            f"gesture={self.gesture.state}, "
            f"previewing={self.preview.previewing_id}, "
            f"selected={self.preview.selected_id}, "
            f"render_trigger={self.render_trigger})"
        )
