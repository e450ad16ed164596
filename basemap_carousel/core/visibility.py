"""Visibility coordination - hover-preview, restore and commit of base layers.

The carousel previews a layer by making it the only visible one, and
restores exactly what was visible before once the pointer leaves. A click
commits the layer and notifies the caller.

Pure functions plan the work: they take the LayerSet and a PreviewState and
return a VisibilityUpdate (new state + effects). VisibilityCoordinator
applies the effects to the LayerRefs and invokes the selection callback.

Commit policy
-------------
A pointer-leave usually follows the click that committed a layer. What that
leave does is an explicit choice:

    LOCK (default): the commit clears the hover snapshot, the leave is a no-op
        and the committed layer stays visible.
    REVERT_ON_LEAVE: the commit takes a snapshot exactly like a preview, so
        the leave restores whatever was visible right before the click.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from basemap_carousel.constants import PreviewConfig
from basemap_carousel.model.effects import Effect, NotifySelection, SetLayerVisibility
from basemap_carousel.model.layer_ref import (
    LayerRef,
    LayerSet,
    find_layer,
    find_visible_layer,
    visible_layer_ids,
)
from basemap_carousel.model.pointer_event import PointerEvent

logger = logging.getLogger(__name__)

SelectionCallback = Callable[[str], None]


class CommitPolicy(Enum):
    """What a pointer-leave does after a click-commit."""

    LOCK = "lock"
    REVERT_ON_LEAVE = "revert_on_leave"


DEFAULT_COMMIT_POLICY = CommitPolicy(PreviewConfig.DEFAULT_COMMIT_POLICY)


@dataclass(frozen=True)
class PreviewState:
    """Hover-preview bookkeeping.

    Attributes:
        hover_snapshot_id: Layer visible right before the preview began.
            None while active means "no layer was visible".
        active: True between a hover-enter and its matching hover-leave
    """

    hover_snapshot_id: Optional[str] = None
    active: bool = False


@dataclass(frozen=True)
class VisibilityUpdate:
    """Result of a planning function: new state plus effects to apply in order."""

    state: PreviewState
    effects: tuple[Effect, ...] = ()


# =============================================================================
# PLANNING (pure)
# =============================================================================


def plan_visibility(layers: LayerSet, target_ids: Iterable[Optional[str]]) -> tuple[SetLayerVisibility, ...]:
    """Plan visibility so that exactly the layers in target_ids are visible.

    Group layers pass their flag to every direct child, unconditionally.
    None entries are ignored, so [None] hides every layer.
    """
    targets = {layer_id for layer_id in target_ids if layer_id}
    effects: list[SetLayerVisibility] = []
    for layer in layers:
        visible = layer.id in targets
        effects.append(SetLayerVisibility(layer_id=layer.id, visible=visible))
        for child in layer.iter_children():
            effects.append(SetLayerVisibility(layer_id=child.id, visible=visible, group_id=layer.id))
    return tuple(effects)


def plan_exclusive(layers: LayerSet, layer: LayerRef) -> tuple[SetLayerVisibility, ...]:
    """Plan the container-level selection: hide all, show layer.

    Unlike plan_visibility this does not expand groups.
    """
    effects = [SetLayerVisibility(layer_id=other.id, visible=False) for other in layers]
    effects.append(SetLayerVisibility(layer_id=layer.id, visible=True))
    return tuple(effects)


def begin_preview(layers: LayerSet, layer: LayerRef, state: PreviewState = PreviewState()) -> VisibilityUpdate:
    """Snapshot the currently visible layer, then show only layer.

    If a preview is already active (enter on another thumbnail without a
    leave in between) its snapshot is kept, so the final leave still
    restores the layer visible before the first hover.
    """
    if state.active:
        snapshot_id = state.hover_snapshot_id
    else:
        current = find_visible_layer(layers)
        snapshot_id = current.id if current is not None else None
    return VisibilityUpdate(
        state=PreviewState(hover_snapshot_id=snapshot_id, active=True),
        effects=plan_visibility(layers, [layer.id]),
    )


def end_preview(layers: LayerSet, state: PreviewState) -> VisibilityUpdate:
    """Restore the snapshot taken by begin_preview and clear it.

    A snapshot of None hides every layer. Without an active preview (stray
    leave, or a leave after a locked commit) nothing happens.
    """
    if not state.active:
        return VisibilityUpdate(state=PreviewState())
    return VisibilityUpdate(
        state=PreviewState(),
        effects=plan_visibility(layers, [state.hover_snapshot_id]),
    )


def commit_selection(
    layers: LayerSet,
    layer: LayerRef,
    policy: CommitPolicy = DEFAULT_COMMIT_POLICY,
) -> VisibilityUpdate:
    """Show only layer and notify the caller exactly once.

    The snapshot/toggle steps are those of begin_preview. Under
    CommitPolicy.LOCK the snapshot is dropped so a following leave cannot
    undo the commit.
    """
    update = begin_preview(layers, layer)
    state = update.state if policy == CommitPolicy.REVERT_ON_LEAVE else PreviewState()
    return VisibilityUpdate(state=state, effects=update.effects + (NotifySelection(layer_id=layer.id),))


# =============================================================================
# EXECUTION
# =============================================================================


def apply_effects(
    layers: LayerSet,
    effects: Iterable[Effect],
    notify: Optional[SelectionCallback] = None,
) -> None:
    """Apply effects in order: write visibility flags, invoke the callback."""
    by_id = {layer.id: layer for layer in layers}
    for effect in effects:
        if isinstance(effect, NotifySelection):
            if notify is not None:
                notify(effect.layer_id)
            continue

        if effect.group_id is None:
            target = by_id.get(effect.layer_id)
        else:
            group = by_id.get(effect.group_id)
            target = None if group is None else next(
                (child for child in group.iter_children() if child.id == effect.layer_id), None
            )
        if target is None:
            logger.debug(f"[PREVIEW] No layer {effect.layer_id} for visibility write, skipped")
            continue
        target.set_visible(effect.visible)


class VisibilityCoordinator:
    """Owns hover-preview and click-commit for one LayerSet.

    Example:
        coordinator = VisibilityCoordinator(layers=layers)
        layer = coordinator.resolve_layer("2")
        if layer is not None:
            coordinator.begin_preview(layer)
            coordinator.end_preview()
    """

    def __init__(self, layers: LayerSet, policy: CommitPolicy = DEFAULT_COMMIT_POLICY) -> None:
        self.layers = layers
        self.policy = policy
        self.preview = PreviewState()

    def resolve_layer(self, identifier: Optional[str]) -> Optional[LayerRef]:
        """Find a layer by identifier; None means the caller does nothing."""
        layer = find_layer(self.layers, identifier)
        if layer is None:
            logger.debug(f"[PREVIEW] No layer for identifier {identifier!r}")
        return layer

    def resolve_event(self, event: PointerEvent) -> Optional[LayerRef]:
        """Find the layer whose thumbnail was the target of event."""
        return self.resolve_layer(event.identifier)

    def set_visible(self, target_ids: Iterable[Optional[str]]) -> None:
        apply_effects(self.layers, plan_visibility(self.layers, target_ids))

    def begin_preview(self, layer: LayerRef) -> None:
        self._apply(begin_preview(self.layers, layer, self.preview))
        logger.info(f"[PREVIEW] Previewing {layer.id} (snapshot={self.preview.hover_snapshot_id!r})")

    def end_preview(self) -> None:
        if not self.preview.active:
            logger.debug("[PREVIEW] Leave without active preview - nothing to restore")
            return
        snapshot_id = self.preview.hover_snapshot_id
        self._apply(end_preview(self.layers, self.preview))
        logger.info(f"[PREVIEW] Restored {snapshot_id!r}")

    def commit_selection(self, layer: LayerRef, notify: Optional[SelectionCallback] = None) -> None:
        self._apply(commit_selection(self.layers, layer, policy=self.policy), notify=notify)
        logger.info(f"[PREVIEW] Committed {layer.id} (policy={self.policy.value})")

    def select_exclusive(self, layer: LayerRef) -> None:
        """Container-level selection: only layer visible, no snapshot bookkeeping.

        layer is shown through its own reference, so it need not belong to
        this coordinator's LayerSet.
        """
        apply_effects(self.layers, plan_exclusive(self.layers, layer))
        layer.set_visible(True)
        logger.info(f"[PREVIEW] Selected {layer.id} from carousel container")

    @property
    def visible_ids(self) -> list[str]:
        return visible_layer_ids(self.layers)

    def _apply(self, update: VisibilityUpdate, notify: Optional[SelectionCallback] = None) -> None:
        # State is replaced before effects run so a re-entrant callback sees it
        self.preview = update.state
        apply_effects(self.layers, update.effects, notify=notify)
