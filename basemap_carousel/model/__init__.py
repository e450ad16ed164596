"""Data model classes for the basemap carousel.

- LayerRef: One candidate base layer or layer group (visibility is mutable)
- PointerEvent: Pointer interaction plus its target element attributes
- SetLayerVisibility / NotifySelection: Side effects returned by the core logic
- Message / ToastMessage: User-facing messages
"""

from basemap_carousel.model.effects import Effect, NotifySelection, SetLayerVisibility
from basemap_carousel.model.layer_ref import (
    LayerRef,
    LayerSet,
    find_layer,
    find_visible_layer,
    visibility_snapshot,
    visible_layer_ids,
)
from basemap_carousel.model.pointer_event import PointerEvent, PointerEventType

__all__ = [
    "LayerRef",
    "LayerSet",
    "find_layer",
    "find_visible_layer",
    "visible_layer_ids",
    "visibility_snapshot",
    "PointerEvent",
    "PointerEventType",
    "Effect",
    "SetLayerVisibility",
    "NotifySelection",
]
