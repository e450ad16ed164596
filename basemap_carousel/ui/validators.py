"""Validators - Input validation for the layer set a caller supplies.

The carousel itself never validates its LayerSet: duplicate identifiers
break the "exactly one visible" invariant and must be caught by whoever
builds the set. These helpers let callers do that.

Validators return Optional[ToastMessage]:
- None if valid
- A message object if invalid (caller displays it)
"""

from collections.abc import Sequence

from basemap_carousel.model.layer_ref import LayerRef
from basemap_carousel.model.message import (
    DuplicateLayerIdMessage,
    EmptyLayerSetMessage,
    ToastMessage,
)


def validate_layer_set_not_empty(layers: Sequence[LayerRef]) -> ToastMessage | None:
    """Validate that there is at least one layer to offer.

    Returns:
        None if valid, EmptyLayerSetMessage if the set is empty.
    """
    if not layers:
        return EmptyLayerSetMessage()
    return None


def validate_unique_layer_ids(layers: Sequence[LayerRef]) -> ToastMessage | None:
    """Validate that identifiers are unique across layers and group children.

    Returns:
        None if valid, DuplicateLayerIdMessage for the first repeated id.
    """
    seen: set[str] = set()
    for layer in layers:
        for layer_id in [layer.id, *(child.id for child in layer.iter_children())]:
            if layer_id in seen:
                return DuplicateLayerIdMessage(layer_id=layer_id)
            seen.add(layer_id)
    return None


def validate_layer_set(layers: Sequence[LayerRef]) -> ToastMessage | None:
    """Run all layer set validators, returning the first failure."""
    return validate_layer_set_not_empty(layers) or validate_unique_layer_ids(layers)
