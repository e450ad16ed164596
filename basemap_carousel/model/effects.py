"""Side effects produced by the pure carousel logic.

The gesture and visibility functions never touch LayerRefs or callbacks
directly. They return new state plus a tuple of effects; a coordinator
applies them in order (see core.visibility.apply_effects).
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass(frozen=True)
class SetLayerVisibility:
    """Write a visibility flag.

    Attributes:
        layer_id: Identifier of the layer to update
        visible: New flag value
        group_id: Parent group identifier when layer_id is a group child
    """

    layer_id: str
    visible: bool
    group_id: Optional[str] = None


@dataclass(frozen=True)
class NotifySelection:
    """Invoke the caller's selection callback with layer_id."""

    layer_id: str


Effect = Union[SetLayerVisibility, NotifySelection]
