"""LayerRef - a selectable base layer as seen by the carousel.

A LayerRef mirrors one layer of the external map subsystem. Its identifier is
assigned by that subsystem and treated as an opaque string: it is compared by
value and never generated or parsed here. Only the visibility flag is mutated
by the carousel.

Group layers aggregate child LayerRefs. Toggling a group always toggles all
of its direct children to the same value.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Optional


@dataclass(eq=False)
class LayerRef:
    """One candidate base layer (or layer group).

    Attributes:
        id: Opaque, stable identifier assigned by the map subsystem
        visible: Current visibility flag (the only mutable state we touch)
        is_group: True if this layer aggregates children
        children: Ordered child layers (groups only)
        title: Human-readable name shown under the thumbnail
        image_url: Explicit preview image. Takes precedence over a GetMap preview.
        wms_url: WMS endpoint used to build a GetMap preview
        wms_layers: WMS layer name(s) requested for the preview
        tile_url: XYZ raster template ({z}/{x}/{y}) used to render the map

    Example:
        osm = LayerRef(id="1", title="OpenStreetMap", visible=True,
                       tile_url="https://a.tile.openstreetmap.org/{z}/{x}/{y}.png")
    """

    id: str
    visible: bool = False
    is_group: bool = False
    children: list["LayerRef"] = field(default_factory=list)
    title: str = ""
    image_url: Optional[str] = None
    wms_url: Optional[str] = None
    wms_layers: Optional[str] = None
    tile_url: Optional[str] = None

    def __post_init__(self) -> None:
        """Validate invariants - STRICT: fail immediately on invalid state."""
        if not isinstance(self.id, str) or not self.id:
            raise ValueError(f"LayerRef id must be a non-empty string, got {self.id!r}")
        if self.children and not self.is_group:
            raise ValueError(f"LayerRef {self.id} has children but is not a group")

    def set_visible(self, visible: bool) -> None:
        self.visible = visible

    def iter_children(self) -> Iterator["LayerRef"]:
        """Yield direct children (nothing for plain layers)."""
        if self.is_group:
            yield from self.children

    @property
    def display_name(self) -> str:
        """Title for display, falling back to the identifier."""
        return self.title or f"Layer {self.id}"

    def __repr__(self) -> str:
        kind = f"group[{len(self.children)}]" if self.is_group else "layer"
        return f"LayerRef(id={self.id!r}, {kind}, visible={self.visible})"


# Ordered sequence of candidate base layers supplied by the caller
LayerSet = Sequence[LayerRef]


def find_layer(layers: LayerSet, layer_id: Optional[str]) -> Optional[LayerRef]:
    """Find the top-level layer whose identifier equals layer_id.

    Returns None for a missing identifier or when no layer matches.
    """
    if not layer_id:
        return None
    return next((layer for layer in layers if layer.id == layer_id), None)


def find_visible_layer(layers: LayerSet) -> Optional[LayerRef]:
    """Return the first visible top-level layer (linear scan), or None."""
    return next((layer for layer in layers if layer.visible), None)


def visible_layer_ids(layers: LayerSet) -> list[str]:
    """Identifiers of all visible top-level layers, in LayerSet order."""
    return [layer.id for layer in layers if layer.visible]


def visibility_snapshot(layers: LayerSet) -> dict[str, bool]:
    """Full visibility picture keyed by "id" (top level) and "group/child".

    Used for logging and for comparing visibility before and after an
    operation in tests.
    """
    snapshot: dict[str, bool] = {}
    for layer in layers:
        snapshot[layer.id] = layer.visible
        for child in layer.iter_children():
            snapshot[f"{layer.id}/{child.id}"] = child.visible
    return snapshot
