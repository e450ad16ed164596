"""Basemap rendering for the carousel map using free raster tiles.

The visible base layers are turned into a Mapbox GL style specification with
one raster source per visible layer. This is the deck.gl way to show XYZ
raster tiles from Python: pydeck's TileLayer only fetches tiles and needs a
renderSubLayers callback that pydeck doesn't expose.

The style dict defines:
- sources: Where to fetch tiles (one per visible layer, group children expanded)
- layers: How to render them (as raster, in LayerSet order)

No API key required - the demo layers use OpenStreetMap, OpenTopoMap and
Waymarked Trails tiles, with previews from the terrestris OSM WMS.
"""

import logging

import pydeck as pdk

from basemap_carousel.core.map_view import MapView
from basemap_carousel.model.layer_ref import LayerRef, LayerSet

logger = logging.getLogger(__name__)

# Standard OpenStreetMap tiles
OSM_TILES = "https://a.tile.openstreetmap.org/{z}/{x}/{y}.png"

# OpenTopoMap - topographic map with contour lines (no API key needed)
# Use explicit subdomain 'a' - deck.gl raster sources don't expand {s}
OPENTOPOMAP_TILES = "https://a.tile.opentopomap.org/{z}/{x}/{y}.png"

# Hiking route overlay, transparent background
HIKING_TILES = "https://tile.waymarkedtrails.org/hiking/{z}/{x}/{y}.png"

# terrestris OSM WMS for GetMap thumbnails
TERRESTRIS_WMS = "https://ows.terrestris.de/osm/service"

RASTER_TILE_SIZE = 256
RASTER_MAX_ZOOM = 19


def demo_layers() -> list[LayerRef]:
    """Layer set used by the demo app: two plain layers and one group."""
    return [
        LayerRef(
            id="osm",
            title="OpenStreetMap",
            visible=True,
            tile_url=OSM_TILES,
            wms_url=TERRESTRIS_WMS,
            wms_layers="OSM-WMS",
        ),
        LayerRef(
            id="topo",
            title="OpenTopoMap",
            tile_url=OPENTOPOMAP_TILES,
            wms_url=TERRESTRIS_WMS,
            wms_layers="TOPO-WMS",
        ),
        LayerRef(
            id="hiking",
            title="OSM + Hiking Routes",
            is_group=True,
            children=[
                LayerRef(id="hiking-base", tile_url=OSM_TILES, wms_url=TERRESTRIS_WMS, wms_layers="OSM-WMS"),
                LayerRef(id="hiking-routes", tile_url=HIKING_TILES),
            ],
        ),
    ]


def _visible_tile_layers(layers: LayerSet) -> list[LayerRef]:
    """Visible layers with tiles, groups expanded to their visible children."""
    result: list[LayerRef] = []
    for layer in layers:
        if layer.is_group:
            result.extend(child for child in layer.iter_children() if child.visible and child.tile_url)
        elif layer.visible and layer.tile_url:
            result.append(layer)
    return result


def build_basemap_style(layers: LayerSet) -> dict[str, object]:
    """Mapbox GL style (version 8) rendering the currently visible layers.

    With no visible layer the style has no sources and the map is blank,
    which is the expected look after restoring "nothing visible".
    """
    sources: dict[str, object] = {}
    style_layers: list[dict[str, object]] = []
    for layer in _visible_tile_layers(layers):
        sources[layer.id] = {
            "type": "raster",
            "tiles": [layer.tile_url],
            "tileSize": RASTER_TILE_SIZE,
        }
        style_layers.append(
            {
                "id": layer.id,
                "type": "raster",
                "source": layer.id,
                "minzoom": 0,
                "maxzoom": RASTER_MAX_ZOOM,
            }
        )
    return {"version": 8, "sources": sources, "layers": style_layers}


def create_deck(map_view: MapView) -> pdk.Deck:
    """Pydeck map showing the visible base layers of map_view."""
    view_state = pdk.ViewState(
        latitude=map_view.center_lat,
        longitude=map_view.center_lon,
        zoom=map_view.zoom,
        pitch=0,
        bearing=0,
    )
    return pdk.Deck(
        map_style=build_basemap_style(map_view.layers),
        map_provider="mapbox",  # Required when map_style is a dict
        initial_view_state=view_state,
        layers=[],
    )
