"""Slide descriptors for the carousel thumbnail renderer.

For each LayerRef the slide renderer receives the layer identifier (as the
element attribute the carousel resolves events from), the current map size,
extent and projection, and a preview image URL.

Preview images:
    1. layer.image_url when set
    2. otherwise a WMS GetMap request for the current extent, when the layer
       (or, for groups, its children) has a WMS source
    3. otherwise None (the renderer shows the title only)

The URL is only built here. Fetching the image is the renderer's job.
"""

import itertools
import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

from basemap_carousel.constants import CarouselConfig, ThumbnailConfig
from basemap_carousel.core.map_view import Extent, MapAdapter, MapSize
from basemap_carousel.model.layer_ref import LayerRef

logger = logging.getLogger(__name__)

# Geographic CRS codes whose WMS 1.3.0 axis order is (lat, lon)
_LAT_LON_CRS = {"EPSG:4326", "EPSG:4258", "CRS:84"}

_slide_ids = itertools.count(1)


def unique_slide_key() -> str:
    """Fresh slide key ("layer-slide-<n>"), unique for the process lifetime."""
    return f"{CarouselConfig.SLIDE_KEY_PREFIX}{next(_slide_ids)}"


@dataclass(frozen=True)
class SlideSpec:
    """Everything the slide renderer needs for one thumbnail.

    Attributes:
        layer_id: Identifier of the previewed layer
        title: Caption under the thumbnail
        attributes: Element attributes; carries the identifier for event resolution
        map_size: Current map size (width, height) in pixels
        extent: Current map extent in projection units
        projection: Current map projection code
        preview_url: Image URL for the thumbnail, or None
        key: Unique key of this slide for the current render
    """

    layer_id: str
    title: str
    map_size: MapSize
    extent: Extent
    projection: str
    preview_url: Optional[str]
    key: str
    attributes: dict[str, str] = field(default_factory=dict)


def thumbnail_size(map_size: MapSize) -> tuple[int, int]:
    """Thumbnail size keeping the map aspect ratio at ThumbnailConfig.WIDTH_PX."""
    width, height = map_size
    if width <= 0 or height <= 0:
        return (ThumbnailConfig.WIDTH_PX, ThumbnailConfig.HEIGHT_PX)
    thumb_width = ThumbnailConfig.WIDTH_PX
    return (thumb_width, max(1, round(thumb_width * height / width)))


def _wms_source(layer: LayerRef) -> tuple[Optional[str], Optional[str]]:
    """(url, layer names) for a GetMap preview. Groups combine their children."""
    if layer.wms_url and layer.wms_layers:
        return layer.wms_url, layer.wms_layers
    children = [child for child in layer.iter_children() if child.wms_url and child.wms_layers]
    if not children:
        return None, None
    # A single GetMap can only target one server
    url = children[0].wms_url
    names = [child.wms_layers for child in children if child.wms_url == url]
    return url, ",".join(names)


def get_map_url(
    base_url: str,
    layers: str,
    extent: Extent,
    projection: str,
    size: tuple[int, int],
) -> str:
    """Build a WMS 1.3.0 GetMap URL.

    Args:
        base_url: WMS endpoint
        layers: Comma separated WMS layer names
        extent: (min_x, min_y, max_x, max_y) in projection units
        projection: CRS code, e.g. "EPSG:3857"
        size: Image (width, height) in pixels
    """
    min_x, min_y, max_x, max_y = extent
    if projection.upper() in _LAT_LON_CRS:
        bbox = (min_y, min_x, max_y, max_x)
    else:
        bbox = (min_x, min_y, max_x, max_y)
    params = {
        "SERVICE": "WMS",
        "VERSION": ThumbnailConfig.WMS_VERSION,
        "REQUEST": "GetMap",
        "LAYERS": layers,
        "STYLES": ThumbnailConfig.WMS_STYLES,
        "FORMAT": ThumbnailConfig.WMS_FORMAT,
        "TRANSPARENT": ThumbnailConfig.WMS_TRANSPARENT,
        "CRS": projection,
        "BBOX": ",".join(f"{value:.6f}" for value in bbox),
        "WIDTH": size[0],
        "HEIGHT": size[1],
    }
    return requests.Request("GET", base_url, params=params).prepare().url


def preview_url(layer: LayerRef, map_size: MapSize, extent: Extent, projection: str) -> Optional[str]:
    """Preview image URL for layer, or None if it has no image source."""
    if layer.image_url:
        return layer.image_url
    url, names = _wms_source(layer)
    if url is None or names is None:
        logger.debug(f"No preview source for layer {layer.id}")
        return None
    return get_map_url(
        base_url=url,
        layers=names,
        extent=extent,
        projection=projection,
        size=thumbnail_size(map_size),
    )


def build_slides(map_adapter: MapAdapter, layers: Optional[list[LayerRef]] = None) -> list[SlideSpec]:
    """Build one SlideSpec per layer from the current map view.

    Reads the map only; layer visibility is never touched.
    """
    layers = list(map_adapter.layers) if layers is None else layers
    map_size = map_adapter.size
    extent = map_adapter.extent()
    projection = map_adapter.projection_code
    return [
        SlideSpec(
            layer_id=layer.id,
            title=layer.display_name,
            map_size=map_size,
            extent=extent,
            projection=projection,
            preview_url=preview_url(layer, map_size=map_size, extent=extent, projection=projection),
            key=unique_slide_key(),
            attributes={CarouselConfig.IDENTIFIER_ATTRIBUTE: layer.id},
        )
        for layer in layers
    ]
