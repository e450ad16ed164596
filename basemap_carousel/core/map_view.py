"""Map adapter - the carousel's view of the underlying map.

The carousel needs four things from the map:
- the ordered layers it offers (LayerRefs with visibility flags)
- the viewport size in pixels
- the visible extent and the projection code (thumbnails show the same area)
- a "view changed" notification to re-render thumbnails after a move

MapAdapter is the abstract contract. MapView is a self-contained
implementation holding a web-mercator style view (center, zoom, size). The
extent is computed with pyproj by projecting the WGS84 center into the view
projection and spanning size × resolution around it.

View-changed subscribers are fire-and-forget: they must not touch layer
visibility, preview or gesture state.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from functools import lru_cache

import pyproj

from basemap_carousel.constants import MapConfig
from basemap_carousel.model.layer_ref import LayerRef, LayerSet

logger = logging.getLogger(__name__)

# (min_x, min_y, max_x, max_y) in projection units
Extent = tuple[float, float, float, float]
# (width, height) in pixels
MapSize = tuple[int, int]

# Meters per degree along the equator for the WGS84 ellipsoid
METERS_PER_DEGREE_EQUATOR = 111319.49079327357


def _clamp_latitude(lat: float) -> float:
    return min(max(lat, -MapConfig.MAX_LATITUDE), MapConfig.MAX_LATITUDE)


@lru_cache(maxsize=16)
def _transformer(source_crs: str, target_crs: str) -> pyproj.Transformer:
    return pyproj.Transformer.from_crs(source_crs, target_crs, always_xy=True)


@lru_cache(maxsize=16)
def _is_geographic(crs_code: str) -> bool:
    return pyproj.CRS(crs_code).is_geographic


class MapAdapter(ABC):
    """What the carousel consumes from the underlying map."""

    @property
    @abstractmethod
    def layers(self) -> LayerSet:
        """Ordered layers offered by the carousel."""
        ...

    @property
    @abstractmethod
    def size(self) -> MapSize:
        """Viewport size in pixels (width, height)."""
        ...

    @property
    @abstractmethod
    def projection_code(self) -> str:
        """Projection code of the view, e.g. "EPSG:3857"."""
        ...

    @abstractmethod
    def extent(self) -> Extent:
        """Currently visible extent in projection units."""
        ...

    @abstractmethod
    def subscribe(self, callback: Callable[["MapAdapter"], None]) -> Callable[[], None]:
        """Register a view-changed callback. Returns an unsubscribe function."""
        ...


class MapView(MapAdapter):
    """Concrete map adapter with a zoomable web-mercator style view.

    Example:
        view = MapView(layers=layers)
        unsubscribe = view.subscribe(lambda v: print(v.extent()))
        view.move(lon=7.1, lat=50.7, zoom=12)
    """

    def __init__(
        self,
        layers: LayerSet,
        center_lon: float = MapConfig.START_CENTER_LON,
        center_lat: float = MapConfig.START_CENTER_LAT,
        zoom: float = MapConfig.DEFAULT_ZOOM,
        size: MapSize = MapConfig.DEFAULT_SIZE_PX,
        projection: str = MapConfig.PROJECTION,
    ) -> None:
        """Initialize map view.

        Args:
            layers: Layers owned by the map (the carousel only flips visibility)
            center_lon: View center longitude (WGS84)
            center_lat: View center latitude (WGS84)
            zoom: Zoom level (0 = whole world in 256px)
            size: Viewport (width, height) in pixels
            projection: View projection code
        """
        self._layers = list(layers)
        self.center_lon = center_lon
        self.center_lat = _clamp_latitude(center_lat)
        self.zoom = zoom
        self._size = size
        self._projection = projection
        self._subscribers: list[Callable[[MapAdapter], None]] = []

    @property
    def layers(self) -> list[LayerRef]:
        return self._layers

    @property
    def size(self) -> MapSize:
        return self._size

    @property
    def projection_code(self) -> str:
        return self._projection

    @property
    def resolution(self) -> float:
        """Size of one pixel in projection units at the current zoom."""
        meters = MapConfig.RESOLUTION_ZOOM_0 / (2**self.zoom)
        if _is_geographic(self._projection):
            return meters / METERS_PER_DEGREE_EQUATOR
        return meters

    def projected_center(self) -> tuple[float, float]:
        """View center in projection units."""
        transform = _transformer(MapConfig.GEOGRAPHIC_CRS, self._projection)
        return transform.transform(self.center_lon, self.center_lat)

    def extent(self) -> Extent:
        x, y = self.projected_center()
        width, height = self._size
        half_w = width * self.resolution / 2
        half_h = height * self.resolution / 2
        return (x - half_w, y - half_h, x + half_w, y + half_h)

    # =========================================================================
    # VIEW CHANGES
    # =========================================================================

    def subscribe(self, callback: Callable[[MapAdapter], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def move(self, lon: float | None = None, lat: float | None = None, zoom: float | None = None) -> None:
        """Pan and/or zoom, then notify subscribers (the map's "moveend")."""
        if lon is not None:
            self.center_lon = lon
        if lat is not None:
            self.center_lat = _clamp_latitude(lat)
        if zoom is not None:
            self.zoom = min(max(zoom, MapConfig.MIN_ZOOM), MapConfig.MAX_ZOOM)
        logger.debug(f"[MAP] Moved to ({self.center_lat:.5f}, {self.center_lon:.5f}) z={self.zoom}")
        self._notify()

    def resize(self, width: int, height: int) -> None:
        """Change the viewport size, then notify subscribers."""
        if width <= 0 or height <= 0:
            raise ValueError(f"Map size must be positive, got {width}x{height}")
        self._size = (width, height)
        self._notify()

    def _notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self)
