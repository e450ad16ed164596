"""Configuration constants for the Basemap Carousel.

All configurable parameters are centralized here for easy tuning.

Classes:
    AppConfig: Streamlit demo application settings
    GestureConfig: Click vs. drag classification
    CarouselConfig: Slider rendering policy passed through to the slide renderer
    MapConfig: Default map view parameters
    ThumbnailConfig: Preview image size and WMS GetMap parameters
    PreviewConfig: Hover-preview and commit behavior
"""

from pathlib import Path

# Package root directory (where basemap_carousel/ lives)
PACKAGE_DIR = Path(__file__).parent

# Project root directory (parent of basemap_carousel/)
PROJECT_ROOT = PACKAGE_DIR.parent


class AppConfig:
    """UI application settings."""

    TITLE = "Basemap Carousel - Pick Your Base Layer"
    ICON = "🗺️"
    LAYOUT = "wide"
    MAP_HEIGHT_PX = 520


class GestureConfig:
    """Click vs. drag classification on the carousel container."""

    # Press-to-release durations strictly above this are drags, not clicks.
    # Fixed by design of the interaction, not user configurable.
    DRAG_THRESHOLD_MS = 180


class CarouselConfig:
    """Slider policy for the thumbnail carousel.

    These values are rendering policy only. The selection logic never reads
    them; they are handed to the slide renderer unchanged.
    """

    CLASS_NAME = "carousel"
    WRAPPER_CLASS_NAME = "carousel-wrapper"
    SLIDES_TO_SCROLL = 1
    LAZY_LOAD = "ondemand"
    INFINITE = True
    SWIPE_TO_SLIDE = True
    DOTS = False
    ARROWS = False

    # Attribute on the thumbnail element carrying the layer identifier
    IDENTIFIER_ATTRIBUTE = "data-identifier"

    # Prefix for per-render unique slide keys ("layer-slide-1", ...)
    SLIDE_KEY_PREFIX = "layer-slide-"


class MapConfig:
    """Default map view parameters."""

    # Initial center: Bonn, Germany
    START_CENTER_LON = 7.0982
    START_CENTER_LAT = 50.7374
    DEFAULT_ZOOM = 10

    # Viewport size in pixels (width, height)
    DEFAULT_SIZE_PX = (800, 600)

    # View projection (web mercator) and the geographic CRS of the center
    PROJECTION = "EPSG:3857"
    GEOGRAPHIC_CRS = "EPSG:4326"

    # Ground resolution at zoom 0 for 256px web mercator tiles (meters/pixel)
    # Earth circumference 40,075,016.686 m / 256 px
    RESOLUTION_ZOOM_0 = 156543.03392804097

    MIN_ZOOM = 0
    MAX_ZOOM = 20

    # Web mercator is undefined at the poles
    MAX_LATITUDE = 85.05112878


class ThumbnailConfig:
    """Preview image parameters for carousel slides."""

    WIDTH_PX = 160
    HEIGHT_PX = 120

    # WMS GetMap request parameters for layers without an explicit image_url
    WMS_VERSION = "1.3.0"
    WMS_FORMAT = "image/png"
    WMS_TRANSPARENT = "TRUE"
    WMS_STYLES = ""


class PreviewConfig:
    """Hover-preview and commit behavior.

    DEFAULT_COMMIT_POLICY names a CommitPolicy member:
    - "lock": a commit clears the hover snapshot, later pointer-leave is a no-op
    - "revert_on_leave": a commit keeps a snapshot, pointer-leave restores it
    """

    DEFAULT_COMMIT_POLICY = "lock"
