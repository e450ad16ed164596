"""Core selection logic for the basemap carousel.

- GestureClassifier: Click vs. drag decision from press/release timing
- VisibilityCoordinator: Hover-preview, restore and commit of base layers
- MapView: Map adapter with viewport, extent (pyproj) and move notifications

The gesture and visibility modules expose pure planning functions as well;
the classes apply their results.
"""

from basemap_carousel.core.gesture import GestureClassifier, GestureState
from basemap_carousel.core.map_view import MapAdapter, MapView
from basemap_carousel.core.visibility import (
    CommitPolicy,
    PreviewState,
    VisibilityCoordinator,
    VisibilityUpdate,
)

__all__ = [
    # Gesture
    "GestureClassifier",
    "GestureState",
    # Visibility
    "CommitPolicy",
    "PreviewState",
    "VisibilityCoordinator",
    "VisibilityUpdate",
    # Map
    "MapAdapter",
    "MapView",
]
