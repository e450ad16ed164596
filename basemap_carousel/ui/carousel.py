"""LayerCarousel - controller wiring pointer events to the selection logic.

Event flow:
    PRESS / RELEASE on the container -> GestureStateMachine (timing)
    ENTER on a thumbnail             -> PreviewStateMachine.hover_enter
    LEAVE on a thumbnail             -> PreviewStateMachine.hover_leave
    CLICK on a thumbnail             -> drag check, then PreviewStateMachine.commit
    on_slide_click(layer)            -> drag check, then exclusive selection
    map move                         -> render_trigger bump only

Events whose target carries no known layer identifier are ignored silently.
A click after a press held longer than the drag threshold is ignored
entirely (no resolution, no visibility change, no callback).

render() describes what the slide renderer should show; it reads the map
view and never changes layer visibility, so it is safe to call after every
map move.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from basemap_carousel.constants import CarouselConfig
from basemap_carousel.core.gesture import Clock, GestureClassifier, monotonic_ms
from basemap_carousel.core.map_view import MapAdapter
from basemap_carousel.core.visibility import (
    DEFAULT_COMMIT_POLICY,
    CommitPolicy,
    SelectionCallback,
    VisibilityCoordinator,
)
from basemap_carousel.model.layer_ref import LayerRef, find_layer, find_visible_layer
from basemap_carousel.model.pointer_event import PointerEvent, PointerEventType
from basemap_carousel.ui.context import CarouselContext
from basemap_carousel.ui.state_machine import (
    GestureStateMachine,
    PreviewStateMachine,
    StreamlitUIListener,
)
from basemap_carousel.ui.thumbnails import SlideSpec, build_slides

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CarouselSettings:
    """Slider policy handed to the slide renderer unchanged."""

    slides_to_show: int
    class_name: str = CarouselConfig.CLASS_NAME
    slides_to_scroll: int = CarouselConfig.SLIDES_TO_SCROLL
    lazy_load: str = CarouselConfig.LAZY_LOAD
    infinite: bool = CarouselConfig.INFINITE
    swipe_to_slide: bool = CarouselConfig.SWIPE_TO_SLIDE
    dots: bool = CarouselConfig.DOTS
    arrows: bool = CarouselConfig.ARROWS

    @staticmethod
    def for_layer_count(layer_count: int) -> "CarouselSettings":
        """Settings showing half of the layers at once (rounded up)."""
        return CarouselSettings(slides_to_show=math.ceil(layer_count / 2))

    def as_slider_props(self) -> dict[str, Any]:
        """Settings as slider component props (camelCase keys)."""
        return {
            "className": self.class_name,
            "slidesToShow": self.slides_to_show,
            "slidesToScroll": self.slides_to_scroll,
            "lazyLoad": self.lazy_load,
            "infinite": self.infinite,
            "swipeToSlide": self.swipe_to_slide,
            "dots": self.dots,
            "arrows": self.arrows,
        }


@dataclass(frozen=True)
class CarouselRender:
    """Complete description of one carousel render."""

    class_name: str
    settings: CarouselSettings
    slides: list[SlideSpec]
    render_trigger: int


def wrapper_class_name(class_name: str = "") -> str:
    """CSS class of the carousel wrapper element."""
    return f"{class_name} {CarouselConfig.WRAPPER_CLASS_NAME}".strip()


class LayerCarousel:
    """Carousel controller for choosing a base layer.

    Example:
        carousel = LayerCarousel(map_view=view, on_layer_selected=print)
        carousel.on_press()
        carousel.on_release()
        carousel.on_item_click(PointerEvent.for_layer(PointerEventType.CLICK, "2"))
    """

    def __init__(
        self,
        map_view: MapAdapter,
        layers: Optional[list[LayerRef]] = None,
        on_layer_selected: Optional[SelectionCallback] = None,
        class_name: str = "",
        policy: CommitPolicy = DEFAULT_COMMIT_POLICY,
        clock: Clock = monotonic_ms,
        context: Optional[CarouselContext] = None,
        add_ui_listener: bool = False,
    ) -> None:
        """Initialize the carousel.

        Args:
            map_view: Map adapter providing layers, view geometry and move events
            layers: Layers to offer (defaults to all layers of the map)
            on_layer_selected: Called with the layer id after a click-commit
            class_name: Extra CSS class for the wrapper element
            policy: What a pointer-leave does after a commit
            clock: Millisecond clock for press/release timing
            context: Shared context (creates new if None)
            add_ui_listener: If True, preview transitions trigger a Streamlit rerun.
                             Set to False for testing or non-Streamlit usage.
        """
        self.map_view = map_view
        self.layers = list(map_view.layers) if layers is None else list(layers)
        self.on_layer_selected: SelectionCallback = on_layer_selected or (lambda layer_id: None)
        self.class_name = class_name
        self.context = context or CarouselContext()

        self.coordinator = VisibilityCoordinator(layers=self.layers, policy=policy)
        self.classifier = GestureClassifier(clock=clock)
        self.preview_sm = PreviewStateMachine(coordinator=self.coordinator, context=self.context.preview)
        self.gesture_sm = GestureStateMachine(classifier=self.classifier, context=self.context.gesture)
        if add_ui_listener:
            self.preview_sm.add_listener(StreamlitUIListener())
            logger.info("Created LayerCarousel with StreamlitUIListener")

        self._unsubscribe: Optional[Callable[[], None]] = map_view.subscribe(self._on_map_moved)

    # =========================================================================
    # CONTAINER EVENTS (gesture timing)
    # =========================================================================

    def on_press(self, event: Optional[PointerEvent] = None) -> bool:
        timestamp = event.timestamp_ms if event is not None else None
        return self.gesture_sm.try_transition("press", timestamp_ms=timestamp)

    def on_release(self, event: Optional[PointerEvent] = None) -> bool:
        timestamp = event.timestamp_ms if event is not None else None
        return self.gesture_sm.try_transition("release", timestamp_ms=timestamp)

    def is_drag(self) -> bool:
        return self.gesture_sm.is_drag()

    # =========================================================================
    # THUMBNAIL EVENTS (preview / commit)
    # =========================================================================

    def on_item_enter(self, event: PointerEvent) -> bool:
        """Preview the hovered layer. Returns True if a preview started."""
        layer = self.coordinator.resolve_event(event)
        if layer is None:
            return False
        return self.preview_sm.try_transition("hover_enter", layer=layer)

    def on_item_leave(self, event: Optional[PointerEvent] = None) -> bool:
        """Restore the layer visible before the preview (subject to commit policy)."""
        if self.preview_sm.is_idle:
            logger.debug("Leave while idle - ignored")
            return False
        return self.preview_sm.try_transition("hover_leave")

    def on_item_click(self, event: PointerEvent) -> bool:
        """Commit the clicked layer unless the gesture was a drag.

        Returns:
            True if the layer was committed and the callback invoked.
        """
        if self.is_drag():
            self.context.gesture.ignored_clicks += 1
            logger.debug(f"Click ignored as drag ({self.classifier.gesture_duration_ms:.1f}ms)")
            return False
        layer = self.coordinator.resolve_event(event)
        if layer is None:
            return False
        return self.preview_sm.try_transition("commit", layer=layer, notify=self.on_layer_selected)

    def on_slide_click(self, layer: LayerRef) -> bool:
        """Container-level selection of a layer reference (no group expansion)."""
        if self.is_drag():
            self.context.gesture.ignored_clicks += 1
            return False
        self.coordinator.select_exclusive(layer)
        self.context.bump_render_trigger()
        return True

    def handle_event(self, event: PointerEvent) -> bool:
        """Dispatch a pointer event to the matching handler."""
        handlers = {
            PointerEventType.PRESS: self.on_press,
            PointerEventType.RELEASE: self.on_release,
            PointerEventType.ENTER: self.on_item_enter,
            PointerEventType.LEAVE: self.on_item_leave,
            PointerEventType.CLICK: self.on_item_click,
        }
        return handlers[event.event_type](event)

    # =========================================================================
    # MAP EVENTS AND RENDERING
    # =========================================================================

    def _on_map_moved(self, map_view: MapAdapter) -> None:
        trigger = self.context.bump_render_trigger()
        logger.debug(f"[MAP] View changed, render trigger {trigger}")

    def render(self) -> CarouselRender:
        """Describe the carousel for the current map view."""
        return CarouselRender(
            class_name=wrapper_class_name(self.class_name),
            settings=CarouselSettings.for_layer_count(len(self.layers)),
            slides=build_slides(self.map_view, layers=self.layers),
            render_trigger=self.context.render_trigger,
        )

    def close(self) -> None:
        """Stop listening to map moves."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def state_name(self) -> str:
        return self.preview_sm.get_state_name()

    @property
    def selected_id(self) -> Optional[str]:
        return self.context.preview.selected_id

    @property
    def visible_layer(self) -> Optional[LayerRef]:
        return find_visible_layer(self.layers)

    def get_layer(self, layer_id: str) -> Optional[LayerRef]:
        return find_layer(self.layers, layer_id)

    def __repr__(self) -> str:
        return f"LayerCarousel(layers={len(self.layers)}, context={self.context!r})"
