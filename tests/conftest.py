"""Shared pytest fixtures for basemap_carousel tests.

Provides a controllable clock and small layer sets, plus carousel
controllers without the Streamlit UI listener.

TIMING:
    All press/release timing goes through FakeClock, so a "200 ms press" in a
    test is exactly 200 ms. The drag threshold is 180 ms (strictly greater
    counts as a drag).
"""

import pytest

from basemap_carousel.core.map_view import MapView
from basemap_carousel.core.visibility import CommitPolicy
from basemap_carousel.model.layer_ref import LayerRef
from basemap_carousel.model.pointer_event import PointerEvent, PointerEventType
from basemap_carousel.ui.carousel import LayerCarousel


# =============================================================================
# CLOCK AND CALLBACK HELPERS
# =============================================================================


class FakeClock:
    """Millisecond clock that only moves when told to."""

    def __init__(self, start_ms: float = 10_000.0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def advance(self, ms: float) -> None:
        self.now_ms += ms


class SelectionRecorder:
    """Selection callback recording every layer id it receives."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, layer_id: str) -> None:
        self.calls.append(layer_id)


def visibility(layers: list[LayerRef]) -> list[bool]:
    """Top-level visibility flags in LayerSet order."""
    return [layer.visible for layer in layers]


def click(carousel: LayerCarousel, clock: FakeClock, layer_id: str, hold_ms: float = 50.0) -> bool:
    """Press, hold for hold_ms, release and click the thumbnail of layer_id."""
    carousel.on_press()
    clock.advance(hold_ms)
    carousel.on_release()
    return carousel.on_item_click(PointerEvent.for_layer(PointerEventType.CLICK, layer_id))


def enter(carousel: LayerCarousel, layer_id: str) -> bool:
    return carousel.on_item_enter(PointerEvent.for_layer(PointerEventType.ENTER, layer_id))


def leave(carousel: LayerCarousel, layer_id: str) -> bool:
    return carousel.on_item_leave(PointerEvent.for_layer(PointerEventType.LEAVE, layer_id))


# =============================================================================
# LAYER SETS
# =============================================================================


@pytest.fixture
def two_layers() -> list[LayerRef]:
    """Layer "1" visible, layer "2" hidden."""
    return [LayerRef(id="1", visible=True), LayerRef(id="2", visible=False)]


@pytest.fixture
def group_layers() -> list[LayerRef]:
    """Group "g" with hidden children "g1", "g2" plus visible layer "1"."""
    return [
        LayerRef(id="g", is_group=True, children=[LayerRef(id="g1"), LayerRef(id="g2")]),
        LayerRef(id="1", visible=True),
    ]


# =============================================================================
# CONTROLLERS
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def recorder() -> SelectionRecorder:
    return SelectionRecorder()


@pytest.fixture
def map_view(two_layers: list[LayerRef]) -> MapView:
    return MapView(layers=two_layers)


@pytest.fixture
def carousel(map_view: MapView, clock: FakeClock, recorder: SelectionRecorder) -> LayerCarousel:
    """Carousel over two_layers with the default (LOCK) commit policy."""
    return LayerCarousel(map_view=map_view, on_layer_selected=recorder, clock=clock)


@pytest.fixture
def revert_carousel(map_view: MapView, clock: FakeClock, recorder: SelectionRecorder) -> LayerCarousel:
    """Carousel over two_layers reproducing revert-on-leave after a commit."""
    return LayerCarousel(
        map_view=map_view,
        on_layer_selected=recorder,
        clock=clock,
        policy=CommitPolicy.REVERT_ON_LEAVE,
    )
