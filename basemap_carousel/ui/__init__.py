"""User interface components for the basemap carousel.

File Structure:
- carousel.py: LayerCarousel controller, CarouselSettings, CarouselRender
- thumbnails.py: SlideSpec descriptors and preview (GetMap) URLs
- basemap_style.py: Raster map style for visible layers, pydeck Deck
- state_machine.py: PreviewStateMachine, GestureStateMachine, StreamlitUIListener
- context.py: State machine models
- validators.py: LayerSet validation with Optional[ToastMessage] returns
- infra.py: Mockable Streamlit infrastructure (rerun)
"""

from basemap_carousel.ui.basemap_style import build_basemap_style, create_deck, demo_layers
from basemap_carousel.ui.carousel import (
    CarouselRender,
    CarouselSettings,
    LayerCarousel,
    wrapper_class_name,
)
from basemap_carousel.ui.context import CarouselContext, GestureContext, PreviewContext
from basemap_carousel.ui.state_machine import (
    GestureStateMachine,
    PreviewStateMachine,
    StreamlitUIListener,
)
from basemap_carousel.ui.thumbnails import SlideSpec, build_slides

__all__ = [
    "LayerCarousel",
    "CarouselSettings",
    "CarouselRender",
    "wrapper_class_name",
    "SlideSpec",
    "build_slides",
    "build_basemap_style",
    "create_deck",
    "demo_layers",
    "CarouselContext",
    "PreviewContext",
    "GestureContext",
    "PreviewStateMachine",
    "GestureStateMachine",
    "StreamlitUIListener",
]
