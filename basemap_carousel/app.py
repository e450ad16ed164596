"""Basemap Carousel - Interactive base layer picker demo.

Browse candidate base layers as thumbnails, preview one on the map, and
commit the choice with a click.

Streamlit has no pointer-enter/leave events, so the demo maps them to
buttons: "Preview" enters a thumbnail, "End preview" leaves it, and "Select"
performs a press, release and click in one go.

Run: streamlit run basemap_carousel/app.py
"""

import logging
import traceback

import streamlit as st

from basemap_carousel.constants import AppConfig, MapConfig
from basemap_carousel.core.map_view import MapView
from basemap_carousel.core.visibility import CommitPolicy
from basemap_carousel.model.message import CarouselStatusMessage, LayerSelectedMessage
from basemap_carousel.model.pointer_event import PointerEvent, PointerEventType
from basemap_carousel.ui import LayerCarousel, build_basemap_style, create_deck, demo_layers
from basemap_carousel.ui.thumbnails import SlideSpec
from basemap_carousel.ui.validators import validate_layer_set

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


# =============================================================================
# SESSION STATE
# =============================================================================


def _on_layer_selected(layer_id: str) -> None:
    """Selection callback: remember the choice and confirm it to the user."""
    st.session_state.selected_layer_id = layer_id
    carousel: LayerCarousel = st.session_state.carousel
    layer = carousel.get_layer(layer_id)
    LayerSelectedMessage(layer_name=layer.display_name if layer else layer_id).display()


def init_session_state() -> None:
    """Initialize session state with map view and carousel."""
    if "map_view" not in st.session_state:
        layers = demo_layers()
        problem = validate_layer_set(layers)
        if problem is not None:
            problem.display()
        st.session_state.map_view = MapView(layers=layers)

    if "carousel" not in st.session_state:
        st.session_state.carousel = LayerCarousel(
            map_view=st.session_state.map_view,
            on_layer_selected=_on_layer_selected,
            add_ui_listener=True,
        )

    if "selected_layer_id" not in st.session_state:
        st.session_state.selected_layer_id = None


def reset_ui_state() -> None:
    """Drop map view and carousel so the next run starts fresh."""
    logger.info("Resetting UI state due to error recovery")
    carousel = st.session_state.get("carousel")
    if carousel is not None:
        carousel.close()
    for key in ("carousel", "map_view", "selected_layer_id"):
        st.session_state.pop(key, None)


# =============================================================================
# RENDERING
# =============================================================================


def _render_sidebar(carousel: LayerCarousel, map_view: MapView) -> None:
    with st.sidebar:
        st.header("Map View")
        lon = st.number_input("Longitude", value=float(map_view.center_lon), format="%.4f")
        lat = st.number_input(
            "Latitude",
            min_value=-MapConfig.MAX_LATITUDE,
            max_value=MapConfig.MAX_LATITUDE,
            value=float(map_view.center_lat),
            format="%.4f",
        )
        zoom = st.slider("Zoom", MapConfig.MIN_ZOOM, MapConfig.MAX_ZOOM, int(map_view.zoom))
        if (lon, lat, zoom) != (map_view.center_lon, map_view.center_lat, map_view.zoom):
            map_view.move(lon=lon, lat=lat, zoom=zoom)

        st.header("Commit Behavior")
        policies = [policy.value for policy in CommitPolicy]
        current = carousel.coordinator.policy.value
        choice = st.radio("After a click, leaving the thumbnail...", policies, index=policies.index(current))
        carousel.coordinator.policy = CommitPolicy(choice)

        visible = carousel.visible_layer
        selected = carousel.get_layer(carousel.selected_id) if carousel.selected_id else None
        CarouselStatusMessage(
            state_name=carousel.state_name,
            visible_layer_name=visible.display_name if visible else None,
            selected_layer_name=selected.display_name if selected else None,
        ).display()


def _render_slide(carousel: LayerCarousel, slide: SlideSpec) -> None:
    if slide.preview_url:
        st.image(slide.preview_url, caption=slide.title)
    else:
        st.markdown(f"**{slide.title}**")

    previewing = carousel.context.preview.previewing_id == slide.layer_id
    if previewing:
        if st.button("End preview", key=f"leave_{slide.layer_id}"):
            carousel.on_item_leave(PointerEvent(PointerEventType.LEAVE, attributes=slide.attributes))
    elif st.button("Preview", key=f"enter_{slide.layer_id}"):
        # Entering another thumbnail keeps the snapshot of the running preview
        carousel.on_item_enter(PointerEvent(PointerEventType.ENTER, attributes=slide.attributes))

    if st.button("Select", key=f"select_{slide.layer_id}", type="primary"):
        carousel.on_press()
        carousel.on_release()
        carousel.on_item_click(PointerEvent(PointerEventType.CLICK, attributes=slide.attributes))


def _run_app_ui() -> None:
    """Run the main application UI. Separated for error handling wrapper."""
    carousel: LayerCarousel = st.session_state.carousel
    map_view: MapView = st.session_state.map_view
    logger.info(f"[MAIN] Render cycle starting: {carousel!r}")

    _render_sidebar(carousel, map_view)

    deck = create_deck(map_view)
    st.pydeck_chart(deck, height=AppConfig.MAP_HEIGHT_PX)
    if not build_basemap_style(map_view.layers)["layers"]:
        st.caption("No base layer visible.")

    render = carousel.render()
    columns = st.columns(max(render.settings.slides_to_show, 1))
    for index, slide in enumerate(render.slides):
        with columns[index % len(columns)]:
            _render_slide(carousel, slide)


# =============================================================================
# MAIN
# =============================================================================


def main() -> None:
    """Application entry point."""
    st.set_page_config(page_title=AppConfig.TITLE, page_icon=AppConfig.ICON, layout=AppConfig.LAYOUT)
    init_session_state()

    st.title(AppConfig.TITLE)

    try:
        _run_app_ui()
    except Exception as e:
        # Log full traceback for debugging
        error_msg = f"{type(e).__name__}: {e}"
        full_traceback = traceback.format_exc()
        logger.error(f"[UI] UI error caught: {error_msg}\n{full_traceback}")

        st.error(f"⚠️ [UI] Something went wrong: {error_msg}")
        reset_ui_state()

        if st.button("🔄 Reset and Continue", type="primary"):
            st.rerun()


if __name__ == "__main__":
    main()
