"""Basemap Carousel - pick a map base layer from a carousel of thumbnails.

Hover a thumbnail to preview its layer on the map, leave to restore what was
shown before, click to commit. Slow presses are treated as drags of the
carousel and never commit.

Modules:
    core: Selection logic (gesture classification, visibility coordination, map view)
    model: Data structures (LayerRef, PointerEvent, effects, messages)
    ui: Carousel controller, state machines, slide descriptors, Streamlit helpers

Example:
    from basemap_carousel.core import MapView
    from basemap_carousel.ui import LayerCarousel, demo_layers

    view = MapView(layers=demo_layers())
    carousel = LayerCarousel(map_view=view, on_layer_selected=print)
"""
