"""Unit tests for basemap_carousel validators.

Tests pure validation functions that require no Streamlit or browser interaction.
These validators return Optional[ToastMessage] - None if valid, a message if invalid.
"""

from basemap_carousel.model.layer_ref import LayerRef
from basemap_carousel.model.message import DuplicateLayerIdMessage, EmptyLayerSetMessage
from basemap_carousel.ui.basemap_style import demo_layers
from basemap_carousel.ui.validators import (
    validate_layer_set,
    validate_layer_set_not_empty,
    validate_unique_layer_ids,
)


class TestValidateLayerSetNotEmpty:
    """Tests for validate_layer_set_not_empty."""

    def test_non_empty_is_valid(self, two_layers: list[LayerRef]) -> None:
        assert validate_layer_set_not_empty(two_layers) is None

    def test_empty_returns_message(self) -> None:
        """An empty set returns EmptyLayerSetMessage."""
        assert isinstance(validate_layer_set_not_empty([]), EmptyLayerSetMessage)


class TestValidateUniqueLayerIds:
    """Tests for validate_unique_layer_ids."""

    def test_unique_ids_are_valid(self, group_layers: list[LayerRef]) -> None:
        assert validate_unique_layer_ids(group_layers) is None

    def test_duplicate_top_level_id(self) -> None:
        layers = [LayerRef(id="1"), LayerRef(id="2"), LayerRef(id="1")]
        result = validate_unique_layer_ids(layers)
        assert isinstance(result, DuplicateLayerIdMessage)
        assert result.layer_id == "1"

    def test_child_clashing_with_top_level(self) -> None:
        """Children share the identifier space with top-level layers."""
        layers = [
            LayerRef(id="1"),
            LayerRef(id="g", is_group=True, children=[LayerRef(id="1")]),
        ]
        result = validate_unique_layer_ids(layers)
        assert isinstance(result, DuplicateLayerIdMessage)
        assert "'1'" in result.message


class TestValidateLayerSet:
    """Tests for the combined validator."""

    def test_demo_layers_are_valid(self) -> None:
        assert validate_layer_set(demo_layers()) is None

    def test_first_failure_wins(self) -> None:
        assert isinstance(validate_layer_set([]), EmptyLayerSetMessage)
