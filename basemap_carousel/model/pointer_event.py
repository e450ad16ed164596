"""Pointer event types - the UI events the carousel reacts to.

This module defines the canonical input types for the carousel controller:
- PointerEventType: What happened (enter, leave, click, press, release)
- PointerEvent: The event plus the attributes of the element it targeted

Thumbnail events carry the layer identifier as an attribute of their target
element (CarouselConfig.IDENTIFIER_ATTRIBUTE). Container events (press and
release) usually carry no identifier at all.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from basemap_carousel.constants import CarouselConfig


class PointerEventType(Enum):
    """Kind of pointer interaction - EXACTLY one per event."""

    ENTER = "enter"  # Pointer entered a thumbnail
    LEAVE = "leave"  # Pointer left a thumbnail
    CLICK = "click"  # Click on a thumbnail
    PRESS = "press"  # Pointer down on the carousel container
    RELEASE = "release"  # Pointer up on the carousel container


@dataclass(frozen=True)
class PointerEvent:
    """A pointer event and the attributes of its target element.

    STRICT CONTRACT:
    - event_type is ALWAYS a PointerEventType
    - attributes is a plain mapping (may be empty)
    - timestamp_ms is optional; controllers use their own clock when None
    """

    event_type: PointerEventType
    attributes: dict[str, Any] = field(default_factory=dict)
    timestamp_ms: Optional[float] = None

    def __post_init__(self) -> None:
        if not isinstance(self.event_type, PointerEventType):
            raise ValueError(f"Unknown event_type: {self.event_type!r}")
        if not isinstance(self.attributes, dict):
            raise ValueError(f"attributes must be a dict, got {type(self.attributes).__name__}")

    @property
    def identifier(self) -> Optional[str]:
        """Layer identifier carried by the target element, or None."""
        value = self.attributes.get(CarouselConfig.IDENTIFIER_ATTRIBUTE)
        if value is None or value == "":
            return None
        return str(value)

    @staticmethod
    def for_layer(event_type: PointerEventType, layer_id: str, timestamp_ms: Optional[float] = None) -> "PointerEvent":
        """Build an event targeting the thumbnail of layer_id."""
        return PointerEvent(
            event_type=event_type,
            attributes={CarouselConfig.IDENTIFIER_ATTRIBUTE: layer_id},
            timestamp_ms=timestamp_ms,
        )

    @staticmethod
    def from_dict(data: dict[str, Any]) -> Optional["PointerEvent"]:
        """Parse an event dict coming from a front-end component.

        Expected shape: {"eventType": "click", "target": {"data-identifier": "1"},
        "timeStamp": 1234.5}. Returns None for unknown event types.
        """
        try:
            event_type = PointerEventType(data.get("eventType"))
        except ValueError:
            return None
        target = data.get("target") or {}
        timestamp = data.get("timeStamp")
        return PointerEvent(
            event_type=event_type,
            attributes=dict(target),
            timestamp_ms=float(timestamp) if timestamp is not None else None,
        )
