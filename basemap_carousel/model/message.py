"""Message - User-facing messages for the basemap carousel UI.

Architecture:
- SIDEBAR: ONE blue info message describing the current carousel state
- TOASTS: transient notifications for committed selections and invalid input

Design Principles:
- Maximum ONE status message at any time
- Messages know their own display level and render themselves
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MessageLevel(Enum):
    """Display level for UI messages."""

    INFO = "info"  # Blue - context/status
    WARNING = "warning"  # Yellow - action instructions
    ERROR = "error"  # Red - invalid input


@dataclass(frozen=True)
class Message(ABC):
    """Abstract base class for user-facing messages displayed inline."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for display in Streamlit."""
        raise NotImplementedError

    @property
    @abstractmethod
    def level(self) -> MessageLevel:
        """Display level."""
        raise NotImplementedError

    def display(self) -> None:
        """Render this message using the appropriate Streamlit function."""
        import streamlit as st

        render_fn = {
            MessageLevel.INFO: st.info,
            MessageLevel.WARNING: st.warning,
            MessageLevel.ERROR: st.error,
        }[self.level]
        render_fn(self.message)


@dataclass(frozen=True)
class ToastMessage(ABC):
    """Abstract base class for transient popup notifications."""

    @property
    @abstractmethod
    def message(self) -> str:
        """Formatted message for the toast notification."""
        raise NotImplementedError

    @property
    @abstractmethod
    def icon(self) -> str:
        """Icon to show in toast. Override in subclasses."""
        raise NotImplementedError

    def display(self) -> None:
        """Show this message as a toast notification and log it."""
        import streamlit as st

        logger = logging.getLogger(__name__)
        logger.info(f"[TOAST] {self.icon} {self.message}")
        st.toast(f"{self.icon} {self.message}")


# =============================================================================
# TOAST MESSAGES
# =============================================================================


@dataclass(frozen=True)
class LayerSelectedMessage(ToastMessage):
    """A base layer was committed with a click."""

    layer_name: str

    @property
    def icon(self) -> str:
        return "🗺️"

    @property
    def message(self) -> str:
        return f"Base Layer Selected — {self.layer_name}"


@dataclass(frozen=True)
class EmptyLayerSetMessage(ToastMessage):
    """The caller supplied no layers at all."""

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return "No Base Layers — the carousel needs at least one layer to offer."


@dataclass(frozen=True)
class DuplicateLayerIdMessage(ToastMessage):
    """Two layers in the supplied set share an identifier."""

    layer_id: str

    @property
    def icon(self) -> str:
        return "⚠️"

    @property
    def message(self) -> str:
        return f"Duplicate Layer Identifier — '{self.layer_id}' is used more than once."


# =============================================================================
# SIDEBAR - Status message (BLUE)
# =============================================================================


@dataclass(frozen=True)
class CarouselStatusMessage(Message):
    """SIDEBAR: what the carousel currently shows on the map."""

    state_name: str
    visible_layer_name: Optional[str] = None
    selected_layer_name: Optional[str] = None

    @property
    def level(self) -> MessageLevel:
        return MessageLevel.INFO

    @property
    def message(self) -> str:
        visible = self.visible_layer_name or "no base layer"
        selected = self.selected_layer_name or "nothing selected yet"
        return (
            f"🗺️ **{self.state_name}**\n\n"
            f"On the map: **{visible}**\n\n"
            f"Selection: **{selected}**"
        )
