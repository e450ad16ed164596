"""Infrastructure utilities for Streamlit UI operations.

This module abstracts Streamlit-specific infrastructure (st.rerun) to enable
mockability in tests.

Pattern: State machine listeners import from this module. Tests patch
trigger_rerun instead of every place where st.rerun might be called directly.
"""

import streamlit as st


def trigger_rerun(scope: str = "app") -> None:
    """Trigger Streamlit rerun with optional scope.

    This is a mockable wrapper around st.rerun() for testability.
    In tests, patch 'basemap_carousel.ui.infra.trigger_rerun' to prevent
    actual reruns (which raise StopExecution).

    Args:
        scope: Rerun scope - "app" for full rerun, "fragment" for partial.
    """
    st.rerun(scope=scope)
