"""Sidebar navigation for the Manu-shop UI."""

import streamlit as st

from ...core.config import SessionKeys
from ...core.constants import APP_NAME, DEFAULT_PAGE, PAGES
from .floating_assistant import render_floating_assistant


def render_sidebar() -> str:
    """Render the navigation shell and return the selected page label."""
    labels = list(PAGES)
    current = st.session_state.get(SessionKeys.CURRENT_PAGE, DEFAULT_PAGE)

    with st.sidebar:
        st.title(f"⚡ {APP_NAME}")
        selected = st.radio(
            "Navegación",
            labels,
            index=labels.index(current) if current in labels else 0,
            label_visibility="collapsed"
        )
        st.markdown("---")
        render_floating_assistant()
        st.caption("Manu-shop · ElectroMonitor")

    st.session_state[SessionKeys.CURRENT_PAGE] = selected
    return selected
