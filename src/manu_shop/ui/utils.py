"""
Session state helpers shared by the Manu-shop pages.
"""

from typing import Any, Callable, Optional

import streamlit as st

from ..core.config import SessionKeys


def get_state(key: str, factory: Callable[[], Any]) -> Any:
    """Return ``st.session_state[key]``, creating it with ``factory`` on first use."""
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def flash(kind: str, message: str) -> None:
    """Queue a message to show after the next rerun (``kind``: success, error, warning, info)."""
    st.session_state[SessionKeys.FLASH] = (kind, message)


def show_flash() -> Optional[str]:
    """Show and clear the queued message, if any."""
    queued = st.session_state.pop(SessionKeys.FLASH, None)
    if not queued:
        return None
    kind, message = queued
    getattr(st, kind, st.info)(message)
    return message


def format_currency(amount: float) -> str:
    return f"${amount:,.2f}"
