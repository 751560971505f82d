"""
Manu-shop Streamlit front-end.

Layout shell: page config, sidebar navigation (with the floating
assistant), and the selected page. Run with ``streamlit run`` on this file
or through ``run_app.py``.
"""

import logging
import uuid
from typing import Optional

import sentry_sdk
import streamlit as st

from manu_shop.core.config import SessionKeys
from manu_shop.core.constants import PAGE_CONFIG, PAGES
from manu_shop.core.logging_config import CorrelationIDFilter, configure_logging, init_sentry
from manu_shop.ui.components.sidebar import render_sidebar
from manu_shop.ui.pages import PAGE_RENDERERS, notifications
from manu_shop.ui.styles import inject_styles

logger = logging.getLogger(__name__)


@st.cache_resource
def _init_process() -> bool:
    """Logging and Sentry are configured once per server process."""
    configure_logging()
    return init_sentry()


def _init_session() -> None:
    is_new = SessionKeys.CORRELATION_ID not in st.session_state
    if is_new:
        st.session_state[SessionKeys.CORRELATION_ID] = uuid.uuid4().hex[:12]
    # set on every run: reruns of one session may land on different threads
    CorrelationIDFilter.set_correlation_id(st.session_state[SessionKeys.CORRELATION_ID])
    if is_new:
        logger.info("New session")


def handle_page_change(previous: Optional[str], selected: str) -> None:
    """Release what the page being left holds for this session."""
    if previous == selected or previous not in PAGES:
        return
    if PAGES[previous] == "notifications":
        notifications.leave_page()


def render_app() -> None:
    inject_styles()
    previous = st.session_state.get(SessionKeys.CURRENT_PAGE)
    page_label = render_sidebar()
    handle_page_change(previous, page_label)
    renderer = PAGE_RENDERERS[PAGES[page_label]]
    try:
        renderer()
    except Exception as e:
        logger.exception(f"Unhandled error rendering {page_label}")
        sentry_sdk.capture_exception(e)
        st.error(f"Ocurrió un error inesperado: {e}")


def main() -> None:
    st.set_page_config(**PAGE_CONFIG)
    _init_process()
    _init_session()
    render_app()


if __name__ == "__main__":
    main()
