"""
Floating assistant widget, mounted on every page.

It keeps its own transcript, separate from the assistant page, and can be
minimized to the header or resized between fixed limits.
"""

import streamlit as st

from ...core.config import SessionKeys
from ...llm import AssistantVariant
from .chat_interface import get_chat_session, render_transcript, send_message

MIN_HEIGHT = 400
MAX_HEIGHT = 900
DEFAULT_HEIGHT = 600


def clamp_height(height: int) -> int:
    return max(MIN_HEIGHT, min(MAX_HEIGHT, int(height)))


def render_floating_assistant() -> None:
    chat = get_chat_session(SessionKeys.FLOATING_CHAT, AssistantVariant.FLOATING)

    with st.popover("💬 Asistente Manu-Shop", use_container_width=True):
        header_col, toggle_col = st.columns([4, 1])
        header_col.markdown("**Asistente Manu-Shop**")
        minimized = st.session_state.get(SessionKeys.FLOATING_MINIMIZED, False)
        if toggle_col.button("🗖" if minimized else "🗕", key="floating_minimize"):
            st.session_state[SessionKeys.FLOATING_MINIMIZED] = not minimized
            st.rerun()
        if minimized:
            return

        height = clamp_height(st.session_state.get(SessionKeys.FLOATING_HEIGHT, DEFAULT_HEIGHT))
        with st.container(height=height - 150):
            render_transcript(chat)

        with st.form("floating_chat_form", clear_on_submit=True):
            text = st.text_input("Mensaje", placeholder="Pregunta sobre stock o proyectos...",
                                 label_visibility="collapsed")
            sent = st.form_submit_button("Enviar", use_container_width=True)
        if sent and text.strip():
            send_message(chat, text)
            st.rerun()

        st.session_state[SessionKeys.FLOATING_HEIGHT] = clamp_height(
            st.slider("Tamaño", MIN_HEIGHT, MAX_HEIGHT, height, step=50, key="floating_height_slider")
        )
