"""
AI assistant page.
"""

import streamlit as st

from ...core.config import SessionKeys
from ...llm import AssistantVariant
from ..components.chat_interface import get_chat_session, render_transcript, send_message

INPUT_PLACEHOLDER = "Describe tu proyecto (ej. 'Quiero instalar cableado ethernet')..."


def render() -> None:
    """Render the full-page assistant."""
    st.header("🤖 Asesor de Componentes IA")
    st.caption("Impulsado por ElectroMonitor Intelligence")

    chat = get_chat_session(SessionKeys.ASSISTANT_CHAT, AssistantVariant.PAGE)
    with st.container(height=560):
        render_transcript(chat)

    prompt = st.chat_input(INPUT_PLACEHOLDER)
    if prompt and prompt.strip():
        send_message(chat, prompt)
        st.rerun()
