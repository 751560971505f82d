"""
Chat interface component shared by the assistant page and the floating widget.
"""

import streamlit as st

from ...llm import AssistantVariant, ChatSession, InventoryAssistant
from ...models import ChatRole
from ..utils import get_state

AVATARS = {ChatRole.USER: "👤", ChatRole.ASSISTANT: "🤖"}
ROLE_LABELS = {ChatRole.USER: "Tú", ChatRole.ASSISTANT: "Asistente"}


def get_chat_session(key: str, variant: AssistantVariant) -> ChatSession:
    """The session's transcript for one widget, created with its greeting."""
    return get_state(key, lambda: ChatSession(InventoryAssistant(variant=variant)))


def render_transcript(chat: ChatSession) -> None:
    for message in chat.messages:
        with st.chat_message(message.role.value, avatar=AVATARS[message.role]):
            st.caption(ROLE_LABELS[message.role].upper())
            st.markdown(message.content)


def send_message(chat: ChatSession, text: str) -> None:
    with st.spinner("Pensando..."):
        chat.send(text)
