"""
UI component modules.
"""

from .chat_interface import get_chat_session, render_transcript
from .floating_assistant import render_floating_assistant
from .sidebar import render_sidebar

__all__ = [
    'get_chat_session',
    'render_transcript',
    'render_floating_assistant',
    'render_sidebar'
]
