"""
Manu-shop inventory assistant.

Example:
    >>> from manu_shop.llm import InventoryAssistant, ChatSession
    >>> chat = ChatSession(InventoryAssistant())
    >>> chat.send("Quiero construir una red local")
"""

from .assistant import ChatSession, InventoryAssistant
from .prompts import AssistantVariant, build_inventory_context, build_system_prompt

__all__ = [
    'ChatSession',
    'InventoryAssistant',
    'AssistantVariant',
    'build_inventory_context',
    'build_system_prompt'
]
