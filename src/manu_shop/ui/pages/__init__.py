"""
Page renderers, keyed by the page names used in navigation.
"""

from . import ai_assistant, dashboard, inventory, notifications, sales

PAGE_RENDERERS = {
    "dashboard": dashboard.render,
    "sales": sales.render,
    "inventory": inventory.render,
    "notifications": notifications.render,
    "ai_assistant": ai_assistant.render,
}

__all__ = ['PAGE_RENDERERS']
