"""
Centralized constants for Manu-shop.
"""
from typing import Dict, List

# Inventory
LOW_STOCK_THRESHOLD = 5  # quantity strictly below this is low stock

# BaaS tables
PRODUCTS_TABLE = "products"
SALES_TABLE = "sales"
SALE_ITEMS_TABLE = "sale_items"
NOTIFICATIONS_TABLE = "notifications"

# Navigation (label -> page key)
APP_NAME = "Manu-shop"
PAGES: Dict[str, str] = {
    "Panel de Control": "dashboard",
    "Ventas y POS": "sales",
    "Inventario": "inventory",
    "Notificaciones": "notifications",
    "Asistente IA": "ai_assistant",
}
DEFAULT_PAGE = "Panel de Control"

# Revenue chart: static months with a live point appended for the current month
PLACEHOLDER_REVENUE: List[Dict[str, float]] = [
    {"name": "Jan", "sales": 4000},
    {"name": "Feb", "sales": 3000},
    {"name": "Mar", "sales": 2000},
    {"name": "Apr", "sales": 2780},
    {"name": "May", "sales": 1890},
]
LIVE_REVENUE_LABEL = "Jun"
MONTH_LABELS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun",
                "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]

# Assistant
ASSISTANT_GREETING = (
    '¡Hola! Puedo ayudarte a encontrar componentes para tus proyectos. '
    'Intenta preguntar algo como "Quiero construir una red local" o '
    '"Necesito arreglar una lámpara".'
)
FLOATING_ASSISTANT_GREETING = (
    "¡Hola! Soy tu asistente de Manu-Shop. ¿En qué te puedo ayudar hoy? "
    "Puedo verificar tu stock y recomendarte componentes para tus proyectos."
)
EMPTY_INVENTORY_CONTEXT = "No hay productos en el inventario."
ASSISTANT_FALLBACK_REPLY = "Lo siento, no pude procesar tu solicitud."
ASSISTANT_ERROR_TEMPLATE = "Error: {message}. (Verifica tu API Key)"
UNKNOWN_ERROR_MESSAGE = "Error desconocido"

# User-facing messages
MSG_SALE_COMPLETED = "¡Venta completada exitosamente!"
MSG_SALE_FAILED = "Error al procesar la venta"
MSG_EMPTY_CART = "El carrito está vacío"
MSG_NO_NOTIFICATIONS = "No hay notificaciones"

# Streamlit Settings
PAGE_CONFIG = {
    'page_title': 'Manu-shop',
    'page_icon': '⚡',
    'layout': 'wide',
    'initial_sidebar_state': 'expanded'
}
