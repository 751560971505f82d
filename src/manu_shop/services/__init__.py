"""
Service layer between the Streamlit pages and the hosted database.
"""

from .dashboard import DashboardService, SalesStats, compute_sales_stats
from .inventory import InventoryService, ProductForm
from .notifications import NotificationFeed, NotificationService
from .sales import Cart, SalesService

__all__ = [
    'DashboardService',
    'SalesStats',
    'compute_sales_stats',
    'InventoryService',
    'ProductForm',
    'NotificationFeed',
    'NotificationService',
    'Cart',
    'SalesService'
]
