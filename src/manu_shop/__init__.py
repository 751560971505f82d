"""
Manu-shop package.

Inventory, point of sale, sales dashboard, notifications and an inventory
assistant on top of a hosted Supabase database.
"""

__version__ = "0.1.0"
