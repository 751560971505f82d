"""
Hosted database access.
"""

from .client import execute, get_async_supabase_client, get_supabase_client

__all__ = [
    'execute',
    'get_async_supabase_client',
    'get_supabase_client'
]
