"""
Access to the hosted database (Supabase).

Every read and write in the application goes through a query built on the
generated Supabase client; ``execute`` runs it and normalizes failures
into ``DatabaseError``.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List

from supabase import AsyncClient, Client, acreate_client, create_client

from ..core.config import get_settings
from ..core.exceptions import ConfigurationError, DatabaseError, ErrorCode

logger = logging.getLogger(__name__)


def _credentials() -> tuple:
    supabase_settings = get_settings().supabase
    if not supabase_settings.is_configured:
        raise ConfigurationError(
            "SUPABASE_URL and SUPABASE_KEY must be set",
            error_code=ErrorCode.MISSING_CREDENTIALS
        )
    return supabase_settings.url, supabase_settings.key.get_secret_value()


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    """Return the process-wide Supabase client."""
    url, key = _credentials()
    try:
        client = create_client(url, key)
    except Exception as e:
        raise ConfigurationError(
            f"Supabase connection failed: {e}",
            original_exception=e
        )
    logger.info(f"Supabase client created for {url}")
    return client


async def get_async_supabase_client() -> AsyncClient:
    """Create an async Supabase client (needed for realtime channels)."""
    url, key = _credentials()
    return await acreate_client(url, key)


def execute(query: Any, table: str, operation: str) -> List[Dict[str, Any]]:
    """
    Run a built query and return its rows.

    Args:
        query: A Supabase request builder (``client.table(...).select(...)``)
        table: Table name, for error context
        operation: ``select``, ``insert``, ``update`` or ``delete``

    Returns:
        The list of rows returned by the backend (may be empty)

    Raises:
        DatabaseError: If the request fails
    """
    try:
        response = query.execute()
    except Exception as e:
        raise DatabaseError(
            f"{operation} on {table} failed: {e}",
            original_exception=e,
            table=table,
            operation=operation
        )

    data = getattr(response, "data", None)
    logger.debug(f"{operation} on {table} returned {len(data or [])} rows")
    return data or []
