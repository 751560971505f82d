"""
Notification service.

Reads the ``notifications`` table, marks rows as read, computes the
low-stock list, and follows the table's realtime INSERT stream.

The realtime channel needs the async Supabase client, so
``NotificationFeed`` runs it on its own event loop in a daemon thread and
hands new rows to the Streamlit script through a queue.
"""

import asyncio
import logging
import queue
import threading
from typing import Any, Callable, Dict, List, Optional

import pydantic

from ..core.constants import LOW_STOCK_THRESHOLD, NOTIFICATIONS_TABLE, PRODUCTS_TABLE
from ..core.exceptions import ErrorCode, ManuShopError
from ..db.client import execute, get_async_supabase_client, get_supabase_client
from ..models import Notification, Product

logger = logging.getLogger(__name__)

REALTIME_CHANNEL = "notifications"


class NotificationService:
    """Reads and updates notifications."""

    def __init__(self, client=None):
        self.client = client or get_supabase_client()

    def list_notifications(self) -> List[Notification]:
        """All notifications, newest first."""
        rows = execute(
            self.client.table(NOTIFICATIONS_TABLE).select("*").order("created_at", desc=True),
            NOTIFICATIONS_TABLE, "select"
        )
        return [Notification.model_validate(row) for row in rows]

    def low_stock_products(self, threshold: int = LOW_STOCK_THRESHOLD) -> List[Product]:
        """Products whose stock is strictly below ``threshold``."""
        rows = execute(
            self.client.table(PRODUCTS_TABLE)
            .select("id, name, stock_quantity")
            .lt("stock_quantity", threshold),
            PRODUCTS_TABLE, "select"
        )
        return [Product.model_validate(row) for row in rows]

    def mark_as_read(self, notification_id: str,
                     notifications: List[Notification]) -> List[Notification]:
        """Flag a notification as read and return the updated local list."""
        execute(
            self.client.table(NOTIFICATIONS_TABLE).update({"is_read": True}).eq("id", notification_id),
            NOTIFICATIONS_TABLE, "update"
        )
        return [
            n.model_copy(update={"is_read": True}) if n.id == notification_id else n
            for n in notifications
        ]


def merge_new(existing: List[Notification], incoming: List[Notification]) -> List[Notification]:
    """Prepend newly received notifications (arrival order) to a newest-first list."""
    known = {n.id for n in existing}
    fresh = [n for n in reversed(incoming) if n.id not in known]
    return fresh + existing


def _extract_record(payload: Any) -> Optional[Dict[str, Any]]:
    """Pull the inserted row out of a postgres_changes payload."""
    if not isinstance(payload, dict):
        return None
    data = payload.get("data")
    if isinstance(data, dict) and isinstance(data.get("record"), dict):
        return data["record"]
    for key in ("record", "new"):
        if isinstance(payload.get(key), dict):
            return payload[key]
    return None


class NotificationFeed:
    """Live INSERT stream of the notifications table."""

    def __init__(self, client_factory: Callable = get_async_supabase_client):
        self._client_factory = client_factory
        self._queue: "queue.Queue[Notification]" = queue.Queue()
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._channel = None
        self._ready = threading.Event()
        self.error: Optional[Exception] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, timeout: float = 10.0) -> bool:
        """Subscribe in the background; returns True once the channel is up."""
        if self._thread is not None:
            return self.error is None

        self._ready.clear()
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run, name="notification-feed", daemon=True)
        self._thread.start()
        self._ready.wait(timeout)
        return self._ready.is_set() and self.error is None

    def _run(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._subscribe())
        except Exception as e:
            self.error = ManuShopError(
                f"Realtime subscription failed: {e}",
                error_code=ErrorCode.REALTIME_ERROR,
                original_exception=e
            )
            self._ready.set()
            self._loop.close()
            return

        logger.info("Subscribed to notification inserts")
        # ready only once the loop is running, so stop() can schedule on it
        self._loop.call_soon(self._ready.set)
        self._loop.run_forever()
        self._loop.close()

    async def _subscribe(self) -> None:
        client = await self._client_factory()
        channel = client.channel(REALTIME_CHANNEL)
        channel.on_postgres_changes(
            "INSERT",
            schema="public",
            table=NOTIFICATIONS_TABLE,
            callback=self._on_insert
        )
        await channel.subscribe()
        self._channel = channel

    def _on_insert(self, payload: Any) -> None:
        record = _extract_record(payload)
        if record is None:
            logger.warning(f"Unrecognized realtime payload: {payload!r}")
            return
        try:
            self._queue.put(Notification.model_validate(record))
        except pydantic.ValidationError as e:
            logger.warning(f"Dropping malformed notification {record!r}: {e}")

    def drain(self) -> List[Notification]:
        """Notifications received since the last call, in arrival order."""
        items = []
        while True:
            try:
                items.append(self._queue.get_nowait())
            except queue.Empty:
                return items

    def stop(self, timeout: float = 5.0) -> None:
        """Unsubscribe and shut the background loop down."""
        if self._thread is None:
            return

        loop = self._loop
        if self._channel is not None and loop.is_running():
            future = asyncio.run_coroutine_threadsafe(self._channel.unsubscribe(), loop)
            try:
                future.result(timeout)
            except Exception as e:
                logger.warning(f"Error unsubscribing from notifications: {e}")
        if loop.is_running():
            loop.call_soon_threadsafe(loop.stop)
        self._thread.join(timeout)

        self._thread = None
        self._channel = None
        logger.info("Notification feed stopped")
