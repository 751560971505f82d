"""
Notifications page: low-stock alerts and the live notifications list.
"""

import html
import logging
from typing import Callable, List, Optional

import streamlit as st

from ...core.config import SessionKeys, get_settings
from ...core.constants import MSG_NO_NOTIFICATIONS
from ...core.exceptions import ManuShopError
from ...models import Notification, Product
from ...services.notifications import NotificationFeed, NotificationService, merge_new
from ..styles import LOW_STOCK_ALERT_HTML, NOTIFICATION_HTML

logger = logging.getLogger(__name__)

REFRESH_SECONDS = 5


def get_feed(feed_factory: Callable[[], NotificationFeed] = NotificationFeed) -> NotificationFeed:
    """The session's realtime feed, started on first use."""
    feed = st.session_state.get(SessionKeys.NOTIFICATION_FEED)
    if feed is None:
        feed = feed_factory()
        if not feed.start():
            logger.warning(f"Live notifications unavailable: {feed.error}")
        st.session_state[SessionKeys.NOTIFICATION_FEED] = feed
    return feed


def leave_page() -> None:
    """Stop the session's feed and drop the cached list; the next visit starts fresh."""
    feed = st.session_state.pop(SessionKeys.NOTIFICATION_FEED, None)
    if feed is not None:
        feed.stop()
    st.session_state.pop(SessionKeys.NOTIFICATIONS, None)


def load_notifications(service: NotificationService, refresh: bool = False) -> List[Notification]:
    """The session's list, read from the database on first use or when ``refresh`` is set."""
    if refresh or SessionKeys.NOTIFICATIONS not in st.session_state:
        st.session_state[SessionKeys.NOTIFICATIONS] = service.list_notifications()
    return st.session_state[SessionKeys.NOTIFICATIONS]


def apply_feed(feed: NotificationFeed) -> List[Notification]:
    """Prepend anything the feed received since the last run."""
    notifications = st.session_state.get(SessionKeys.NOTIFICATIONS, [])
    incoming = feed.drain()
    if incoming:
        notifications = merge_new(notifications, incoming)
        st.session_state[SessionKeys.NOTIFICATIONS] = notifications
    return notifications


def mark_as_read(service: NotificationService, notification_id: str) -> None:
    notifications = st.session_state.get(SessionKeys.NOTIFICATIONS, [])
    try:
        st.session_state[SessionKeys.NOTIFICATIONS] = service.mark_as_read(notification_id, notifications)
    except ManuShopError as e:
        st.error(f"No se pudo marcar como leída: {e.message}")


def render_low_stock(products: List[Product]) -> None:
    for product in products:
        st.markdown(
            LOW_STOCK_ALERT_HTML.format(name=html.escape(product.name), stock=product.stock_quantity),
            unsafe_allow_html=True
        )


def render_notification_list(service: NotificationService, feed: NotificationFeed,
                             low_stock_count: int) -> None:
    notifications = apply_feed(feed)

    if not notifications and not low_stock_count:
        st.caption(MSG_NO_NOTIFICATIONS)
        return

    for notification in notifications:
        text_col, action_col = st.columns([12, 1])
        css_class = "notification-read" if notification.is_read else "notification-unread"
        text_col.markdown(
            NOTIFICATION_HTML.format(
                css_class=css_class,
                message=html.escape(notification.message),
                timestamp=notification.created_at.strftime("%d/%m/%Y %H:%M:%S")
            ),
            unsafe_allow_html=True
        )
        if not notification.is_read:
            if action_col.button("✔️", key=f"read_{notification.id}", help="Marcar como leída"):
                mark_as_read(service, notification.id)
                st.rerun()


def render(service: Optional[NotificationService] = None,
           feed_factory: Callable[[], NotificationFeed] = NotificationFeed) -> None:
    """Render the notifications page."""
    st.header("🔔 Notificaciones del Sistema")

    try:
        service = service or NotificationService()
        feed = get_feed(feed_factory)
        # without the live stream, re-read on every full run
        load_notifications(service, refresh=not feed.is_running)
        low_stock = service.low_stock_products(get_settings().application.low_stock_threshold)
    except ManuShopError as e:
        st.error(f"No se pudieron cargar las notificaciones: {e.message}")
        return

    render_low_stock(low_stock)

    live_list = st.fragment(render_notification_list, run_every=REFRESH_SECONDS if feed.is_running else None)
    live_list(service, feed, len(low_stock))
