"""
Shared styles for the Manu-shop UI.

Only the few classes the pages emit through ``st.markdown`` live here;
everything else uses Streamlit's dark theme.
"""

import streamlit as st

COMMON_CSS = """
<style>
    .badge {
        display: inline-block;
        padding: 0.15rem 0.6rem;
        border-radius: 9999px;
        background: rgba(148, 163, 184, 0.15);
        font-size: 0.85rem;
    }
    .badge-low-stock {
        background: rgba(249, 115, 22, 0.2);
        color: #fdba74;
    }
    .alert-card {
        border-left: 4px solid #f97316;
        background: rgba(249, 115, 22, 0.1);
        padding: 0.75rem 1rem;
        border-radius: 0.5rem;
        margin-bottom: 0.75rem;
    }
    .notification-card {
        padding: 0.75rem 1rem;
        border-radius: 0.5rem;
        margin-bottom: 0.5rem;
        background: rgba(30, 41, 59, 0.6);
    }
    .notification-unread {
        border-left: 4px solid #3b82f6;
        font-weight: 600;
    }
    .notification-read {
        opacity: 0.5;
    }
    .price {
        font-family: monospace;
        color: #60a5fa;
    }
</style>
"""

LOW_STOCK_BADGE_HTML = '<span class="badge {css_class}">{label}</span>'

LOW_STOCK_ALERT_HTML = """
<div class="alert-card">
    <p><strong>⚠️ Alerta de Stock Bajo</strong></p>
    <p>El producto <strong>{name}</strong> tiene pocas existencias ({stock} restantes).</p>
    <small>Acción sugerida: Reabastecer pronto.</small>
</div>
"""

NOTIFICATION_HTML = """
<div class="notification-card {css_class}">
    <p>{message}</p>
    <small>{timestamp}</small>
</div>
"""


def inject_styles() -> None:
    st.markdown(COMMON_CSS, unsafe_allow_html=True)
