"""
Dashboard page: sales totals and the revenue chart.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go
import streamlit as st

from ...core.config import get_settings
from ...core.exceptions import ManuShopError
from ...services.dashboard import (
    DashboardService,
    SalesStats,
    compute_sales_stats,
    day_over_day_change,
    monthly_revenue,
    revenue_chart_data,
)
from ..utils import format_currency

logger = logging.getLogger(__name__)


def load_stats(service: Optional[DashboardService] = None,
               now: Optional[datetime] = None) -> Tuple[SalesStats, List[Dict[str, Any]]]:
    """Fetch sales and aggregate them; zero totals when the fetch fails."""
    try:
        service = service or DashboardService()
        sales = service.fetch_sales()
    except ManuShopError as e:
        logger.error(f"Error fetching stats: {e.message}")
        return SalesStats(), []
    return compute_sales_stats(sales, now), sales


def build_revenue_figure(data: pd.DataFrame) -> go.Figure:
    fig = px.bar(data, x="name", y="sales", labels={"name": "", "sales": "Ventas"})
    fig.update_traces(marker_color="#3b82f6")
    fig.update_layout(
        height=400,
        margin=dict(l=20, r=20, t=20, b=20),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    fig.update_yaxes(gridcolor="rgba(255,255,255,0.1)")
    return fig


def render(service: Optional[DashboardService] = None) -> None:
    """Render the dashboard."""
    st.header("Panel de Control")

    with st.spinner("Cargando ventas..."):
        stats, sales = load_stats(service)

    change = day_over_day_change(stats)
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric(
            "Ventas Diarias",
            format_currency(stats.daily),
            f"{change:+.0f}% desde ayer" if change is not None else None
        )
    with col2:
        st.metric("Ventas Mensuales", format_currency(stats.monthly))
    with col3:
        st.metric("Ventas Anuales", format_currency(stats.yearly))

    st.subheader("Resumen de Ingresos")
    if get_settings().application.dashboard_live_history:
        data = monthly_revenue(sales)
    else:
        data = revenue_chart_data(stats)
    st.plotly_chart(build_revenue_figure(data), use_container_width=True)
