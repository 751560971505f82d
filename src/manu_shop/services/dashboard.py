"""
Dashboard statistics.

Sale totals are aggregated client-side from the ``sales`` rows into daily,
monthly and yearly buckets. All comparisons are made in UTC.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

import pandas as pd

from ..core.constants import LIVE_REVENUE_LABEL, MONTH_LABELS, PLACEHOLDER_REVENUE, SALES_TABLE
from ..db.client import execute, get_supabase_client

logger = logging.getLogger(__name__)


@dataclass
class SalesStats:
    daily: float = 0.0
    monthly: float = 0.0
    yearly: float = 0.0
    previous_day: float = 0.0


def _as_utc(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc)


def sales_frame(sales: List[Dict[str, Any]]) -> pd.DataFrame:
    """
    Normalize sale rows into a DataFrame with ``amount`` and ``sale_date``.

    Non-numeric amounts count as 0; rows without a parseable date are dropped.
    """
    if not sales:
        return pd.DataFrame({"amount": pd.Series(dtype="float64"),
                             "sale_date": pd.Series(dtype="datetime64[ns, UTC]")})

    df = pd.DataFrame(sales)
    df["amount"] = pd.to_numeric(df["total_amount"], errors="coerce").fillna(0.0)
    df["sale_date"] = pd.to_datetime(df["sale_date"], utc=True, errors="coerce", format="ISO8601")
    dropped = int(df["sale_date"].isna().sum())
    if dropped:
        logger.warning(f"Ignoring {dropped} sales without a valid sale_date")
    return df.dropna(subset=["sale_date"])[["amount", "sale_date"]]


def compute_sales_stats(sales: List[Dict[str, Any]], now: Optional[datetime] = None) -> SalesStats:
    """
    Aggregate sale totals.

    Args:
        sales: Rows with ``total_amount`` and ``sale_date`` (ISO string)
        now: Reference time; defaults to the current UTC time

    Returns:
        Totals for today, the current month and year, and for yesterday
    """
    now = _as_utc(now)
    df = sales_frame(sales)
    if df.empty:
        return SalesStats()

    today = now.date()
    yesterday = today - timedelta(days=1)
    start_of_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    start_of_year = start_of_month.replace(month=1)

    sale_days = df["sale_date"].dt.date
    return SalesStats(
        daily=float(df.loc[sale_days == today, "amount"].sum()),
        monthly=float(df.loc[df["sale_date"] >= start_of_month, "amount"].sum()),
        yearly=float(df.loc[df["sale_date"] >= start_of_year, "amount"].sum()),
        previous_day=float(df.loc[sale_days == yesterday, "amount"].sum()),
    )


def day_over_day_change(stats: SalesStats) -> Optional[float]:
    """Percent change of today's total against yesterday's; None without a base."""
    if not stats.previous_day:
        return None
    return (stats.daily - stats.previous_day) / stats.previous_day * 100


def revenue_chart_data(stats: SalesStats) -> pd.DataFrame:
    """Static months plus a live point for the current monthly total."""
    rows = list(PLACEHOLDER_REVENUE) + [{"name": LIVE_REVENUE_LABEL, "sales": stats.monthly}]
    return pd.DataFrame(rows, columns=["name", "sales"])


def monthly_revenue(sales: List[Dict[str, Any]], now: Optional[datetime] = None) -> pd.DataFrame:
    """Real per-month totals for the current year, January through the current month."""
    now = _as_utc(now)
    df = sales_frame(sales)
    df = df[df["sale_date"].dt.year == now.year]
    totals = df.groupby(df["sale_date"].dt.month)["amount"].sum()
    return pd.DataFrame({
        "name": MONTH_LABELS[:now.month],
        "sales": [float(totals.get(month, 0.0)) for month in range(1, now.month + 1)],
    })


class DashboardService:
    """Reads the sale rows the dashboard aggregates."""

    def __init__(self, client=None):
        self.client = client or get_supabase_client()

    def fetch_sales(self) -> List[Dict[str, Any]]:
        return execute(
            self.client.table(SALES_TABLE).select("total_amount, sale_date"),
            SALES_TABLE, "select"
        )
