"""Plotly visualisation helpers for the expense tracker.

Each function takes data produced by the view builder and returns a
``plotly.graph_objects.Figure`` that Streamlit renders via
``st.plotly_chart``.
"""

from __future__ import annotations

from typing import Sequence, Tuple

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

try:
    from .models import ExpenseRecord
except ImportError:  # pragma: no cover - fallback for direct execution
    from models import ExpenseRecord

BAR_COLOUR = "rgba(6,182,212,0.9)"


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        title=message,
        xaxis={'visible': False},
        yaxis={'visible': False},
    )
    return fig


def create_monthly_bar_chart(series: Sequence[Tuple[str, float]], title: str | None = None) -> go.Figure:
    """Bar chart of monthly spend.

    Parameters
    ----------
    series : sequence of (str, float)
        ``(YYYY-MM, total)`` pairs in ascending month order, as found on
        :attr:`ExpenseView.series`.
    title : str, optional
        Chart title.

    Returns
    -------
    plotly.graph_objects.Figure
        One bar per month, or an empty figure reading "No data yet".
    """
    if not series:
        return _empty_figure("No data yet")
    df = pd.DataFrame(list(series), columns=["Month", "Total"])
    fig = px.bar(df, x="Month", y="Total")
    fig.update_traces(marker_color=BAR_COLOUR)
    fig.update_layout(
        title=title or "Monthly spending",
        xaxis_title="Month",
        yaxis_title="Total",
        xaxis={'type': 'category'},
    )
    return fig


def create_category_pie_chart(records: Sequence[ExpenseRecord], title: str | None = None) -> go.Figure:
    """Share of spend per category for the given (usually filtered) records."""
    if not records:
        return _empty_figure("No data to display")
    df = pd.DataFrame({
        "Category": [r.category for r in records],
        "Amount": [r.amount for r in records],
    })
    totals = df.groupby("Category", sort=True)["Amount"].sum().reset_index()
    fig = px.pie(totals, names="Category", values="Amount")
    fig.update_layout(title=title or "Spending by category")
    return fig
