"""Plotly visualisation helpers for the Expense Dashboard.

Each function accepts the output of the corresponding function in
:mod:`analytics` and returns a `plotly.graph_objects.Figure` that
Streamlit can render via ``st.plotly_chart``.  Empty inputs produce an
empty figure titled "No data to display" rather than raising.
"""

from __future__ import annotations

from typing import Sequence

import plotly.express as px
import plotly.graph_objects as go

try:
    from .analytics import periods_to_frame, shares_to_frame
    from .models import CategoryShare, PeriodSummary
except ImportError:
    from analytics import periods_to_frame, shares_to_frame
    from models import CategoryShare, PeriodSummary

INCOME_COLOR = "#2ca02c"
EXPENSE_COLOR = "#d62728"


def _empty_figure() -> go.Figure:
    fig = go.Figure()
    fig.update_layout(title="No data to display")
    return fig


def create_category_pie_chart(shares: Sequence[CategoryShare], title: str | None = None) -> go.Figure:
    """Generate a pie chart of category shares.

    Parameters
    ----------
    shares : sequence of CategoryShare
        Output of :func:`analytics.category_breakdown`.
    title : str, optional
        Title for the chart.

    Returns
    -------
    plotly.graph_objects.Figure
        Pie chart with one slice per category.
    """
    df = shares_to_frame(shares)
    if df.empty or df["Amount"].sum() <= 0:
        return _empty_figure()
    fig = px.pie(
        df,
        names="Category",
        values="Amount",
        color_discrete_sequence=px.colors.qualitative.Set3,
    )
    fig.update_traces(textposition="inside", textinfo="percent+label")
    fig.update_layout(title=title or "Category breakdown")
    return fig


def create_income_expense_bar_chart(income: float, expenses: float, title: str | None = None) -> go.Figure:
    """Side-by-side bars comparing total income with total expenses."""
    fig = go.Figure(
        go.Bar(
            x=["Income", "Expenses"],
            y=[income, expenses],
            marker_color=[INCOME_COLOR, EXPENSE_COLOR],
        )
    )
    fig.update_layout(
        title=title or "Income vs Expenses",
        xaxis_title="",
        yaxis_title="Amount",
    )
    return fig


def create_monthly_trend_chart(periods: Sequence[PeriodSummary], title: str | None = None) -> go.Figure:
    """Bar chart of monthly spending from :func:`analytics.trailing_periods`.

    Income is drawn alongside expenses so the gap reads as the month's net.
    """
    df = periods_to_frame(periods)
    if df.empty:
        return _empty_figure()
    fig = go.Figure()
    fig.add_trace(go.Bar(name="Expenses", x=df["Period"], y=df["Expenses"], marker_color=EXPENSE_COLOR))
    fig.add_trace(go.Bar(name="Income", x=df["Period"], y=df["Income"], marker_color=INCOME_COLOR))
    fig.update_layout(
        title=title or "Monthly spending",
        barmode="group",
        xaxis_title="Month",
        yaxis_title="Amount",
    )
    return fig
