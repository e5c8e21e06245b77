from __future__ import annotations

from typing import Optional
import pandas as pd
import plotly.graph_objects as go


def balance_curve(schedule_df: pd.DataFrame, title: str = "Remaining balance") -> go.Figure:
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(x=schedule_df["period"], y=schedule_df["balance"], mode="lines", name="Balance")
    )
    fig.update_layout(title=title, xaxis_title="Month", yaxis_title="$")
    return fig


def payment_breakdown_bars(yearly_df: pd.DataFrame, title: str = "Principal vs interest per year") -> go.Figure:
    fig = go.Figure()
    fig.add_bar(x=yearly_df["year"], y=yearly_df["principal"], name="Principal")
    fig.add_bar(x=yearly_df["year"], y=yearly_df["interest"], name="Interest")
    fig.update_layout(title=title, barmode="stack", xaxis_title="Year", yaxis_title="$")
    return fig


def cumulative_interest_curve(
    schedule_df: pd.DataFrame,
    baseline_df: Optional[pd.DataFrame] = None,
    title: str = "Cumulative interest",
) -> go.Figure:
    """Cumulative interest paid, optionally against the no-extra-payment baseline."""
    fig = go.Figure()
    fig.add_trace(
        go.Scatter(
            x=schedule_df["period"],
            y=schedule_df["interest"].cumsum(),
            mode="lines",
            name="With extra payment" if baseline_df is not None else "Interest",
        )
    )
    if baseline_df is not None:
        fig.add_trace(
            go.Scatter(
                x=baseline_df["period"],
                y=baseline_df["interest"].cumsum(),
                mode="lines",
                name="Without extra payment",
            )
        )
    fig.update_layout(title=title, xaxis_title="Month", yaxis_title="$")
    return fig
