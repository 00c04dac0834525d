from __future__ import annotations

from typing import Any, Dict, List

import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from wealthpath.core.config import SETTINGS
from wealthpath.utils.amount_codec import format_amount


def _badge(text: str, kind: str = "info") -> None:
    """Small colored badge using HTML."""
    color = {
        "ok": "#0f9d58",
        "warn": "#f4b400",
        "bad": "#db4437",
        "info": "#4285f4",
    }.get(kind, "#4285f4")
    st.markdown(
        f"""
        <span style="display:inline-block;padding:2px 10px;border-radius:999px;font-size:12px;background:{color};color:white;">
          {text}
        </span>
        """,
        unsafe_allow_html=True,
    )


def _fmt(x: Any, *, compact: bool = True) -> str:
    return format_amount(x, compact=compact, symbol=SETTINGS.currency_symbol)


def rows_frame(rows: List[Dict[str, Any]]) -> pd.DataFrame:
    """Projection rows -> display table with compact amounts."""
    df = pd.DataFrame(rows)
    if df.empty:
        return df
    money_cols = {
        "investment_value": "Investment value",
        "monthly_contribution": "Monthly SIP",
        "annual_contribution": "Annual SIP",
        "goals_required": "Goals required",
        "surplus_or_deficit": "Surplus / deficit",
    }
    out = df[["year", "age"]].rename(columns={"year": "Year", "age": "Age"})
    for col, label in money_cols.items():
        out[label] = df[col].map(_fmt)
    return out


def trajectory_figure(rows: List[Dict[str, Any]]) -> go.Figure:
    df = pd.DataFrame(rows)
    fig = go.Figure()
    if df.empty:
        return fig

    fig.add_trace(go.Scatter(x=df["year"], y=df["investment_value"], name="Projected wealth", mode="lines", fill="tozeroy"))
    fig.add_trace(go.Bar(x=df["year"], y=df["goals_required"], name="Goals required"))

    hi = float(max(df["investment_value"].max(), df["goals_required"].max()))
    ticks = [hi * i / 5 for i in range(6)]
    fig.update_layout(
        title="Wealth projection",
        hovermode="x unified",
        yaxis=dict(
            tickmode="array",
            tickvals=ticks,
            ticktext=[
                format_amount(t, compact=True, decimals=SETTINGS.axis_decimals, symbol=SETTINGS.currency_symbol)
                for t in ticks
            ],
        ),
        legend=dict(orientation="h"),
    )
    return fig
