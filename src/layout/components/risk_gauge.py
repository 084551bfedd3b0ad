"""
src/layout/components/risk_gauge.py
────────────────────────────────────
Failure-probability gauge using a Plotly indicator.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc

from config.alerts import RISK_COLORS
from config.equipment import RISK_HIGH_PCT, RISK_MEDIUM_PCT
from src.analytics.risk import risk_tier
from src.layout.theme import CARD_BG, MUTED, TEXT


def risk_gauge(probability_pct: float, title: str, height: int = 200) -> dcc.Graph:
    """
    Gauge for a failure probability (0–100 %), banded at the tier cut-offs.

    Args:
        probability_pct: Failure probability in percent
        title: Label shown above the number
        height: Figure height in px
    """
    color = RISK_COLORS[risk_tier(probability_pct).value]

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=probability_pct,
        number={"suffix": "%", "font": {"color": color, "size": 28}},
        title={"text": title, "font": {"color": MUTED, "size": 12}},
        gauge={
            "axis": {"range": [0, 100], "tickwidth": 1, "tickfont": {"color": MUTED, "size": 9}},
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [
                {"range": [0, RISK_MEDIUM_PCT], "color": "rgba(22,163,74,0.12)"},
                {"range": [RISK_MEDIUM_PCT, RISK_HIGH_PCT], "color": "rgba(202,138,4,0.12)"},
                {"range": [RISK_HIGH_PCT, 100], "color": "rgba(220,38,38,0.12)"},
            ],
            "threshold": {"line": {"color": RISK_COLORS["high"], "width": 2}, "thickness": 0.75, "value": RISK_HIGH_PCT},
        },
    ))
    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=20, r=20, t=40, b=20),
        height=height,
        font=dict(color=TEXT),
    )

    return dcc.Graph(figure=fig, config={"displayModeBar": False}, style={"height": f"{height}px"})
