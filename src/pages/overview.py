"""
src/pages/overview.py
──────────────────────
Fleet overview page.

Static structure; KPIs, predictions and the priority alert feed are
injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import html

from config.alerts import ALERT_FILTERS
from src.layout.theme import CARD_STYLE, card_title

_FILTER_LABELS = {"all": "All", "critical": "Critical", "high": "High", "medium": "Medium", "ai": "AI", "sensor": "Sensor"}


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Fleet Overview", className="page-title"),
                    html.P(
                        "AI failure-risk predictions across all monitored construction equipment",
                        className="page-subtitle",
                    ),
                    html.Div(id="overview-updated", style={"fontSize": ".75rem"}),
                ],
                className="page-header mb-3",
            ),
            # ── Fleet KPI banner (dynamic) ────────────────────────────────────
            html.Div(id="overview-kpi-banner", className="mb-4"),
            # ── Predictions + priority alerts ─────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [card_title("AI Predictions"), html.Div(id="overview-predictions")],
                            style=CARD_STYLE,
                        ),
                        md=8,
                    ),
                    dbc.Col(
                        html.Div(
                            [
                                card_title("Priority Alerts"),
                                dbc.RadioItems(
                                    id="overview-alert-filter",
                                    options=[{"label": _FILTER_LABELS[k], "value": k} for k in ALERT_FILTERS],
                                    value="all",
                                    inline=True,
                                    className="mb-2",
                                    style={"fontSize": ".75rem"},
                                ),
                                html.Div(id="overview-alerts"),
                            ],
                            style=CARD_STYLE,
                        ),
                        md=4,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
