"""
src/pages/equipment.py
───────────────────────
Equipment detail page.

Layout: sidebar selector + detail panel (unit details, risk gauge,
root-cause diagnosis, 24 h sensor trends).
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from src.layout.sidebar import create_sidebar
from src.layout.theme import CARD_STYLE, card_title
from src.state import get_state

_CHARTS = [
    ("eq-chart-temperature", "Temperature (°F)"),
    ("eq-chart-vibration", "Vibration (g)"),
    ("eq-chart-pressure", "Pressure (PSI)"),
    ("eq-chart-current", "Current (A)"),
]


def _chart_card(chart_id: str, title: str) -> html.Div:
    return html.Div(
        [card_title(title), dcc.Graph(id=chart_id, config={"displayModeBar": False})],
        style=CARD_STYLE,
    )


def layout(selected: str | None = None) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Equipment Detail", className="page-title"),
                    html.P("Failure risk, root-cause diagnosis and recent sensor trends", className="page-subtitle"),
                ],
                className="page-header mb-3",
            ),

            dbc.Row(
                [
                    # ── Sidebar ───────────────────────────────────────────────
                    dbc.Col(create_sidebar(get_state().fleet(), selected), md=3),

                    # ── Main detail panel ─────────────────────────────────────
                    dbc.Col(
                        [
                            dbc.Row(
                                [
                                    dbc.Col(html.Div(id="eq-details", style=CARD_STYLE), md=7),
                                    dbc.Col(
                                        html.Div([card_title("Failure Risk"), html.Div(id="eq-risk-gauge")], style=CARD_STYLE),
                                        md=5,
                                    ),
                                ],
                                className="g-3 mb-3",
                            ),
                            html.Div(
                                [card_title("Root-Cause Diagnosis"), html.Div(id="eq-diagnosis")],
                                style=CARD_STYLE,
                                className="mb-3",
                            ),
                            dbc.Row(
                                [dbc.Col(_chart_card(chart_id, title), md=6) for chart_id, title in _CHARTS],
                                className="g-3",
                            ),
                        ],
                        md=9,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
