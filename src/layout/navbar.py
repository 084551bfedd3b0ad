"""
src/layout/navbar.py
─────────────────────
Navigation bar with page links, data-source marker and model status.
"""

import dash_bootstrap_components as dbc
from dash import html

from src.layout.theme import BRAND, ML_ACCENT, NAV_BG


def create_navbar() -> dbc.Navbar:
    return dbc.Navbar(
        dbc.Container(
            [
                dbc.NavbarBrand(
                    [
                        html.Span("🏗", style={"marginRight": "8px", "fontSize": "1.1rem"}),
                        html.Span("Fleet Monitor", style={"fontWeight": "700", "letterSpacing": ".04em"}),
                    ],
                    href="/",
                    style={"color": BRAND, "textDecoration": "none"},
                ),
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        [
                            dbc.NavItem(dbc.NavLink("Overview", href="/", id="nav-overview", active="exact")),
                            dbc.NavItem(dbc.NavLink("Equipment", href="/equipment", id="nav-equipment", active="exact")),
                            dbc.NavItem(dbc.NavLink("Model", href="/model", id="nav-model", active="exact")),
                            dbc.NavItem(
                                html.Div(
                                    [
                                        html.Span(id="navbar-source-badge", style=_pill_style("#6B7280")),
                                        html.Span(id="navbar-model-badge", style=_pill_style(ML_ACCENT)),
                                    ],
                                    style={"display": "flex", "gap": "6px", "alignItems": "center", "marginLeft": "12px"},
                                )
                            ),
                        ],
                        className="ms-auto",
                        navbar=True,
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"padding": ".5rem 1rem"},
    )


def _pill_style(color: str) -> dict:
    return {
        "border": f"1px solid {color}",
        "color": color,
        "borderRadius": "9999px",
        "fontSize": ".68rem",
        "fontWeight": "700",
        "padding": "2px 10px",
        "whiteSpace": "nowrap",
    }


def source_badge(connection_status: str) -> tuple[str, dict]:
    """Label and style for the data-source pill."""
    if connection_status == "connected":
        return "Live Data", _pill_style("#16A34A")
    if connection_status == "error":
        return "Demo Data (store unavailable)", _pill_style("#DC2626")
    return "Demo Data", _pill_style("#CA8A04")


def model_badge(model_ready: bool, training: bool) -> tuple[str, dict]:
    if training:
        return "ML Training…", _pill_style("#CA8A04")
    if model_ready:
        return "ML Active", _pill_style(ML_ACCENT)
    return "ML Untrained", _pill_style("#9CA3AF")
