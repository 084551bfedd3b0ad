"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Location for routing
  - dcc.Store for the selected unit and the last prediction refresh
  - dcc.Interval driving prediction refresh
  - Navbar + page content container
"""
from dash import dcc, html

from config.equipment import EQUIPMENT_IDS
from config.settings import settings
from src.layout.navbar import create_navbar
from src.layout.theme import BORDER, MUTED, PAGE_BG, TEXT


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Client-side state stores ──────────────────────────────────────
            dcc.Store(id="store-equipment", data=EQUIPMENT_IDS[0]),
            dcc.Store(id="store-refreshed"),  # ISO time of the last prediction refresh

            # ── Routing ───────────────────────────────────────────────────────
            dcc.Location(id="url", refresh=False),

            # ── Prediction refresh interval ───────────────────────────────────
            dcc.Interval(id="interval-live", interval=settings.UPDATE_INTERVAL_MS, n_intervals=0),

            create_navbar(),

            html.Div(id="page-content", style={"minHeight": "calc(100vh - 60px)"}),

            html.Footer(
                [
                    html.Span("Fleet IoT Monitor"),
                    html.Span(" · "),
                    html.Span("Predictive maintenance for construction equipment"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": MUTED,
                    "borderTop": f"1px solid {BORDER}",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": PAGE_BG, "minHeight": "100vh", "color": TEXT},
    )
