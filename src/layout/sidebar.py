"""
src/layout/sidebar.py
──────────────────────
Equipment selector sidebar (shown on /equipment page).
"""
import dash_bootstrap_components as dbc
from dash import html

from config.equipment import CATEGORY_COLORS
from src.data.models import EquipmentUnit
from src.layout.theme import CARD_STYLE, LABEL_STYLE, MUTED, TEXT


def create_sidebar(units: list[EquipmentUnit], selected: str | None) -> html.Div:
    """Equipment selector listing the monitored fleet, colored by category."""
    options = [
        {
            "label": html.Div(
                [
                    html.Span(
                        unit.name,
                        style={
                            "color": CATEGORY_COLORS.get(unit.category, TEXT),
                            "fontWeight": "600",
                            "fontSize": ".9rem",
                        },
                    ),
                    html.Div(f"{unit.equipment_id} · {unit.site}", style={"fontSize": ".68rem", "color": MUTED}),
                ]
            ),
            "value": unit.equipment_id,
        }
        for unit in units
    ]
    ids = [unit.equipment_id for unit in units]
    value = selected if selected in ids else (ids[0] if ids else None)

    return html.Div(
        [
            html.Div("Equipment", style={**LABEL_STYLE, "marginBottom": "8px"}),
            dbc.RadioItems(
                id="equipment-selector",
                options=options,
                value=value,
                inputStyle={"marginRight": "8px"},
                labelStyle={"cursor": "pointer", "marginBottom": "8px"},
                style={"display": "flex", "flexDirection": "column", "gap": "4px"},
            ),
        ],
        style={**CARD_STYLE, "minWidth": "180px"},
    )
