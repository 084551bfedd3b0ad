"""
src/layout/components/kpi_card.py
──────────────────────────────────
Fleet KPI tiles.
"""
from dash import html

from src.layout.theme import BORDER, CARD_STYLE, LABEL_STYLE, MUTED, TEXT


def kpi_card(
    label: str,
    value: str,
    color: str = TEXT,
    sub_label: str = "",
    border_color: str = BORDER,
) -> html.Div:
    """
    Metric tile: label on top, large value, optional caption.

    Args:
        label: Metric name
        value: Pre-formatted value
        color: Value color (reflects status)
        sub_label: Caption under the value
        border_color: Left accent stripe color
    """
    children = [
        html.Div(label, style=LABEL_STYLE),
        html.Div(value, style={"fontSize": "1.6rem", "fontWeight": "700", "color": color, "lineHeight": "1.2"}),
    ]
    if sub_label:
        children.append(html.Div(sub_label, style={"fontSize": ".72rem", "color": MUTED, "marginTop": "2px"}))

    return html.Div(children, style={**CARD_STYLE, "borderLeft": f"4px solid {border_color}"})


def sensor_stat(label: str, value: str, color: str = TEXT) -> html.Div:
    """Inline sensor value used in prediction rows and unit details."""
    return html.Div([
        html.Div(label, style={"fontSize": ".65rem", "color": MUTED}),
        html.Div(value, style={"fontSize": ".9rem", "fontWeight": "600", "color": color}),
    ])
