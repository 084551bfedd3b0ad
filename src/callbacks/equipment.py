"""
src/callbacks/equipment.py
───────────────────────────
Equipment detail page callbacks.
Updates details, risk gauge, diagnosis and trend charts for the selected unit.
"""
from __future__ import annotations

import pandas as pd
import plotly.graph_objects as go
from dash import Input, Output, html

from config.alerts import SEVERITY_COLORS, IssueSeverity
from config.equipment import CATEGORY_COLORS, DIAGNOSTIC_THRESHOLDS
from src.analytics.diagnosis import group_by_severity
from src.data.models import EquipmentStatus, EquipmentUnit
from src.layout.components.kpi_card import sensor_stat
from src.layout.components.risk_gauge import risk_gauge
from src.layout.components.severity_badge import issue_card
from src.layout.theme import ACCENT, BORDER, CARD_BG, LABEL_STYLE, MUTED, TEXT
from src.state import get_state

_STATUS_COLORS = {
    EquipmentStatus.OPERATIONAL: "#16A34A",
    EquipmentStatus.MAINTENANCE: "#CA8A04",
    EquipmentStatus.CRITICAL: "#DC2626",
    EquipmentStatus.OFFLINE: "#6B7280",
}

_GROUP_TITLES = {
    IssueSeverity.CRITICAL: "Critical Issues",
    IssueSeverity.WARNING: "Warnings",
    IssueSeverity.INFO: "Information",
}


def _base_layout(title: str = "") -> dict:
    return {
        "template": "plotly_white",
        "paper_bgcolor": CARD_BG,
        "plot_bgcolor": CARD_BG,
        "margin": {"l": 10, "r": 10, "t": 30, "b": 10},
        "font": {"color": TEXT, "size": 11},
        "title": {"text": title, "font": {"size": 12, "color": MUTED}},
        "xaxis": {"gridcolor": BORDER, "showgrid": True},
        "yaxis": {"gridcolor": BORDER, "showgrid": True},
        "showlegend": False,
        "height": 220,
    }


def _limit_lines(col: str) -> list[tuple[float, str, str]]:
    """(value, label, color) threshold lines for a sensor channel."""
    thr = DIAGNOSTIC_THRESHOLDS
    warn, crit = SEVERITY_COLORS["warning"], SEVERITY_COLORS["critical"]
    if col == "temperature_f":
        return [(thr.temperature_f.warning, "Warn", warn), (thr.temperature_f.critical, "Crit", crit)]
    if col == "vibration_g":
        return [(thr.vibration_g.warning, "Warn", warn), (thr.vibration_g.critical, "Crit", crit)]
    if col == "pressure_psi":
        return [(thr.pressure_psi["min"], "Min", warn), (thr.pressure_psi["max"], "Max", crit)]
    if col == "current_a":
        return [(thr.current_max_a, "Max", warn)]
    return []


def _trend_fig(df: pd.DataFrame, col: str, color: str) -> go.Figure:
    """Single-channel trend chart with diagnostic threshold lines."""
    fig = go.Figure()
    if df.empty:
        fig.update_layout(**_base_layout("No data"))
        return fig

    fig.add_scatter(
        x=df["timestamp"], y=df[col],
        line={"color": color, "width": 1.5},
        name=col,
        mode="lines",
        hovertemplate="%{x|%d/%m %H:%M}<br>%{y:.2f}<extra></extra>",
    )
    for value, label, line_color in _limit_lines(col):
        fig.add_hline(y=value, line_dash="dot", line_color=line_color, line_width=1,
                      annotation_text=label, annotation_font_color=line_color, annotation_font_size=9)

    fig.update_layout(**_base_layout())
    return fig


def _details(unit: EquipmentUnit) -> html.Div:
    status_color = _STATUS_COLORS[unit.status]

    def field(label: str, value: str, color: str = TEXT) -> html.Div:
        return html.Div([
            html.Div(label, style=LABEL_STYLE),
            html.Div(value, style={"fontSize": ".9rem", "fontWeight": "600", "color": color}),
        ])

    children = [
        html.Div(
            [
                html.Span(unit.name, style={"fontWeight": "700", "fontSize": "1.1rem",
                                            "color": CATEGORY_COLORS.get(unit.category, TEXT)}),
                html.Span(unit.equipment_id, style={"fontSize": ".75rem", "color": MUTED, "marginLeft": "8px"}),
            ],
            style={"marginBottom": "12px"},
        ),
        html.Div(
            [
                field("Status", unit.status.value.upper(), status_color),
                field("Category", unit.category),
                field("Site", unit.site),
                field("Area", unit.area),
                field("Uptime", f"{unit.uptime_pct:.1f}%"),
                field("Operating Hours", f"{unit.operating_hours:,.0f} h"),
            ],
            style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "10px"},
        ),
    ]

    p = unit.prediction
    if p is not None:
        children.append(html.Div(
            [
                sensor_stat("Temperature", f"{p.sensors.temperature_f:.1f}°F"),
                sensor_stat("Vibration", f"{p.sensors.vibration_g:.2f}g"),
                sensor_stat("Pressure", f"{p.sensors.pressure_psi:.0f} PSI"),
                sensor_stat("Current", f"{p.sensors.current_a:.1f}A"),
            ],
            style={"display": "flex", "gap": "18px", "marginTop": "14px",
                   "borderTop": f"1px solid {BORDER}", "paddingTop": "10px"},
        ))
    return html.Div(children)


def _gauge(unit: EquipmentUnit):
    p = unit.prediction
    if p is None:
        return html.Div("Train the model to see a failure-risk prediction.",
                        style={"color": MUTED, "padding": "20px"})
    return html.Div([
        risk_gauge(p.failure_probability, "Failure probability", height=180),
        html.Div(
            [
                html.Div(p.recommended_action, style={"fontWeight": "600", "fontSize": ".85rem"}),
                html.Div(f"Maintenance due in {p.days_until_maintenance} days",
                         style={"fontSize": ".75rem", "color": MUTED}),
            ],
            style={"textAlign": "center"},
        ),
    ])


def _diagnosis_panel(unit: EquipmentUnit) -> html.Div:
    issues = get_state().diagnose(unit.equipment_id)
    if not issues:
        return html.Div("No issues detected. All monitored parameters are within normal range.",
                        style={"color": SEVERITY_COLORS["info"], "padding": "8px"})

    sections = []
    for severity, group in group_by_severity(issues).items():
        if not group:
            continue
        sections.append(html.Div(
            [
                html.Div(f"{_GROUP_TITLES[severity]} ({len(group)})",
                         style={**LABEL_STYLE, "color": SEVERITY_COLORS[severity], "marginBottom": "6px"}),
                *[issue_card(issue) for issue in group],
            ],
            className="mb-2",
        ))
    return html.Div(sections)


def register(app) -> None:

    @app.callback(
        Output("store-equipment", "data"),
        Input("equipment-selector", "value"),
        prevent_initial_call=True,
    )
    def update_selected_equipment(value: str | None) -> str | None:
        return value

    @app.callback(
        [
            Output("eq-details", "children"),
            Output("eq-risk-gauge", "children"),
            Output("eq-diagnosis", "children"),
            Output("eq-chart-temperature", "figure"),
            Output("eq-chart-vibration", "figure"),
            Output("eq-chart-pressure", "figure"),
            Output("eq-chart-current", "figure"),
        ],
        [
            Input("equipment-selector", "value"),
            Input("store-refreshed", "data"),
        ],
    )
    def update_equipment_panel(equipment_id: str | None, refreshed: str | None):
        state = get_state()
        unit = state.unit(equipment_id) if equipment_id else None
        if unit is None:
            empty_fig = go.Figure()
            empty_fig.update_layout(**_base_layout("No data"))
            no_data = html.Div("Select a unit.", style={"color": MUTED, "padding": "20px"})
            return no_data, no_data, no_data, empty_fig, empty_fig, empty_fig, empty_fig

        df = state.source.recent_frame(unit.equipment_id, hours=24)
        color = CATEGORY_COLORS.get(unit.category, ACCENT)
        return (
            _details(unit),
            _gauge(unit),
            _diagnosis_panel(unit),
            _trend_fig(df, "temperature_f", color),
            _trend_fig(df, "vibration_g", color),
            _trend_fig(df, "pressure_psi", color),
            _trend_fig(df, "current_a", color),
        )
