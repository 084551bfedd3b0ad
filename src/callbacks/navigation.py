"""
src/callbacks/navigation.py: routing, navbar, prediction refresh and the
overview page.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from config.alerts import MAX_ALERTS_DISPLAY, RISK_COLORS, SEVERITY_COLORS
from config.equipment import RISK_HIGH_PCT
from src.analytics.alerts import alert_stats, filter_alerts, sort_alerts
from src.analytics.risk import risk_tier
from src.data.models import Alert, Prediction, RiskTier
from src.layout.components.kpi_card import kpi_card, sensor_stat
from src.layout.components.severity_badge import severity_badge
from src.layout.navbar import model_badge, source_badge
from src.layout.theme import ACCENT, MUTED, ML_ACCENT, TEXT
from src.state import get_state


def _predictions_table(predictions: list[Prediction], model_ready: bool) -> html.Div:
    if not predictions:
        hint = "No predictions yet." if model_ready else "Model not trained. Train it on the Model page to enable predictions."
        return html.Div(hint, style={"color": MUTED, "padding": "12px"})

    units = {u.equipment_id: u for u in get_state().fleet()}
    rows = []
    for p in sorted(predictions, key=lambda p: p.failure_probability, reverse=True):
        color = RISK_COLORS[p.risk_tier.value]
        unit = units.get(p.equipment_id)
        rows.append(html.Tr([
            html.Td([
                html.Div(p.equipment_id, style={"fontWeight": "600", "color": ACCENT, "fontSize": ".82rem"}),
                html.Div(unit.name if unit else "", style={"fontSize": ".68rem", "color": MUTED}),
            ]),
            html.Td(html.Span(f"{p.failure_probability:.1f}%", style={"fontWeight": "700", "color": color})),
            html.Td(html.Span(p.risk_tier.value.upper(), style={"fontSize": ".7rem", "fontWeight": "700", "color": color})),
            html.Td(f"{p.days_until_maintenance} d", style={"fontSize": ".8rem"}),
            html.Td(
                html.Div(
                    [
                        sensor_stat("Temp", f"{p.sensors.temperature_f:.1f}°F"),
                        sensor_stat("Vib", f"{p.sensors.vibration_g:.2f}g"),
                        sensor_stat("Press", f"{p.sensors.pressure_psi:.0f} PSI"),
                        sensor_stat("Curr", f"{p.sensors.current_a:.1f}A"),
                    ],
                    style={"display": "flex", "gap": "12px"},
                )
            ),
            html.Td(p.recommended_action, style={"fontSize": ".75rem", "color": MUTED}),
        ]))

    return html.Table(
        [
            html.Thead(
                html.Tr([html.Th(h) for h in ["Unit", "Risk", "Tier", "Service In", "Sensors", "Action"]]),
                style={"color": MUTED, "fontSize": ".65rem", "textTransform": "uppercase"},
            ),
            html.Tbody(rows),
        ],
        style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".8rem"},
    )


def _alert_list(alerts: list[Alert]) -> html.Div:
    if not alerts:
        return html.Div("No active alerts.", style={"color": MUTED, "padding": "12px"})

    items = []
    for a in sort_alerts(alerts, by="priority")[:MAX_ALERTS_DISPLAY]:
        items.append(html.Div(
            [
                html.Div(
                    [
                        html.Span(a.equipment_id, style={"fontWeight": "600", "fontSize": ".8rem"}),
                        severity_badge(a.severity.value),
                    ],
                    style={"display": "flex", "justifyContent": "space-between"},
                ),
                html.Div(a.message, style={"fontSize": ".75rem"}),
                html.Div(
                    f"{a.site} · {a.created_at:%d/%m %H:%M}",
                    style={"fontSize": ".68rem", "color": MUTED},
                ),
            ],
            style={
                "borderLeft": f"3px solid {SEVERITY_COLORS.get(a.severity.value, MUTED)}",
                "padding": "6px 10px",
                "marginBottom": "8px",
            },
        ))
    return html.Div(items)


def register(app) -> None:
    """Register routing, navbar and overview page callbacks."""

    # ── Page routing ──────────────────────────────────────────────────────────
    from src.pages import equipment, model, overview

    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
        State("store-equipment", "data"),
    )
    def display_page(pathname: str, selected: str | None):
        if pathname == "/equipment":
            return equipment.layout(selected)
        if pathname == "/model":
            return model.layout()
        return overview.layout()

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Prediction refresh ────────────────────────────────────────────────────
    @app.callback(
        Output("store-refreshed", "data"),
        Input("interval-live", "n_intervals"),
    )
    def refresh_predictions(n_intervals: int) -> str:
        state = get_state()
        state.refresh()
        return state.last_updated.isoformat() if state.last_updated else ""

    # ── Navbar badges ─────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("navbar-source-badge", "children"),
            Output("navbar-source-badge", "style"),
            Output("navbar-model-badge", "children"),
            Output("navbar-model-badge", "style"),
        ],
        Input("store-refreshed", "data"),
        Input("url", "pathname"),
    )
    def update_badges(refreshed: str | None, pathname: str):
        state = get_state()
        src_label, src_style = source_badge(state.source.connection_status)
        ml_label, ml_style = model_badge(state.model_ready, state.trainer.is_running)
        return src_label, src_style, ml_label, ml_style

    # ── Overview ──────────────────────────────────────────────────────────────
    @app.callback(
        [
            Output("overview-kpi-banner", "children"),
            Output("overview-predictions", "children"),
            Output("overview-alerts", "children"),
            Output("overview-updated", "children"),
        ],
        Input("store-refreshed", "data"),
        Input("overview-alert-filter", "value"),
    )
    def update_overview(refreshed: str | None, alert_filter: str | None):
        state = get_state()
        predictions = list(state.predictions)
        feed = filter_alerts(state.alerts(), alert_filter or "all")
        stats = alert_stats(state.alerts(priority_only=False))

        high = sum(p.risk_tier == RiskTier.HIGH for p in predictions)
        avg_risk = sum(p.failure_probability for p in predictions) / len(predictions) if predictions else 0.0
        avg_color = RISK_COLORS[risk_tier(avg_risk).value]

        kpi_banner = dbc.Row(
            [
                dbc.Col(kpi_card("Units Monitored", str(len(state.equipment_ids)), ACCENT), xs=6, md=3),
                dbc.Col(kpi_card(
                    "High Risk Units", str(high),
                    RISK_COLORS["high"] if high else RISK_COLORS["low"],
                    sub_label=f"failure probability > {RISK_HIGH_PCT:.0f}%",
                    border_color=RISK_COLORS["high"] if high else RISK_COLORS["low"],
                ), xs=6, md=3),
                dbc.Col(kpi_card(
                    "Average Risk", f"{avg_risk:.1f}%" if predictions else "—",
                    avg_color if predictions else MUTED,
                ), xs=6, md=3),
                dbc.Col(kpi_card(
                    "Active Alerts", str(stats.total),
                    SEVERITY_COLORS["critical"] if stats.critical else TEXT,
                    sub_label=f"{stats.critical} critical · {stats.ai_predictions} from AI",
                    border_color=ML_ACCENT,
                ), xs=6, md=3),
            ],
            className="g-3",
        )

        updated = (
            html.Span(f"Last updated {state.last_updated:%H:%M:%S} UTC", style={"color": MUTED})
            if state.last_updated else ""
        )
        return kpi_banner, _predictions_table(predictions, state.model_ready), _alert_list(feed), updated
