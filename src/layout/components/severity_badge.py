"""
src/layout/components/severity_badge.py
────────────────────────────────────────
Severity badge and diagnostic issue card.
"""
from dash import html

from config.alerts import SEVERITY_BG, SEVERITY_COLORS
from src.data.models import DiagnosticIssue
from src.layout.theme import MUTED


def severity_badge(severity: str) -> html.Span:
    color = SEVERITY_COLORS.get(severity, MUTED)
    return html.Span(
        severity.upper(),
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "backgroundColor": SEVERITY_BG.get(severity, "transparent"),
            "border": f"1px solid {color}",
            "borderRadius": "9999px",
            "padding": "1px 8px",
            "whiteSpace": "nowrap",
        },
    )


def issue_card(issue: DiagnosticIssue) -> html.Div:
    severity = issue.severity.value
    color = SEVERITY_COLORS[severity]
    return html.Div(
        [
            html.Div(
                [
                    html.Span(issue.sensor, style={"fontWeight": "600", "color": color}),
                    severity_badge(severity),
                ],
                style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
            ),
            html.Div(issue.status, style={"fontSize": ".85rem", "fontWeight": "600", "marginTop": "4px"}),
            html.Div(
                f"Current: {issue.current} · Threshold: {issue.threshold}",
                style={"fontSize": ".75rem", "color": MUTED, "marginTop": "2px"},
            ),
            html.Div(issue.impact, style={"fontSize": ".75rem", "marginTop": "4px"}),
        ],
        style={
            "backgroundColor": SEVERITY_BG[severity],
            "border": f"1px solid {color}",
            "borderRadius": "8px",
            "padding": "10px 12px",
            "marginBottom": "8px",
        },
    )
