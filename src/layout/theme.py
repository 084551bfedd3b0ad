"""
src/layout/theme.py
───────────────────
Shared palette for the light dashboard theme.
"""
from dash import html

PAGE_BG = "#F3F4F6"
NAV_BG = "#111827"
CARD_BG = "#FFFFFF"
BORDER = "#E5E7EB"
TEXT = "#111827"
MUTED = "#6B7280"
ACCENT = "#2563EB"
BRAND = "#FACC15"
ML_ACCENT = "#9333EA"

CARD_STYLE = {
    "backgroundColor": CARD_BG,
    "border": f"1px solid {BORDER}",
    "borderRadius": "8px",
    "padding": "16px",
    "boxShadow": "0 1px 2px rgba(0,0,0,0.05)",
}

LABEL_STYLE = {
    "fontSize": ".7rem",
    "color": MUTED,
    "textTransform": "uppercase",
    "letterSpacing": ".06em",
}


def card_title(text: str) -> html.Div:
    return html.Div(text, style={"fontSize": "1rem", "fontWeight": "600", "marginBottom": "12px", "color": TEXT})
