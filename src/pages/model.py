"""
src/pages/model.py
───────────────────
Risk model page: train button, progress bar, evaluation metrics and a
transient notice when a run fails.
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from config.equipment import TRAINING_EQUIPMENT_IDS
from config.settings import settings
from src.analytics.features import FEATURE_NAMES
from src.layout.theme import CARD_STYLE, LABEL_STYLE, MUTED, ML_ACCENT, card_title
from src.state import get_state

TRAINING_POLL_MS = 1_000


def layout() -> html.Div:
    state = get_state()
    trainer = state.trainer
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Risk Model", className="page-title"),
                    html.P(
                        "Failure-risk classifier predicting maintenance need from sensor features",
                        className="page-subtitle",
                    ),
                ],
                className="page-header mb-3",
            ),

            dcc.Interval(id="model-poll", interval=TRAINING_POLL_MS, n_intervals=0, disabled=not trainer.is_running),

            dbc.Alert(id="model-error", color="danger", is_open=False, dismissable=True, duration=8_000),

            dbc.Row(
                [
                    dbc.Col(
                        html.Div(
                            [
                                card_title("Training"),
                                html.Div(id="model-status", className="mb-2"),
                                dbc.Progress(id="model-progress", value=0, striped=True, animated=True,
                                             color="info", className="mb-3", style={"height": "18px"}),
                                dbc.Button("Train Model", id="model-train-btn", n_clicks=0,
                                           style={"backgroundColor": ML_ACCENT, "borderColor": ML_ACCENT}),
                                html.Div(
                                    f"{len(TRAINING_EQUIPMENT_IDS)} units × {settings.TRAINING_DAYS} days of hourly "
                                    f"history · {settings.TRAINING_EPOCHS} epochs · "
                                    f"{settings.VALIDATION_SPLIT:.0%} validation split",
                                    style={"fontSize": ".75rem", "color": MUTED, "marginTop": "10px"},
                                ),
                            ],
                            style=CARD_STYLE,
                        ),
                        md=6,
                    ),
                    dbc.Col(
                        html.Div([card_title("Evaluation"), html.Div(id="model-metrics")], style=CARD_STYLE),
                        md=6,
                    ),
                ],
                className="g-3 mb-3",
            ),

            html.Div(
                [
                    card_title("Input Features"),
                    html.Div(
                        [html.Span(name, className="me-2 badge bg-light text-dark") for name in FEATURE_NAMES],
                    ),
                    html.Div("Classifier", style={**LABEL_STYLE, "marginTop": "12px"}),
                    html.Div(type(state.classifier).__name__, style={"fontSize": ".85rem"}),
                ],
                style=CARD_STYLE,
            ),
        ],
        style={"padding": "1.5rem"},
    )
