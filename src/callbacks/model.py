"""
src/callbacks/model.py
───────────────────────
Risk model page callbacks: start a background training run and poll its
progress until it finishes.
"""
from __future__ import annotations

from dash import Input, Output, html, no_update

from config.logging import get_logger
from src.data.models import ModelMetrics
from src.layout.components.kpi_card import kpi_card
from src.layout.theme import MUTED, ML_ACCENT
from src.ml.classifier import TrainingInProgressError
from src.state import get_state

log = get_logger(__name__)


def _metrics_panel(metrics: ModelMetrics | None) -> html.Div:
    if metrics is None:
        return html.Div("No trained model yet.", style={"color": MUTED, "padding": "12px"})

    tiles = [
        ("Accuracy", metrics.accuracy),
        ("Precision", metrics.precision),
        ("Recall", metrics.recall),
        ("F1 Score", metrics.f1_score),
    ]
    loss = f"{metrics.final_loss:.4f}" if metrics.final_loss is not None else "n/a"
    return html.Div([
        html.Div(
            [kpi_card(label, f"{value:.1%}", ML_ACCENT, border_color=ML_ACCENT) for label, value in tiles],
            style={"display": "grid", "gridTemplateColumns": "1fr 1fr", "gap": "10px"},
        ),
        html.Div(
            f"{metrics.train_samples:,} training / {metrics.validation_samples:,} validation samples · "
            f"{metrics.epochs} epochs · validation loss {loss} · trained {metrics.trained_at:%Y-%m-%d %H:%M} UTC",
            style={"fontSize": ".72rem", "color": MUTED, "marginTop": "10px"},
        ),
    ])


def _status_text(running: bool, ready: bool) -> html.Span:
    if running:
        return html.Span(
            "Training in progress… risk predictions are paused until the new model is ready",
            style={"color": "#CA8A04", "fontWeight": "600"},
        )
    if ready:
        return html.Span("Model trained and serving predictions", style={"color": "#16A34A", "fontWeight": "600"})
    return html.Span("Model not trained", style={"color": MUTED, "fontWeight": "600"})


def register(app) -> None:

    @app.callback(
        [
            Output("model-poll", "disabled", allow_duplicate=True),
            Output("model-error", "children", allow_duplicate=True),
            Output("model-error", "is_open", allow_duplicate=True),
        ],
        Input("model-train-btn", "n_clicks"),
        prevent_initial_call=True,
    )
    def start_training(n_clicks: int):
        try:
            get_state().start_training()
        except TrainingInProgressError as e:
            log.info("training_request_rejected", extra={"reason": str(e)})
            return False, str(e), True
        return False, no_update, False

    @app.callback(
        [
            Output("model-progress", "value"),
            Output("model-progress", "label"),
            Output("model-status", "children"),
            Output("model-metrics", "children"),
            Output("model-train-btn", "disabled"),
            Output("model-poll", "disabled"),
            Output("model-error", "children"),
            Output("model-error", "is_open"),
        ],
        Input("model-poll", "n_intervals"),
    )
    def poll_training(n_intervals: int):
        state = get_state()
        trainer = state.trainer
        running = trainer.is_running
        progress = trainer.progress if running else (100.0 if state.model_ready else trainer.progress)

        error_text, error_open = no_update, no_update
        if not running and trainer.last_error and n_intervals:
            error_text, error_open = f"Training failed: {trainer.last_error}", True

        return (
            progress,
            f"{progress:.0f}%" if progress else "",
            _status_text(running, state.model_ready),
            _metrics_panel(state.metrics),
            running,
            not running,
            error_text,
            error_open,
        )
