"""
tests/test_model_page.py
─────────────────────────
Tests for the risk model page status line.
"""
from src.callbacks.model import _status_text


class TestStatusText:
    def test_retraining_warns_predictions_paused(self):
        text = _status_text(running=True, ready=False).children
        assert "Training in progress" in text
        assert "predictions are paused" in text

    def test_ready(self):
        assert _status_text(running=False, ready=True).children == "Model trained and serving predictions"

    def test_untrained(self):
        assert _status_text(running=False, ready=False).children == "Model not trained"
