"""
tests/test_logging.py
──────────────────────
Tests for the JSON log line formatter.
"""
import json
import logging

from config.logging import JsonFormatter


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord("src.ml.trainer", logging.INFO, __file__, 1, msg, (), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_core_fields(self):
        payload = json.loads(JsonFormatter("fleet-monitor").format(_record("training_started")))
        assert payload["msg"] == "training_started"
        assert payload["level"] == "INFO"
        assert payload["service"] == "fleet-monitor"
        assert payload["logger"] == "src.ml.trainer"

    def test_extra_fields_included(self):
        line = JsonFormatter("fleet-monitor").format(_record("epoch_end", epoch=3, val_loss=0.41))
        payload = json.loads(line)
        assert payload["epoch"] == 3
        assert payload["val_loss"] == 0.41
        assert "args" not in payload
