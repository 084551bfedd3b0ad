"""
tests/test_alerts.py
─────────────────────
Tests for the unified alert feed.
"""
from datetime import UTC, datetime, timedelta

from config.alerts import AlertSeverity, AlertSource
from src.analytics.alerts import (
    alert_from_record,
    alert_stats,
    filter_alerts,
    prediction_alerts,
    priority_feed,
    sort_alerts,
)
from src.analytics.risk import build_prediction


def _predictions(make_reading, now, probabilities: dict[str, float]):
    return [
        build_prediction(make_reading(equipment_id=eq_id), p, computed_at=now)
        for eq_id, p in probabilities.items()
    ]


class TestAlertFromRecord:
    def test_warehouse_keys(self):
        alert = alert_from_record({
            "ALERT_ID": "A-1", "EQUIPMENT_ID": "GEN-234", "SEVERITY": "CRITICAL",
            "MESSAGE": "Overheat", "SITE_NAME": "Downtown", "CREATED_AT": "2024-06-01T10:00:00Z",
        })
        assert alert.id == "A-1"
        assert alert.severity == AlertSeverity.CRITICAL
        assert alert.priority == 1
        assert alert.site == "Downtown"
        assert alert.created_at == datetime(2024, 6, 1, 10, tzinfo=UTC)
        assert alert.source == AlertSource.SENSOR

    def test_fallbacks(self):
        alert = alert_from_record({"id": "A-2", "equipment_id": "PMP-156", "severity": "bogus",
                                   "message": "x", "created_at": datetime(2024, 6, 1)})
        assert alert.severity == AlertSeverity.MEDIUM
        assert alert.priority == 3
        assert alert.site == "Unknown Site"
        assert alert.created_at.tzinfo is not None


class TestPredictionAlerts:
    def test_tiers(self, make_reading, now):
        preds = _predictions(make_reading, now, {"A": 0.9, "B": 0.5, "C": 0.1})
        alerts = {a.equipment_id: a for a in prediction_alerts(preds)}
        assert set(alerts) == {"A", "B"}
        assert alerts["A"].severity == AlertSeverity.CRITICAL
        assert alerts["B"].severity == AlertSeverity.HIGH
        assert alerts["A"].id == "ml-A"
        assert alerts["A"].site == "Multiple Sites"
        assert alerts["A"].source == AlertSource.AI_PREDICTION
        assert alerts["A"].message == "AI Prediction: Schedule immediate maintenance (90.0% failure risk)"

    def test_priority_feed_keeps_only_high_predictions(self, make_reading, now):
        preds = _predictions(make_reading, now, {"A": 0.9, "B": 0.5})
        sensor = alert_from_record({"id": "S-1", "equipment_id": "C", "severity": "medium",
                                    "message": "m", "created_at": now})
        feed = priority_feed([sensor], preds)
        assert [a.id for a in feed] == ["S-1", "ml-A"]


class TestFilterSortStats:
    def _alerts(self, now):
        return [
            alert_from_record({"id": "1", "equipment_id": "Z", "severity": "medium", "message": "m",
                               "created_at": now - timedelta(hours=2)}),
            alert_from_record({"id": "2", "equipment_id": "A", "severity": "critical", "message": "m",
                               "created_at": now - timedelta(hours=5)}),
            alert_from_record({"id": "3", "equipment_id": "M", "severity": "high", "message": "m",
                               "created_at": now}),
        ]

    def test_filter(self, now):
        alerts = self._alerts(now)
        assert [a.id for a in filter_alerts(alerts, "critical")] == ["2"]
        assert [a.id for a in filter_alerts(alerts, "sensor")] == ["1", "2", "3"]
        assert filter_alerts(alerts, "ai") == []
        assert len(filter_alerts(alerts, "unknown")) == 3

    def test_sort(self, now):
        alerts = self._alerts(now)
        assert [a.id for a in sort_alerts(alerts, "priority")] == ["2", "3", "1"]
        assert [a.id for a in sort_alerts(alerts, "time")] == ["3", "1", "2"]
        assert [a.id for a in sort_alerts(alerts, "equipment")] == ["2", "3", "1"]

    def test_stats(self, now):
        stats = alert_stats(self._alerts(now))
        assert (stats.critical, stats.high, stats.medium) == (1, 1, 1)
        assert stats.sensor_alerts == 3
        assert stats.ai_predictions == 0
        assert stats.total == 3
