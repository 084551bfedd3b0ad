"""
src/analytics/alerts.py
───────────────────────
Unified alert feed.

Merges sensor alerts coming from the telemetry side with alerts derived
from classifier predictions, then filters, sorts and counts them.

Prediction alerts:
  high tier   → severity critical, priority 1
  medium tier → severity high,     priority 2
  low tier    → no alert
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from config.alerts import ALERT_PRIORITY, AlertSeverity, AlertSource
from src.data.models import Alert, Prediction, RiskTier

PREDICTION_SITE = "Multiple Sites"


def alert_from_record(record: dict[str, Any]) -> Alert:
    """
    Build a sensor Alert from a telemetry-side record. Upper-case warehouse
    column names (ALERT_ID, EQUIPMENT_ID, ...) and snake_case keys are both
    accepted. Fallbacks: severity → medium, site → "Unknown Site",
    created_at → now.
    """
    def pick(*keys: str) -> Any:
        for key in keys:
            value = record.get(key)
            if value not in (None, ""):
                return value
        return None

    raw_severity = str(pick("SEVERITY", "severity") or AlertSeverity.MEDIUM.value).lower()
    try:
        severity = AlertSeverity(raw_severity)
    except ValueError:
        severity = AlertSeverity.MEDIUM

    created = pick("CREATED_AT", "created_at")
    if isinstance(created, str):
        created = datetime.fromisoformat(created.replace("Z", "+00:00"))
    if isinstance(created, datetime) and created.tzinfo is None:
        created = created.replace(tzinfo=UTC)

    return Alert(
        id=str(pick("ALERT_ID", "id") or ""),
        equipment_id=str(pick("EQUIPMENT_ID", "equipment_id") or ""),
        severity=severity,
        message=str(pick("MESSAGE", "message") or ""),
        site=str(pick("SITE_NAME", "site") or "Unknown Site"),
        created_at=created or datetime.now(tz=UTC),
        source=AlertSource.SENSOR,
        priority=ALERT_PRIORITY[severity],
    )


def prediction_message(prediction: Prediction) -> str:
    return f"AI Prediction: {prediction.recommended_action} ({prediction.failure_probability:.1f}% failure risk)"


def prediction_alerts(predictions: list[Prediction]) -> list[Alert]:
    """Alerts for every medium- or high-tier prediction."""
    alerts: list[Alert] = []
    for p in predictions:
        if p.risk_tier == RiskTier.LOW:
            continue
        severity = AlertSeverity.CRITICAL if p.risk_tier == RiskTier.HIGH else AlertSeverity.HIGH
        alerts.append(Alert(
            id=f"ml-{p.equipment_id}",
            equipment_id=p.equipment_id,
            severity=severity,
            message=prediction_message(p),
            site=PREDICTION_SITE,
            created_at=p.last_updated,
            source=AlertSource.AI_PREDICTION,
            priority=ALERT_PRIORITY[severity],
        ))
    return alerts


def all_alerts(sensor_alerts: list[Alert], predictions: list[Prediction]) -> list[Alert]:
    return [*sensor_alerts, *prediction_alerts(predictions)]


def priority_feed(sensor_alerts: list[Alert], predictions: list[Prediction]) -> list[Alert]:
    """Dashboard feed: all sensor alerts plus high-tier prediction alerts only."""
    high = [p for p in predictions if p.risk_tier == RiskTier.HIGH]
    return [*sensor_alerts, *prediction_alerts(high)]


def filter_alerts(alerts: list[Alert], kind: str = "all") -> list[Alert]:
    """kind: all | critical | high | medium | ai | sensor (unknown → all)."""
    if kind in (AlertSeverity.CRITICAL.value, AlertSeverity.HIGH.value, AlertSeverity.MEDIUM.value):
        return [a for a in alerts if a.severity == kind]
    if kind == "ai":
        return [a for a in alerts if a.source == AlertSource.AI_PREDICTION]
    if kind == "sensor":
        return [a for a in alerts if a.source == AlertSource.SENSOR]
    return list(alerts)


def sort_alerts(alerts: list[Alert], by: str = "priority") -> list[Alert]:
    """by: priority (most urgent first) | time (newest first) | equipment (A→Z)."""
    if by == "time":
        return sorted(alerts, key=lambda a: a.created_at, reverse=True)
    if by == "equipment":
        return sorted(alerts, key=lambda a: a.equipment_id)
    return sorted(alerts, key=lambda a: a.priority)


@dataclass(frozen=True)
class AlertStats:
    critical: int
    high: int
    medium: int
    ai_predictions: int
    sensor_alerts: int
    total: int


def alert_stats(alerts: list[Alert]) -> AlertStats:
    return AlertStats(
        critical=sum(a.severity == AlertSeverity.CRITICAL for a in alerts),
        high=sum(a.severity == AlertSeverity.HIGH for a in alerts),
        medium=sum(a.severity == AlertSeverity.MEDIUM for a in alerts),
        ai_predictions=sum(a.source == AlertSource.AI_PREDICTION for a in alerts),
        sensor_alerts=sum(a.source == AlertSource.SENSOR for a in alerts),
        total=len(alerts),
    )
