"""
src/analytics/risk.py
─────────────────────
Mapping from a classifier probability to a risk tier, a maintenance horizon,
and a recommended action.

  probability % > 70 → high
  probability % > 40 → medium
  otherwise          → low

days_until_maintenance = max(1, floor((1 − p) × 30))
"""
from __future__ import annotations

import math
from datetime import datetime

from config.equipment import MAINTENANCE_HORIZON_DAYS, RISK_HIGH_PCT, RISK_MEDIUM_PCT
from src.data.models import Prediction, RiskTier, SensorReading, SensorSnapshot

RECOMMENDED_ACTIONS: dict[RiskTier, str] = {
    RiskTier.HIGH: "Schedule immediate maintenance",
    RiskTier.MEDIUM: "Plan maintenance within 2 weeks",
    RiskTier.LOW: "Continue normal operations",
}


def to_percentage(probability: float) -> float:
    """Classifier probability [0, 1] → percentage with one decimal."""
    return round(min(1.0, max(0.0, float(probability))) * 100.0, 1)


def risk_tier(probability_pct: float) -> RiskTier:
    if probability_pct > RISK_HIGH_PCT:
        return RiskTier.HIGH
    if probability_pct > RISK_MEDIUM_PCT:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def days_until_maintenance(probability: float) -> int:
    """Days left before maintenance is due; never below one."""
    p = min(1.0, max(0.0, float(probability)))
    return max(1, math.floor((1.0 - p) * MAINTENANCE_HORIZON_DAYS))


def recommended_action(tier: RiskTier) -> str:
    return RECOMMENDED_ACTIONS[tier]


def build_prediction(reading: SensorReading, probability: float, computed_at: datetime) -> Prediction:
    """Assemble a Prediction from a reading and its classifier probability."""
    pct = to_percentage(probability)
    tier = risk_tier(pct)
    return Prediction(
        equipment_id=reading.equipment_id,
        failure_probability=pct,
        risk_tier=tier,
        days_until_maintenance=days_until_maintenance(probability),
        recommended_action=recommended_action(tier),
        sensors=SensorSnapshot.of(reading),
        last_updated=computed_at,
    )
