"""
src/data/models.py
──────────────────
Pydantic v2 data models for sensor readings, predictions, diagnostic issues,
equipment units, classifier metrics, and fleet alerts.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, FiniteFloat, computed_field

from config.alerts import AlertSeverity, AlertSource, IssueSeverity

MAINTENANCE_RISK_THRESHOLD = 0.7


def failure_risk_score(temperature_f: float, vibration_g: float, pressure_psi: float) -> float:
    """
    Failure risk ∈ [0, 1] from the normalized excess of three channels:
      temperature above 90°F (per 20°F), vibration above 2g (per 1g),
      pressure away from 125 PSI (per 25 PSI).
    """
    temp_score = max(0.0, (temperature_f - 90.0) / 20.0)
    vib_score = max(0.0, (vibration_g - 2.0) / 1.0)
    pressure_score = max(0.0, abs(pressure_psi - 125.0) / 25.0)
    risk = (temp_score + vib_score + pressure_score) / 3.0
    return round(min(1.0, max(0.0, risk)), 3)


class EquipmentStatus(str, Enum):
    OPERATIONAL = "operational"
    MAINTENANCE = "maintenance"
    CRITICAL = "critical"
    OFFLINE = "offline"


class RiskTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {RiskTier.LOW: 0, RiskTier.MEDIUM: 1, RiskTier.HIGH: 2}


class SensorReading(BaseModel):
    equipment_id: str = Field(min_length=1)
    timestamp: datetime
    temperature_f: FiniteFloat
    vibration_g: FiniteFloat = Field(ge=0.0)
    pressure_psi: FiniteFloat = Field(ge=0.0)
    current_a: FiniteFloat = Field(ge=0.0)
    operating_hours: FiniteFloat = Field(ge=0.0)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def failure_risk(self) -> float:
        return failure_risk_score(self.temperature_f, self.vibration_g, self.pressure_psi)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def maintenance_needed(self) -> int:
        return 1 if self.failure_risk > MAINTENANCE_RISK_THRESHOLD else 0


class SensorSnapshot(BaseModel):
    temperature_f: float
    vibration_g: float
    pressure_psi: float
    current_a: float

    @classmethod
    def of(cls, reading: SensorReading) -> SensorSnapshot:
        return cls(
            temperature_f=reading.temperature_f,
            vibration_g=reading.vibration_g,
            pressure_psi=reading.pressure_psi,
            current_a=reading.current_a,
        )


class Prediction(BaseModel):
    equipment_id: str
    failure_probability: float = Field(ge=0.0, le=100.0)  # percent, one decimal
    risk_tier: RiskTier
    days_until_maintenance: int = Field(ge=1)
    recommended_action: str
    sensors: SensorSnapshot
    last_updated: datetime


class DiagnosticIssue(BaseModel):
    severity: IssueSeverity
    sensor: str
    current: str
    threshold: str
    status: str
    impact: str


class EquipmentUnit(BaseModel):
    equipment_id: str = Field(min_length=1)
    name: str
    category: str = "Unknown"
    site: str = "Unassigned"
    area: str = "Unknown Area"
    status: EquipmentStatus = EquipmentStatus.OPERATIONAL
    uptime_pct: float = Field(default=100.0, ge=0.0, le=100.0)
    operating_hours: float = Field(default=0.0, ge=0.0)
    prediction: Prediction | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any], prediction: Prediction | None = None) -> EquipmentUnit:
        """
        Build a unit from a loosely-shaped record (demo roster entry or a
        telemetry-store row). Missing or empty fields take these fallbacks:
          name → equipment id, area → "Unknown Area", status → operational,
          uptime → 100%, operating hours → 0.
        Unknown status strings also fall back to operational.
        """
        equipment_id = str(record.get("id") or record.get("equipment_id") or "")
        raw_status = record.get("status") or EquipmentStatus.OPERATIONAL.value
        try:
            status = EquipmentStatus(str(raw_status).lower())
        except ValueError:
            status = EquipmentStatus.OPERATIONAL

        uptime = record.get("uptime_pct")
        hours = record.get("operating_hours")
        return cls(
            equipment_id=equipment_id,
            name=record.get("name") or equipment_id,
            category=record.get("category") or "Unknown",
            site=record.get("site") or "Unassigned",
            area=record.get("area") or "Unknown Area",
            status=status,
            uptime_pct=float(uptime) if uptime is not None else 100.0,
            operating_hours=float(hours) if hours is not None else 0.0,
            prediction=prediction,
        )


class ModelMetrics(BaseModel):
    accuracy: float = Field(ge=0.0, le=1.0)
    precision: float = Field(ge=0.0, le=1.0)
    recall: float = Field(ge=0.0, le=1.0)
    f1_score: float = Field(ge=0.0, le=1.0)
    epochs: int = Field(ge=0)
    train_samples: int = Field(ge=0)
    validation_samples: int = Field(ge=0)
    final_loss: float | None = None
    trained_at: datetime


class Alert(BaseModel):
    id: str
    equipment_id: str
    severity: AlertSeverity
    message: str
    site: str = "Unknown Site"
    created_at: datetime
    source: AlertSource = AlertSource.SENSOR
    priority: int = Field(default=3, ge=1, le=3)
