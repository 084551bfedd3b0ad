"""
tests/test_models.py
─────────────────────
Tests for Pydantic v2 data models and the derived risk fields.
"""
import math

import pytest
from pydantic import ValidationError

from src.data.models import (
    EquipmentStatus,
    EquipmentUnit,
    RiskTier,
    SensorReading,
    failure_risk_score,
)


class TestFailureRisk:
    def test_nominal_reading_has_no_risk(self, make_reading):
        r = make_reading(temperature_f=80.0, vibration_g=1.0, pressure_psi=125.0)
        assert r.failure_risk == 0.0
        assert r.maintenance_needed == 0

    def test_single_channel_excess(self, make_reading):
        r = make_reading(temperature_f=110.0, vibration_g=1.0, pressure_psi=125.0)
        assert r.failure_risk == pytest.approx(0.333)

    def test_clamped_to_one(self, make_reading):
        r = make_reading(temperature_f=150.0, vibration_g=6.0, pressure_psi=260.0)
        assert r.failure_risk == 1.0
        assert r.maintenance_needed == 1

    def test_exactly_point_seven_is_not_maintenance(self, make_reading):
        # pressure score 2.1 → risk 0.7, which is not strictly above the threshold
        r = make_reading(temperature_f=90.0, vibration_g=2.0, pressure_psi=177.5)
        assert r.failure_risk == 0.7
        assert r.maintenance_needed == 0

    def test_low_pressure_counts_as_excess(self):
        assert failure_risk_score(90.0, 2.0, 75.0) == pytest.approx(round(2.0 / 3, 3))

    @pytest.mark.parametrize(
        "temp,vib,pres",
        [(60.0, 0.0, 0.0), (95.0, 2.5, 140.0), (120.0, 3.5, 30.0), (200.0, 10.0, 400.0)],
    )
    def test_flag_matches_risk(self, make_reading, temp, vib, pres):
        r = make_reading(temperature_f=temp, vibration_g=vib, pressure_psi=pres)
        assert 0.0 <= r.failure_risk <= 1.0
        assert r.maintenance_needed == (1 if r.failure_risk > 0.7 else 0)

    def test_dump_includes_computed_fields(self, make_reading):
        dumped = make_reading().model_dump()
        assert "failure_risk" in dumped
        assert "maintenance_needed" in dumped


class TestSensorReadingValidation:
    def test_negative_vibration_rejected(self, make_reading):
        with pytest.raises(ValidationError):
            make_reading(vibration_g=-0.1)

    def test_non_finite_temperature_rejected(self, make_reading):
        with pytest.raises(ValidationError):
            make_reading(temperature_f=math.nan)

    def test_empty_equipment_id_rejected(self, now):
        with pytest.raises(ValidationError):
            SensorReading(
                equipment_id="", timestamp=now, temperature_f=80.0, vibration_g=1.0,
                pressure_psi=125.0, current_a=15.0, operating_hours=10.0,
            )


class TestRiskTier:
    def test_rank_order(self):
        assert RiskTier.LOW.rank < RiskTier.MEDIUM.rank < RiskTier.HIGH.rank


class TestEquipmentUnitFromRecord:
    def test_fallbacks(self):
        unit = EquipmentUnit.from_record({"id": "X-1"})
        assert unit.name == "X-1"
        assert unit.area == "Unknown Area"
        assert unit.status == EquipmentStatus.OPERATIONAL
        assert unit.uptime_pct == 100.0
        assert unit.operating_hours == 0.0
        assert unit.prediction is None

    def test_unknown_status_is_operational(self):
        unit = EquipmentUnit.from_record({"id": "X-1", "status": "exploded"})
        assert unit.status == EquipmentStatus.OPERATIONAL

    def test_equipment_id_key_and_case(self):
        unit = EquipmentUnit.from_record({"equipment_id": "PMP-9", "status": "MAINTENANCE", "uptime_pct": 70})
        assert unit.equipment_id == "PMP-9"
        assert unit.status == EquipmentStatus.MAINTENANCE
        assert unit.uptime_pct == 70.0
