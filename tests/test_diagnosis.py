"""
tests/test_diagnosis.py
────────────────────────
Tests for the root-cause diagnosis rules.
"""
import pytest

from config.alerts import IssueSeverity
from src.analytics.diagnosis import diagnose, group_by_severity, sensor_issues
from src.data.models import EquipmentStatus, SensorSnapshot


def _snapshot(temperature_f=80.0, vibration_g=1.0, pressure_psi=125.0, current_a=10.0) -> SensorSnapshot:
    return SensorSnapshot(
        temperature_f=temperature_f, vibration_g=vibration_g,
        pressure_psi=pressure_psi, current_a=current_a,
    )


class TestTemperature:
    def test_critical(self):
        issues = sensor_issues(_snapshot(temperature_f=100.0))
        assert len(issues) == 1
        assert issues[0].sensor == "Temperature"
        assert issues[0].severity == IssueSeverity.CRITICAL
        assert issues[0].current == "100°F"
        assert issues[0].threshold == "95°F"
        assert issues[0].status == "CRITICAL - Overheating detected"

    def test_warning(self):
        issues = sensor_issues(_snapshot(temperature_f=90.0))
        assert len(issues) == 1
        assert issues[0].severity == IssueSeverity.WARNING
        assert issues[0].threshold == "85°F"

    def test_normal(self):
        assert sensor_issues(_snapshot(temperature_f=80.0)) == []

    def test_boundary_is_not_exceeded(self):
        assert sensor_issues(_snapshot(temperature_f=85.0)) == []


class TestVibration:
    def test_critical(self):
        (issue,) = sensor_issues(_snapshot(vibration_g=2.5))
        assert issue.severity == IssueSeverity.CRITICAL
        assert issue.current == "2.5g"
        assert issue.threshold == "2.0g"

    def test_warning(self):
        (issue,) = sensor_issues(_snapshot(vibration_g=1.75))
        assert issue.severity == IssueSeverity.WARNING
        assert issue.threshold == "1.5g"


class TestPressure:
    def test_too_high(self):
        (issue,) = sensor_issues(_snapshot(pressure_psi=190.0))
        assert issue.severity == IssueSeverity.CRITICAL
        assert "too high" in issue.status
        assert issue.threshold == "80-180 PSI"

    def test_below_minimum(self):
        (issue,) = sensor_issues(_snapshot(pressure_psi=70.0))
        assert issue.severity == IssueSeverity.WARNING
        assert "below minimum" in issue.status

    def test_in_band(self):
        assert sensor_issues(_snapshot(pressure_psi=125.0)) == []


class TestCurrent:
    def test_overload(self):
        (issue,) = sensor_issues(_snapshot(current_a=30.0))
        assert issue.sensor == "Current"
        assert issue.severity == IssueSeverity.WARNING
        assert issue.threshold == "25A"


class TestDiagnose:
    def test_combined_scenario_ordering(self, make_unit):
        unit = make_unit(
            status=EquipmentStatus.CRITICAL, uptime_pct=80.0, operating_hours=4_500.0,
            temperature_f=96.0, vibration_g=1.0, pressure_psi=125.0, current_a=10.0,
        )
        issues = diagnose(unit)
        assert [i.severity for i in issues] == [
            IssueSeverity.CRITICAL, IssueSeverity.CRITICAL, IssueSeverity.WARNING, IssueSeverity.INFO,
        ]
        assert [i.sensor for i in issues] == ["Temperature", "System Status", "Uptime", "Operating Hours"]
        assert issues[2].current == "80.0%"
        assert issues[3].current == "4500h"

    def test_critical_does_not_hide_other_rules(self, make_unit):
        issues = diagnose(make_unit(temperature_f=100.0, vibration_g=1.75))
        assert {i.sensor for i in issues} == {"Temperature", "Vibration"}
        assert issues[0].severity == IssueSeverity.CRITICAL

    def test_maintenance_status(self, make_unit):
        (issue,) = diagnose(make_unit(status=EquipmentStatus.MAINTENANCE))
        assert issue.sensor == "Maintenance Schedule"
        assert issue.severity == IssueSeverity.WARNING

    def test_without_prediction_only_equipment_rules(self, make_unit):
        unit = make_unit(with_prediction=False, status=EquipmentStatus.CRITICAL, uptime_pct=50.0)
        assert [i.sensor for i in diagnose(unit)] == ["System Status", "Uptime"]

    def test_healthy_unit(self, make_unit):
        assert diagnose(make_unit()) == []

    def test_uptime_boundary(self, make_unit):
        assert diagnose(make_unit(uptime_pct=85.0)) == []

    @pytest.mark.parametrize("hours,expected", [(4_000.0, 0), (4_000.5, 1)])
    def test_service_interval(self, make_unit, hours, expected):
        assert len(diagnose(make_unit(operating_hours=hours))) == expected


class TestGroupBySeverity:
    def test_buckets(self, make_unit):
        unit = make_unit(
            status=EquipmentStatus.CRITICAL, uptime_pct=80.0, operating_hours=4_500.0, temperature_f=96.0,
        )
        groups = group_by_severity(diagnose(unit))
        assert set(groups) == set(IssueSeverity)
        assert len(groups[IssueSeverity.CRITICAL]) == 2
        assert len(groups[IssueSeverity.WARNING]) == 1
        assert len(groups[IssueSeverity.INFO]) == 1
