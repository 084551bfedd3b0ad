"""
src/analytics/diagnosis.py
──────────────────────────
Root-cause diagnosis engine.

Explains why a unit is flagged by checking its latest sensor snapshot
(when a prediction exists) and its reported status, uptime and operating
hours against fixed limits. Every rule is evaluated on its own; a unit can
surface any number of issues, and a critical finding never hides a warning
on another rule. Results are ordered critical → warning → info, keeping rule
order within a severity.
"""
from __future__ import annotations

from config.alerts import ISSUE_ORDER, IssueSeverity
from config.equipment import DIAGNOSTIC_THRESHOLDS, DiagnosticThresholds
from src.data.models import DiagnosticIssue, EquipmentStatus, EquipmentUnit, SensorSnapshot


def _num(value: float) -> str:
    """Compact number rendering: 96.0 → "96", 1.75 → "1.75"."""
    return f"{value:g}"


# ── Sensor rules ──────────────────────────────────────────────────────────────

def _temperature_issue(temp: float, thr: DiagnosticThresholds) -> DiagnosticIssue | None:
    limits = thr.temperature_f
    if temp > limits.critical:
        return DiagnosticIssue(
            severity=IssueSeverity.CRITICAL,
            sensor="Temperature",
            current=f"{_num(temp)}°F",
            threshold=f"{_num(limits.critical)}°F",
            status="CRITICAL - Overheating detected",
            impact="Engine damage risk, immediate shutdown recommended",
        )
    if temp > limits.warning:
        return DiagnosticIssue(
            severity=IssueSeverity.WARNING,
            sensor="Temperature",
            current=f"{_num(temp)}°F",
            threshold=f"{_num(limits.warning)}°F",
            status="HIGH - Above normal range",
            impact="Reduced efficiency, maintenance required",
        )
    return None


def _vibration_issue(vib: float, thr: DiagnosticThresholds) -> DiagnosticIssue | None:
    limits = thr.vibration_g
    if vib > limits.critical:
        return DiagnosticIssue(
            severity=IssueSeverity.CRITICAL,
            sensor="Vibration",
            current=f"{_num(vib)}g",
            threshold=f"{limits.critical:.1f}g",
            status="CRITICAL - Excessive vibration",
            impact="Mechanical failure imminent, stop operation",
        )
    if vib > limits.warning:
        return DiagnosticIssue(
            severity=IssueSeverity.WARNING,
            sensor="Vibration",
            current=f"{_num(vib)}g",
            threshold=f"{limits.warning:.1f}g",
            status="HIGH - Unusual vibration levels",
            impact="Bearing or alignment issues, inspect soon",
        )
    return None


def _pressure_issue(pressure: float, thr: DiagnosticThresholds) -> DiagnosticIssue | None:
    p_min = thr.pressure_psi["min"]
    p_max = thr.pressure_psi["max"]
    band = f"{_num(p_min)}-{_num(p_max)} PSI"
    if pressure > p_max:
        return DiagnosticIssue(
            severity=IssueSeverity.CRITICAL,
            sensor="Pressure",
            current=f"{_num(pressure)} PSI",
            threshold=band,
            status="CRITICAL - Pressure too high",
            impact="System damage risk, reduce load",
        )
    if pressure < p_min:
        return DiagnosticIssue(
            severity=IssueSeverity.WARNING,
            sensor="Pressure",
            current=f"{_num(pressure)} PSI",
            threshold=band,
            status="LOW - Pressure below minimum",
            impact="Performance degradation, check filters",
        )
    return None


def _current_issue(current: float, thr: DiagnosticThresholds) -> DiagnosticIssue | None:
    if current > thr.current_max_a:
        return DiagnosticIssue(
            severity=IssueSeverity.WARNING,
            sensor="Current",
            current=f"{_num(current)}A",
            threshold=f"{_num(thr.current_max_a)}A",
            status="HIGH - Electrical overload",
            impact="Motor strain, check electrical connections",
        )
    return None


def sensor_issues(
    sensors: SensorSnapshot,
    thresholds: DiagnosticThresholds = DIAGNOSTIC_THRESHOLDS,
) -> list[DiagnosticIssue]:
    """Issues raised by the four sensor channels, in rule order."""
    found = [
        _temperature_issue(sensors.temperature_f, thresholds),
        _vibration_issue(sensors.vibration_g, thresholds),
        _pressure_issue(sensors.pressure_psi, thresholds),
        _current_issue(sensors.current_a, thresholds),
    ]
    return [issue for issue in found if issue is not None]


# ── Equipment attribute rules ─────────────────────────────────────────────────

def equipment_issues(
    equipment: EquipmentUnit,
    thresholds: DiagnosticThresholds = DIAGNOSTIC_THRESHOLDS,
) -> list[DiagnosticIssue]:
    """Issues raised by reported status, uptime and operating hours."""
    issues: list[DiagnosticIssue] = []

    if equipment.status == EquipmentStatus.CRITICAL:
        issues.append(DiagnosticIssue(
            severity=IssueSeverity.CRITICAL,
            sensor="System Status",
            current="CRITICAL",
            threshold="OPERATIONAL",
            status="CRITICAL - Equipment malfunction",
            impact="Immediate attention required, safety risk",
        ))
    elif equipment.status == EquipmentStatus.MAINTENANCE:
        issues.append(DiagnosticIssue(
            severity=IssueSeverity.WARNING,
            sensor="Maintenance Schedule",
            current="DUE",
            threshold="CURRENT",
            status="Scheduled maintenance overdue",
            impact="Performance degradation, reliability risk",
        ))

    if equipment.uptime_pct < thresholds.uptime_min_pct:
        issues.append(DiagnosticIssue(
            severity=IssueSeverity.WARNING,
            sensor="Uptime",
            current=f"{equipment.uptime_pct:.1f}%",
            threshold=f"{_num(thresholds.uptime_min_pct)}%",
            status="LOW - Poor reliability",
            impact="Frequent breakdowns affecting productivity",
        ))

    if equipment.operating_hours > thresholds.service_interval_hours:
        issues.append(DiagnosticIssue(
            severity=IssueSeverity.INFO,
            sensor="Operating Hours",
            current=f"{equipment.operating_hours:.0f}h",
            threshold=f"{_num(thresholds.service_interval_hours)}h",
            status="HIGH - Major service interval approaching",
            impact="Plan for comprehensive maintenance",
        ))

    return issues


# ── Main API ──────────────────────────────────────────────────────────────────

def diagnose(
    equipment: EquipmentUnit,
    thresholds: DiagnosticThresholds = DIAGNOSTIC_THRESHOLDS,
) -> list[DiagnosticIssue]:
    """All matching issues for a unit, sorted critical → warning → info."""
    issues: list[DiagnosticIssue] = []
    if equipment.prediction is not None:
        issues.extend(sensor_issues(equipment.prediction.sensors, thresholds))
    issues.extend(equipment_issues(equipment, thresholds))
    return sorted(issues, key=lambda issue: ISSUE_ORDER[issue.severity])


def group_by_severity(issues: list[DiagnosticIssue]) -> dict[IssueSeverity, list[DiagnosticIssue]]:
    """Split a diagnosis into critical / warning / info buckets for display."""
    groups: dict[IssueSeverity, list[DiagnosticIssue]] = {sev: [] for sev in IssueSeverity}
    for issue in issues:
        groups[issue.severity].append(issue)
    return groups
