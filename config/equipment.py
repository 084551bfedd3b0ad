"""
config/equipment.py
───────────────────
Equipment roster and diagnostic thresholds for the construction fleet.

Diagnostic limits (per latest sensor snapshot):
  Temperature  > warning_f  → warning,  > critical_f → critical
  Vibration    > warning_g  → warning,  > critical_g → critical
  Pressure     < min_psi    → warning,  > max_psi    → critical
  Current      > max_a      → warning
Risk tiers are cut on the failure probability percentage.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelLimits:
    warning: float
    critical: float


@dataclass(frozen=True)
class DiagnosticThresholds:
    temperature_f: ChannelLimits
    vibration_g: ChannelLimits
    pressure_psi: dict[str, float]   # min / max
    current_max_a: float
    uptime_min_pct: float
    service_interval_hours: float


DIAGNOSTIC_THRESHOLDS = DiagnosticThresholds(
    temperature_f=ChannelLimits(warning=85.0, critical=95.0),
    vibration_g=ChannelLimits(warning=1.5, critical=2.0),
    pressure_psi={"min": 80.0, "max": 180.0},
    current_max_a=25.0,
    uptime_min_pct=85.0,
    service_interval_hours=4_000.0,
)

# ── Risk tiers ────────────────────────────────────────────────────────────────
RISK_HIGH_PCT = 70.0
RISK_MEDIUM_PCT = 40.0
MAINTENANCE_HORIZON_DAYS = 30

# ── Training roster (synthetic history used to fit the classifier) ───────────
TRAINING_EQUIPMENT_IDS = ["GEN-001", "PMP-002", "COM-003", "MIX-004", "GEN-005"]

# ── Monitored fleet (demo roster, used when no telemetry store answers) ──────
EQUIPMENT_CONFIG: dict[str, dict] = {
    "GEN-234": {
        "id": "GEN-234",
        "name": "Mobile Generator 234",
        "category": "Generators",
        "site": "Downtown Infrastructure Project",
        "area": "North Staging",
        "status": "operational",
        "uptime_pct": 97.4,
        "operating_hours": 2_310.0,
    },
    "PMP-156": {
        "id": "PMP-156",
        "name": "Trash Pump 156",
        "category": "Water Pumps",
        "site": "Highway 101 Expansion",
        "area": "Drainage Cut",
        "status": "maintenance",
        "uptime_pct": 88.1,
        "operating_hours": 3_420.0,
    },
    "COM-789": {
        "id": "COM-789",
        "name": "Plate Compactor 789",
        "category": "Compactors",
        "site": "Highway 101 Expansion",
        "area": "Southbound Lanes",
        "status": "critical",
        "uptime_pct": 79.6,
        "operating_hours": 4_580.0,
    },
    "MIX-445": {
        "id": "MIX-445",
        "name": "Concrete Mixer 445",
        "category": "Concrete Mixers",
        "site": "Downtown Infrastructure Project",
        "area": "Foundation Pour",
        "status": "operational",
        "uptime_pct": 95.2,
        "operating_hours": 1_120.0,
    },
    "GEN-567": {
        "id": "GEN-567",
        "name": "Tower Generator 567",
        "category": "Generators",
        "site": "Commercial Building Complex",
        "area": "East Tower",
        "status": "operational",
        "uptime_pct": 92.8,
        "operating_hours": 4_105.0,
    },
}

EQUIPMENT_IDS = list(EQUIPMENT_CONFIG.keys())

CATEGORY_COLORS: dict[str, str] = {
    "Generators": "#EAB308",
    "Water Pumps": "#3B82F6",
    "Compactors": "#22C55E",
    "Concrete Mixers": "#A855F7",
}
