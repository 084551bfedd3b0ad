"""
config/alerts.py
────────────────
Severity levels, sources, and display configuration for diagnostic issues
and fleet alerts.
"""

from enum import Enum


class IssueSeverity(str, Enum):
    CRITICAL = "critical"
    WARNING = "warning"
    INFO = "info"


class AlertSeverity(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class AlertSource(str, Enum):
    SENSOR = "sensor"
    AI_PREDICTION = "ai_prediction"


# Display ordering for diagnosis (lower = shown first)
ISSUE_ORDER: dict[str, int] = {
    IssueSeverity.CRITICAL: 0,
    IssueSeverity.WARNING: 1,
    IssueSeverity.INFO: 2,
}

# Alert priority (1 = most urgent)
ALERT_PRIORITY: dict[str, int] = {
    AlertSeverity.CRITICAL: 1,
    AlertSeverity.HIGH: 2,
    AlertSeverity.MEDIUM: 3,
}

SEVERITY_COLORS: dict[str, str] = {
    IssueSeverity.CRITICAL: "#DC2626",
    IssueSeverity.WARNING: "#CA8A04",
    IssueSeverity.INFO: "#2563EB",
    AlertSeverity.HIGH: "#EA580C",
    AlertSeverity.MEDIUM: "#CA8A04",
}

SEVERITY_BG: dict[str, str] = {
    IssueSeverity.CRITICAL: "#FEF2F2",
    IssueSeverity.WARNING: "#FEFCE8",
    IssueSeverity.INFO: "#EFF6FF",
    AlertSeverity.HIGH: "#FFF7ED",
    AlertSeverity.MEDIUM: "#FEFCE8",
}

RISK_COLORS: dict[str, str] = {
    "low": "#16A34A",
    "medium": "#CA8A04",
    "high": "#DC2626",
}

ALERT_FILTERS = ("all", "critical", "high", "medium", "ai", "sensor")

MAX_ALERTS_DISPLAY = 100
