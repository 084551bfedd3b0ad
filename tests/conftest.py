"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the Fleet Monitor test suite.
"""
import os
from datetime import UTC, datetime

import numpy as np
import pytest

# Demo mode, short training runs
os.environ.setdefault("TELEMETRY_DB", "")
os.environ.setdefault("TRAINING_DAYS", "3")
os.environ.setdefault("TRAINING_EPOCHS", "3")
os.environ.setdefault("SIMULATION_SEED", "42")


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def make_reading(now):
    """Factory for SensorReadings with nominal defaults."""
    from src.data.models import SensorReading

    def _make(
        temperature_f: float = 80.0,
        vibration_g: float = 1.0,
        pressure_psi: float = 125.0,
        current_a: float = 15.0,
        operating_hours: float = 500.0,
        equipment_id: str = "GEN-234",
        timestamp: datetime | None = None,
    ) -> SensorReading:
        return SensorReading(
            equipment_id=equipment_id,
            timestamp=timestamp or now,
            temperature_f=temperature_f,
            vibration_g=vibration_g,
            pressure_psi=pressure_psi,
            current_a=current_a,
            operating_hours=operating_hours,
        )

    return _make


@pytest.fixture
def make_unit(make_reading, now):
    """
    Factory for EquipmentUnits. Sensor keyword arguments attach a medium-risk
    prediction carrying those values; with_prediction=False leaves it off.
    """
    from src.analytics.risk import build_prediction
    from src.data.models import EquipmentStatus, EquipmentUnit

    def _make(
        status: EquipmentStatus = EquipmentStatus.OPERATIONAL,
        uptime_pct: float = 95.0,
        operating_hours: float = 1_000.0,
        with_prediction: bool = True,
        **sensors,
    ) -> EquipmentUnit:
        prediction = None
        if with_prediction:
            prediction = build_prediction(make_reading(**sensors), 0.5, computed_at=now)
        return EquipmentUnit(
            equipment_id="GEN-234",
            name="Mobile Generator 234",
            status=status,
            uptime_pct=uptime_pct,
            operating_hours=operating_hours,
            prediction=prediction,
        )

    return _make


@pytest.fixture
def separable_data() -> tuple[np.ndarray, np.ndarray]:
    """200 rows of 7 features with a label learnable from the first two."""
    gen = np.random.default_rng(0)
    X = gen.uniform(0.0, 1.0, size=(200, 7))
    y = (X[:, 0] + X[:, 1] > 1.0).astype(int)
    return X, y
