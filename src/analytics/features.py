"""
src/analytics/features.py
─────────────────────────
Feature preparation for the risk classifier.

Each reading maps to a fixed 7-wide vector:
  [temp/100, vibration/3, pressure/200, current/30,
   sin(2π·hour/24), cos(2π·hour/24), operating_hours/10000]

Order and divisors are a contract with any model trained on these vectors.
"""
from __future__ import annotations

import math

import numpy as np

from src.data.models import SensorReading

FEATURE_NAMES = [
    "temperature_norm",
    "vibration_norm",
    "pressure_norm",
    "current_norm",
    "hour_sin",
    "hour_cos",
    "operating_hours_norm",
]
N_FEATURES = len(FEATURE_NAMES)


def to_feature_vector(reading: SensorReading) -> np.ndarray:
    hour_angle = 2.0 * math.pi * reading.timestamp.hour / 24.0
    return np.array(
        [
            reading.temperature_f / 100.0,
            reading.vibration_g / 3.0,
            reading.pressure_psi / 200.0,
            reading.current_a / 30.0,
            math.sin(hour_angle),
            math.cos(hour_angle),
            reading.operating_hours / 10_000.0,
        ],
        dtype=float,
    )


def to_feature_matrix(readings: list[SensorReading]) -> np.ndarray:
    """Stack feature vectors into an (n, 7) matrix; empty input gives shape (0, 7)."""
    if not readings:
        return np.empty((0, N_FEATURES), dtype=float)
    return np.vstack([to_feature_vector(r) for r in readings])


def prepare_training_data(readings: list[SensorReading]) -> tuple[np.ndarray, np.ndarray]:
    """Features plus the binary maintenance-needed label of each reading."""
    X = to_feature_matrix(readings)
    y = np.array([r.maintenance_needed for r in readings], dtype=int)
    return X, y
