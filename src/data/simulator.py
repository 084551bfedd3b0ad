"""
src/data/simulator.py
─────────────────────
Synthetic telemetry generator for construction equipment.

Generates:
  - Hourly series of temperature / vibration / pressure / current per unit
  - Training rosters (several units × N days) for the risk classifier
  - "Live" latest readings when no telemetry store is connected

Design:
  - Each call draws one operating point (base temperature, vibration, pressure)
    and holds it for the whole series, so one call simulates one unit
  - Periodic variation per channel plus additive uniform noise
  - Randomness is injected through a numpy Generator. Without one, calls draw
    from a single process-wide Generator seeded once from SIMULATION_SEED
"""
from __future__ import annotations

import threading
from datetime import UTC, datetime, timedelta

import numpy as np
import pandas as pd

from config.settings import settings
from src.data.models import SensorReading

# ── Operating point ranges [low, high) drawn once per series ─────────────────

BASE_RANGES: dict[str, tuple[float, float]] = {
    "temperature_f": (75.0, 95.0),
    "vibration_g": (0.5, 2.0),
    "pressure_psi": (100.0, 150.0),
}

BASE_CURRENT_A = 15.0

# Uniform noise upper bound per channel: noise ~ U[0, scale)
NOISE: dict[str, float] = {
    "temperature_f": 3.0,
    "vibration_g": 0.1,
    "pressure_psi": 5.0,
    "current_a": 2.0,
    "operating_hours": 1_000.0,
}


def make_rng(seed: int | None = settings.SIMULATION_SEED) -> np.random.Generator:
    return np.random.default_rng(seed)


_shared_rng: np.random.Generator | None = None
_shared_lock = threading.Lock()


def shared_rng() -> np.random.Generator:
    """Process-wide Generator, seeded on first use and reused afterwards."""
    global _shared_rng
    with _shared_lock:
        if _shared_rng is None:
            _shared_rng = make_rng()
        return _shared_rng


def _draw_base(rng: np.random.Generator) -> dict[str, float]:
    return {channel: float(rng.uniform(low, high)) for channel, (low, high) in BASE_RANGES.items()}


def _reading_at(
    i: int,
    ts: datetime,
    equipment_id: str,
    base: dict[str, float],
    rng: np.random.Generator,
) -> SensorReading:
    temp = base["temperature_f"] + 5.0 * np.sin(i / 24) + rng.uniform(0.0, NOISE["temperature_f"])
    vib = base["vibration_g"] + 0.3 * np.sin(i / 12) + rng.uniform(0.0, NOISE["vibration_g"])
    pres = base["pressure_psi"] + 10.0 * np.cos(i / 6) + rng.uniform(0.0, NOISE["pressure_psi"])
    cur = BASE_CURRENT_A + 3.0 * np.sin(i / 8) + rng.uniform(0.0, NOISE["current_a"])
    hours = i + rng.uniform(0.0, NOISE["operating_hours"])

    return SensorReading(
        equipment_id=equipment_id,
        timestamp=ts,
        temperature_f=round(float(temp), 2),
        vibration_g=round(float(vib), 3),
        pressure_psi=round(float(pres), 1),
        current_a=round(float(cur), 2),
        operating_hours=float(hours),
    )


# ── Public API ────────────────────────────────────────────────────────────────

def generate_series(
    equipment_id: str,
    days: int,
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> list[SensorReading]:
    """
    Generate `days` × 24 hourly readings for one unit, oldest first.

    Sample i is stamped `now - (days*24 - i)` hours. Non-positive `days`
    yields an empty list.
    """
    total_hours = max(0, int(days)) * 24
    if total_hours == 0:
        return []

    rng = rng if rng is not None else shared_rng()
    now = now or datetime.now(tz=UTC)
    base = _draw_base(rng)

    return [
        _reading_at(i, now - timedelta(hours=total_hours - i), equipment_id, base, rng)
        for i in range(total_hours)
    ]


def generate_training_data(
    equipment_ids: list[str],
    days: int = settings.TRAINING_DAYS,
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> list[SensorReading]:
    """Concatenate one independent series per unit of the training roster."""
    rng = rng if rng is not None else shared_rng()
    readings: list[SensorReading] = []
    for equipment_id in equipment_ids:
        readings.extend(generate_series(equipment_id, days, rng=rng, now=now))
    return readings


def latest_reading(
    equipment_id: str,
    rng: np.random.Generator | None = None,
    now: datetime | None = None,
) -> SensorReading:
    """Simulate a current reading: the last sample of a fresh one-day series."""
    return generate_series(equipment_id, 1, rng=rng, now=now)[-1]


class SimulatedSource:
    """Reading source backed entirely by the synthesizer."""

    connection_status = "demo"

    def __init__(self, rng: np.random.Generator | None = None):
        self._rng = rng if rng is not None else shared_rng()

    def latest_reading(self, equipment_id: str, now: datetime | None = None) -> SensorReading:
        return latest_reading(equipment_id, rng=self._rng, now=now)


def to_dataframe(readings: list[SensorReading]) -> pd.DataFrame:
    """Convert a list of SensorReadings (computed risk fields included) to a DataFrame."""
    return pd.DataFrame([r.model_dump() for r in readings])
