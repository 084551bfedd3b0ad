"""
tests/test_simulator.py
────────────────────────
Tests for the synthetic sensor data generator.
"""
from datetime import timedelta

import numpy as np
import pytest

from src.data.simulator import (
    SimulatedSource,
    generate_series,
    generate_training_data,
    latest_reading,
    shared_rng,
    to_dataframe,
)


class TestGenerateSeries:
    @pytest.mark.parametrize("days", [0, 1, 2, 5])
    def test_correct_reading_count(self, rng, now, days):
        assert len(generate_series("GEN-234", days, rng=rng, now=now)) == days * 24

    def test_negative_days_is_empty(self, rng, now):
        assert generate_series("GEN-234", -3, rng=rng, now=now) == []

    def test_hourly_timestamps_ending_before_now(self, rng, now):
        series = generate_series("GEN-234", 3, rng=rng, now=now)
        assert series[0].timestamp == now - timedelta(hours=72)
        assert series[-1].timestamp == now - timedelta(hours=1)
        gaps = {b.timestamp - a.timestamp for a, b in zip(series, series[1:], strict=False)}
        assert gaps == {timedelta(hours=1)}

    def test_equipment_id_propagated(self, rng, now):
        assert {r.equipment_id for r in generate_series("PMP-156", 1, rng=rng, now=now)} == {"PMP-156"}

    def test_risk_fields_consistent(self, rng, now):
        for r in generate_series("COM-789", 4, rng=rng, now=now):
            assert 0.0 <= r.failure_risk <= 1.0
            assert r.maintenance_needed == (1 if r.failure_risk > 0.7 else 0)

    def test_values_rounded(self, rng, now):
        for r in generate_series("MIX-445", 1, rng=rng, now=now):
            assert round(r.temperature_f, 2) == r.temperature_f
            assert round(r.vibration_g, 3) == r.vibration_g
            assert round(r.pressure_psi, 1) == r.pressure_psi
            assert round(r.current_a, 2) == r.current_a

    def test_values_within_generator_envelope(self, rng, now):
        for r in generate_series("GEN-567", 2, rng=rng, now=now):
            assert 70.0 - 0.01 <= r.temperature_f <= 103.0 + 0.01
            assert 0.2 - 0.001 <= r.vibration_g <= 2.4 + 0.001
            assert 90.0 - 0.1 <= r.pressure_psi <= 165.0 + 0.1
            assert 12.0 - 0.01 <= r.current_a <= 20.0 + 0.01

    def test_reproducible_with_seed(self, now):
        s1 = generate_series("GEN-234", 2, rng=np.random.default_rng(7), now=now)
        s2 = generate_series("GEN-234", 2, rng=np.random.default_rng(7), now=now)
        assert [r.temperature_f for r in s1] == [r.temperature_f for r in s2]


class TestTrainingData:
    def test_concatenates_units(self, rng, now):
        ids = ["GEN-001", "PMP-002", "COM-003"]
        readings = generate_training_data(ids, days=2, rng=rng, now=now)
        assert len(readings) == len(ids) * 2 * 24
        assert [r.equipment_id for r in readings[::48]] == ids

    def test_empty_roster(self, rng, now):
        assert generate_training_data([], days=2, rng=rng, now=now) == []


class TestLatestReading:
    def test_latest_is_one_hour_before_now(self, rng, now):
        r = latest_reading("GEN-234", rng=rng, now=now)
        assert r.equipment_id == "GEN-234"
        assert r.timestamp == now - timedelta(hours=1)

    def test_simulated_source(self, rng, now):
        source = SimulatedSource(rng=rng)
        assert source.connection_status == "demo"
        assert source.latest_reading("MIX-445", now=now).equipment_id == "MIX-445"

    def test_repeated_unseeded_calls_differ(self, now):
        first = latest_reading("X", now=now)
        second = latest_reading("X", now=now)
        assert first.model_dump() != second.model_dump()

    def test_default_source_shares_process_generator(self):
        assert shared_rng() is shared_rng()
        assert SimulatedSource()._rng is shared_rng()


class TestToDataframe:
    def test_columns(self, rng, now):
        df = to_dataframe(generate_series("GEN-234", 1, rng=rng, now=now))
        assert len(df) == 24
        for col in ["timestamp", "temperature_f", "vibration_g", "pressure_psi",
                    "current_a", "operating_hours", "failure_risk", "maintenance_needed"]:
            assert col in df.columns
