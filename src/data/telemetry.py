"""
src/data/telemetry.py
─────────────────────
External telemetry source with simulated fallback.

Provides:
  - TelemetryStore   : SQLite tables for readings, equipment and alerts
      initialize()      : Create tables (idempotent)
      insert_readings() : Bulk insert SensorReading rows
      get_readings()    : Readings for a unit over the last N hours (DataFrame)
      get_latest()      : Most recent reading for a unit
      get_equipment()   : Equipment rows as plain dicts
      insert_alerts() / get_alerts()
  - TelemetrySource  : latest_reading() from the store, else the synthesizer

When no store is configured, the store cannot be reached, or it has no row
for a unit, readings are simulated and the source reports "demo" / "error".
A store in "error" is retried on every read and reports "connected" again
once a query succeeds.

Thread safety: check_same_thread=False + a per-store lock.
"""
from __future__ import annotations

import sqlite3
import threading
from datetime import UTC, datetime, timedelta
from typing import Any

import numpy as np
import pandas as pd

from config.equipment import EQUIPMENT_CONFIG
from config.logging import get_logger
from config.settings import settings
from src.analytics.alerts import alert_from_record
from src.data.models import Alert, SensorReading
from src.data.simulator import generate_series, shared_rng, to_dataframe
from src.data.simulator import latest_reading as simulated_latest

log = get_logger(__name__)

# ── Schema ────────────────────────────────────────────────────────────────────

_CREATE_READINGS = """
CREATE TABLE IF NOT EXISTS readings (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp       TEXT NOT NULL,
    equipment_id    TEXT NOT NULL,
    temperature_f   REAL NOT NULL,
    vibration_g     REAL NOT NULL,
    pressure_psi    REAL NOT NULL,
    current_a       REAL NOT NULL,
    operating_hours REAL NOT NULL
);
"""

_CREATE_EQUIPMENT = """
CREATE TABLE IF NOT EXISTS equipment (
    id              TEXT PRIMARY KEY,
    name            TEXT,
    category        TEXT,
    site            TEXT,
    area            TEXT,
    status          TEXT,
    uptime_pct      REAL,
    operating_hours REAL
);
"""

_CREATE_ALERTS = """
CREATE TABLE IF NOT EXISTS alerts (
    id           TEXT PRIMARY KEY,
    equipment_id TEXT NOT NULL,
    severity     TEXT NOT NULL,
    message      TEXT NOT NULL,
    site         TEXT,
    created_at   TEXT NOT NULL
);
"""

_CREATE_IDX = """
CREATE INDEX IF NOT EXISTS idx_readings_eq_ts ON readings (equipment_id, timestamp);
CREATE INDEX IF NOT EXISTS idx_alerts_ts      ON alerts   (created_at);
"""


class TelemetryStore:
    def __init__(self, path: str):
        self.path = path
        self._lock = threading.RLock()
        self._conn: sqlite3.Connection | None = None

    # ── Connection ────────────────────────────────────────────────────────────

    def _get_conn(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is None:
                self._conn = sqlite3.connect(self.path, check_same_thread=False)
                self._conn.row_factory = sqlite3.Row
            return self._conn

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def initialize(self) -> None:
        conn = self._get_conn()
        with self._lock, conn:
            conn.executescript(_CREATE_READINGS + _CREATE_EQUIPMENT + _CREATE_ALERTS + _CREATE_IDX)

    # ── Readings ──────────────────────────────────────────────────────────────

    def insert_readings(self, readings: list[SensorReading]) -> None:
        if not readings:
            return
        rows = [
            (
                r.timestamp.isoformat(),
                r.equipment_id,
                r.temperature_f,
                r.vibration_g,
                r.pressure_psi,
                r.current_a,
                r.operating_hours,
            )
            for r in readings
        ]
        conn = self._get_conn()
        with self._lock, conn:
            conn.executemany(
                """INSERT INTO readings
                   (timestamp, equipment_id, temperature_f, vibration_g,
                    pressure_psi, current_a, operating_hours)
                   VALUES (?,?,?,?,?,?,?)""",
                rows,
            )

    def get_readings(self, equipment_id: str, hours: int = 24, limit: int = 10_000) -> pd.DataFrame:
        """Readings for a unit over the last `hours` hours, oldest first."""
        since = (datetime.now(tz=UTC) - timedelta(hours=hours)).isoformat()
        conn = self._get_conn()
        with self._lock:
            df = pd.read_sql_query(
                """SELECT * FROM readings
                   WHERE equipment_id = ? AND timestamp >= ?
                   ORDER BY timestamp ASC
                   LIMIT ?""",
                conn,
                params=(equipment_id, since, limit),
            )
        if not df.empty:
            df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
        return df

    def get_latest(self, equipment_id: str) -> SensorReading | None:
        conn = self._get_conn()
        with self._lock:
            row = conn.execute(
                "SELECT * FROM readings WHERE equipment_id = ? ORDER BY timestamp DESC LIMIT 1",
                (equipment_id,),
            ).fetchone()
        if row is None:
            return None
        return SensorReading(
            equipment_id=row["equipment_id"],
            timestamp=datetime.fromisoformat(row["timestamp"]),
            temperature_f=row["temperature_f"],
            vibration_g=row["vibration_g"],
            pressure_psi=row["pressure_psi"],
            current_a=row["current_a"],
            operating_hours=row["operating_hours"],
        )

    # ── Equipment ─────────────────────────────────────────────────────────────

    def upsert_equipment(self, records: list[dict[str, Any]]) -> None:
        if not records:
            return
        rows = [
            (
                r["id"],
                r.get("name"),
                r.get("category"),
                r.get("site"),
                r.get("area"),
                r.get("status"),
                r.get("uptime_pct"),
                r.get("operating_hours"),
            )
            for r in records
        ]
        conn = self._get_conn()
        with self._lock, conn:
            conn.executemany(
                """INSERT OR REPLACE INTO equipment
                   (id, name, category, site, area, status, uptime_pct, operating_hours)
                   VALUES (?,?,?,?,?,?,?,?)""",
                rows,
            )

    def get_equipment(self) -> list[dict[str, Any]]:
        conn = self._get_conn()
        with self._lock:
            rows = conn.execute("SELECT * FROM equipment ORDER BY id").fetchall()
        return [dict(row) for row in rows]

    # ── Alerts ────────────────────────────────────────────────────────────────

    def insert_alerts(self, alerts: list[Alert]) -> None:
        if not alerts:
            return
        rows = [
            (a.id, a.equipment_id, a.severity.value, a.message, a.site, a.created_at.isoformat())
            for a in alerts
        ]
        conn = self._get_conn()
        with self._lock, conn:
            conn.executemany(
                """INSERT OR IGNORE INTO alerts
                   (id, equipment_id, severity, message, site, created_at)
                   VALUES (?,?,?,?,?,?)""",
                rows,
            )

    def get_alerts(self, days: int = 30, limit: int = 500) -> list[Alert]:
        since = (datetime.now(tz=UTC) - timedelta(days=days)).isoformat()
        conn = self._get_conn()
        with self._lock:
            rows = conn.execute(
                "SELECT * FROM alerts WHERE created_at >= ? ORDER BY created_at DESC LIMIT ?",
                (since, limit),
            ).fetchall()
        return [alert_from_record(dict(row)) for row in rows]


class TelemetrySource:
    """
    Reading source preferring the telemetry store and falling back to the
    synthesizer. connection_status: "connected" | "demo" | "error".
    """

    def __init__(self, store: TelemetryStore | None = None, rng: np.random.Generator | None = None):
        self.store = store
        self._rng = rng if rng is not None else shared_rng()
        self.connection_status = "demo" if store is None else "connected"

    @classmethod
    def from_settings(cls) -> TelemetrySource:
        if not settings.TELEMETRY_DB:
            return cls(store=None)
        store = TelemetryStore(settings.TELEMETRY_DB)
        source = cls(store=store)
        try:
            store.initialize()
        except sqlite3.Error as e:
            log.warning("telemetry_unavailable", extra={"path": settings.TELEMETRY_DB, "error": str(e)})
            source.connection_status = "error"
        return source

    def _reopen_if_failed(self) -> None:
        if self.connection_status == "error":
            self.store.close()
            self.store.initialize()

    def _mark_connected(self) -> None:
        if self.connection_status == "error":
            log.info("telemetry_recovered", extra={"path": self.store.path})
        self.connection_status = "connected"

    def latest_reading(self, equipment_id: str, now: datetime | None = None) -> SensorReading:
        if self.store is not None:
            try:
                self._reopen_if_failed()
                reading = self.store.get_latest(equipment_id)
            except sqlite3.Error as e:
                log.warning("telemetry_read_failed", extra={"equipment_id": equipment_id, "error": str(e)})
                self.connection_status = "error"
            else:
                self._mark_connected()
                if reading is not None:
                    return reading
                log.debug("telemetry_missing_unit", extra={"equipment_id": equipment_id})
        return simulated_latest(equipment_id, rng=self._rng, now=now)

    def recent_frame(self, equipment_id: str, hours: int = 24) -> pd.DataFrame:
        """Recent readings as a DataFrame; a simulated day when the store has none."""
        if self.store is not None:
            try:
                self._reopen_if_failed()
                df = self.store.get_readings(equipment_id, hours=hours)
            except sqlite3.Error as e:
                log.warning("telemetry_read_failed", extra={"equipment_id": equipment_id, "error": str(e)})
                self.connection_status = "error"
            else:
                self._mark_connected()
                if not df.empty:
                    return df
        days = max(1, -(-hours // 24))
        df = to_dataframe(generate_series(equipment_id, days, rng=self._rng))
        return df.tail(hours).reset_index(drop=True)

    def equipment_records(self) -> list[dict[str, Any]]:
        """Equipment rows from the store, or the configured demo roster."""
        if self.store is not None:
            try:
                self._reopen_if_failed()
                records = self.store.get_equipment()
            except sqlite3.Error as e:
                log.warning("telemetry_equipment_failed", extra={"error": str(e)})
                self.connection_status = "error"
            else:
                self._mark_connected()
                if records:
                    return records
        return [dict(eq) for eq in EQUIPMENT_CONFIG.values()]

    def sensor_alerts(self) -> list[Alert]:
        if self.store is None:
            return []
        try:
            self._reopen_if_failed()
            alerts = self.store.get_alerts()
        except sqlite3.Error as e:
            log.warning("telemetry_alerts_failed", extra={"error": str(e)})
            self.connection_status = "error"
            return []
        self._mark_connected()
        return alerts
