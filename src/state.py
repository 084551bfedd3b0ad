"""
src/state.py
────────────
Process-wide application state shared by the dashboard callbacks.

Holds the classifier and its trainer, the latest fleet predictions and the
telemetry source. Callbacks never keep their own copies: they read from the
state object, call refresh() when new predictions are wanted, and listeners
registered with subscribe() are told after every refresh.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import lru_cache

from config.equipment import EQUIPMENT_IDS
from config.logging import get_logger
from src.analytics.alerts import all_alerts, priority_feed
from src.analytics.diagnosis import diagnose
from src.data.models import Alert, DiagnosticIssue, EquipmentUnit, ModelMetrics, Prediction
from src.data.telemetry import TelemetrySource
from src.ml.classifier import NeuralRiskClassifier, RiskClassifier
from src.ml.predictor import predict_all
from src.ml.trainer import ModelTrainer

log = get_logger(__name__)

Listener = Callable[["AppState"], None]


@dataclass
class AppState:
    classifier: RiskClassifier
    trainer: ModelTrainer
    source: TelemetrySource
    equipment_ids: list[str] = field(default_factory=lambda: list(EQUIPMENT_IDS))
    predictions: list[Prediction] = field(default_factory=list)
    last_updated: datetime | None = None
    _listeners: list[Listener] = field(default_factory=list, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    @classmethod
    def create(cls, classifier: RiskClassifier | None = None, source: TelemetrySource | None = None) -> AppState:
        classifier = classifier or NeuralRiskClassifier()
        return cls(
            classifier=classifier,
            trainer=ModelTrainer(classifier),
            source=source or TelemetrySource.from_settings(),
        )

    # ── Subscriptions ─────────────────────────────────────────────────────────

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener(self)

    # ── Predictions ───────────────────────────────────────────────────────────

    @property
    def model_ready(self) -> bool:
        return self.classifier.is_trained

    @property
    def metrics(self) -> ModelMetrics | None:
        return self.classifier.metrics

    def refresh(self) -> list[Prediction]:
        """Recompute fleet predictions (empty without a trained model) and notify."""
        predictions = predict_all(self.equipment_ids, self.classifier, source=self.source)
        with self._lock:
            self.predictions = predictions
            self.last_updated = datetime.now(tz=UTC)
        self._notify()
        return predictions

    def prediction_for(self, equipment_id: str) -> Prediction | None:
        with self._lock:
            return next((p for p in self.predictions if p.equipment_id == equipment_id), None)

    # ── Training ──────────────────────────────────────────────────────────────

    def start_training(self) -> Future[ModelMetrics]:
        """
        Launch a background training run. On success predictions are
        refreshed; failures stay on trainer.last_error for the UI to show.
        """
        future = self.trainer.start()
        future.add_done_callback(self._on_training_done)
        return future

    def _on_training_done(self, future: Future[ModelMetrics]) -> None:
        if future.cancelled() or future.exception() is not None:
            log.warning("training_run_ended_without_model", extra={"error": self.trainer.last_error})
            return
        self.refresh()

    # ── Fleet views ───────────────────────────────────────────────────────────

    def fleet(self) -> list[EquipmentUnit]:
        return [
            EquipmentUnit.from_record(record, prediction=self.prediction_for(str(record.get("id", ""))))
            for record in self.source.equipment_records()
        ]

    def unit(self, equipment_id: str) -> EquipmentUnit | None:
        return next((u for u in self.fleet() if u.equipment_id == equipment_id), None)

    def diagnose(self, equipment_id: str) -> list[DiagnosticIssue]:
        unit = self.unit(equipment_id)
        return diagnose(unit) if unit is not None else []

    def alerts(self, priority_only: bool = True) -> list[Alert]:
        """Sensor alerts plus prediction alerts (high tier only unless priority_only=False)."""
        with self._lock:
            predictions = list(self.predictions)
        if priority_only:
            return priority_feed(self.source.sensor_alerts(), predictions)
        return all_alerts(self.source.sensor_alerts(), predictions)


@lru_cache(maxsize=1)
def get_state() -> AppState:
    return AppState.create()
