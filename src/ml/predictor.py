"""
src/ml/predictor.py
───────────────────
Fleet prediction generator: one latest reading per unit → classifier →
Prediction with risk tier, maintenance horizon and recommended action.
"""
from __future__ import annotations

from datetime import UTC, datetime
from typing import Protocol

from config.logging import get_logger
from src.analytics.features import to_feature_matrix
from src.analytics.risk import build_prediction
from src.data.models import Prediction, SensorReading
from src.data.simulator import SimulatedSource
from src.ml.classifier import RiskClassifier

log = get_logger(__name__)


class ReadingSource(Protocol):
    def latest_reading(self, equipment_id: str, now: datetime | None = None) -> SensorReading: ...


def predict_all(
    equipment_ids: list[str],
    classifier: RiskClassifier | None,
    source: ReadingSource | None = None,
    now: datetime | None = None,
) -> list[Prediction]:
    """
    Predict failure risk for every unit in `equipment_ids`.

    Returns an empty list when there is no trained classifier. Inference
    errors (e.g. malformed features) propagate to the caller.
    """
    if classifier is None or not classifier.is_trained:
        return []
    if not equipment_ids:
        return []

    source = source or SimulatedSource()
    now = now or datetime.now(tz=UTC)

    readings = [source.latest_reading(eq_id, now=now) for eq_id in equipment_ids]
    probabilities = classifier.predict_proba(to_feature_matrix(readings))

    predictions = [
        build_prediction(reading, float(p), computed_at=now)
        for reading, p in zip(readings, probabilities, strict=True)
    ]
    log.info(
        "predictions_generated",
        extra={"units": len(predictions), "high_risk": sum(p.risk_tier == "high" for p in predictions)},
    )
    return predictions
