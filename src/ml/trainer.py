"""
src/ml/trainer.py
─────────────────
Background training task.

Runs the full pipeline off the interactive path on a single worker thread:
  1. Synthesize the training roster history        → progress 20
  2. Build features / labels                       → progress 40
  3. Build the estimator                           → progress 60
  4. Fit epoch by epoch                            → progress 60 … 90
  5. Evaluate on the held-out split                → progress 95
  6. Publish                                       → progress 100

Only one run per trainer at a time. cancel() asks the running fit to stop at
the next epoch boundary.
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import numpy as np

from config.equipment import TRAINING_EQUIPMENT_IDS
from config.logging import get_logger
from config.settings import settings
from src.analytics.features import prepare_training_data
from src.data.models import ModelMetrics
from src.data.simulator import generate_training_data, shared_rng
from src.ml.classifier import RiskClassifier, TrainingInProgressError

log = get_logger(__name__)

ProgressCallback = Callable[[float], None]

_EPOCH_START = 60.0
_EPOCH_SPAN = 30.0


class ModelTrainer:
    def __init__(
        self,
        classifier: RiskClassifier,
        equipment_ids: list[str] | None = None,
        days: int = settings.TRAINING_DAYS,
        rng: np.random.Generator | None = None,
    ):
        self.classifier = classifier
        self.equipment_ids = list(equipment_ids or TRAINING_EQUIPMENT_IDS)
        self.days = days
        self._rng = rng
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="trainer")
        self._lock = threading.Lock()
        self._cancel = threading.Event()
        self._future: Future[ModelMetrics] | None = None
        self._progress = 0.0
        self.last_error: str | None = None

    # ── Status ────────────────────────────────────────────────────────────────

    @property
    def progress(self) -> float:
        return self._progress

    @property
    def is_running(self) -> bool:
        future = self._future
        return future is not None and not future.done()

    # ── Control ───────────────────────────────────────────────────────────────

    def start(self, on_progress: ProgressCallback | None = None) -> Future[ModelMetrics]:
        """
        Submit a training run and return its Future.

        Raises TrainingInProgressError if a run is already in flight.
        """
        with self._lock:
            if self.is_running:
                raise TrainingInProgressError("Training is already running")
            self._cancel.clear()
            self._progress = 0.0
            self.last_error = None
            self._future = self._executor.submit(self._run, on_progress)
            return self._future

    def cancel(self) -> None:
        self._cancel.set()

    def shutdown(self) -> None:
        self.cancel()
        self._executor.shutdown(wait=True)

    # ── Worker ────────────────────────────────────────────────────────────────

    def _report(self, value: float, on_progress: ProgressCallback | None) -> None:
        self._progress = value
        if on_progress is not None:
            on_progress(value)

    def _run(self, on_progress: ProgressCallback | None) -> ModelMetrics:
        self._report(0.0, on_progress)
        try:
            rng = self._rng if self._rng is not None else shared_rng()
            readings = generate_training_data(self.equipment_ids, self.days, rng=rng)
            self._report(20.0, on_progress)

            X, y = prepare_training_data(readings)
            self._report(40.0, on_progress)
            log.info(
                "training_data_ready",
                extra={"samples": int(len(y)), "positives": int(y.sum()), "units": len(self.equipment_ids)},
            )
            self._report(_EPOCH_START, on_progress)

            def on_epoch(epoch: int, total: int, loss: float | None) -> None:
                self._report(_EPOCH_START + epoch / total * _EPOCH_SPAN, on_progress)

            metrics = self.classifier.train(X, y, progress=on_epoch, cancel=self._cancel)
            self._report(95.0, on_progress)
        except Exception as e:
            self.last_error = str(e) or type(e).__name__
            self._report(0.0, on_progress)
            raise

        self._report(100.0, on_progress)
        return metrics
