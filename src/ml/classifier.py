"""
src/ml/classifier.py
────────────────────
Failure-risk classifiers.

Any binary classifier exposing
    train(X, y, progress=None, cancel=None) -> ModelMetrics
    predict_proba(X) -> ndarray of P(maintenance needed) ∈ [0, 1]
can drive predictions. Two scikit-learn implementations are provided:

  NeuralRiskClassifier   : MLP 64 → 32 → 16 → sigmoid, adam, lr 0.001
  LogisticRiskClassifier : SGD logistic regression

Lifecycle:
    UNTRAINED ──train()──▶ TRAINING ──success──▶ TRAINED
                               │
                               └──failure / cancel──▶ UNTRAINED

One training run owns a classifier at a time: a second train() while
TRAINING is rejected with TrainingInProgressError. Predictions are only
served while TRAINED and never mutate the fitted estimator.
"""
from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Protocol

import numpy as np
from sklearn.linear_model import SGDClassifier
from sklearn.metrics import accuracy_score, f1_score, log_loss, precision_score, recall_score
from sklearn.model_selection import train_test_split
from sklearn.neural_network import MLPClassifier

from config.logging import get_logger
from config.settings import settings
from src.analytics.features import N_FEATURES
from src.data.models import ModelMetrics

log = get_logger(__name__)

CLASSES = np.array([0, 1])

# progress(epoch, total_epochs, loss)
EpochCallback = Callable[[int, int, float | None], None]


class ClassifierState(str, Enum):
    UNTRAINED = "untrained"
    TRAINING = "training"
    TRAINED = "trained"


# ── Errors ────────────────────────────────────────────────────────────────────

class ClassifierError(RuntimeError):
    """Base class for classifier lifecycle errors."""


class TrainingInProgressError(ClassifierError):
    pass


class TrainingFailedError(ClassifierError):
    pass


class TrainingCancelledError(ClassifierError):
    pass


class ClassifierNotReadyError(ClassifierError):
    pass


class FeatureShapeError(ValueError):
    """Feature input does not match the (n, 7) finite-float contract."""


# ── Interface ─────────────────────────────────────────────────────────────────

class RiskClassifier(Protocol):
    @property
    def state(self) -> ClassifierState: ...

    @property
    def is_trained(self) -> bool: ...

    @property
    def metrics(self) -> ModelMetrics | None: ...

    def train(
        self,
        X: np.ndarray,
        y: np.ndarray,
        progress: EpochCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> ModelMetrics: ...

    def predict_proba(self, X: np.ndarray) -> np.ndarray: ...


def validate_features(X: np.ndarray) -> np.ndarray:
    """
    Coerce to a float (n, 7) matrix. A single vector is treated as one row.
    Raises FeatureShapeError on wrong width, wrong rank or non-finite values.
    """
    try:
        arr = np.asarray(X, dtype=float)
    except (TypeError, ValueError) as e:
        raise FeatureShapeError(f"Feature input is not numeric: {e}") from e

    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2 or arr.shape[1] != N_FEATURES:
        raise FeatureShapeError(
            f"Expected feature matrix of shape (n, {N_FEATURES}), got {arr.shape}"
        )
    if not np.isfinite(arr).all():
        raise FeatureShapeError("Feature input contains NaN or infinite values")
    return arr


# ── Shared epoch-wise training ────────────────────────────────────────────────

class IncrementalRiskClassifier(ABC):
    """
    Base for classifiers fitted one epoch at a time with `partial_fit`,
    so callers get per-epoch progress and a cancellation point.
    """

    def __init__(
        self,
        epochs: int = settings.TRAINING_EPOCHS,
        validation_split: float = settings.VALIDATION_SPLIT,
        random_state: int | None = settings.SIMULATION_SEED,
    ):
        if epochs < 1:
            raise ValueError("epochs must be >= 1")
        if not 0.0 < validation_split < 1.0:
            raise ValueError("validation_split must be in (0, 1)")
        self.epochs = epochs
        self.validation_split = validation_split
        self.random_state = random_state
        self._lock = threading.Lock()
        self._state = ClassifierState.UNTRAINED
        self._estimator = None
        self._metrics: ModelMetrics | None = None

    @abstractmethod
    def _build_estimator(self):
        """Return a fresh, unfitted scikit-learn estimator supporting partial_fit."""

    # ── State ─────────────────────────────────────────────────────────────────

    @property
    def state(self) -> ClassifierState:
        return self._state

    @property
    def is_trained(self) -> bool:
        return self._state == ClassifierState.TRAINED

    @property
    def metrics(self) -> ModelMetrics | None:
        return self._metrics

    def _begin_training(self) -> None:
        with self._lock:
            if self._state == ClassifierState.TRAINING:
                raise TrainingInProgressError("A training run already owns this classifier")
            self._state = ClassifierState.TRAINING
            self._estimator = None
            self._metrics = None

    def _finish(self, estimator, metrics: ModelMetrics) -> None:
        with self._lock:
            self._estimator = estimator
            self._metrics = metrics
            self._state = ClassifierState.TRAINED

    def _reset(self) -> None:
        with self._lock:
            self._estimator = None
            self._metrics = None
            self._state = ClassifierState.UNTRAINED

    # ── Training ──────────────────────────────────────────────────────────────

    def train(
        self,
        X: np.ndarray,
        y: np.ndarray,
        progress: EpochCallback | None = None,
        cancel: threading.Event | None = None,
    ) -> ModelMetrics:
        """
        Fit on (X, y) holding out `validation_split` for evaluation.

        Raises:
            TrainingInProgressError: another run owns the classifier.
            TrainingCancelledError: `cancel` was set between epochs.
            TrainingFailedError: anything else went wrong; the message says what.
        In the last two cases the classifier is back to UNTRAINED.
        """
        self._begin_training()
        try:
            estimator, metrics = self._fit(X, y, progress, cancel)
        except TrainingCancelledError:
            self._reset()
            log.info("training_cancelled", extra={"classifier": type(self).__name__})
            raise
        except Exception as e:
            self._reset()
            log.error("training_failed", extra={"classifier": type(self).__name__, "error": str(e)})
            raise TrainingFailedError(f"Training failed: {e}") from e

        self._finish(estimator, metrics)
        log.info(
            "training_complete",
            extra={"classifier": type(self).__name__, "accuracy": metrics.accuracy, "f1": metrics.f1_score},
        )
        return metrics

    def _fit(
        self,
        X: np.ndarray,
        y: np.ndarray,
        progress: EpochCallback | None,
        cancel: threading.Event | None,
    ):
        X = validate_features(X)
        y = np.asarray(y, dtype=int).ravel()
        if len(y) != len(X):
            raise ValueError(f"{len(X)} feature rows but {len(y)} labels")
        if len(X) < 5:
            raise ValueError(f"Need at least 5 samples to train, got {len(X)}")

        X_train, X_val, y_train, y_val = train_test_split(
            X, y, test_size=self.validation_split, random_state=self.random_state, shuffle=True,
        )
        estimator = self._build_estimator()
        log.info(
            "training_started",
            extra={"classifier": type(self).__name__, "train_samples": len(X_train), "epochs": self.epochs},
        )

        loss: float | None = None
        for epoch in range(self.epochs):
            if cancel is not None and cancel.is_set():
                raise TrainingCancelledError("Training cancelled")
            estimator.partial_fit(X_train, y_train, classes=CLASSES)
            loss = float(log_loss(y_val, estimator.predict_proba(X_val)[:, 1], labels=CLASSES))
            log.debug("epoch_end", extra={"epoch": epoch + 1, "epochs": self.epochs, "val_loss": round(loss, 4)})
            if progress is not None:
                progress(epoch + 1, self.epochs, loss)

        y_pred = estimator.predict(X_val)
        metrics = ModelMetrics(
            accuracy=float(accuracy_score(y_val, y_pred)),
            precision=float(precision_score(y_val, y_pred, zero_division=0)),
            recall=float(recall_score(y_val, y_pred, zero_division=0)),
            f1_score=float(f1_score(y_val, y_pred, zero_division=0)),
            epochs=self.epochs,
            train_samples=len(X_train),
            validation_samples=len(X_val),
            final_loss=loss,
            trained_at=datetime.now(tz=UTC),
        )
        return estimator, metrics

    # ── Inference ─────────────────────────────────────────────────────────────

    def predict_proba(self, X: np.ndarray) -> np.ndarray:
        """P(maintenance needed) for each row of X."""
        estimator = self._estimator
        if self._state != ClassifierState.TRAINED or estimator is None:
            raise ClassifierNotReadyError(f"Classifier is {self._state.value}; train it before predicting")
        arr = validate_features(X)
        return np.clip(estimator.predict_proba(arr)[:, 1], 0.0, 1.0)


# ── Implementations ───────────────────────────────────────────────────────────

class NeuralRiskClassifier(IncrementalRiskClassifier):
    """
    Small feed-forward network. Dense 64 → 32 → 16 with ReLU and a logistic
    output, regularized with an L2 penalty.
    """

    def __init__(
        self,
        hidden_layers: tuple[int, ...] = (64, 32, 16),
        learning_rate: float = settings.LEARNING_RATE,
        batch_size: int = settings.BATCH_SIZE,
        alpha: float = 1e-3,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.hidden_layers = hidden_layers
        self.learning_rate = learning_rate
        self.batch_size = batch_size
        self.alpha = alpha

    def _build_estimator(self) -> MLPClassifier:
        return MLPClassifier(
            hidden_layer_sizes=self.hidden_layers,
            activation="relu",
            solver="adam",
            learning_rate_init=self.learning_rate,
            batch_size=self.batch_size,
            alpha=self.alpha,
            random_state=self.random_state,
        )


class LogisticRiskClassifier(IncrementalRiskClassifier):
    """Logistic regression trained by SGD on log loss."""

    def __init__(self, alpha: float = 1e-4, **kwargs):
        super().__init__(**kwargs)
        self.alpha = alpha

    def _build_estimator(self) -> SGDClassifier:
        return SGDClassifier(loss="log_loss", alpha=self.alpha, random_state=self.random_state)
