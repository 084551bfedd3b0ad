"""
tests/test_classifier.py
─────────────────────────
Tests for the risk classifier lifecycle, training and inference contract.
"""
import threading

import numpy as np
import pytest

from src.ml.classifier import (
    ClassifierNotReadyError,
    ClassifierState,
    FeatureShapeError,
    LogisticRiskClassifier,
    NeuralRiskClassifier,
    TrainingCancelledError,
    TrainingFailedError,
    TrainingInProgressError,
    validate_features,
)


@pytest.fixture
def clf() -> LogisticRiskClassifier:
    return LogisticRiskClassifier(epochs=5, random_state=0)


class TestLifecycle:
    def test_starts_untrained(self, clf):
        assert clf.state == ClassifierState.UNTRAINED
        assert not clf.is_trained
        assert clf.metrics is None

    def test_predict_before_training_raises(self, clf):
        with pytest.raises(ClassifierNotReadyError):
            clf.predict_proba(np.zeros((1, 7)))

    def test_train_reaches_trained(self, clf, separable_data):
        X, y = separable_data
        metrics = clf.train(X, y)
        assert clf.state == ClassifierState.TRAINED
        assert clf.metrics == metrics
        assert metrics.train_samples == 160
        assert metrics.validation_samples == 40
        assert metrics.epochs == 5
        for value in (metrics.accuracy, metrics.precision, metrics.recall, metrics.f1_score):
            assert 0.0 <= value <= 1.0

    def test_learns_separable_signal(self, separable_data):
        X, y = separable_data
        clf = LogisticRiskClassifier(epochs=30, random_state=0)
        assert clf.train(X, y).accuracy >= 0.7

    def test_progress_reported_per_epoch(self, clf, separable_data):
        seen = []
        clf.train(*separable_data, progress=lambda epoch, total, loss: seen.append((epoch, total, loss)))
        assert [(e, t) for e, t, _ in seen] == [(i, 5) for i in range(1, 6)]
        assert all(loss is not None and loss >= 0.0 for _, _, loss in seen)

    def test_second_training_rejected_while_running(self, clf, separable_data):
        outcomes = []

        def reenter(epoch, total, loss):
            if epoch == 1:
                outcomes.append(clf.state)
                try:
                    clf.train(*separable_data)
                except TrainingInProgressError:
                    outcomes.append("rejected")

        clf.train(*separable_data, progress=reenter)
        assert outcomes == [ClassifierState.TRAINING, "rejected"]
        assert clf.is_trained

    def test_failure_reverts_to_untrained(self, clf):
        with pytest.raises(TrainingFailedError):
            clf.train(np.zeros((3, 7)), np.zeros(3))
        assert clf.state == ClassifierState.UNTRAINED

    def test_failure_after_success_drops_model(self, clf, separable_data):
        clf.train(*separable_data)
        with pytest.raises(TrainingFailedError):
            clf.train(np.zeros((10, 4)), np.zeros(10))
        assert clf.state == ClassifierState.UNTRAINED
        with pytest.raises(ClassifierNotReadyError):
            clf.predict_proba(np.zeros((1, 7)))

    def test_label_count_mismatch_fails(self, clf, separable_data):
        X, y = separable_data
        with pytest.raises(TrainingFailedError):
            clf.train(X, y[:-1])

    def test_cancel(self, clf, separable_data):
        cancel = threading.Event()
        cancel.set()
        with pytest.raises(TrainingCancelledError):
            clf.train(*separable_data, cancel=cancel)
        assert clf.state == ClassifierState.UNTRAINED

    @pytest.mark.parametrize("kwargs", [{"epochs": 0}, {"validation_split": 0.0}, {"validation_split": 1.0}])
    def test_bad_arguments(self, kwargs):
        with pytest.raises(ValueError):
            LogisticRiskClassifier(**kwargs)


class TestInference:
    def test_probabilities_in_unit_interval(self, clf, separable_data):
        X, y = separable_data
        clf.train(X, y)
        p = clf.predict_proba(X[:10])
        assert p.shape == (10,)
        assert ((p >= 0.0) & (p <= 1.0)).all()

    def test_single_vector(self, clf, separable_data):
        X, y = separable_data
        clf.train(X, y)
        assert clf.predict_proba(X[0]).shape == (1,)

    def test_wrong_width_rejected(self, clf, separable_data):
        clf.train(*separable_data)
        with pytest.raises(FeatureShapeError):
            clf.predict_proba(np.zeros((2, 6)))

    def test_feature_shape_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_features(np.full((1, 7), np.nan))

    def test_non_numeric_rejected(self):
        with pytest.raises(FeatureShapeError):
            validate_features([["a"] * 7])

    def test_prediction_is_read_only(self, clf, separable_data):
        X, y = separable_data
        clf.train(X, y)
        first = clf.predict_proba(X[:5])
        clf.predict_proba(X)
        np.testing.assert_allclose(clf.predict_proba(X[:5]), first)


class TestNeuralRiskClassifier:
    def test_trains_and_predicts(self, separable_data):
        X, y = separable_data
        clf = NeuralRiskClassifier(epochs=3, batch_size=32, random_state=0)
        metrics = clf.train(X, y)
        assert clf.is_trained
        assert metrics.epochs == 3
        p = clf.predict_proba(X[:4])
        assert ((p >= 0.0) & (p <= 1.0)).all()

    def test_architecture(self):
        clf = NeuralRiskClassifier()
        estimator = clf._build_estimator()
        assert estimator.hidden_layer_sizes == (64, 32, 16)
        assert estimator.solver == "adam"
        assert estimator.learning_rate_init == pytest.approx(0.001)
