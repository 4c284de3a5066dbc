"""Estimator adapters.

An estimator is anything exposing predict_possible(X) -> probabilities, where
X is the (n_chords, n_keys) 0/1 chord matrix. These adapters put trained
scikit-learn classifiers and Keras models behind that single method so the
oracle never needs to know which backend produced a probability.
"""

from typing import Any, Optional

import numpy as np
from sklearn.base import BaseEstimator


class SklearnEstimator:
    """Wraps a fitted scikit-learn classifier.

    The probability that a chord is possible is the predict_proba column of
    the positive label.

    Attributes:
        model: Fitted classifier with predict_proba
        positive_label: Class label meaning "possible"

    Example:
        >>> from sklearn.linear_model import LogisticRegression
        >>> model = LogisticRegression().fit(X_chords, y_possible)
        >>> estimator = SklearnEstimator(model)
        >>> probs = estimator.predict_possible(X_chords)
    """

    def __init__(self, model: BaseEstimator, positive_label: Any = 1):
        if not hasattr(model, 'predict_proba'):
            raise ValueError(
                f"{type(model).__name__} has no predict_proba; "
                f"wrap it in CalibratedClassifierCV first"
            )
        self.model = model
        self.positive_label = positive_label

    def predict_possible(self, X: np.ndarray) -> np.ndarray:
        classes = list(self.model.classes_)
        if self.positive_label not in classes:
            raise ValueError(
                f"Positive label {self.positive_label!r} not among model classes {classes}"
            )
        proba = self.model.predict_proba(X)
        return proba[:, classes.index(self.positive_label)]


class KerasEstimator:
    """Wraps a Keras model with a sigmoid "possible" output.

    TensorFlow is installed through the keras extra; the adapter only calls
    model.predict, so it never imports it.

    Parameters
    ----------
    model : keras.Model
        Trained model taking the chord matrix as input.
    batch_size : int, default=4096
        Batch size for inference over large chord sets.
    output_index : int, optional
        Column of a multi-output head holding the possible probability
        (e.g. a (time, accuracy, possible) head). Required when the model
        outputs more than one column.
    """

    def __init__(self, model, batch_size: int = 4096, output_index: Optional[int] = None):
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive, got {batch_size}")
        self.model = model
        self.batch_size = batch_size
        self.output_index = output_index

    def predict_possible(self, X: np.ndarray) -> np.ndarray:
        predictions = np.asarray(
            self.model.predict(X, batch_size=self.batch_size, verbose=0)
        )

        if predictions.ndim == 2 and predictions.shape[1] > 1:
            if self.output_index is None:
                raise ValueError(
                    f"Model has {predictions.shape[1]} outputs; set output_index"
                )
            return predictions[:, self.output_index]

        return predictions.reshape(-1)
