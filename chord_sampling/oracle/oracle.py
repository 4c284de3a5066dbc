"""Feasibility oracles.

An oracle turns chords into the estimated probability that each chord is
physically possible to play. The single variant forwards to one estimator;
the ensemble variant averages several independently trained estimators.
Both expose the same two methods, estimate() and estimate_all(), so samplers
never branch on the variant.
"""

import statistics
from typing import Protocol, Sequence

import numpy as np

from chord_sampling.config import OracleConfig
from chord_sampling.errors import OracleError
from chord_sampling.utils import Chord, Key, chords_to_matrix


class Estimator(Protocol):
    """Anything mapping a chord matrix to one probability per row."""

    def predict_possible(self, X: np.ndarray) -> np.ndarray:
        ...


class FeasibilityOracle(Protocol):
    """Interface shared by SingleOracle and EnsembleOracle."""

    def estimate(self, chord: Chord) -> float:
        ...

    def estimate_all(self, chords: Sequence[Chord]) -> np.ndarray:
        ...


def _run_estimator(estimator: Estimator, X: np.ndarray) -> np.ndarray:
    """Invoke one estimator and check its output is one probability per row."""
    try:
        output = estimator.predict_possible(X)
    except OracleError:
        raise
    except Exception as e:
        raise OracleError(
            f"{type(estimator).__name__} failed: {type(e).__name__}: {e}"
        ) from e

    probabilities = np.asarray(output, dtype=np.float64)
    if probabilities.ndim == 2 and probabilities.shape[1] == 1:
        probabilities = probabilities[:, 0]

    if probabilities.shape != (X.shape[0],):
        raise OracleError(
            f"{type(estimator).__name__} returned shape {probabilities.shape}, "
            f"expected ({X.shape[0]},)"
        )
    if not np.all(np.isfinite(probabilities)):
        raise OracleError(f"{type(estimator).__name__} returned non-finite probabilities")
    if np.any(probabilities < 0) or np.any(probabilities > 1):
        raise OracleError(f"{type(estimator).__name__} returned probabilities outside [0, 1]")

    return probabilities


class SingleOracle:
    """Oracle backed by a single estimator.

    Attributes:
        estimator: The estimator every query is forwarded to
        keys: Key alphabet fixing the chord encoding

    Example:
        >>> oracle = SingleOracle(SklearnEstimator(model), layout.keys)
        >>> oracle.estimate(frozenset({'L1', 'M1'}))
        0.83...
    """

    def __init__(self, estimator: Estimator, keys: Sequence[Key]):
        self.estimator = estimator
        self.keys = tuple(keys)

    def estimate(self, chord: Chord) -> float:
        """Estimated probability that one chord is possible."""
        return float(self.estimate_all([chord])[0])

    def estimate_all(self, chords: Sequence[Chord]) -> np.ndarray:
        """Estimate many chords in one batch, preserving order."""
        if len(chords) == 0:
            return np.zeros(0, dtype=np.float64)
        X = chords_to_matrix(chords, self.keys)
        return _run_estimator(self.estimator, X)


class EnsembleOracle:
    """Oracle averaging a fixed set of independent estimators.

    Each chord's probability is the arithmetic mean of the estimators'
    outputs, correctly rounded so that the result does not depend on the
    order of the estimators.

    Attributes:
        estimators: Tuple of estimators, fixed at construction
        keys: Key alphabet fixing the chord encoding

    Example:
        >>> oracle = EnsembleOracle([est_a, est_b, est_c], layout.keys)
        >>> oracle.size
        3
    """

    def __init__(self, estimators: Sequence[Estimator], keys: Sequence[Key]):
        if len(estimators) == 0:
            raise ValueError("Ensemble oracle needs at least one estimator")
        self.estimators = tuple(estimators)
        self.keys = tuple(keys)

    @property
    def size(self) -> int:
        return len(self.estimators)

    def estimate(self, chord: Chord) -> float:
        """Mean estimated probability that one chord is possible."""
        return float(self.estimate_all([chord])[0])

    def estimate_all(self, chords: Sequence[Chord]) -> np.ndarray:
        """Mean estimates for many chords, one batch per estimator."""
        if len(chords) == 0:
            return np.zeros(0, dtype=np.float64)

        X = chords_to_matrix(chords, self.keys)
        stacked = np.vstack([_run_estimator(estimator, X) for estimator in self.estimators])

        # statistics.mean sums exactly, so 0.2, 0.4, 0.6 average to 0.4
        return np.array(
            [statistics.mean(column) for column in stacked.T.tolist()],
            dtype=np.float64
        )


def build_oracle(
    config: OracleConfig,
    estimators: Sequence[Estimator],
    keys: Sequence[Key]
) -> FeasibilityOracle:
    """Build the oracle variant selected in the configuration.

    Parameters
    ----------
    config : OracleConfig
        Oracle selection.
    estimators : sequence
        Trained estimators. Exactly one for 'single', exactly
        config.ensemble_size for 'ensemble'.
    keys : sequence
        Layout key alphabet.

    Returns
    -------
    oracle : SingleOracle or EnsembleOracle
    """
    config.validate()

    if config.variant == 'single':
        if len(estimators) != 1:
            raise ValueError(f"Single oracle takes exactly 1 estimator, got {len(estimators)}")
        return SingleOracle(estimators[0], keys)

    if len(estimators) != config.ensemble_size:
        raise ValueError(
            f"Ensemble oracle takes exactly {config.ensemble_size} estimators, "
            f"got {len(estimators)}"
        )
    return EnsembleOracle(estimators, keys)
