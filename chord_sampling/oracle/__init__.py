"""Feasibility oracles and estimator adapters.

This subpackage provides:
- SingleOracle / EnsembleOracle behind one estimate / estimate_all interface
- build_oracle for config-driven variant selection
- Adapters for scikit-learn and Keras estimators
"""

from chord_sampling.oracle.oracle import (
    Estimator,
    FeasibilityOracle,
    SingleOracle,
    EnsembleOracle,
    build_oracle
)
from chord_sampling.oracle.estimators import SklearnEstimator, KerasEstimator

__all__ = [
    'Estimator',
    'FeasibilityOracle',
    'SingleOracle',
    'EnsembleOracle',
    'build_oracle',
    'SklearnEstimator',
    'KerasEstimator'
]
