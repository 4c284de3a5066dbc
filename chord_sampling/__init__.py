"""Chord Sampling Engine.

Draws candidate keyboard chords for keymap optimization, featuring:
- Exponential sampler: incremental random chord construction
- Possible sampler: uniform draws accepted by estimated feasibility
- Uncertain sampler: binomial sampling around the oracle's decision boundary
- Single or ensembled feasibility oracles over scikit-learn / Keras models

Each sampler is selected at configuration time and pulled one chord at a time
by the outer optimizer.
"""

__version__ = "1.0.0"
__author__ = "Keymap Optimization Team"

from chord_sampling.config import SamplingConfig
from chord_sampling.samplers import build_sampler
from chord_sampling.oracle import build_oracle

__all__ = ['SamplingConfig', 'build_sampler', 'build_oracle']
