"""Chord samplers.

This subpackage provides the three sampling strategies:
- ExponentialSampler: incremental random construction, no oracle
- PossibleSampler: uniform draws accepted with the oracle's probability
- UncertainSampler: binomial rank sampling around the oracle's boundary
"""

from chord_sampling.samplers.exponential import ExponentialSampler
from chord_sampling.samplers.possible import PossibleSampler
from chord_sampling.samplers.uncertain import ChordRanking, UncertainSampler, rank_chords
from chord_sampling.samplers.factory import ChordSampler, build_sampler

__all__ = [
    'ExponentialSampler',
    'PossibleSampler',
    'UncertainSampler',
    'ChordRanking',
    'rank_chords',
    'ChordSampler',
    'build_sampler'
]
