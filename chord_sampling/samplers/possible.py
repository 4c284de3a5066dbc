"""Rejection ("possible") chord sampler.

Draws legal chords uniformly and keeps each one with probability equal to
the oracle's estimate that it is possible, so the output concentrates on
chords the oracle believes can be played.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from chord_sampling.config import PossibleConfig
from chord_sampling.errors import SamplingAttemptsExceeded
from chord_sampling.layout import Layout
from chord_sampling.oracle import FeasibilityOracle
from chord_sampling.tracking import get_logger, log_error, log_rejection_stats
from chord_sampling.utils import Chord, as_random_state


class PossibleSampler:
    """Oracle-weighted rejection sampling over the legal chord set.

    Each attempt:
    1. Draws a chord uniformly from the layout's legal chords
    2. Queries the oracle for its probability p
    3. Accepts if a uniform value r in [0, 1) satisfies r < p

    The expected number of attempts per chord is 1 / (mean probability over
    the legal set). The loop is unbounded unless max_attempts is set.

    Attributes:
        layout: Layout supplying uniform legal chords
        oracle: Feasibility oracle (single or ensemble)
        config: PossibleConfig with the attempt cap
        rng: NumPy random number generator

    Example:
        >>> sampler = PossibleSampler(layout, oracle, random_state=42)
        >>> chord, attempts = sampler.draw()
        >>> print(f"Accepted after {attempts} attempts")
    """

    def __init__(
        self,
        layout: Layout,
        oracle: FeasibilityOracle,
        random_state,
        config: Optional[PossibleConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the rejection sampler.

        Args:
            layout: Validity predicate with uniform legal sampling
            oracle: Feasibility oracle
            random_state: Seed or np.random.RandomState
            config: PossibleConfig (defaults to unbounded attempts)
            logger: Logger for debug output
        """
        self.layout = layout
        self.oracle = oracle
        self.config = config if config is not None else PossibleConfig()
        self.config.validate()
        self.rng = as_random_state(random_state)
        self.logger = logger if logger is not None else get_logger()

    def should_accept(self, probability: float) -> bool:
        """Accept a candidate with the given estimated probability."""
        return self.rng.random_sample() < probability

    def draw(self, context=None) -> Tuple[Chord, int]:
        """Rejection sample one chord.

        Args:
            context: Optional layout context

        Returns:
            Tuple of (chord, attempts), attempts counting the accepted draw

        Raises:
            SamplingAttemptsExceeded: If max_attempts draws were all rejected
            OracleError: If the oracle fails on a candidate
        """
        max_attempts = self.config.max_attempts
        attempts = 0
        while max_attempts is None or attempts < max_attempts:
            attempts += 1
            candidate = self.layout.sample_uniform_legal(self.rng, context)
            probability = self.oracle.estimate(candidate)
            if self.should_accept(probability):
                log_rejection_stats(self.logger, attempts, probability)
                return candidate, attempts

        error = SamplingAttemptsExceeded(max_attempts)
        log_error(self.logger, error, context="possible sampler")
        raise error

    def sample_chord(self, context=None) -> Chord:
        """Rejection sample one chord."""
        chord, _ = self.draw(context)
        return chord

    def sample(self, n: int, context=None) -> List[Chord]:
        """Draw n chords."""
        return [self.sample_chord(context) for _ in range(n)]

    def __iter__(self) -> Iterator[Chord]:
        while True:
            yield self.sample_chord()
