"""Uncertainty-ranked ("uncertain") chord sampler.

Scores every legal chord with the oracle once per context, ranks them from
most to least likely possible, and then samples ranks from a binomial
distribution centred on the boundary where the estimate crosses 0.5. Draws
concentrate on the chords the oracle is least sure about, which are the most
informative ones to test next.
"""

import logging
import time
from typing import Dict, Hashable, Iterator, List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.stats import binom

from chord_sampling.config import UncertainConfig
from chord_sampling.errors import EnumerationTooLarge, ValidityError
from chord_sampling.layout import Layout
from chord_sampling.oracle import FeasibilityOracle
from chord_sampling.tracking import (
    get_logger, log_error, log_phase_end, log_phase_start, log_ranking_summary,
    log_success
)
from chord_sampling.utils import Chord, Key, compute_chords_hash, format_chord, as_random_state


class ChordRanking:
    """Legal chords sorted by estimated probability of being possible.

    Attributes:
        chords: Chords, most likely possible first
        probabilities: Oracle estimates aligned with chords
        boundary_index: Number of chords with probability above the threshold
        threshold: Probability used to compute the boundary index
    """

    def __init__(
        self,
        chords: Sequence[Chord],
        probabilities: np.ndarray,
        boundary_index: int,
        threshold: float
    ):
        self.chords: Tuple[Chord, ...] = tuple(chords)
        self.probabilities = np.asarray(probabilities, dtype=np.float64)
        self.probabilities.setflags(write=False)
        self.boundary_index = boundary_index
        self.threshold = threshold

    @property
    def n(self) -> int:
        return len(self.chords)

    @property
    def binomial_p(self) -> float:
        """Success probability i/n of the rank distribution."""
        return self.boundary_index / self.n

    @property
    def index_std(self) -> float:
        """Standard deviation sqrt(n p (1 - p)) of the sampled rank."""
        p = self.binomial_p
        return float(np.sqrt(self.n * p * (1 - p)))

    def index_probabilities(self) -> np.ndarray:
        """Probability of drawing each rank.

        Binomial(n, i/n) mass over 0..n, with the mass of n folded into n-1
        by the clamp.

        Returns:
            Array of length n summing to 1
        """
        pmf = binom.pmf(np.arange(self.n + 1), self.n, self.binomial_p)
        pmf[self.n - 1] += pmf[self.n]
        return pmf[:self.n]

    def to_frame(self, keys: Sequence[Key]) -> pd.DataFrame:
        """Tabulate the ranking for inspection.

        Args:
            keys: Layout key alphabet used to format chords

        Returns:
            DataFrame with rank, chord, n_keys, probability and
            sample_probability columns
        """
        return pd.DataFrame({
            'rank': np.arange(self.n),
            'chord': [format_chord(chord, keys) for chord in self.chords],
            'n_keys': [len(chord) for chord in self.chords],
            'probability': self.probabilities,
            'sample_probability': self.index_probabilities()
        })

    def fingerprint(self, keys: Sequence[Key]) -> str:
        """Hash of the sorted order and probabilities."""
        return compute_chords_hash(self.chords, keys, self.probabilities)


def rank_chords(
    chords: Sequence[Chord],
    probabilities: Sequence[float],
    threshold: float = 0.5
) -> ChordRanking:
    """Sort chords by probability and locate the decision boundary.

    The sort is descending and stable, so chords with equal probability keep
    their enumeration order.

    Parameters
    ----------
    chords : sequence of frozenset
        Legal chords in enumeration order.
    probabilities : sequence of float
        Oracle estimates aligned with chords.
    threshold : float, default=0.5
        The boundary index counts probabilities strictly above this.

    Returns
    -------
    ranking : ChordRanking
    """
    probabilities = np.asarray(probabilities, dtype=np.float64)
    if len(chords) == 0:
        raise ValidityError("Cannot rank an empty chord set")
    if probabilities.shape != (len(chords),):
        raise ValueError(
            f"Got {probabilities.shape[0] if probabilities.ndim else 0} probabilities "
            f"for {len(chords)} chords"
        )

    order = np.argsort(-probabilities, kind='stable')
    sorted_probabilities = probabilities[order]
    boundary_index = int(np.count_nonzero(sorted_probabilities > threshold))

    return ChordRanking(
        chords=[chords[i] for i in order],
        probabilities=sorted_probabilities,
        boundary_index=boundary_index,
        threshold=threshold
    )


class UncertainSampler:
    """Binomial rank sampling around the oracle's decision boundary.

    Setup (once per context): enumerate all n legal chords, score them in
    one oracle batch, and rank them. Each draw then picks rank
    j ~ Binomial(n, i/n), clamped to n-1, where i is the boundary index.
    The mean rank is exactly i.

    If every chord is above the threshold (i = n) or none is (i = 0) the
    distribution is degenerate and every draw returns the last or first
    ranked chord.

    Attributes:
        layout: Layout enumerating legal chords
        oracle: Feasibility oracle (single or ensemble)
        config: UncertainConfig with threshold and enumeration bound
        rng: NumPy random number generator

    Example:
        >>> sampler = UncertainSampler(layout, oracle, random_state=42)
        >>> ranking = sampler.prepare()
        >>> print(f"Boundary at {ranking.boundary_index} of {ranking.n}")
        >>> chord = sampler.sample_chord()
    """

    def __init__(
        self,
        layout: Layout,
        oracle: FeasibilityOracle,
        random_state,
        config: Optional[UncertainConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the uncertain sampler.

        Args:
            layout: Validity predicate with legal chord enumeration
            oracle: Feasibility oracle
            random_state: Seed or np.random.RandomState
            config: UncertainConfig (defaults to threshold 0.5)
            logger: Logger for setup progress
        """
        self.layout = layout
        self.oracle = oracle
        self.config = config if config is not None else UncertainConfig()
        self.config.validate()
        self.rng = as_random_state(random_state)
        self.logger = logger if logger is not None else get_logger()
        self._rankings: Dict[Hashable, ChordRanking] = {}

    def prepare(self, context=None, refresh: bool = False) -> ChordRanking:
        """Enumerate, score and rank the legal chords of a context.

        The ranking is cached; later draws for the same context reuse it.
        The cache holds one ranking per context seen and is only emptied by
        clear_cache(), so callers cycling through many contexts should clear it.
        Setup does not consume the random source.

        Args:
            context: Optional layout context
            refresh: Recompute even if a ranking is cached

        Returns:
            ChordRanking for the context

        Raises:
            EnumerationTooLarge: If more than max_chords legal chords exist
            ValidityError: If the context has no legal chords
            OracleError: If scoring fails
        """
        if not refresh and context in self._rankings:
            return self._rankings[context]

        start_time = time.time()
        log_phase_start(self.logger, "Chord ranking", f"Context: {context!r}")

        chords = self.layout.enumerate_legal(context)
        if len(chords) > self.config.max_chords:
            error = EnumerationTooLarge(self.config.max_chords, context)
            log_error(self.logger, error, context="uncertain sampler setup")
            raise error
        if not chords:
            error = ValidityError(f"No legal chords for context {context!r}")
            log_error(self.logger, error, context="uncertain sampler setup")
            raise error

        probabilities = self.oracle.estimate_all(chords)
        ranking = rank_chords(chords, probabilities, self.config.boundary_threshold)

        log_ranking_summary(
            self.logger, ranking.n, ranking.boundary_index,
            ranking.binomial_p, ranking.index_std
        )
        log_success(self.logger, f"Ranking ready: {ranking.fingerprint(self.layout.keys)}")
        log_phase_end(self.logger, "Chord ranking", time.time() - start_time)

        self._rankings[context] = ranking
        return ranking

    def _draw_index(self, ranking: ChordRanking) -> int:
        j = self.rng.binomial(ranking.n, ranking.binomial_p)
        return min(int(j), ranking.n - 1)

    def sample_index(self, context=None) -> int:
        """Draw one rank: Binomial(n, i/n) clamped to [0, n-1]."""
        return self._draw_index(self.prepare(context))

    def sample_chord(self, context=None) -> Chord:
        """Draw one chord near the decision boundary."""
        ranking = self.prepare(context)
        return ranking.chords[self._draw_index(ranking)]

    def clear_cache(self) -> None:
        """Drop every cached ranking; the next draw per context re-scores."""
        self._rankings.clear()

    def sample(self, n: int, context=None) -> List[Chord]:
        """Draw n chords."""
        return [self.sample_chord(context) for _ in range(n)]

    def __iter__(self) -> Iterator[Chord]:
        while True:
            yield self.sample_chord()
