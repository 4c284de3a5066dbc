"""Exponential chord sampler.

Builds chords one key at a time without consulting the feasibility oracle,
so the number of keys is roughly geometric and small chords dominate.
"""

import logging
from typing import Iterator, List, Optional

from chord_sampling.config import ExponentialConfig
from chord_sampling.errors import ValidityError
from chord_sampling.layout import Layout
from chord_sampling.tracking import get_logger
from chord_sampling.utils import Chord, as_random_state


class ExponentialSampler:
    """Incremental stochastic chord construction.

    Starting from the empty chord, each step looks up the keys that can be
    legally added. If there are none the chord is emitted; otherwise a random
    legal key is added with probability continue_probability and the chord
    is emitted with the remaining probability. A stop on an illegal empty
    chord discards the attempt and starts over.

    Attributes:
        layout: Layout deciding which additions are legal
        config: ExponentialConfig with the continue probability
        rng: NumPy random number generator

    Example:
        >>> sampler = ExponentialSampler(TwiddlerLayout(), random_state=42)
        >>> chord = sampler.sample_chord()
    """

    def __init__(
        self,
        layout: Layout,
        random_state,
        config: Optional[ExponentialConfig] = None,
        logger: Optional[logging.Logger] = None
    ):
        """Initialize the exponential sampler.

        Args:
            layout: Validity predicate for incremental additions
            random_state: Seed or np.random.RandomState
            config: ExponentialConfig (defaults to continue probability 0.6)
            logger: Logger for debug output
        """
        self.layout = layout
        self.config = config if config is not None else ExponentialConfig()
        self.config.validate()
        self.rng = as_random_state(random_state)
        self.logger = logger if logger is not None else get_logger()

    def _construct(self, context) -> Chord:
        chord = frozenset()
        while True:
            candidates = self.layout.legal_additions(chord, context)
            if not candidates:
                return chord
            if self.rng.random_sample() >= self.config.continue_probability:
                return chord
            chord = chord | {candidates[self.rng.randint(len(candidates))]}

    def sample_chord(self, context=None) -> Chord:
        """Construct one legal chord.

        Per step the random source is consumed as one uniform value for the
        stop/continue decision, then one integer for the key when continuing.
        Every added key is a legal addition, so only a stop on the empty chord
        can produce an illegal result; construction then restarts from scratch.

        Args:
            context: Optional layout context

        Returns:
            Legal chord (the empty chord only where the layout allows it)

        Raises:
            ValidityError: If the empty chord is illegal and no key can start a chord
        """
        restarts = 0
        while True:
            chord = self._construct(context)
            if self.layout.is_legal(chord, context):
                break
            if not self.layout.legal_additions(chord, context):
                raise ValidityError(f"No legal chord can be built for context {context!r}")
            restarts += 1

        self.logger.debug(
            f"Exponential sampler built chord of {len(chord)} key(s) after {restarts} restart(s)"
        )
        return chord

    def sample(self, n: int, context=None) -> List[Chord]:
        """Draw n chords."""
        return [self.sample_chord(context) for _ in range(n)]

    def __iter__(self) -> Iterator[Chord]:
        while True:
            yield self.sample_chord()
