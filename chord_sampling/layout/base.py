"""Validity predicate abstractions.

A layout owns the ordered key alphabet of a keyboard and the rule deciding
which key combinations are legal chords. Samplers only ever query it; they
never decide legality themselves.
"""

from abc import ABC, abstractmethod
from itertools import combinations
from typing import Callable, Dict, Hashable, List, Optional, Sequence, Tuple

import numpy as np

from chord_sampling.errors import EnumerationTooLarge, ValidityError
from chord_sampling.utils import Chord, Key


class Layout(ABC):
    """Keyboard layout exposing legality checks and legal-chord enumeration.

    Subclasses implement is_valid(); incremental legality, enumeration and
    uniform sampling are derived from it. Enumerations are cached per
    context since the rule is fixed for the lifetime of a layout; the cache
    keeps one entry per context until clear_cache() is called.

    Attributes:
        keys: Ordered key alphabet
        max_chords: Largest legal chord set enumerate_legal() will build
    """

    def __init__(self, keys: Sequence[Key], max_chords: int = 2 ** 16):
        if len(keys) == 0:
            raise ValueError("Layout needs at least one key")
        if len(set(keys)) != len(keys):
            raise ValueError("Layout keys must be unique")
        if max_chords <= 0:
            raise ValueError(f"max_chords must be positive, got {max_chords}")

        self.keys: Tuple[Key, ...] = tuple(keys)
        self.max_chords = max_chords
        self._key_set = frozenset(self.keys)
        self._enumerations: Dict[Hashable, Tuple[Chord, ...]] = {}

    @abstractmethod
    def is_valid(self, chord: Chord, context=None) -> bool:
        """Whether the chord is legal in the given context."""

    def _check_valid(self, chord: Chord, context) -> bool:
        unknown = chord - self._key_set
        if unknown:
            raise ValidityError(f"Chord contains keys outside the layout: {sorted(map(str, unknown))}")
        try:
            return bool(self.is_valid(chord, context))
        except ValidityError:
            raise
        except Exception as e:
            raise ValidityError(f"Validity check failed for context {context!r}: {e}") from e

    def is_legal(self, chord: Chord, context=None) -> bool:
        """Whether the whole chord is legal.

        Raises:
            ValidityError: If the chord has unknown keys or the predicate fails
        """
        return self._check_valid(chord, context)

    def is_legal_addition(self, partial_chord: Chord, key: Key, context=None) -> bool:
        """Whether adding key to partial_chord yields a legal chord.

        Keys already in the chord are never legal additions.
        """
        if key not in self._key_set:
            raise ValidityError(f"Unknown key: {key!r}")
        if key in partial_chord:
            return False
        return self._check_valid(partial_chord | {key}, context)

    def legal_additions(self, chord: Chord, context=None) -> List[Key]:
        """List the keys (in alphabet order) that can legally extend chord."""
        return [
            key for key in self.keys
            if key not in chord and self.is_legal_addition(chord, key, context)
        ]

    def enumerate_legal(self, context=None) -> Tuple[Chord, ...]:
        """Enumerate every legal chord for a context.

        Chords are produced in powerset order: by increasing size, then by
        key alphabet order. This order is the tie-breaker used when ranking
        chords, so it must stay deterministic.

        Args:
            context: Optional layout context

        Returns:
            Tuple of legal chords

        Raises:
            EnumerationTooLarge: If more than max_chords legal chords exist
            ValidityError: If the predicate fails
        """
        if context in self._enumerations:
            return self._enumerations[context]

        chords = []
        for size in range(len(self.keys) + 1):
            for keys in combinations(self.keys, size):
                chord = frozenset(keys)
                if self._check_valid(chord, context):
                    chords.append(chord)
                    if len(chords) > self.max_chords:
                        raise EnumerationTooLarge(self.max_chords, context)

        enumeration = tuple(chords)
        self._enumerations[context] = enumeration
        return enumeration

    def clear_cache(self) -> None:
        """Forget every cached enumeration."""
        self._enumerations.clear()

    def sample_uniform_legal(self, rng: np.random.RandomState, context=None) -> Chord:
        """Draw one legal chord uniformly at random using the caller's rng.

        Raises:
            ValidityError: If the context has no legal chords
        """
        chords = self.enumerate_legal(context)
        if not chords:
            raise ValidityError(f"No legal chords for context {context!r}")
        return chords[rng.randint(len(chords))]

    def count_legal(self, context=None) -> int:
        """Number of legal chords for a context."""
        return len(self.enumerate_legal(context))


class PredicateLayout(Layout):
    """Layout defined by a plain predicate function.

    Example:
        >>> layout = PredicateLayout(
        ...     keys=('a', 'b', 'c'),
        ...     predicate=lambda chord, context: 0 < len(chord) <= 2
        ... )
        >>> layout.count_legal()
        6
    """

    def __init__(
        self,
        keys: Sequence[Key],
        predicate: Callable[[Chord, Optional[Hashable]], bool],
        max_chords: int = 2 ** 16
    ):
        super().__init__(keys, max_chords=max_chords)
        self.predicate = predicate

    def is_valid(self, chord: Chord, context=None) -> bool:
        return self.predicate(chord, context)
