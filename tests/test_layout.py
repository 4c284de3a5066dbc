"""Unit tests for layouts (validity predicates).

This test suite validates PredicateLayout and TwiddlerLayout enumeration,
incremental legality and uniform sampling.
"""

import unittest
import sys
from pathlib import Path
import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chord_sampling.errors import EnumerationTooLarge, ValidityError
from chord_sampling.layout import PredicateLayout, TwiddlerLayout, TWIDDLER_KEYS


def at_most_two_keys(chord, context):
    return 0 < len(chord) <= 2


class TestPredicateLayout(unittest.TestCase):
    """Test layouts built from a predicate function."""

    def setUp(self):
        """Set up a three-key layout allowing one or two keys."""
        self.layout = PredicateLayout(keys=('a', 'b', 'c'), predicate=at_most_two_keys)

    def test_enumeration_order(self):
        """Test chords come by size, then alphabet order."""
        chords = self.layout.enumerate_legal()
        expected = [
            {'a'}, {'b'}, {'c'},
            {'a', 'b'}, {'a', 'c'}, {'b', 'c'}
        ]
        self.assertEqual([set(chord) for chord in chords], expected)

    def test_enumeration_cached(self):
        """Test the enumeration is computed once per context."""
        first = self.layout.enumerate_legal()
        second = self.layout.enumerate_legal()
        self.assertIs(first, second)

    def test_clear_cache(self):
        """Test clearing the cache forces a fresh enumeration."""
        first = self.layout.enumerate_legal()
        self.layout.clear_cache()
        second = self.layout.enumerate_legal()
        self.assertIsNot(first, second)
        self.assertEqual(first, second)

    def test_legal_addition(self):
        """Test incremental legality."""
        self.assertTrue(self.layout.is_legal_addition(frozenset(), 'a'))
        self.assertTrue(self.layout.is_legal_addition(frozenset({'a'}), 'b'))
        self.assertFalse(self.layout.is_legal_addition(frozenset({'a', 'b'}), 'c'))

    def test_existing_key_not_legal_addition(self):
        """Test a key already in the chord cannot be added again."""
        self.assertFalse(self.layout.is_legal_addition(frozenset({'a'}), 'a'))

    def test_legal_additions(self):
        """Test listing legal additions in alphabet order."""
        self.assertEqual(self.layout.legal_additions(frozenset()), ['a', 'b', 'c'])
        self.assertEqual(self.layout.legal_additions(frozenset({'b'})), ['a', 'c'])
        self.assertEqual(self.layout.legal_additions(frozenset({'a', 'c'})), [])

    def test_is_legal(self):
        """Test whole-chord legality goes through the checked predicate."""
        self.assertTrue(self.layout.is_legal(frozenset({'a', 'c'})))
        self.assertFalse(self.layout.is_legal(frozenset()))
        with self.assertRaises(ValidityError):
            self.layout.is_legal(frozenset({'z'}))

    def test_unknown_key(self):
        """Test unknown keys raise ValidityError."""
        with self.assertRaises(ValidityError):
            self.layout.is_legal_addition(frozenset(), 'z')

    def test_context_forwarded(self):
        """Test the context reaches the predicate and scopes the cache."""
        layout = PredicateLayout(
            keys=('a', 'b', 'c'),
            predicate=lambda chord, context: len(chord) == (context or 1)
        )
        self.assertEqual(layout.count_legal(), 3)
        self.assertEqual(layout.count_legal(context=2), 3)
        self.assertEqual(layout.count_legal(context=3), 1)

    def test_predicate_failure_wrapped(self):
        """Test predicate exceptions surface as ValidityError."""
        def broken(chord, context):
            raise KeyError("missing context")

        layout = PredicateLayout(keys=('a', 'b'), predicate=broken)
        with self.assertRaises(ValidityError):
            layout.enumerate_legal()

    def test_enumeration_bound(self):
        """Test enumeration stops once the bound is exceeded."""
        layout = PredicateLayout(keys=('a', 'b', 'c'), predicate=at_most_two_keys, max_chords=4)
        with self.assertRaises(EnumerationTooLarge):
            layout.enumerate_legal()

    def test_uniform_sampling(self):
        """Test uniform sampling covers every legal chord evenly."""
        rng = np.random.RandomState(42)
        counts = {}
        for _ in range(6000):
            chord = self.layout.sample_uniform_legal(rng)
            counts[chord] = counts.get(chord, 0) + 1

        self.assertEqual(set(counts), set(self.layout.enumerate_legal()))
        for count in counts.values():
            self.assertAlmostEqual(count / 6000, 1 / 6, delta=0.03)

    def test_uniform_sampling_no_chords(self):
        """Test sampling an empty legal set fails."""
        layout = PredicateLayout(keys=('a',), predicate=lambda chord, context: False)
        with self.assertRaises(ValidityError):
            layout.sample_uniform_legal(np.random.RandomState(0))

    def test_invalid_keys(self):
        """Test layout key validation."""
        with self.assertRaises(ValueError):
            PredicateLayout(keys=(), predicate=at_most_two_keys)
        with self.assertRaises(ValueError):
            PredicateLayout(keys=('a', 'a'), predicate=at_most_two_keys)


class TestTwiddlerLayout(unittest.TestCase):
    """Test the Twiddler keyboard layout."""

    def setUp(self):
        """Set up layout."""
        self.layout = TwiddlerLayout()

    def test_keys(self):
        """Test the 16-key alphabet."""
        self.assertEqual(len(self.layout.keys), 16)
        self.assertEqual(self.layout.keys, TWIDDLER_KEYS)

    def test_thumb_only_invalid(self):
        """Test chords need a finger key."""
        self.assertFalse(self.layout.is_valid(frozenset()))
        self.assertFalse(self.layout.is_valid(frozenset({'Z0', 'L0'})))
        self.assertTrue(self.layout.is_valid(frozenset({'Z0', 'L1'})))

    def test_reserved_chords(self):
        """Test reserved Num+Shift chords are invalid."""
        self.assertFalse(self.layout.is_valid(frozenset({'Z0', 'R0', 'M2'})))
        self.assertTrue(self.layout.is_valid(frozenset({'Z0', 'R0', 'L2'})))
        self.assertTrue(self.layout.is_valid(frozenset({'Z0', 'R0', 'M2', 'L1'})))

    def test_legal_chord_count(self):
        """Test all 2^16 chords minus thumb-only and reserved ones."""
        # 16 thumb-only subsets (including empty) and 8 reserved chords
        self.assertEqual(self.layout.count_legal(), 65536 - 16 - 8)

    def test_first_additions(self):
        """Test only finger keys can start a chord."""
        additions = self.layout.legal_additions(frozenset())
        self.assertEqual(len(additions), 12)
        self.assertNotIn('Z0', additions)

    def test_graphical_format(self):
        """Test the key grid drawing."""
        drawing = self.layout.format_graphical(frozenset({'L0', 'M1'}))
        self.assertEqual(drawing.splitlines(), ['.#..', ' .#.', ' ...', ' ...', ' ...'])


if __name__ == '__main__':
    unittest.main(verbosity=2)
