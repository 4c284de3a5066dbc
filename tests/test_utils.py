"""Unit tests for chord utility functions."""

import unittest
import sys
from pathlib import Path
import numpy as np

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from chord_sampling.utils import (
    format_chord, chord_to_vector, chords_to_matrix, compute_chords_hash, as_random_state
)

KEYS = ('a', 'b', 'c', 'd')


class TestEncoding(unittest.TestCase):
    """Test chord vector encoding."""

    def test_chord_to_vector(self):
        """Test positions follow the key alphabet."""
        vector = chord_to_vector(frozenset({'d', 'b'}), KEYS)

        self.assertEqual(vector.dtype, np.float32)
        np.testing.assert_array_equal(vector, [0.0, 1.0, 0.0, 1.0])

    def test_empty_chord_vector(self):
        """Test the empty chord encodes as zeros."""
        np.testing.assert_array_equal(chord_to_vector(frozenset(), KEYS), np.zeros(4))

    def test_matrix_rows_are_vectors(self):
        """Test each matrix row is the chord's vector."""
        chords = [frozenset({'a'}), frozenset({'b', 'c'}), frozenset()]
        matrix = chords_to_matrix(chords, KEYS)

        self.assertEqual(matrix.shape, (3, 4))
        self.assertEqual(matrix.dtype, np.float32)
        for row, chord in zip(matrix, chords):
            np.testing.assert_array_equal(row, chord_to_vector(chord, KEYS))

    def test_empty_matrix(self):
        """Test no chords give a (0, n_keys) matrix."""
        self.assertEqual(chords_to_matrix([], KEYS).shape, (0, 4))


class TestFormatting(unittest.TestCase):
    """Test chord formatting and hashing."""

    def test_format_chord(self):
        """Test keys are joined in alphabet order."""
        self.assertEqual(format_chord(frozenset({'c', 'a'}), KEYS), 'a+c')
        self.assertEqual(format_chord(frozenset(), KEYS), '-')

    def test_hash_depends_on_order(self):
        """Test the hash tracks chord order and probabilities."""
        chords = [frozenset({'a'}), frozenset({'b'})]
        base = compute_chords_hash(chords, KEYS, [0.7, 0.3])

        self.assertEqual(len(base), 16)
        self.assertEqual(base, compute_chords_hash(chords, KEYS, [0.7, 0.3]))
        self.assertNotEqual(base, compute_chords_hash(chords[::-1], KEYS, [0.7, 0.3]))
        self.assertNotEqual(base, compute_chords_hash(chords, KEYS, [0.7, 0.4]))


class TestRandomState(unittest.TestCase):
    """Test random source resolution."""

    def test_seed(self):
        """Test integer seeds build a RandomState."""
        rng = as_random_state(5)
        self.assertIsInstance(rng, np.random.RandomState)
        self.assertEqual(rng.randint(1000), np.random.RandomState(5).randint(1000))

    def test_instance_passthrough(self):
        """Test an existing RandomState is used as is."""
        rng = np.random.RandomState(1)
        self.assertIs(as_random_state(rng), rng)

    def test_none_refused(self):
        """Test the global numpy state is never used."""
        with self.assertRaises(ValueError):
            as_random_state(None)


if __name__ == '__main__':
    unittest.main(verbosity=2)
