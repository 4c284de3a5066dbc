"""Utility functions for working with chords."""

import hashlib
import json
from typing import FrozenSet, Hashable, List, Sequence

import numpy as np
from sklearn.utils import check_random_state

Key = Hashable
Chord = FrozenSet[Key]


def order_keys(chord: Chord, keys: Sequence[Key]) -> List[Key]:
    """Return the chord's keys in alphabet order."""
    return [key for key in keys if key in chord]


def format_chord(chord: Chord, keys: Sequence[Key]) -> str:
    """Format a chord as its keys in alphabet order, e.g. 'L0+M1'.

    The empty chord formats as '-'.
    """
    ordered = order_keys(chord, keys)
    if not ordered:
        return '-'
    return '+'.join(str(key) for key in ordered)


def chord_to_vector(chord: Chord, keys: Sequence[Key]) -> np.ndarray:
    """Encode a chord as a 0/1 float32 vector over the key alphabet.

    Parameters
    ----------
    chord : frozenset
        Chord to encode.
    keys : sequence
        Ordered key alphabet; position i of the vector is keys[i].

    Returns
    -------
    vector : np.ndarray
        Shape (len(keys),), 1.0 where the key is pressed.
    """
    return np.array([1.0 if key in chord else 0.0 for key in keys], dtype=np.float32)


def chords_to_matrix(chords: Sequence[Chord], keys: Sequence[Key]) -> np.ndarray:
    """Stack chord vectors into an (n_chords, n_keys) float32 matrix."""
    if len(chords) == 0:
        return np.zeros((0, len(keys)), dtype=np.float32)
    return np.vstack([chord_to_vector(chord, keys) for chord in chords])


def compute_chords_hash(
    chords: Sequence[Chord],
    keys: Sequence[Key],
    probabilities: Sequence[float] = None
) -> str:
    """Compute a hash of an ordered chord list for reproducibility checks.

    Parameters
    ----------
    chords : sequence of frozenset
        Chords in the order to fingerprint.
    keys : sequence
        Key alphabet, fixes the textual form of each chord.
    probabilities : sequence of float, optional
        Probabilities aligned with chords, included when provided.

    Returns
    -------
    hash_str : str
        SHA256 hash of the ordered chords (first 16 hex characters).
    """
    payload = {'chords': [format_chord(chord, keys) for chord in chords]}
    if probabilities is not None:
        payload['probabilities'] = [float(p).hex() for p in probabilities]

    config_str = json.dumps(payload, sort_keys=True)
    return hashlib.sha256(config_str.encode()).hexdigest()[:16]


def as_random_state(random_state) -> np.random.RandomState:
    """Resolve a seed or RandomState into the sampler's random source.

    None is rejected: it would fall back to numpy's global random state and
    make sampling irreproducible.

    Parameters
    ----------
    random_state : int or np.random.RandomState
        Seed, or an existing random source to share.

    Returns
    -------
    rng : np.random.RandomState
    """
    if random_state is None:
        raise ValueError("random_state must be a seed or a RandomState, not None")
    return check_random_state(random_state)
