"""Twiddler one-handed chording keyboard layout.

The Twiddler has four thumb keys and a 4x3 grid of finger keys. Keys are
named by column (L, M, R, plus Z for the extra thumb key) and row (0 for the
thumb row, 1-4 for the finger rows).
"""

from typing import Tuple

from chord_sampling.layout.base import Layout
from chord_sampling.utils import Chord


# Num, Alt, Ctrl, Shift
THUMB_KEYS: Tuple[str, ...] = ('Z0', 'L0', 'M0', 'R0')

FINGER_ROWS: Tuple[Tuple[str, ...], ...] = (
    ('L1', 'M1', 'R1'),
    ('L2', 'M2', 'R2'),
    ('L3', 'M3', 'R3'),
    ('L4', 'M4', 'R4'),
)

FINGER_KEYS: Tuple[str, ...] = tuple(key for row in FINGER_ROWS for key in row)

TWIDDLER_KEYS: Tuple[str, ...] = THUMB_KEYS + FINGER_KEYS

# Reserved by the firmware. {Z0, R0} is reserved too but has no finger key,
# so it is never valid anyway.
RESERVED_CHORDS: Tuple[Chord, ...] = tuple(
    frozenset(('Z0', 'R0', key))
    for key in ('R1', 'R2', 'R3', 'R4', 'M1', 'M2', 'M3', 'M4')
)


class TwiddlerLayout(Layout):
    """Validity rule of the Twiddler keyboard.

    A chord is valid if it presses at least one finger key and is not one of
    the reserved Num+Shift chords. The context is ignored.

    Example:
        >>> layout = TwiddlerLayout()
        >>> layout.is_valid(frozenset({'L0', 'M1'}))
        True
        >>> layout.is_valid(frozenset({'L0'}))
        False
    """

    def __init__(self, max_chords: int = 2 ** 16):
        super().__init__(TWIDDLER_KEYS, max_chords=max_chords)

    def is_valid(self, chord: Chord, context=None) -> bool:
        if not any(key in chord for key in FINGER_KEYS):
            return False
        return chord not in RESERVED_CHORDS

    def format_graphical(self, chord: Chord) -> str:
        """Draw the chord as the physical key grid ('#' pressed, '.' not)."""
        lines = [''.join('#' if key in chord else '.' for key in THUMB_KEYS)]
        for row in FINGER_ROWS:
            # the thumb row has one more key than the finger rows
            lines.append(' ' + ''.join('#' if key in chord else '.' for key in row))
        return '\n'.join(lines)
