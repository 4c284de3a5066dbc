"""Keyboard layouts (validity predicates).

This subpackage provides:
- The Layout abstraction samplers query for legality and enumeration
- PredicateLayout for rules given as a plain function
- The Twiddler chording keyboard layout
"""

from chord_sampling.layout.base import Layout, PredicateLayout
from chord_sampling.layout.twiddler import TwiddlerLayout, TWIDDLER_KEYS

__all__ = [
    'Layout',
    'PredicateLayout',
    'TwiddlerLayout',
    'TWIDDLER_KEYS'
]
