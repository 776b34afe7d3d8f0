"""Inference layer - Musical understanding from notes.

This layer builds higher-level musical context from a note sequence:
- Key detection (tonal center)
- Chord progression generation in the detected key

Pipeline: Notes → Key → Chords
"""

from .key import KeyDetector, KeyProfiles, KRUMHANSL_PROFILES
from .chords import (
    ChordGenerator,
    PROGRESSIONS,
    progression_for,
    parse_chord_symbol,
    spell_triad,
)

__all__ = [
    # Key detection
    "KeyDetector",
    "KeyProfiles",
    "KRUMHANSL_PROFILES",
    # Chord generation
    "ChordGenerator",
    "PROGRESSIONS",
    "progression_for",
    "parse_chord_symbol",
    "spell_triad",
]
