"""Chord generation - Lay a diatonic progression over a note sequence.

The progression is chosen from a fixed table keyed by the song key and is
spread evenly across the notes' span. Harmonic rhythm is not tracked.
"""

import logging
from types import MappingProxyType
from typing import List, Optional, Sequence, Tuple

from ..core import Chord, Note, PITCH_NAMES
from ..core.constants import CHORD_OCTAVE, MIN_NOTES_FOR_CHORDS

logger = logging.getLogger(__name__)

# Four-chord progressions by key
PROGRESSIONS = MappingProxyType({
    "C": ("C", "Am", "F", "G"),
    "G": ("G", "Em", "C", "D"),
    "D": ("D", "Bm", "G", "A"),
    "A": ("A", "F#m", "D", "E"),
    "E": ("E", "C#m", "A", "B"),
    "F": ("F", "Dm", "Bb", "C"),
    "Cm": ("Cm", "Ab", "Eb", "G"),
    "Am": ("Am", "F", "C", "G"),
    "Em": ("Em", "C", "G", "D"),
    "Dm": ("Dm", "Bb", "F", "C"),
})
DEFAULT_PROGRESSION_KEY = "C"

MAJOR_TRIAD = (0, 4, 7)
MINOR_TRIAD = (0, 3, 7)


def progression_for(key: str) -> Tuple[str, ...]:
    """Chord symbols for a key, falling back to the C progression."""
    progression = PROGRESSIONS.get(key)
    if progression is None:
        logger.debug("No progression for key %s, using %s", key, DEFAULT_PROGRESSION_KEY)
        return PROGRESSIONS[DEFAULT_PROGRESSION_KEY]
    return progression


def parse_chord_symbol(symbol: str) -> Optional[Tuple[int, bool]]:
    """
    Parse a chord symbol into its root pitch class and quality.

    A symbol is minor when it ends in 'm' and does not contain 'maj'.

    Args:
        symbol: Chord symbol such as 'F#m' or 'G'

    Returns:
        Tuple of (root pitch class, is_minor), or None if the root is unknown
    """
    is_minor = symbol.endswith("m") and "maj" not in symbol
    root = symbol[:-1] if is_minor else symbol

    # Roots are looked up in the sharp-only pitch table, so flats do not resolve
    root_name = root.replace("#", "s").lower()
    if root_name not in PITCH_NAMES:
        return None

    return PITCH_NAMES.index(root_name), is_minor


def spell_triad(root: int, is_minor: bool, octave: int = CHORD_OCTAVE) -> Tuple[str, ...]:
    """Pitch names of a root-position triad, all in one octave."""
    intervals = MINOR_TRIAD if is_minor else MAJOR_TRIAD
    return tuple(f"{PITCH_NAMES[(root + interval) % 12]}{octave}" for interval in intervals)


class ChordGenerator:
    """Generate an evenly spaced chord progression for a key."""

    def __init__(self, min_notes: int = MIN_NOTES_FOR_CHORDS, octave: int = CHORD_OCTAVE):
        """
        Initialize ChordGenerator.

        Args:
            min_notes: Minimum number of notes needed to harmonize
            octave: Octave all chord tones are voiced in
        """
        self.min_notes = min_notes
        self.octave = octave

    def generate(self, notes: Sequence[Note], key: str) -> List[Chord]:
        """
        Generate chords for a note sequence.

        Args:
            notes: Note sequence, in time order
            key: Key name (e.g., 'C', 'Am')

        Returns:
            List of chords; empty when there are too few notes
        """
        if len(notes) < self.min_notes:
            return []

        progression = progression_for(key)
        span = notes[-1].end
        slot = span / len(progression)

        chords = []
        for i, symbol in enumerate(progression):
            parsed = parse_chord_symbol(symbol)
            if parsed is None:
                logger.debug("Dropping chord %s: unknown root", symbol)
                continue

            root, is_minor = parsed
            chords.append(
                Chord(
                    notes=spell_triad(root, is_minor, self.octave),
                    name=symbol,
                    time=i * slot,
                    duration=slot,
                )
            )

        return chords
