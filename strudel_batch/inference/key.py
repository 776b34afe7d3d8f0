"""Key detection - Identify the tonal center of a note sequence.

Builds a duration- and velocity-weighted pitch class histogram and scores
every rotation against the Krumhansl-Schmuckler major and minor profiles.
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from ..core import Note, parse_pitch_name
from ..core.constants import KEY_TONICS, MINOR_SUFFIX

logger = logging.getLogger(__name__)


def _read_only(values) -> np.ndarray:
    array = np.array(values, dtype=np.float64)
    array.setflags(write=False)
    return array


@dataclass(frozen=True)
class KeyProfiles:
    """Reference pitch class weights for the major and minor modes."""

    major: np.ndarray
    minor: np.ndarray

    def __post_init__(self):
        for mode in ("major", "minor"):
            profile = _read_only(getattr(self, mode))
            if profile.shape != (12,):
                raise ValueError(f"{mode} profile must have 12 weights")
            object.__setattr__(self, mode, profile)


# Krumhansl-Schmuckler key profiles (cognitive-based)
KRUMHANSL_PROFILES = KeyProfiles(
    major=[6.35, 2.23, 3.48, 2.33, 4.38, 4.09, 2.52, 5.19, 2.39, 3.66, 2.29, 2.88],
    minor=[6.33, 2.68, 3.52, 5.38, 2.60, 3.53, 2.54, 4.75, 3.98, 2.69, 3.34, 3.17],
)


class KeyDetector:
    """Detect the musical key of a note sequence.

    Ties are resolved by evaluation order: tonics ascend from C, and at each
    tonic the major mode is scored before the minor one. The first maximum wins.
    """

    def __init__(self, profiles: KeyProfiles = KRUMHANSL_PROFILES):
        self.profiles = profiles

    def chroma_histogram(self, notes: Sequence[Note]) -> np.ndarray:
        """
        Build a 12-bin pitch class histogram.

        Each note adds duration * velocity to its pitch class. Notes whose
        names do not parse are skipped.

        Args:
            notes: Note sequence

        Returns:
            12-element numpy array of pitch class weights
        """
        chroma = np.zeros(12)
        skipped = 0

        for note in notes:
            parsed = parse_pitch_name(note.name)
            if parsed is None:
                skipped += 1
                continue
            pitch_class, _ = parsed
            chroma[pitch_class] += note.effective_duration * note.effective_velocity

        if skipped:
            logger.debug("Skipped %d notes with unparseable names", skipped)

        return chroma

    def score_keys(self, notes: Sequence[Note]) -> List[Tuple[str, float]]:
        """
        Score all 24 keys.

        Returns:
            (key, score) pairs in evaluation order
        """
        chroma = self.chroma_histogram(notes)
        scores = []

        for shift in range(12):
            rotated = np.roll(chroma, -shift)
            tonic = KEY_TONICS[shift]
            scores.append((tonic, float(np.dot(rotated, self.profiles.major))))
            scores.append((tonic + MINOR_SUFFIX, float(np.dot(rotated, self.profiles.minor))))

        return scores

    def detect_key(self, notes: Sequence[Note]) -> str:
        """
        Detect the key of a note sequence.

        An empty sequence scores zero everywhere and resolves to 'C'.

        Args:
            notes: Note sequence

        Returns:
            Key name, e.g. 'C', 'F#', 'Am'
        """
        best_key = KEY_TONICS[0]
        best_score = -np.inf

        for key, score in self.score_keys(notes):
            if score > best_score:
                best_key, best_score = key, score

        logger.debug("Detected key %s (score %.3f)", best_key, best_score)
        return best_key
