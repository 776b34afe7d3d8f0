"""Quantization - snap frequencies to pitch names and durations to multipliers."""

import math
from typing import Optional

from ..core import PITCH_NAMES, parse_time_signature, validate_tempo, round_half_up
from ..core.constants import (
    A4_FREQ,
    A4_INDEX,
    INDEX_MIN,
    INDEX_MAX,
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
    DURATION_MULTIPLIERS,
    MULTIPLIER_TOLERANCE,
)


class FrequencyQuantizer:
    """Map frequencies onto the 12-tone equal-tempered grid (A4 = 440 Hz)."""

    @staticmethod
    def to_index(frequency: float) -> Optional[int]:
        """Grid index of a frequency, or None if it is off the grid."""
        if frequency is None or not frequency > 0:
            return None
        index = round_half_up(12 * math.log2(frequency / A4_FREQ)) + A4_INDEX
        if index < INDEX_MIN or index > INDEX_MAX:
            return None
        return index

    @classmethod
    def to_note_name(cls, frequency: float) -> str:
        """
        Convert a frequency to a pitch name such as 'a4'.

        Args:
            frequency: Frequency in Hz

        Returns:
            Pitch name, or an empty string if the frequency cannot be named
        """
        index = cls.to_index(frequency)
        if index is None:
            return ""
        return f"{PITCH_NAMES[index % 12]}{index // 12}"


class DurationQuantizer:
    """Express durations as one of a small set of beat multipliers."""

    def __init__(
        self,
        tempo: float = DEFAULT_TEMPO,
        time_signature: str = DEFAULT_TIME_SIGNATURE,
        multipliers=DURATION_MULTIPLIERS,
        tolerance: float = MULTIPLIER_TOLERANCE,
    ):
        """
        Initialize DurationQuantizer.

        Args:
            tempo: Tempo in BPM
            time_signature: Time signature as 'N/D'
            multipliers: Supported multipliers, in beats
            tolerance: Maximum distance in beats for a match
        """
        self.tempo = validate_tempo(tempo)
        self.time_signature = parse_time_signature(time_signature)
        self.multipliers = tuple(multipliers)
        self.tolerance = tolerance

    @property
    def beat_duration(self) -> float:
        """Duration of one beat in seconds, scaled by the denominator."""
        return (60.0 / self.tempo) * (4 / self.time_signature[1])

    def multiplier(self, duration: Optional[float]) -> Optional[float]:
        """Nearest supported multiplier within tolerance, or None."""
        if not duration:
            return None
        beats = duration / self.beat_duration
        nearest = min(self.multipliers, key=lambda m: abs(beats - m))
        if abs(beats - nearest) < self.tolerance:
            return nearest
        return None

    def suffix(self, duration: Optional[float]) -> str:
        """Mini-notation suffix for a duration ('*2', '*0.5', or '')."""
        multiplier = self.multiplier(duration)
        if multiplier is None or multiplier == 1:
            return ""
        return f"*{multiplier:g}"
