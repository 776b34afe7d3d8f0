"""Musical event types - the units passed between pipeline stages."""

import math
from dataclasses import dataclass
from typing import Optional, Tuple
import numpy as np

from .constants import DEFAULT_NOTE_DURATION, DEFAULT_NOTE_VELOCITY
from .errors import InvalidArgumentError


@dataclass(frozen=True)
class Note:
    """Represents a single melodic note."""

    name: str  # Pitch name with octave (e.g., 'c4', 'fs3')
    time: float  # Start time in seconds
    duration: Optional[float] = None  # Seconds; None means the default
    velocity: Optional[float] = None  # 0.0 - 1.0; None means the default

    def __post_init__(self):
        if not math.isfinite(self.time) or self.time < 0:
            raise InvalidArgumentError(f"Note time must be >= 0, got {self.time}")
        # Zero duration or velocity is allowed and means the default
        if self.duration is not None and not self.duration >= 0:
            raise InvalidArgumentError(
                f"Note duration must not be negative, got {self.duration}"
            )
        if self.velocity is not None and not 0.0 <= self.velocity <= 1.0:
            raise InvalidArgumentError(
                f"Note velocity must be between 0 and 1, got {self.velocity}"
            )

    @property
    def effective_duration(self) -> float:
        """Duration in seconds, falling back to the default when unset or zero."""
        return self.duration or DEFAULT_NOTE_DURATION

    @property
    def effective_velocity(self) -> float:
        """Velocity, falling back to the default when unset or zero."""
        return self.velocity or DEFAULT_NOTE_VELOCITY

    @property
    def end(self) -> float:
        """End time in seconds."""
        return self.time + self.effective_duration


@dataclass(frozen=True)
class Chord:
    """A block chord spelled as pitch names, root first."""

    notes: Tuple[str, ...]
    name: str  # Chord symbol (e.g., 'Am', 'F#m', 'G')
    time: float
    duration: float


@dataclass(frozen=True)
class AnalysisResult:
    """Everything extracted from one audio unit."""

    notes: Tuple[Note, ...]
    chords: Tuple[Chord, ...]
    detected_key: str
    estimated_tempo: float
    duration: float


@dataclass(frozen=True)
class AudioBuffer:
    """Decoded mono samples and their sample rate."""

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self):
        if self.sample_rate <= 0:
            raise InvalidArgumentError(
                f"Sample rate must be positive, got {self.sample_rate}"
            )
        samples = np.asarray(self.samples, dtype=np.float64)
        if samples.ndim != 1:
            raise InvalidArgumentError(
                f"Expected a mono (1-D) sample buffer, got shape {samples.shape}"
            )
        object.__setattr__(self, "samples", samples)

    @property
    def duration(self) -> float:
        """Buffer length in seconds."""
        return len(self.samples) / self.sample_rate
