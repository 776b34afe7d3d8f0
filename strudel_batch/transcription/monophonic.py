"""Monophonic transcription from per-frame autocorrelation pitch."""

import logging
from typing import List, Optional

import numpy as np
import librosa

from .base import Transcriber
from ..analysis import PitchEstimator
from ..core import Note, InvalidArgumentError
from ..core.constants import DEFAULT_FRAME_LENGTH, DEFAULT_HOP_LENGTH
from ..processing import FrequencyQuantizer

logger = logging.getLogger(__name__)


class MonophonicTranscriber(Transcriber):
    """Transcribes a single melodic line by merging runs of equal frame pitches."""

    def __init__(
        self,
        estimator: Optional[PitchEstimator] = None,
        frame_length: int = DEFAULT_FRAME_LENGTH,
        hop_length: int = DEFAULT_HOP_LENGTH,
        min_note_duration: float = 0.05,
        min_velocity: float = 0.1,
    ):
        """
        Initialize MonophonicTranscriber.

        Args:
            estimator: Pitch estimator applied to each frame
            frame_length: Samples per analysis frame
            hop_length: Samples between analysis frames
            min_note_duration: Minimum note duration in seconds
            min_velocity: Lower bound for velocities derived from RMS
        """
        if frame_length <= 0 or hop_length <= 0:
            raise InvalidArgumentError(
                f"Frame and hop lengths must be positive, got {frame_length}/{hop_length}"
            )
        self.estimator = estimator or PitchEstimator()
        self.quantizer = FrequencyQuantizer()
        self.frame_length = frame_length
        self.hop_length = hop_length
        self.min_note_duration = min_note_duration
        self.min_velocity = min_velocity

    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Transcribe monophonic audio to notes.

        Args:
            audio: Audio array (mono)
            sr: Sample rate

        Returns:
            List of detected notes in time order
        """
        if sr <= 0:
            raise InvalidArgumentError(f"Sample rate must be positive, got {sr}")
        if len(audio) == 0:
            return []

        frames = self._frame(audio)
        frequencies = self.estimator.estimate_frames(frames, sr)
        names = [self.quantizer.to_note_name(f) for f in frequencies]
        rms = np.sqrt(np.mean(frames ** 2, axis=1))

        notes = self._segment_notes(names, rms, sr)
        logger.debug("Transcribed %d notes from %d frames", len(notes), len(names))
        return notes

    def _frame(self, audio: np.ndarray) -> np.ndarray:
        """Split audio into overlapping frames of shape (n_frames, frame_length)."""
        audio = np.ascontiguousarray(audio, dtype=np.float64)
        if len(audio) < self.frame_length:
            audio = np.pad(audio, (0, self.frame_length - len(audio)))

        frames = librosa.util.frame(
            audio, frame_length=self.frame_length, hop_length=self.hop_length
        )
        return np.ascontiguousarray(frames.T)

    def _segment_notes(self, names: List[str], rms: np.ndarray, sr: int) -> List[Note]:
        """
        Merge consecutive frames with the same pitch name into notes.

        Returns:
            List of Note objects
        """
        notes = []
        peak_rms = float(rms.max()) if len(rms) else 0.0
        hop_seconds = self.hop_length / sr

        start = 0
        while start < len(names):
            end = start
            while end + 1 < len(names) and names[end + 1] == names[start]:
                end += 1

            name = names[start]
            duration = (end - start + 1) * hop_seconds

            # Unvoiced runs are gaps; very short runs are treated as glitches
            if name and duration >= self.min_note_duration:
                notes.append(
                    Note(
                        name=name,
                        time=start * hop_seconds,
                        duration=duration,
                        velocity=self._rms_to_velocity(
                            float(rms[start:end + 1].mean()), peak_rms
                        ),
                    )
                )

            start = end + 1

        return notes

    def _rms_to_velocity(self, rms: float, peak_rms: float) -> float:
        """Convert RMS energy to a velocity relative to the loudest frame."""
        if peak_rms <= 0:
            return self.min_velocity
        return round(float(np.clip(rms / peak_rms, self.min_velocity, 1.0)), 3)
