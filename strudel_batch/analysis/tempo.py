"""Tempo estimation."""

import logging

import numpy as np
import librosa

from ..core import DEFAULT_TEMPO, InvalidArgumentError

logger = logging.getLogger(__name__)


class TempoAnalyzer:
    """Estimate tempo from audio with librosa's beat tracker."""

    def __init__(self, hop_length: int = 512, default_tempo: float = DEFAULT_TEMPO):
        self.hop_length = hop_length
        self.default_tempo = default_tempo

    def estimate(self, audio: np.ndarray, sr: int) -> float:
        """
        Estimate tempo in BPM.

        Args:
            audio: Audio array
            sr: Sample rate

        Returns:
            Tempo in BPM; the default tempo when beat tracking finds nothing
        """
        if sr <= 0:
            raise InvalidArgumentError(f"Sample rate must be positive, got {sr}")

        if len(audio) == 0 or not np.any(audio):
            return self.default_tempo

        tempo, _ = librosa.beat.beat_track(
            y=np.asarray(audio, dtype=np.float32),
            sr=sr,
            hop_length=self.hop_length,
        )

        # Handle tempo as array (newer librosa versions)
        tempo = float(np.atleast_1d(tempo)[0]) if np.size(tempo) > 0 else 0.0

        # Sustained tones and silence can come back as 0 BPM
        if not np.isfinite(tempo) or tempo <= 0:
            logger.debug("Beat tracking found no tempo, using %.1f BPM", self.default_tempo)
            return self.default_tempo

        return tempo
