"""Audio decoding - turns a file on disk into an AudioBuffer for the pipeline."""

import numpy as np
import librosa
from pathlib import Path

from ..core import AudioBuffer, DEFAULT_SR


class AudioLoader:
    """Decode one audio file into a peak-normalized mono AudioBuffer."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a"}

    def __init__(
        self,
        target_sr: int = DEFAULT_SR,
        mono: bool = True,
        normalize: bool = True,
    ):
        """
        Initialize AudioLoader.

        Args:
            target_sr: Rate every file is resampled to
            mono: Downmix to one channel
            normalize: Scale so the loudest sample is at +/-1
        """
        self.target_sr = target_sr
        self.mono = mono
        self.normalize = normalize

    def load(self, path: str) -> AudioBuffer:
        """
        Decode a file for analysis.

        Args:
            path: Audio file with one of SUPPORTED_FORMATS' extensions

        Returns:
            AudioBuffer at target_sr

        Raises:
            FileNotFoundError: If nothing exists at path
            ValueError: If the extension is not a supported format
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        suffix = path.suffix.lower()
        if suffix not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {sorted(self.SUPPORTED_FORMATS)}"
            )

        samples, sr = librosa.load(str(path), sr=self.target_sr, mono=self.mono)

        if self.normalize:
            samples = self._peak_normalize(samples)

        return AudioBuffer(samples=samples, sample_rate=int(sr))

    @staticmethod
    def _peak_normalize(samples: np.ndarray) -> np.ndarray:
        # Silent or empty buffers pass through unchanged
        peak = float(np.max(np.abs(samples))) if samples.size else 0.0
        return samples / peak if peak > 0 else samples
