"""Base classes for transcription."""

from abc import ABC, abstractmethod
from typing import List
import numpy as np

from ..core import AudioBuffer, Note


class Transcriber(ABC):
    """Turns a mono sample buffer into a time-ordered note list."""

    @abstractmethod
    def transcribe(self, audio: np.ndarray, sr: int) -> List[Note]:
        """
        Transcribe audio to notes.

        Args:
            audio: Audio array
            sr: Sample rate

        Returns:
            List of detected notes
        """

    def transcribe_buffer(self, buffer: AudioBuffer) -> List[Note]:
        """Transcribe a decoded AudioBuffer."""
        return self.transcribe(buffer.samples, buffer.sample_rate)
