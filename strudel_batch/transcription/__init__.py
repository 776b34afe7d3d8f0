"""Transcription layer - Note-level detection from audio.

This layer converts audio signals into discrete note events:
- Monophonic transcription (single melody line)
"""

from .base import Transcriber
from .monophonic import MonophonicTranscriber

__all__ = [
    "Transcriber",
    "MonophonicTranscriber",
]
