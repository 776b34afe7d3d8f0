"""Input layer - Audio decoding."""

from .loader import AudioLoader

__all__ = ["AudioLoader"]
