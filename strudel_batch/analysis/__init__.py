"""Analysis layer - Low-level signal analysis.

This layer extracts measurements from raw samples:
- Pitch estimation (autocorrelation, one frequency per frame)
- Tempo estimation (beat tracking)
"""

from .tempo import TempoAnalyzer
from .pitch import PitchEstimator

__all__ = [
    "TempoAnalyzer",
    "PitchEstimator",
]
