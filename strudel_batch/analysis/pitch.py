"""Pitch estimation by time-domain autocorrelation."""

import logging
import math
from typing import Sequence

import numpy as np

from ..core import InvalidArgumentError
from ..core.constants import MIN_FREQ, MAX_FREQ

logger = logging.getLogger(__name__)


class PitchEstimator:
    """Estimate the dominant fundamental frequency of a single frame.

    Candidate periods are limited to ``[sr / max_freq, sr / min_freq)`` and to
    less than half the frame length. Content outside the band is not tracked.
    """

    def __init__(
        self,
        min_freq: float = MIN_FREQ,
        max_freq: float = MAX_FREQ,
        min_correlation_ratio: float = 0.0,
    ):
        """
        Initialize PitchEstimator.

        Args:
            min_freq: Lowest tracked frequency in Hz
            max_freq: Highest tracked frequency in Hz
            min_correlation_ratio: Fraction of the frame energy the best
                correlation must exceed (0 accepts any positive correlation)
        """
        if min_freq <= 0 or max_freq <= min_freq:
            raise InvalidArgumentError(
                f"Invalid frequency band: {min_freq}-{max_freq} Hz"
            )
        if not 0.0 <= min_correlation_ratio <= 1.0:
            raise InvalidArgumentError(
                f"min_correlation_ratio must be in [0, 1], got {min_correlation_ratio}"
            )
        self.min_freq = min_freq
        self.max_freq = max_freq
        self.min_correlation_ratio = min_correlation_ratio

    def period_range(self, sample_rate: int, frame_length: int) -> range:
        """Candidate periods (in samples) for a frame of the given length."""
        min_period = int(math.floor(sample_rate / self.max_freq))
        max_period = int(math.floor(sample_rate / self.min_freq))
        # Periods must stay strictly below half the frame length
        upper = min(max_period, int(math.ceil(frame_length / 2)))
        return range(max(min_period, 1), upper)

    def estimate(self, frame: Sequence[float], sample_rate: int) -> float:
        """
        Estimate the fundamental frequency of one frame.

        Args:
            frame: Audio samples
            sample_rate: Sample rate in Hz

        Returns:
            Frequency in Hz, or 0.0 when no pitch is detected
        """
        if sample_rate <= 0:
            raise InvalidArgumentError(f"Sample rate must be positive, got {sample_rate}")

        frame = np.asarray(frame, dtype=np.float64)
        periods = self.period_range(sample_rate, len(frame))
        if len(periods) == 0:
            return 0.0

        correlations = np.array(
            [np.dot(frame[:-period], frame[period:]) for period in periods]
        )

        # argmax keeps the first (shortest) period on ties
        best = int(np.argmax(correlations))
        best_correlation = correlations[best]
        if best_correlation <= 0:
            return 0.0

        if self.min_correlation_ratio > 0:
            energy = float(np.dot(frame, frame))
            if best_correlation <= self.min_correlation_ratio * energy:
                return 0.0

        return sample_rate / periods[best]

    def estimate_frames(self, frames: np.ndarray, sample_rate: int) -> np.ndarray:
        """
        Estimate one frequency per frame.

        Args:
            frames: 2-D array of shape (n_frames, frame_length)
            sample_rate: Sample rate in Hz

        Returns:
            Array of frequencies (0.0 where no pitch was detected)
        """
        frames = np.atleast_2d(frames)
        frequencies = np.array(
            [self.estimate(frame, sample_rate) for frame in frames], dtype=np.float64
        )
        logger.debug(
            "Estimated pitch for %d frames (%d voiced)",
            len(frequencies),
            int(np.count_nonzero(frequencies)),
        )
        return frequencies
