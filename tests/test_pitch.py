"""Tests for pitch estimation and frequency quantization."""

import numpy as np
import pytest

from strudel_batch.analysis import PitchEstimator
from strudel_batch.core import InvalidArgumentError
from strudel_batch.processing import FrequencyQuantizer

from generate_test_audio import generate_sine_wave

SR = 22050
FRAME = 2048


def semitone_error(estimated: float, expected: float) -> float:
    return abs(12 * np.log2(estimated / expected))


class TestPitchEstimator:
    """Tests for the autocorrelation pitch estimator."""

    def test_silent_frame_returns_zero(self):
        assert PitchEstimator().estimate(np.zeros(FRAME), SR) == 0.0

    def test_empty_frame_returns_zero(self):
        assert PitchEstimator().estimate(np.array([]), SR) == 0.0

    def test_frame_too_short_for_any_period(self):
        # min period at 22050 Hz is 22 samples, so a 40-sample frame has no candidates
        frame = generate_sine_wave(440.0, 40 / SR, SR)
        assert PitchEstimator().estimate(frame, SR) == 0.0

    @pytest.mark.parametrize("freq", [110.0, 220.0, 261.63, 440.0, 659.25, 880.0])
    def test_sine_within_one_semitone(self, freq):
        frame = generate_sine_wave(freq, FRAME / SR, SR)
        estimated = PitchEstimator().estimate(frame, SR)
        assert estimated > 0
        assert semitone_error(estimated, freq) < 1.0

    def test_accepts_plain_lists(self):
        frame = list(generate_sine_wave(440.0, FRAME / SR, SR))
        assert semitone_error(PitchEstimator().estimate(frame, SR), 440.0) < 1.0

    def test_result_is_sample_rate_over_integer_period(self):
        frame = generate_sine_wave(441.0, FRAME / SR, SR)
        # 22050 / 441 = 50 samples exactly
        assert PitchEstimator().estimate(frame, SR) == pytest.approx(441.0)

    def test_period_range(self):
        periods = PitchEstimator().period_range(SR, FRAME)
        assert periods.start == 22  # floor(22050 / 1000)
        assert periods.stop == 275  # floor(22050 / 80)

    def test_period_range_limited_by_frame_length(self):
        periods = PitchEstimator().period_range(SR, 300)
        assert periods.stop == 150

    @pytest.mark.parametrize("sr", [0, -22050])
    def test_invalid_sample_rate(self, sr):
        with pytest.raises(InvalidArgumentError):
            PitchEstimator().estimate(np.zeros(FRAME), sr)

    def test_invalid_band(self):
        with pytest.raises(InvalidArgumentError):
            PitchEstimator(min_freq=500.0, max_freq=100.0)

    def test_correlation_threshold_rejects_noise(self):
        noise = np.random.default_rng(0).standard_normal(FRAME)
        assert PitchEstimator(min_correlation_ratio=0.5).estimate(noise, SR) == 0.0

    def test_correlation_threshold_keeps_tones(self):
        frame = generate_sine_wave(440.0, FRAME / SR, SR)
        estimated = PitchEstimator(min_correlation_ratio=0.5).estimate(frame, SR)
        assert semitone_error(estimated, 440.0) < 1.0

    def test_estimate_frames(self):
        frames = np.stack([
            generate_sine_wave(220.0, FRAME / SR, SR),
            np.zeros(FRAME, dtype=np.float32),
            generate_sine_wave(440.0, FRAME / SR, SR),
        ])
        frequencies = PitchEstimator().estimate_frames(frames, SR)
        assert frequencies.shape == (3,)
        assert frequencies[1] == 0.0
        assert semitone_error(frequencies[0], 220.0) < 1.0
        assert semitone_error(frequencies[2], 440.0) < 1.0


class TestFrequencyQuantizer:
    """Tests for frequency to pitch name conversion."""

    def test_a4(self):
        assert FrequencyQuantizer.to_note_name(440.0) == "a4"

    @pytest.mark.parametrize("freq,name", [
        (261.63, "c4"),
        (277.18, "cs4"),
        (466.16, "as4"),
        (880.0, "a5"),
        (110.0, "a2"),
        (16.35, "c0"),
    ])
    def test_known_frequencies(self, freq, name):
        assert FrequencyQuantizer.to_note_name(freq) == name

    def test_snaps_to_nearest_semitone(self):
        # 450 Hz is ~0.39 semitones above A4
        assert FrequencyQuantizer.to_note_name(450.0) == "a4"

    @pytest.mark.parametrize("freq", [0.0, -440.0, float("nan"), 10.0, 30000.0])
    def test_off_grid_returns_empty(self, freq):
        assert FrequencyQuantizer.to_note_name(freq) == ""

    def test_octave_monotonic(self):
        octaves = [
            int(FrequencyQuantizer.to_note_name(55.0 * 2 ** k)[-1]) for k in range(6)
        ]
        assert octaves == sorted(octaves)
        assert len(set(octaves)) == len(octaves)

    def test_sharp_spelling_only(self):
        names = {FrequencyQuantizer.to_note_name(440.0 * 2 ** (k / 12))[:-1] for k in range(12)}
        assert names == {"c", "cs", "d", "ds", "e", "f", "fs", "g", "gs", "a", "as", "b"}
