"""Analysis pipeline - audio or notes in, notes/chords/key/tempo out.

Composes the layers for one audio unit:

    AudioBuffer → transcription → key → chords → AnalysisResult → Strudel text

A pre-built note list skips transcription. Key and tempo overrides skip the
corresponding detection stage. Each call is independent, so a batch of units
can be processed in any order or in parallel.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from .analysis import PitchEstimator, TempoAnalyzer
from .core import (
    AnalysisResult,
    AudioBuffer,
    InvalidArgumentError,
    Note,
    DEFAULT_FRAME_LENGTH,
    DEFAULT_HOP_LENGTH,
    DEFAULT_SENSITIVITY,
    DEFAULT_TEMPO,
    DEFAULT_TIME_SIGNATURE,
    parse_time_signature,
    validate_key,
    validate_tempo,
)
from .inference import ChordGenerator, KeyDetector
from .output import NotationRenderer, StrudelPattern
from .transcription import MonophonicTranscriber

logger = logging.getLogger(__name__)

AudioUnit = Union[AudioBuffer, Sequence[Note]]


@dataclass(frozen=True)
class PipelineOptions:
    """Configuration for AnalysisPipeline."""

    tempo: Optional[float] = None  # Override; None = estimate
    key: Optional[str] = None  # Override; None = detect
    sensitivity: float = DEFAULT_SENSITIVITY  # 0-100, below 50 rejects weak pitches
    time_signature: str = DEFAULT_TIME_SIGNATURE
    frame_length: int = DEFAULT_FRAME_LENGTH
    hop_length: int = DEFAULT_HOP_LENGTH
    min_note_duration: float = 0.05

    def validate(self) -> "PipelineOptions":
        """Check every option, raising InvalidArgumentError on the first bad one."""
        if self.tempo is not None:
            validate_tempo(self.tempo)
        if self.key is not None:
            validate_key(self.key)
        if not 0 <= self.sensitivity <= 100:
            raise InvalidArgumentError(
                f"Sensitivity must be between 0 and 100, got {self.sensitivity}"
            )
        parse_time_signature(self.time_signature)
        if self.frame_length <= 0 or self.hop_length <= 0:
            raise InvalidArgumentError("Frame and hop lengths must be positive")
        return self

    @property
    def min_correlation_ratio(self) -> float:
        """Pitch estimator threshold derived from sensitivity (50 and up → 0, 0 → 0.5)."""
        return max(0.0, (50 - self.sensitivity) / 100)


class AnalysisPipeline:
    """Turn one audio unit into an AnalysisResult and Strudel code."""

    def __init__(
        self,
        options: Optional[PipelineOptions] = None,
        estimator: Optional[PitchEstimator] = None,
        detector: Optional[KeyDetector] = None,
        generator: Optional[ChordGenerator] = None,
        renderer: Optional[NotationRenderer] = None,
        tempo_analyzer: Optional[TempoAnalyzer] = None,
    ):
        """
        Initialize AnalysisPipeline.

        Args:
            options: Pipeline configuration (validated here)
            estimator: Pitch estimator; built from the sensitivity if omitted
            detector: Key detector
            generator: Chord generator
            renderer: Strudel renderer
            tempo_analyzer: Tempo estimator used for audio input
        """
        self.options = (options or PipelineOptions()).validate()
        self.estimator = estimator or PitchEstimator(
            min_correlation_ratio=self.options.min_correlation_ratio
        )
        self.transcriber = MonophonicTranscriber(
            estimator=self.estimator,
            frame_length=self.options.frame_length,
            hop_length=self.options.hop_length,
            min_note_duration=self.options.min_note_duration,
        )
        self.detector = detector or KeyDetector()
        self.generator = generator or ChordGenerator()
        self.renderer = renderer or NotationRenderer()
        self.tempo_analyzer = tempo_analyzer or TempoAnalyzer(
            hop_length=self.options.hop_length
        )

    def run(self, unit: AudioUnit) -> AnalysisResult:
        """
        Analyze one audio unit.

        Args:
            unit: Decoded audio, or a pre-built note sequence

        Returns:
            AnalysisResult for the unit
        """
        if isinstance(unit, AudioBuffer):
            notes = self.transcriber.transcribe_buffer(unit)
            duration = unit.duration
        else:
            notes = list(unit)
            duration = max((note.end for note in notes), default=0.0)

        key = self._resolve_key(notes)
        tempo = self._resolve_tempo(unit)
        chords = self.generator.generate(notes, key)

        logger.debug(
            "Analyzed unit: %d notes, %d chords, key %s, %.1f BPM, %.2fs",
            len(notes), len(chords), key, tempo, duration,
        )

        return AnalysisResult(
            notes=tuple(notes),
            chords=tuple(chords),
            detected_key=key,
            estimated_tempo=tempo,
            duration=duration,
        )

    def render(self, result: AnalysisResult) -> StrudelPattern:
        """Render a result with the configured time signature."""
        return self.renderer.render(
            result.notes,
            result.chords,
            tempo=result.estimated_tempo,
            time_signature=self.options.time_signature,
        )

    def process(self, unit: AudioUnit) -> Tuple[AnalysisResult, StrudelPattern]:
        """Analyze and render one unit."""
        result = self.run(unit)
        return result, self.render(result)

    def _resolve_key(self, notes: Sequence[Note]) -> str:
        if self.options.key is not None:
            return self.options.key
        return self.detector.detect_key(notes)

    def _resolve_tempo(self, unit: AudioUnit) -> float:
        if self.options.tempo is not None:
            return self.options.tempo
        if isinstance(unit, AudioBuffer):
            return self.tempo_analyzer.estimate(unit.samples, unit.sample_rate)
        return DEFAULT_TEMPO
