"""strudel-batch - Audio to Strudel pattern conversion.

Architecture Layers:
    1. input/         - Audio decoding into sample buffers
    2. analysis/      - Low-level signal analysis (pitch, tempo)
    3. processing/    - Quantization (frequencies, durations)
    4. transcription/ - Note-level detection from frames
    5. inference/     - Musical understanding (key, chords)
    6. output/        - Strudel mini-notation rendering
    7. pipeline       - Orchestration of one audio unit
"""

__version__ = "1.0.0"

# Core types
from .core import (
    Note,
    Chord,
    AnalysisResult,
    AudioBuffer,
    StrudelBatchError,
    InvalidArgumentError,
)

# Analysis layer
from .analysis import PitchEstimator, TempoAnalyzer

# Processing layer
from .processing import FrequencyQuantizer, DurationQuantizer

# Transcription layer
from .transcription import MonophonicTranscriber

# Inference layer
from .inference import KeyDetector, ChordGenerator

# Output layer
from .output import NotationRenderer, StrudelPattern

# Pipeline
from .pipeline import AnalysisPipeline, PipelineOptions

__all__ = [
    # Core
    "Note",
    "Chord",
    "AnalysisResult",
    "AudioBuffer",
    "StrudelBatchError",
    "InvalidArgumentError",
    # Analysis
    "PitchEstimator",
    "TempoAnalyzer",
    # Processing
    "FrequencyQuantizer",
    "DurationQuantizer",
    # Transcription
    "MonophonicTranscriber",
    # Inference
    "KeyDetector",
    "ChordGenerator",
    # Output
    "NotationRenderer",
    "StrudelPattern",
    # Pipeline
    "AnalysisPipeline",
    "PipelineOptions",
]
