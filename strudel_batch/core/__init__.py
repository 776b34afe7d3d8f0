"""Core types and constants for strudel-batch."""

from .note import Note, Chord, AnalysisResult, AudioBuffer
from .constants import (
    PITCH_NAMES,
    CANONICAL_KEYS,
    DEFAULT_SR,
    DEFAULT_FRAME_LENGTH,
    DEFAULT_HOP_LENGTH,
    DEFAULT_TEMPO,
    DEFAULT_KEY,
    DEFAULT_TIME_SIGNATURE,
    DEFAULT_SENSITIVITY,
)
from .errors import StrudelBatchError, InvalidArgumentError
from .grammar import (
    parse_pitch_name,
    parse_time_signature,
    validate_key,
    validate_tempo,
    round_half_up,
)

__all__ = [
    "Note",
    "Chord",
    "AnalysisResult",
    "AudioBuffer",
    "PITCH_NAMES",
    "CANONICAL_KEYS",
    "DEFAULT_SR",
    "DEFAULT_FRAME_LENGTH",
    "DEFAULT_HOP_LENGTH",
    "DEFAULT_TEMPO",
    "DEFAULT_KEY",
    "DEFAULT_TIME_SIGNATURE",
    "DEFAULT_SENSITIVITY",
    "StrudelBatchError",
    "InvalidArgumentError",
    "parse_pitch_name",
    "parse_time_signature",
    "validate_key",
    "validate_tempo",
    "round_half_up",
]
