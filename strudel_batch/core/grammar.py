"""Parsing and validation of pitch names, keys and time signatures."""

import math
import re
from typing import Optional, Tuple

from .constants import CANONICAL_KEYS, PITCH_NAMES
from .errors import InvalidArgumentError

PITCH_NAME_PATTERN = re.compile(r"^([a-gs]+)(\d+)$")
TIME_SIGNATURE_PATTERN = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*$")


def parse_pitch_name(name: str) -> Optional[Tuple[int, int]]:
    """
    Parse a pitch name such as 'cs4' into (pitch class, octave).

    Args:
        name: Pitch name in the lower-case, sharp-only spelling

    Returns:
        Tuple of (pitch class 0-11, octave), or None if unparseable
    """
    match = PITCH_NAME_PATTERN.match(name) if isinstance(name, str) else None
    if match and match.group(1) in PITCH_NAMES:
        return PITCH_NAMES.index(match.group(1)), int(match.group(2))
    return None


def validate_key(key: str) -> str:
    """Return the key unchanged if it is one of the 24 canonical keys."""
    if key not in CANONICAL_KEYS:
        raise InvalidArgumentError(
            f"Unknown key {key!r}. Expected one of: {', '.join(CANONICAL_KEYS)}"
        )
    return key


def parse_time_signature(time_signature: str) -> Tuple[int, int]:
    """Parse 'N/D' into (numerator, denominator), both positive."""
    match = TIME_SIGNATURE_PATTERN.match(time_signature or "")
    if not match:
        raise InvalidArgumentError(
            f"Time signature must look like 'N/D', got {time_signature!r}"
        )
    numerator, denominator = int(match.group(1)), int(match.group(2))
    if numerator <= 0 or denominator <= 0:
        raise InvalidArgumentError(
            f"Time signature parts must be positive, got {time_signature!r}"
        )
    return numerator, denominator


def validate_tempo(tempo: float) -> float:
    """Reject non-positive or non-finite tempos."""
    if tempo is None or not math.isfinite(tempo) or tempo <= 0:
        raise InvalidArgumentError(f"Tempo must be a positive number, got {tempo!r}")
    return tempo


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounding up."""
    return int(math.floor(value + 0.5))
