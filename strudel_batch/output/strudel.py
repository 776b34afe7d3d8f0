"""Strudel export - Render notes and chords as mini-notation patterns."""

import re
from dataclasses import dataclass
from typing import Sequence

from ..core import Chord, Note, round_half_up
from ..core.constants import DEFAULT_TEMPO, DEFAULT_TIME_SIGNATURE
from ..processing import DurationQuantizer

NOTE_PATTERN = re.compile(r"^([A-Ga-g])([#b]?)(\d+)$")
ACCIDENTALS = {"#": "s", "b": "f", "": ""}
REST = "~"


def format_note(name: str) -> str:
    """
    Convert a pitch name to Strudel spelling.

    'C#4' becomes 'cs4' and 'Bb3' becomes 'bf3'. Names that do not follow the
    letter/accidental/octave form are lower-cased and passed through.
    """
    match = NOTE_PATTERN.match(name)
    if not match:
        return name.lower()
    letter, accidental, octave = match.groups()
    return f"{letter.lower()}{ACCIDENTALS[accidental]}{octave}"


def format_tempo(tempo: float) -> str:
    """Print whole-number tempos without a decimal part."""
    return str(int(tempo)) if float(tempo).is_integer() else str(tempo)


@dataclass(frozen=True)
class StrudelPattern:
    """Rendered Strudel code for one analysis."""

    melody: str
    chords: str
    combined: str


class NotationRenderer:
    """Render note and chord sequences as Strudel code."""

    def __init__(self, sound: str = "piano"):
        self.sound = sound

    def render(
        self,
        notes: Sequence[Note],
        chords: Sequence[Chord],
        tempo: float = DEFAULT_TEMPO,
        time_signature: str = DEFAULT_TIME_SIGNATURE,
    ) -> StrudelPattern:
        """
        Render a melody line, a chord line and the combined stack.

        Args:
            notes: Melody notes
            chords: Chords
            tempo: Tempo in BPM
            time_signature: Time signature as 'N/D'

        Returns:
            StrudelPattern with the three text forms
        """
        quantizer = DurationQuantizer(tempo=tempo, time_signature=time_signature)

        melody_tokens = [
            format_note(note.name) + quantizer.suffix(note.duration) for note in notes
        ]
        chord_tokens = [
            "[" + ",".join(format_note(n) for n in chord.notes) + "]"
            + quantizer.suffix(chord.duration)
            for chord in chords
        ]

        melody = self._layer(melody_tokens)
        chord_line = self._layer(chord_tokens)
        combined = (
            f"// Tempo: {format_tempo(tempo)} BPM, Time Signature: {time_signature}\n"
            f"stack(\n"
            f"  {melody},\n"
            f"  {chord_line}\n"
            f").cpm({round_half_up(tempo / 4)})"
        )

        return StrudelPattern(melody=melody, chords=chord_line, combined=combined)

    def _layer(self, tokens: Sequence[str]) -> str:
        """Wrap tokens in a note(...).sound(...) expression."""
        body = " ".join(tokens) or REST
        return f'note("{body}").sound("{self.sound}")'
