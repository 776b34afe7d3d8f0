"""Tests for key detection and chord generation."""

import numpy as np
import pytest

from strudel_batch.core import CANONICAL_KEYS, Note, PITCH_NAMES
from strudel_batch.core.constants import KEY_TONICS
from strudel_batch.inference import (
    ChordGenerator,
    KeyDetector,
    KeyProfiles,
    KRUMHANSL_PROFILES,
    PROGRESSIONS,
    parse_chord_symbol,
    progression_for,
    spell_triad,
)


# ============================================================================
# Helpers
# ============================================================================

def tonic_heavy_notes(tonic_pc: int, third: int) -> list:
    """A long tonic with short third and fifth: unambiguous for the profiles."""
    degrees = [(0, 2.0), (third, 0.5), (7, 0.5), (0, 1.0)]
    notes = []
    time = 0.0
    for interval, duration in degrees:
        name = PITCH_NAMES[(tonic_pc + interval) % 12]
        notes.append(Note(name=f"{name}4", time=time, duration=duration))
        time += duration
    return notes


def arpeggio() -> list:
    return [
        Note(name="c4", time=0.0, duration=0.5),
        Note(name="e4", time=0.5, duration=0.5),
        Note(name="g4", time=1.0, duration=1.0),
        Note(name="c5", time=2.0, duration=0.5),
    ]


# ============================================================================
# Key detection
# ============================================================================

class TestKeyDetector:
    """Tests for KeyDetector."""

    def test_c_major(self):
        assert KeyDetector().detect_key(tonic_heavy_notes(0, 4)) == "C"

    def test_a_minor(self):
        assert KeyDetector().detect_key(tonic_heavy_notes(9, 3)) == "Am"

    @pytest.mark.parametrize("shift", range(12))
    def test_transposition_rotates_major_tonic(self, shift):
        assert KeyDetector().detect_key(tonic_heavy_notes(shift, 4)) == KEY_TONICS[shift]

    @pytest.mark.parametrize("shift", range(12))
    def test_transposition_rotates_minor_tonic(self, shift):
        key = KeyDetector().detect_key(tonic_heavy_notes(shift, 3))
        assert key == KEY_TONICS[shift] + "m"

    def test_empty_input_is_c(self):
        assert KeyDetector().detect_key([]) == "C"

    def test_result_is_canonical(self):
        assert KeyDetector().detect_key(arpeggio()) in CANONICAL_KEYS

    def test_unparseable_names_are_skipped(self):
        notes = tonic_heavy_notes(9, 3)
        noisy = notes + [
            Note(name="C4", time=0.0, duration=10.0),
            Note(name="h2", time=0.0, duration=10.0),
            Note(name="e", time=0.0, duration=10.0),
        ]
        assert KeyDetector().detect_key(noisy) == "Am"

    def test_histogram_weights(self):
        notes = [
            Note(name="c4", time=0.0, duration=1.0, velocity=0.5),
            Note(name="c5", time=1.0),
            Note(name="g3", time=2.0, duration=2.0),
        ]
        chroma = KeyDetector().chroma_histogram(notes)
        assert chroma.shape == (12,)
        assert chroma[0] == pytest.approx(1.0 * 0.5 + 0.25 * 0.8)
        assert chroma[7] == pytest.approx(2.0 * 0.8)
        assert chroma.sum() == pytest.approx(chroma[0] + chroma[7])

    def test_score_keys_order(self):
        scores = KeyDetector().score_keys(arpeggio())
        assert [key for key, _ in scores[:4]] == ["C", "Cm", "C#", "C#m"]
        assert len(scores) == 24

    def test_score_keys_empty_is_all_zero(self):
        assert all(score == 0 for _, score in KeyDetector().score_keys([]))

    def test_major_wins_exact_tie_at_same_tonic(self):
        major = KRUMHANSL_PROFILES.major
        profiles = KeyProfiles(major=major, minor=major)
        assert KeyDetector(profiles).detect_key(tonic_heavy_notes(0, 4)) == "C"
        assert KeyDetector(profiles).detect_key(tonic_heavy_notes(9, 4)) == "A"

    def test_profiles_are_read_only(self):
        with pytest.raises(ValueError):
            KRUMHANSL_PROFILES.major[0] = 0.0

    def test_profile_shape_checked(self):
        with pytest.raises(ValueError):
            KeyProfiles(major=np.ones(11), minor=np.ones(12))


# ============================================================================
# Chord generation
# ============================================================================

class TestChordSymbols:
    """Tests for chord symbol parsing and the progression table."""

    @pytest.mark.parametrize("symbol,expected", [
        ("C", (0, False)),
        ("Am", (9, True)),
        ("F#m", (6, True)),
        ("C#m", (1, True)),
        ("G", (7, False)),
    ])
    def test_parse(self, symbol, expected):
        assert parse_chord_symbol(symbol) == expected

    @pytest.mark.parametrize("symbol", ["", "m", "H", "Xm", "C##", "Cmaj", "Bb", "Eb", "Ab", "Bbm"])
    def test_unknown_roots(self, symbol):
        assert parse_chord_symbol(symbol) is None

    def test_table_shape(self):
        for key, progression in PROGRESSIONS.items():
            assert key in CANONICAL_KEYS
            assert len(progression) == 4

    def test_only_flat_entries_fail_to_resolve(self):
        unresolved = {
            symbol
            for progression in PROGRESSIONS.values()
            for symbol in progression
            if parse_chord_symbol(symbol) is None
        }
        assert unresolved == {"Bb", "Ab", "Eb"}

    def test_progressions_start_on_tonic(self):
        for key, progression in PROGRESSIONS.items():
            assert progression[0] == key

    def test_table_is_read_only(self):
        with pytest.raises(TypeError):
            PROGRESSIONS["B"] = ("B",)

    def test_fallback_to_c(self):
        assert progression_for("F#m") == ("C", "Am", "F", "G")

    def test_spell_triads(self):
        assert spell_triad(0, False) == ("c4", "e4", "g4")
        assert spell_triad(9, True) == ("a4", "c4", "e4")
        assert spell_triad(6, True) == ("fs4", "a4", "cs4")


class TestChordGenerator:
    """Tests for ChordGenerator."""

    @pytest.mark.parametrize("count", [0, 1, 2, 3])
    @pytest.mark.parametrize("key", ["C", "Am", "B", "Dm"])
    def test_too_few_notes(self, count, key):
        assert ChordGenerator().generate(arpeggio()[:count], key) == []

    def test_c_major_progression(self):
        chords = ChordGenerator().generate(arpeggio(), "C")

        assert [c.name for c in chords] == ["C", "Am", "F", "G"]
        assert [c.time for c in chords] == [0.0, 0.625, 1.25, 1.875]
        assert all(c.duration == 0.625 for c in chords)
        assert chords[0].notes == ("c4", "e4", "g4")
        assert chords[1].notes == ("a4", "c4", "e4")
        assert chords[2].notes == ("f4", "a4", "c4")
        assert chords[3].notes == ("g4", "b4", "d4")

    def test_span_uses_default_duration(self):
        notes = [Note(name="c4", time=float(t)) for t in range(4)]
        chords = ChordGenerator().generate(notes, "C")
        assert chords[-1].time + chords[-1].duration == pytest.approx(3.25)

    def test_unknown_key_uses_c_progression(self):
        chords = ChordGenerator().generate(arpeggio(), "G#m")
        assert [c.name for c in chords] == ["C", "Am", "F", "G"]

    def test_flat_roots_are_dropped(self):
        chords = ChordGenerator().generate(arpeggio(), "F")
        assert [c.name for c in chords] == ["F", "Dm", "C"]
        assert [c.time for c in chords] == [0.0, 0.625, 1.875]
        assert chords[2].notes == ("c4", "e4", "g4")

    def test_flat_roots_dropped_for_quarter_note_span(self):
        notes = [Note(name="c4", time=float(t), duration=0.5) for t in range(4)]
        chords = ChordGenerator().generate(notes, "F")
        assert [c.name for c in chords] == ["F", "Dm", "C"]
        assert [c.time for c in chords] == [0.0, 0.875, 2.625]

    def test_minor_key(self):
        chords = ChordGenerator().generate(arpeggio(), "Cm")
        assert [c.name for c in chords] == ["Cm", "G"]
        assert [c.time for c in chords] == [0.0, 1.875]
        assert chords[0].notes == ("c4", "ds4", "g4")

    def test_d_minor_keeps_resolvable_chords(self):
        chords = ChordGenerator().generate(arpeggio(), "Dm")
        assert [c.name for c in chords] == ["Dm", "F", "C"]
        assert [c.time for c in chords] == [0.0, 1.25, 1.875]

    def test_unresolvable_symbols_are_dropped(self, monkeypatch):
        import strudel_batch.inference.chords as chords_module

        monkeypatch.setattr(
            chords_module, "progression_for", lambda key: ("C", "Hm", "F", "G")
        )
        chords = ChordGenerator().generate(arpeggio(), "C")
        assert [c.name for c in chords] == ["C", "F", "G"]
        assert [c.time for c in chords] == [0.0, 1.25, 1.875]

    def test_inputs_not_mutated(self):
        notes = arpeggio()
        before = list(notes)
        ChordGenerator().generate(notes, "C")
        assert notes == before
