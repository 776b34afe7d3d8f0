"""Global constants for strudel-batch."""

# Pitch names (sharp spelling only, lower case)
PITCH_NAMES = ("c", "cs", "d", "ds", "e", "f", "fs", "g", "gs", "a", "as", "b")

# Audio processing defaults
DEFAULT_SR = 22050
DEFAULT_FRAME_LENGTH = 2048
DEFAULT_HOP_LENGTH = 512

# Pitch tracking band (Hz)
MIN_FREQ = 80.0
MAX_FREQ = 1000.0

# Frequency grid: A4 = 440 Hz sits at index 57
A4_FREQ = 440.0
A4_INDEX = 57
INDEX_MIN = 0
INDEX_MAX = 127

# Note defaults
DEFAULT_NOTE_DURATION = 0.25
DEFAULT_NOTE_VELOCITY = 0.8

# Musical defaults
DEFAULT_TEMPO = 120.0
DEFAULT_KEY = "C"
DEFAULT_TIME_SIGNATURE = "4/4"
DEFAULT_SENSITIVITY = 50
CHORD_OCTAVE = 4
MIN_NOTES_FOR_CHORDS = 4

# Duration multipliers understood by the renderer, and the match tolerance in beats
DURATION_MULTIPLIERS = (0.5, 1.0, 2.0, 4.0)
MULTIPLIER_TOLERANCE = 0.1

# Canonical keys: 12 tonics x {major, minor}
KEY_TONICS = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")
MINOR_SUFFIX = "m"
CANONICAL_KEYS = KEY_TONICS + tuple(t + MINOR_SUFFIX for t in KEY_TONICS)
