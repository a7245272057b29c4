"""
Constants and enums for the chordscope system.

No magic strings - use enums and named constants for constrained values.
"""

from enum import Enum, IntEnum

# Label used by the segmenter when no chord shape matches
NO_CHORD = "N.C."

# Chord-sequence analysis
ANALYSIS_STEP_SECONDS = 0.25  # Sampling step for the timeline walk
MAX_ANALYSIS_SECONDS = 600.0  # Some files report absurd lengths
MAX_ANALYSIS_ITERATIONS = 10_000  # Hard stop independent of the duration clamp

# Chord detection needs at least a triad
MIN_CHORD_NOTES = 3

# Rendering defaults
DEFAULT_FRET_COUNT = 24
DEFAULT_CHORD_OCTAVE = 3
PIANO_LOWEST_MIDI = 21  # A0
PIANO_HIGHEST_MIDI = 108  # C8

# GM drum channel (0-indexed, so 9 = channel 10)
DRUM_CHANNEL = 9


class PositionMark(str, Enum):
    """
    How a fretboard position or piano key relates to the current snapshot.

    Consumers decide how to draw each mark.
    """

    ACTIVE = "active"  # Exact MIDI match with a sounding note
    ROOT = "root"  # Pitch class is the scale root
    SCALE = "scale"  # Pitch class is in the scale


class StandardTuning(IntEnum):
    """Open-string MIDI numbers for a six-string guitar (E2 A2 D3 G3 B3 E4)."""

    LOW_E = 40
    A = 45
    D = 50
    G = 55
    B = 59
    HIGH_E = 64


class ErrorMessages:
    """Standardized error messages."""

    UNKNOWN_PITCH_CLASS = "Unknown pitch class: '{name}'."
    UNKNOWN_SCALE_TYPE = "Unknown scale type: '{name}'."
    UNKNOWN_CHORD_QUALITY = "Unknown chord quality: '{quality}'."
    INSTRUMENT_NOT_FOUND = "Instrument '{name}' not found."
    INVALID_FRET_COUNT = "Fret count must be >= 0, got {fret_count}."
    FILE_NOT_FOUND = "File not found: {path}"


class SuccessMessages:
    """Standardized success messages."""

    ANALYSIS_COMPLETE = "Found {count} chord events in {duration:.2f}s."
    PROGRESSION_EXPORTED = "Exported {count} chords to {path}."
    SESSION_CLEARED = "Cleared session '{name}'."
