"""
Pitch primitives - PitchClass, Interval and Note.

These are the foundational types for all pitch-related operations.
PitchClass represents the 12 chromatic pitches (octave-independent).
Interval is the ascending distance between two pitch classes, always mod 12.
Note is a concrete sounding pitch derived from a MIDI number.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from chuk_mcp_chordscope.constants import ErrorMessages

# Display name mappings (module level to avoid IntEnum member issues)
_SHARP_NAMES: list[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
# Accepted on input only; output is always spelled with sharps
_FLAT_NAMES: list[str] = [
    "C",
    "Db",
    "D",
    "Eb",
    "E",
    "F",
    "Gb",
    "G",
    "Ab",
    "A",
    "Bb",
    "B",
]


class PitchClass(IntEnum):
    """
    The 12 chromatic pitch classes (0-11).

    Octave-independent - C4 and C5 are both PitchClass.C.
    The value is the semitone offset from C.

    Enharmonic spelling is not modelled: display names are always sharps.
    """

    C = 0
    Cs = 1  # C#
    D = 2
    Ds = 3  # D#
    E = 4
    F = 5
    Fs = 6  # F#
    G = 7
    Gs = 8  # G#
    A = 9
    As = 10  # A#
    B = 11

    def transpose(self, semitones: int) -> PitchClass:
        """Transpose by a number of semitones (positive or negative)."""
        return PitchClass((self.value + semitones) % 12)

    def interval_to(self, other: PitchClass) -> Interval:
        """Get the ascending interval from this pitch class to another."""
        return Interval((other.value - self.value) % 12)

    def to_midi(self, octave: int = 4) -> int:
        """Convert to MIDI note number. C4 = 60."""
        return self.value + (octave + 1) * 12

    def spell(self) -> str:
        """Get the display name ('C', 'C#', ...)."""
        return _SHARP_NAMES[self.value]

    @classmethod
    def from_midi(cls, midi_note: int) -> PitchClass:
        """Extract pitch class from MIDI note number."""
        return cls(midi_note % 12)

    @classmethod
    def parse(cls, name: str) -> PitchClass:
        """Parse a pitch class from a string like 'C', 'C#', 'Db' or 'Cs'."""
        name = name.strip()

        if name in _SHARP_NAMES:
            return cls(_SHARP_NAMES.index(name))

        if name in _FLAT_NAMES:
            return cls(_FLAT_NAMES.index(name))

        # Enum member names (C, Cs, D, Ds, etc.), any case
        name_upper = name.upper()
        for member in cls:
            if member.name.upper() == name_upper:
                return member

        raise ValueError(ErrorMessages.UNKNOWN_PITCH_CLASS.format(name=name))


class Interval(IntEnum):
    """
    Ascending distance between two pitch classes, in semitones (0-11).

    Compound intervals fold into the octave, so a ninth is a major second.
    """

    P1 = 0
    m2 = 1
    M2 = 2
    m3 = 3
    M3 = 4
    P4 = 5
    d5 = 6
    P5 = 7
    m6 = 8
    M6 = 9
    m7 = 10
    M7 = 11

    # Aliases used when spelling extended chords
    TT = 6
    b9 = 1
    NINTH = 2
    SHARP_NINTH = 3
    AUG_FIFTH = 8
    DIM_SEVENTH = 9

    @property
    def semitones(self) -> int:
        """Number of semitones in this interval."""
        return self.value

    def invert(self) -> Interval:
        """
        Invert the interval within an octave.

        M3 (4) -> m6 (8)
        P5 (7) -> P4 (5)
        """
        return Interval((12 - self.value) % 12)

    @classmethod
    def normalize(cls, semitones: int) -> Interval:
        """Fold any semitone distance into 0-11."""
        return cls(semitones % 12)


@dataclass(frozen=True)
class Note:
    """
    A concrete note: pitch class, octave and MIDI number.

    Invariant: midi == (octave + 1) * 12 + pitch_class.
    Build notes with note_from_midi() so the three fields never disagree.

    Immutable and hashable.
    """

    pitch_class: PitchClass
    octave: int
    midi: int

    def __post_init__(self) -> None:
        if self.midi != (self.octave + 1) * 12 + int(self.pitch_class):
            raise ValueError(
                f"Inconsistent note: {self.pitch_class.spell()}{self.octave} != MIDI {self.midi}"
            )

    @classmethod
    def from_midi(cls, midi: int) -> Note:
        """Build a note from a MIDI number (60 = C4)."""
        return cls(PitchClass(midi % 12), midi // 12 - 1, midi)

    @property
    def name(self) -> str:
        """Pitch class display name, without octave."""
        return self.pitch_class.spell()

    def __str__(self) -> str:
        return f"{self.pitch_class.spell()}{self.octave}"


def note_from_midi(midi: int) -> Note:
    """
    Convert a MIDI number to a Note.

    No range validation: values outside 0-127 produce consistent
    (floored) octaves, which is the caller's concern.
    """
    return Note.from_midi(midi)


def interval_between(root: PitchClass, note: PitchClass) -> Interval:
    """How many semitones up from root to note, in 0-11."""
    return root.interval_to(note)


def transpose(pitch_class: PitchClass, semitones: int) -> PitchClass:
    """Transpose a pitch class; negative semitones wrap downwards."""
    return pitch_class.transpose(semitones)
