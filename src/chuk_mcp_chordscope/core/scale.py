"""
Scale primitives - ScaleType, Scale and the scale generator.

Scales are fixed semitone-offset templates applied to a root pitch class.
Notes are kept in template order (root first), not sorted by pitch.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from chuk_mcp_chordscope.constants import ErrorMessages

from .pitch import PitchClass, transpose


class ScaleType(str, Enum):
    """
    The closed set of supported scale types.

    Values are display names. Ionian/Aeolian are separate members that
    share their template with Major/Minor.
    """

    MAJOR = "Major"
    MINOR = "Minor"
    HARMONIC_MINOR = "Harmonic Minor"
    MELODIC_MINOR = "Melodic Minor"
    IONIAN = "Ionian"
    DORIAN = "Dorian"
    PHRYGIAN = "Phrygian"
    LYDIAN = "Lydian"
    MIXOLYDIAN = "Mixolydian"
    AEOLIAN = "Aeolian"
    LOCRIAN = "Locrian"
    MAJOR_PENTATONIC = "Major Pentatonic"
    MINOR_PENTATONIC = "Minor Pentatonic"

    @property
    def offsets(self) -> tuple[int, ...]:
        """Semitone offsets from the root, in scale order."""
        return SCALE_OFFSETS[self]

    @classmethod
    def parse(cls, name: str | ScaleType) -> ScaleType:
        """
        Parse a scale type from 'Harmonic Minor', 'harmonic_minor' or 'HARMONIC_MINOR'.

        Raises:
            ValueError: If the name is not a known scale type
        """
        if isinstance(name, ScaleType):
            return name

        normalized = name.strip().replace("_", " ").replace("-", " ").lower()
        for member in cls:
            if member.value.lower() == normalized:
                return member

        # Common aliases
        aliases = {
            "natural minor": cls.MINOR,
            "maj": cls.MAJOR,
            "min": cls.MINOR,
        }
        if normalized in aliases:
            return aliases[normalized]

        raise ValueError(ErrorMessages.UNKNOWN_SCALE_TYPE.format(name=name))


class ScaleFamily(str, Enum):
    """Scale groupings offered side by side."""

    DIATONIC = "Diatonic"
    PENTATONIC = "Pentatonic"


SCALE_OFFSETS: dict[ScaleType, tuple[int, ...]] = {
    ScaleType.MAJOR: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.MINOR: (0, 2, 3, 5, 7, 8, 10),
    ScaleType.HARMONIC_MINOR: (0, 2, 3, 5, 7, 8, 11),
    ScaleType.MELODIC_MINOR: (0, 2, 3, 5, 7, 9, 11),  # Ascending form
    ScaleType.IONIAN: (0, 2, 4, 5, 7, 9, 11),
    ScaleType.DORIAN: (0, 2, 3, 5, 7, 9, 10),
    ScaleType.PHRYGIAN: (0, 1, 3, 5, 7, 8, 10),
    ScaleType.LYDIAN: (0, 2, 4, 6, 7, 9, 11),
    ScaleType.MIXOLYDIAN: (0, 2, 4, 5, 7, 9, 10),
    ScaleType.AEOLIAN: (0, 2, 3, 5, 7, 8, 10),
    ScaleType.LOCRIAN: (0, 1, 3, 5, 6, 8, 10),
    ScaleType.MAJOR_PENTATONIC: (0, 2, 4, 7, 9),
    ScaleType.MINOR_PENTATONIC: (0, 3, 5, 7, 10),
}

DIATONIC_SCALES: tuple[ScaleType, ...] = (
    ScaleType.MAJOR,
    ScaleType.MINOR,
    ScaleType.HARMONIC_MINOR,
    ScaleType.MELODIC_MINOR,
    ScaleType.IONIAN,
    ScaleType.DORIAN,
    ScaleType.PHRYGIAN,
    ScaleType.LYDIAN,
    ScaleType.MIXOLYDIAN,
    ScaleType.AEOLIAN,
    ScaleType.LOCRIAN,
)

PENTATONIC_SCALES: tuple[ScaleType, ...] = (
    ScaleType.MAJOR_PENTATONIC,
    ScaleType.MINOR_PENTATONIC,
)

# Chord quality -> scales that fit over it
_MAJOR_FAMILY: tuple[ScaleType, ...] = (
    ScaleType.MAJOR,
    ScaleType.LYDIAN,
    ScaleType.MIXOLYDIAN,
    ScaleType.MAJOR_PENTATONIC,
)
_MINOR_FAMILY: tuple[ScaleType, ...] = (
    ScaleType.MINOR,
    ScaleType.DORIAN,
    ScaleType.PHRYGIAN,
    ScaleType.AEOLIAN,
    ScaleType.HARMONIC_MINOR,
    ScaleType.MELODIC_MINOR,
    ScaleType.MINOR_PENTATONIC,
)
_DOMINANT_FAMILY: tuple[ScaleType, ...] = (
    ScaleType.MIXOLYDIAN,
    ScaleType.MAJOR,
    ScaleType.MAJOR_PENTATONIC,
)
_DIMINISHED_FAMILY: tuple[ScaleType, ...] = (
    ScaleType.LOCRIAN,
    ScaleType.HARMONIC_MINOR,
)

_COMPATIBLE_SCALES: dict[str, tuple[ScaleType, ...]] = {
    "Major": _MAJOR_FAMILY,
    "Maj7": _MAJOR_FAMILY,
    "Maj9": _MAJOR_FAMILY,
    "6": _MAJOR_FAMILY,
    "add9": _MAJOR_FAMILY,
    "Minor": _MINOR_FAMILY,
    "min7": _MINOR_FAMILY,
    "m6": _MINOR_FAMILY,
    "min9": _MINOR_FAMILY,
    "m(add9)": _MINOR_FAMILY,
    "Dom7": _DOMINANT_FAMILY,
    "9": _DOMINANT_FAMILY,
    "m7b5": _DIMINISHED_FAMILY,
    "Dim": _DIMINISHED_FAMILY,
}


@dataclass(frozen=True)
class Scale:
    """
    A generated scale: root, type and its pitch classes in template order.

    Immutable and hashable.
    """

    root: PitchClass
    scale_type: ScaleType
    notes: tuple[PitchClass, ...]

    def contains(self, pitch_class: PitchClass) -> bool:
        """Check whether a pitch class belongs to the scale."""
        return pitch_class in self.notes

    def degree_of(self, pitch_class: PitchClass) -> int | None:
        """
        Get the 1-based scale degree of a pitch class.

        Returns None if the pitch class is not in the scale.
        """
        for i, note in enumerate(self.notes):
            if note == pitch_class:
                return i + 1
        return None

    @property
    def name(self) -> str:
        return f"{self.root.spell()} {self.scale_type.value}"

    def __str__(self) -> str:
        return self.name


def generate_scale(root: PitchClass, scale_type: ScaleType | str) -> Scale:
    """
    Build a scale from a root and a scale type.

    Args:
        root: The root pitch class
        scale_type: A ScaleType, or a name accepted by ScaleType.parse

    Returns:
        The scale, notes in template order

    Raises:
        ValueError: If the scale type is unknown
    """
    kind = ScaleType.parse(scale_type)
    notes = tuple(transpose(root, offset) for offset in SCALE_OFFSETS[kind])
    return Scale(root, kind, notes)


def scales_in_family(family: ScaleFamily | str) -> tuple[ScaleType, ...]:
    """Get the scale types offered for a family."""
    if ScaleFamily(family) == ScaleFamily.DIATONIC:
        return DIATONIC_SCALES
    return PENTATONIC_SCALES


def compatible_scale_types(quality: str) -> tuple[ScaleType, ...]:
    """
    Get the scale types that fit a chord quality.

    Qualities without a specific mapping (Aug, Sus2, 7#9, ...) allow
    every scale type.
    """
    return _COMPATIBLE_SCALES.get(quality, tuple(ScaleType))
