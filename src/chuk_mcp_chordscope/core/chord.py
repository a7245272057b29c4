"""
Chord primitives - ChordShape, ChordResult, detection and parent keys.

Chord shapes are sets of required intervals above an implicit root.
Detection tries every sounding pitch class as a root and keeps the
most fully-spelled shape whose intervals are all present.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from chuk_mcp_chordscope.constants import MIN_CHORD_NOTES, ErrorMessages

from .pitch import Interval, Note, PitchClass, interval_between, note_from_midi
from .scale import Scale, ScaleType, generate_scale


@dataclass(frozen=True)
class ChordShape:
    """
    A chord quality and the intervals it requires from the root.

    Intervals keep their spelling order (root, third, fifth, ...).
    Extra sounding notes never disqualify a shape.
    """

    quality: str
    intervals: tuple[Interval, ...]

    @property
    def size(self) -> int:
        """Number of required intervals - the specificity of the shape."""
        return len(self.intervals)

    def matches(self, present: frozenset[Interval]) -> bool:
        """Check that every required interval is present."""
        return all(interval in present for interval in self.intervals)

    def __str__(self) -> str:
        return self.quality


_I = Interval

# Table order is the tie-break order
CHORD_SHAPES: tuple[ChordShape, ...] = (
    # Triads
    ChordShape("Major", (_I.P1, _I.M3, _I.P5)),
    ChordShape("Minor", (_I.P1, _I.m3, _I.P5)),
    ChordShape("Dim", (_I.P1, _I.m3, _I.d5)),
    ChordShape("Aug", (_I.P1, _I.M3, _I.AUG_FIFTH)),
    ChordShape("Sus2", (_I.P1, _I.M2, _I.P5)),
    ChordShape("Sus4", (_I.P1, _I.P4, _I.P5)),
    # Sevenths
    ChordShape("Maj7", (_I.P1, _I.M3, _I.P5, _I.M7)),
    ChordShape("min7", (_I.P1, _I.m3, _I.P5, _I.m7)),
    ChordShape("Dom7", (_I.P1, _I.M3, _I.P5, _I.m7)),
    ChordShape("m7b5", (_I.P1, _I.m3, _I.d5, _I.m7)),
    ChordShape("Dim7", (_I.P1, _I.m3, _I.d5, _I.DIM_SEVENTH)),
    # Extensions (compound intervals folded into the octave)
    ChordShape("add9", (_I.P1, _I.M3, _I.P5, _I.NINTH)),
    ChordShape("m(add9)", (_I.P1, _I.m3, _I.P5, _I.NINTH)),
    ChordShape("Maj9", (_I.P1, _I.M3, _I.P5, _I.M7, _I.NINTH)),
    ChordShape("min9", (_I.P1, _I.m3, _I.P5, _I.m7, _I.NINTH)),
    ChordShape("9", (_I.P1, _I.M3, _I.P5, _I.m7, _I.NINTH)),
    ChordShape("7b9", (_I.P1, _I.M3, _I.P5, _I.m7, _I.b9)),
    ChordShape("7#9", (_I.P1, _I.M3, _I.P5, _I.m7, _I.SHARP_NINTH)),
    # Sixths
    ChordShape("6", (_I.P1, _I.M3, _I.P5, _I.M6)),
    ChordShape("m6", (_I.P1, _I.m3, _I.P5, _I.M6)),
)

_SHAPES_BY_QUALITY: dict[str, ChordShape] = {shape.quality: shape for shape in CHORD_SHAPES}

# Quality -> semitones from the chord root up to its assumed major key
_PARENT_KEY_OFFSETS: dict[str, int] = {
    # Tonic (I)
    "Major": 0,
    "Maj7": 0,
    "Maj9": 0,
    "6": 0,
    "add9": 0,
    # Relative minor (vi)
    "Minor": 3,
    "min7": 3,
    "m6": 3,
    "min9": 3,
    "m(add9)": 3,
    # Dominant (V)
    "Dom7": 5,
    "9": 5,
    "7b9": 5,
    "7#9": 5,
    # Leading tone (vii)
    "Dim": 1,
    "Dim7": 1,
    "m7b5": 1,
    # Tonic-adjacent
    "Aug": 0,
    "Sus2": 0,
    "Sus4": 0,
}


@dataclass(frozen=True)
class ChordResult:
    """
    A detected chord.

    name is the display string, e.g. 'C Major' or 'F# min7'.
    """

    root: PitchClass
    quality: str
    name: str

    @classmethod
    def of(cls, root: PitchClass, quality: str) -> ChordResult:
        """Build a result with the conventional display name."""
        return cls(root, quality, f"{root.spell()} {quality}")

    def __str__(self) -> str:
        return self.name


def chord_qualities() -> list[str]:
    """All known chord qualities, in table order."""
    return [shape.quality for shape in CHORD_SHAPES]


def get_chord_shape(quality: str) -> ChordShape:
    """
    Look up a chord shape by quality.

    Raises:
        ValueError: If the quality is unknown
    """
    shape = _SHAPES_BY_QUALITY.get(quality)
    if shape is None:
        raise ValueError(ErrorMessages.UNKNOWN_CHORD_QUALITY.format(quality=quality))
    return shape


def detect_chord(notes: Iterable[Note]) -> ChordResult | None:
    """
    Identify the most specific chord formed by a set of notes.

    Every distinct pitch class is tried as a root, lowest sounding note
    first; for each root every shape is tried in table order. The match
    with the most required intervals wins and the first one found keeps
    ties.

    Args:
        notes: Sounding notes, any order, duplicates allowed

    Returns:
        The best match, or None when fewer than three distinct notes sound
        or no shape matches
    """
    unique = sorted({note.midi: note for note in notes}.values(), key=lambda n: n.midi)
    if len(unique) < MIN_CHORD_NOTES:
        return None

    # Ascending-MIDI order of first occurrence
    roots: list[PitchClass] = []
    for note in unique:
        if note.pitch_class not in roots:
            roots.append(note.pitch_class)

    best: ChordResult | None = None
    best_size = 0

    for root in roots:
        present = frozenset(interval_between(root, pc) for pc in roots)
        for shape in CHORD_SHAPES:
            if shape.size > best_size and shape.matches(present):
                best_size = shape.size
                best = ChordResult.of(root, shape.quality)

    return best


def detect_chord_from_midi(midi_notes: Iterable[int]) -> ChordResult | None:
    """Convenience wrapper around detect_chord for raw MIDI numbers."""
    return detect_chord(note_from_midi(m) for m in midi_notes)


def get_chord_notes(root: PitchClass, quality: str, octave: int) -> list[Note]:
    """
    Build concrete notes for a chord, root in the given octave.

    Notes follow the shape's interval order, so a 9 chord lists its
    ninth as the second above the root.

    Returns:
        The chord notes, or an empty list for an unknown quality
    """
    shape = _SHAPES_BY_QUALITY.get(quality)
    if shape is None:
        return []

    root_midi = root.to_midi(octave)
    return [note_from_midi(root_midi + interval.semitones) for interval in shape.intervals]


def estimate_parent_key(chord: ChordResult) -> PitchClass:
    """
    Guess the major key a chord most likely belongs to.

    Each quality is assumed to play one function (minor as vi, dominant
    as V, diminished as vii, everything major-ish as I). Only the chord's
    own quality is considered.

    Example:
        A Minor -> C, B Dim -> C, G Dom7 -> C
    """
    offset = _PARENT_KEY_OFFSETS.get(chord.quality, 0)
    return chord.root.transpose(offset)


def parent_key_scale(chord: ChordResult) -> Scale:
    """The major scale of the estimated parent key."""
    return generate_scale(estimate_parent_key(chord), ScaleType.MAJOR)
