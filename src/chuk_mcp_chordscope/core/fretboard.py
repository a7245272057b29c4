"""
Fretboard primitives - tunings and the position grid.

A tuning is the open MIDI pitch of each string, lowest string first.
Any string count works (guitar, 4/5-string bass, custom instruments).
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Sequence
from dataclasses import dataclass

from chuk_mcp_chordscope.constants import (
    DEFAULT_FRET_COUNT,
    ErrorMessages,
    PositionMark,
    StandardTuning,
)

from .pitch import Note, PitchClass, note_from_midi
from .scale import Scale

Tuning = tuple[int, ...]

STANDARD_TUNING: Tuning = tuple(int(s) for s in StandardTuning)


@dataclass(frozen=True)
class FretboardPosition:
    """One (string, fret) cell and the note it sounds."""

    string_index: int
    fret: int
    note: Note


def note_at(tuning: Sequence[int], string_index: int, fret: int) -> Note:
    """Get the note sounded by a string at a fret."""
    return note_from_midi(tuning[string_index] + fret)


def generate_fretboard(
    tuning: Sequence[int],
    fret_count: int = DEFAULT_FRET_COUNT,
) -> list[list[FretboardPosition]]:
    """
    Build the full position grid for a tuning.

    Args:
        tuning: Open-string MIDI numbers, lowest string first
        fret_count: Highest fret (the open string is fret 0)

    Returns:
        grid[string][fret], len(tuning) x (fret_count + 1).
        An empty tuning gives an empty grid.

    Raises:
        ValueError: If fret_count is negative
    """
    if fret_count < 0:
        raise ValueError(ErrorMessages.INVALID_FRET_COUNT.format(fret_count=fret_count))

    return [
        [
            FretboardPosition(string_index, fret, note_from_midi(open_midi + fret))
            for fret in range(fret_count + 1)
        ]
        for string_index, open_midi in enumerate(tuning)
    ]


def mark_note(
    note: Note,
    scale: Scale | None = None,
    active_notes: Collection[Note] = (),
) -> PositionMark | None:
    """
    Classify a note against the current snapshot.

    An exact MIDI match with a sounding note wins over scale membership;
    the scale root is marked apart from the other scale tones.
    """
    if any(active.midi == note.midi for active in active_notes):
        return PositionMark.ACTIVE
    if scale is not None and scale.contains(note.pitch_class):
        if note.pitch_class == scale.root:
            return PositionMark.ROOT
        return PositionMark.SCALE
    return None


def mark_position(
    position: FretboardPosition,
    scale: Scale | None = None,
    active_notes: Collection[Note] = (),
) -> PositionMark | None:
    """Classify a fretboard position (see mark_note)."""
    return mark_note(position.note, scale, active_notes)


def find_positions(
    grid: Iterable[Iterable[FretboardPosition]],
    pitch_classes: Collection[PitchClass],
) -> list[FretboardPosition]:
    """All positions whose note belongs to the given pitch classes, string by string."""
    return [
        position
        for string in grid
        for position in string
        if position.note.pitch_class in pitch_classes
    ]
