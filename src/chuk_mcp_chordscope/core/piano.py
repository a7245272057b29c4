"""
Piano keyboard model - the key range a piano view draws.
"""

from __future__ import annotations

from collections.abc import Collection
from dataclasses import dataclass

from chuk_mcp_chordscope.constants import PIANO_HIGHEST_MIDI, PIANO_LOWEST_MIDI, PositionMark

from .fretboard import mark_note
from .pitch import Note, PitchClass, note_from_midi
from .scale import Scale

_BLACK_KEYS = frozenset(
    {PitchClass.Cs, PitchClass.Ds, PitchClass.Fs, PitchClass.Gs, PitchClass.As}
)


@dataclass(frozen=True)
class PianoKey:
    """A single key and how it relates to the current snapshot."""

    note: Note
    is_black: bool
    mark: PositionMark | None = None


def is_black_key(pitch_class: PitchClass) -> bool:
    """Sharps are the black keys."""
    return pitch_class in _BLACK_KEYS


def piano_keys(
    low: int = PIANO_LOWEST_MIDI,
    high: int = PIANO_HIGHEST_MIDI,
    scale: Scale | None = None,
    active_notes: Collection[Note] = (),
) -> list[PianoKey]:
    """
    Build the keys from low to high (inclusive).

    Defaults to the 88-key range A0-C8.

    Raises:
        ValueError: If low is above high
    """
    if low > high:
        raise ValueError(f"Invalid key range: {low} > {high}")

    keys = []
    for midi in range(low, high + 1):
        note = note_from_midi(midi)
        keys.append(
            PianoKey(
                note=note,
                is_black=is_black_key(note.pitch_class),
                mark=mark_note(note, scale, active_notes),
            )
        )
    return keys
