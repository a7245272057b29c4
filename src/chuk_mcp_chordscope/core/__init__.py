"""
Core music primitives - the theory engine.

These are the pure building blocks everything else composes on:
- PitchClass, Interval, Note: pitch arithmetic and MIDI conversion
- ScaleType, Scale: interval templates applied to a root
- ChordShape, ChordResult: chord detection and parent-key estimation
- FretboardPosition: string/fret grids for any tuning
- PianoKey: keyboard ranges with snapshot marks
"""

from chuk_mcp_chordscope.core.chord import (
    CHORD_SHAPES,
    ChordResult,
    ChordShape,
    chord_qualities,
    detect_chord,
    detect_chord_from_midi,
    estimate_parent_key,
    get_chord_notes,
    get_chord_shape,
    parent_key_scale,
)
from chuk_mcp_chordscope.core.fretboard import (
    STANDARD_TUNING,
    FretboardPosition,
    Tuning,
    find_positions,
    generate_fretboard,
    mark_note,
    mark_position,
    note_at,
)
from chuk_mcp_chordscope.core.piano import PianoKey, is_black_key, piano_keys
from chuk_mcp_chordscope.core.pitch import (
    Interval,
    Note,
    PitchClass,
    interval_between,
    note_from_midi,
    transpose,
)
from chuk_mcp_chordscope.core.scale import (
    DIATONIC_SCALES,
    PENTATONIC_SCALES,
    Scale,
    ScaleFamily,
    ScaleType,
    compatible_scale_types,
    generate_scale,
    scales_in_family,
)

__all__ = [
    # Pitch
    "PitchClass",
    "Interval",
    "Note",
    "note_from_midi",
    "interval_between",
    "transpose",
    # Scale
    "ScaleType",
    "ScaleFamily",
    "Scale",
    "DIATONIC_SCALES",
    "PENTATONIC_SCALES",
    "generate_scale",
    "scales_in_family",
    "compatible_scale_types",
    # Chord
    "CHORD_SHAPES",
    "ChordShape",
    "ChordResult",
    "chord_qualities",
    "detect_chord",
    "detect_chord_from_midi",
    "get_chord_notes",
    "get_chord_shape",
    "estimate_parent_key",
    "parent_key_scale",
    # Fretboard
    "Tuning",
    "STANDARD_TUNING",
    "FretboardPosition",
    "generate_fretboard",
    "note_at",
    "mark_note",
    "mark_position",
    "find_positions",
    # Piano
    "PianoKey",
    "is_black_key",
    "piano_keys",
]
