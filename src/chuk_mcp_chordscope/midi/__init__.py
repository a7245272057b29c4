"""
MIDI I/O - the file boundary of the system.

Reading flattens a MIDI file into NoteEvents for the segmenter.
Writing renders note timelines or analyzed chord progressions.
"""

from chuk_mcp_chordscope.midi.reader import midi_to_note_events, read_midi_file
from chuk_mcp_chordscope.midi.writer import (
    TICKS_PER_BEAT,
    MidiEvent,
    chord_events_to_midi,
    events_to_midi,
    note_events_to_midi,
    parse_chord_name,
    seconds_to_ticks,
)

__all__ = [
    # Reader
    "midi_to_note_events",
    "read_midi_file",
    # Writer
    "TICKS_PER_BEAT",
    "MidiEvent",
    "chord_events_to_midi",
    "events_to_midi",
    "note_events_to_midi",
    "parse_chord_name",
    "seconds_to_ticks",
]
