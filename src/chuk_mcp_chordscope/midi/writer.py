"""
MIDI export - renders note timelines and chord progressions with mido.

All operations are deterministic: same input → same output.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from mido import Message, MetaMessage, MidiFile, MidiTrack, bpm2tempo, second2tick

from chuk_mcp_chordscope.analysis.segmenter import ChordEvent, NoteEvent
from chuk_mcp_chordscope.constants import DEFAULT_CHORD_OCTAVE
from chuk_mcp_chordscope.core.chord import get_chord_notes
from chuk_mcp_chordscope.core.pitch import PitchClass

# Standard ticks per beat (quarter note)
TICKS_PER_BEAT = 480

DEFAULT_TEMPO_BPM = 120
DEFAULT_VELOCITY = 90


@dataclass(frozen=True)
class MidiEvent:
    """
    A single MIDI note event in ticks (absolute from start of track).

    This is the lowest-level representation before writing to MIDI.
    """

    pitch: int  # MIDI note number (0-127)
    start_ticks: int
    duration_ticks: int
    velocity: int = DEFAULT_VELOCITY
    channel: int = 0

    def __post_init__(self) -> None:
        """Validate MIDI ranges."""
        if not 0 <= self.pitch <= 127:
            raise ValueError(f"Pitch must be 0-127, got {self.pitch}")
        if not 0 <= self.velocity <= 127:
            raise ValueError(f"Velocity must be 0-127, got {self.velocity}")
        if not 0 <= self.channel <= 15:
            raise ValueError(f"Channel must be 0-15, got {self.channel}")
        if self.start_ticks < 0:
            raise ValueError(f"Start ticks must be >= 0, got {self.start_ticks}")
        if self.duration_ticks < 0:
            raise ValueError(f"Duration ticks must be >= 0, got {self.duration_ticks}")


def events_to_midi(
    events: Sequence[MidiEvent],
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> MidiFile:
    """
    Convert MidiEvents to a single-track MidiFile.

    Note-offs sort before note-ons at the same tick so repeated notes
    retrigger cleanly.
    """
    mid = MidiFile(ticks_per_beat=ticks_per_beat)
    track = MidiTrack()
    mid.tracks.append(track)
    track.append(MetaMessage("set_tempo", tempo=bpm2tempo(tempo_bpm), time=0))

    messages: list[tuple[int, Message]] = []
    for event in events:
        messages.append(
            (
                event.start_ticks,
                Message(
                    "note_on",
                    channel=event.channel,
                    note=event.pitch,
                    velocity=event.velocity,
                    time=0,
                ),
            )
        )
        messages.append(
            (
                event.start_ticks + event.duration_ticks,
                Message("note_off", channel=event.channel, note=event.pitch, velocity=0, time=0),
            )
        )

    messages.sort(key=lambda x: (x[0], x[1].type != "note_off"))

    current_time = 0
    for abs_time, msg in messages:
        msg.time = abs_time - current_time
        track.append(msg)
        current_time = abs_time

    track.append(MetaMessage("end_of_track", time=0))
    return mid


def seconds_to_ticks(
    seconds: float,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    ticks_per_beat: int = TICKS_PER_BEAT,
) -> int:
    """Convert seconds to ticks at a fixed tempo."""
    return int(round(second2tick(seconds, ticks_per_beat, bpm2tempo(tempo_bpm))))


def note_events_to_midi(
    events: Sequence[NoteEvent],
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    velocity: int = DEFAULT_VELOCITY,
) -> MidiFile:
    """Render a note timeline (seconds) as a MidiFile."""
    midi_events = [
        MidiEvent(
            pitch=event.pitch,
            start_ticks=seconds_to_ticks(event.start, tempo_bpm),
            duration_ticks=seconds_to_ticks(event.duration, tempo_bpm),
            velocity=velocity,
        )
        for event in events
    ]
    return events_to_midi(midi_events, tempo_bpm=tempo_bpm)


def parse_chord_name(chord_name: str) -> tuple[PitchClass, str]:
    """Split a display name like 'F# min7' into (root, quality)."""
    root, _, quality = chord_name.partition(" ")
    if not quality:
        raise ValueError(f"Invalid chord name: {chord_name}")
    return PitchClass.parse(root), quality


def chord_events_to_midi(
    chord_events: Sequence[ChordEvent],
    octave: int = DEFAULT_CHORD_OCTAVE,
    tempo_bpm: int = DEFAULT_TEMPO_BPM,
    velocity: int = DEFAULT_VELOCITY,
) -> MidiFile:
    """
    Render an analyzed progression as block chords.

    Each chord event becomes its chord tones (root in the given octave)
    held for the event's span.
    """
    midi_events: list[MidiEvent] = []
    for chord_event in chord_events:
        root, quality = parse_chord_name(chord_event.chord_name)
        start = seconds_to_ticks(chord_event.start_time, tempo_bpm)
        duration = seconds_to_ticks(chord_event.duration, tempo_bpm)
        for note in get_chord_notes(root, quality, octave):
            midi_events.append(MidiEvent(note.midi, start, duration, velocity))
    return events_to_midi(midi_events, tempo_bpm=tempo_bpm)
