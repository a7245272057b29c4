"""
MIDI I/O tests - reading files into note events and writing them back.
"""

from pathlib import Path

import pytest
from mido import Message, MetaMessage, MidiFile, MidiTrack

from chuk_mcp_chordscope.analysis import ChordEvent, NoteEvent, analyze_notes
from chuk_mcp_chordscope.constants import DRUM_CHANNEL
from chuk_mcp_chordscope.core import PitchClass
from chuk_mcp_chordscope.midi import (
    TICKS_PER_BEAT,
    MidiEvent,
    chord_events_to_midi,
    events_to_midi,
    midi_to_note_events,
    note_events_to_midi,
    parse_chord_name,
    read_midi_file,
    seconds_to_ticks,
)


def single_track(*messages) -> MidiFile:
    mid = MidiFile(ticks_per_beat=TICKS_PER_BEAT)
    track = MidiTrack()
    track.extend(messages)
    mid.tracks.append(track)
    return mid


class TestMidiEvent:
    """Test MidiEvent dataclass."""

    def test_create_valid_event(self) -> None:
        """Can create a valid MIDI event."""
        event = MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=100)
        assert event.pitch == 60
        assert event.channel == 0

    def test_event_validation(self) -> None:
        """Ranges are enforced."""
        with pytest.raises(ValueError, match="Pitch must be 0-127"):
            MidiEvent(pitch=128, start_ticks=0, duration_ticks=480)
        with pytest.raises(ValueError, match="Velocity must be 0-127"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, velocity=128)
        with pytest.raises(ValueError, match="Channel must be 0-15"):
            MidiEvent(pitch=60, start_ticks=0, duration_ticks=480, channel=16)
        with pytest.raises(ValueError, match="Start ticks"):
            MidiEvent(pitch=60, start_ticks=-1, duration_ticks=480)


class TestWriter:
    """Tests for rendering timelines to MIDI."""

    def test_empty_events(self) -> None:
        """Can create MIDI file with no events."""
        mid = events_to_midi([])
        assert len(mid.tracks) == 1
        assert mid.ticks_per_beat == TICKS_PER_BEAT

    def test_note_on_off_pairs(self) -> None:
        """Each event is one note_on and one note_off."""
        mid = events_to_midi([MidiEvent(60, 0, 480), MidiEvent(64, 480, 480)])
        note_ons = [m for m in mid.tracks[0] if m.type == "note_on"]
        note_offs = [m for m in mid.tracks[0] if m.type == "note_off"]
        assert len(note_ons) == 2
        assert len(note_offs) == 2

    def test_seconds_to_ticks(self) -> None:
        """One second at 120 BPM is two beats."""
        assert seconds_to_ticks(1.0) == 960
        assert seconds_to_ticks(1.0, tempo_bpm=60) == 480
        assert seconds_to_ticks(0.0) == 0

    def test_parse_chord_name(self) -> None:
        """Display names split into root and quality."""
        assert parse_chord_name("F# min7") == (PitchClass.Fs, "min7")
        assert parse_chord_name("C 7#9") == (PitchClass.C, "7#9")
        with pytest.raises(ValueError, match="Invalid chord name"):
            parse_chord_name("C")

    def test_chord_events_to_midi(self) -> None:
        """A progression renders as block chords."""
        progression = [ChordEvent(0.0, 1.0, "C Major"), ChordEvent(1.0, 2.0, "G Dom7")]
        events = midi_to_note_events(chord_events_to_midi(progression))
        assert len(events) == 7
        first = [e.pitch for e in events if e.start < 0.5]
        second = [e.pitch for e in events if e.start >= 0.5]
        assert first == [48, 52, 55]
        assert second == [55, 59, 62, 65]

    def test_chord_events_round_trip_analysis(self) -> None:
        """Rendered chords analyze back to the same progression."""
        progression = [ChordEvent(0.0, 1.0, "A Minor"), ChordEvent(1.0, 2.0, "F Maj7")]
        events = midi_to_note_events(chord_events_to_midi(progression, octave=4))
        names = [e.chord_name for e in analyze_notes(events)]
        assert names == ["A Minor", "F Maj7"]


class TestReader:
    """Tests for reading MIDI into note events."""

    def test_file_round_trip(self, temp_midi_path: Path) -> None:
        """Written notes read back in seconds."""
        notes = [NoteEvent(60, 0.0, 2.0), NoteEvent(64, 0.0, 2.0), NoteEvent(67, 0.5, 1.5)]
        note_events_to_midi(notes).save(str(temp_midi_path))

        events = read_midi_file(temp_midi_path)
        assert [e.pitch for e in events] == [60, 64, 67]
        assert events[0].start == pytest.approx(0.0)
        assert events[0].duration == pytest.approx(2.0)
        assert events[2].start == pytest.approx(0.5)
        assert events[2].end == pytest.approx(2.0)

    def test_file_analysis(self, temp_midi_path: Path, c_major_events: list[NoteEvent]) -> None:
        """A triad written to disk analyzes as one chord."""
        note_events_to_midi(c_major_events).save(str(temp_midi_path))

        result = analyze_notes(read_midi_file(temp_midi_path))
        assert len(result) == 1
        assert result[0].chord_name == "C Major"
        assert result[0].end_time == pytest.approx(2.0)

    def test_missing_file(self, temp_dir: Path) -> None:
        """Missing files fail fast."""
        with pytest.raises(FileNotFoundError):
            read_midi_file(temp_dir / "missing.mid")

    def test_velocity_zero_is_note_off(self) -> None:
        """note_on with velocity 0 ends the note."""
        mid = single_track(
            Message("note_on", note=60, velocity=100, time=0),
            Message("note_on", note=60, velocity=0, time=480),
        )
        events = midi_to_note_events(mid)
        assert len(events) == 1
        assert events[0].duration == pytest.approx(0.5)

    def test_tempo_change(self) -> None:
        """set_tempo changes the tick length."""
        mid = single_track(
            MetaMessage("set_tempo", tempo=1_000_000, time=0),
            Message("note_on", note=60, velocity=100, time=0),
            Message("note_off", note=60, velocity=0, time=480),
        )
        events = midi_to_note_events(mid)
        assert events[0].duration == pytest.approx(1.0)

    def test_drums_excluded_by_default(self) -> None:
        """The drum channel is skipped unless asked for."""
        mid = single_track(
            Message("note_on", channel=DRUM_CHANNEL, note=36, velocity=100, time=0),
            Message("note_on", note=60, velocity=100, time=0),
            Message("note_off", channel=DRUM_CHANNEL, note=36, velocity=0, time=240),
            Message("note_off", note=60, velocity=0, time=240),
        )
        assert [e.pitch for e in midi_to_note_events(mid)] == [60]
        assert [e.pitch for e in midi_to_note_events(mid, include_drums=True)] == [36, 60]

    def test_dangling_note_closed_at_end(self) -> None:
        """Notes without a note-off end with the file."""
        mid = single_track(
            Message("note_on", note=60, velocity=100, time=0),
            Message("note_on", note=64, velocity=100, time=0),
            Message("note_off", note=64, velocity=0, time=480),
        )
        events = midi_to_note_events(mid)
        assert len(events) == 2
        assert all(e.end == pytest.approx(0.5) for e in events)

    def test_retrigger(self) -> None:
        """A second note-on closes the first instance."""
        mid = single_track(
            Message("note_on", note=60, velocity=100, time=0),
            Message("note_on", note=60, velocity=100, time=480),
            Message("note_off", note=60, velocity=0, time=480),
        )
        events = midi_to_note_events(mid)
        assert len(events) == 2
        assert events[0].duration == pytest.approx(0.5)
        assert events[1].start == pytest.approx(0.5)

    def test_multiple_tracks_merge(self) -> None:
        """Notes from every track land on one timeline."""
        mid = MidiFile(ticks_per_beat=TICKS_PER_BEAT)
        for pitch in (60, 64, 67):
            track = MidiTrack()
            track.append(Message("note_on", note=pitch, velocity=100, time=0))
            track.append(Message("note_off", note=pitch, velocity=0, time=960))
            mid.tracks.append(track)

        result = analyze_notes(midi_to_note_events(mid))
        assert [e.chord_name for e in result] == ["C Major"]
