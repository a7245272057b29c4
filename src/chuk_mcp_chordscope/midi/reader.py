"""
MIDI import - the start of the analysis pipeline.

Reads a Standard MIDI File with mido and flattens every track into
NoteEvents timed in seconds. Tempo changes are honoured; a note-on with
velocity 0 counts as a note-off.
"""

from __future__ import annotations

import logging
from pathlib import Path

import mido
from mido import MidiFile

from chuk_mcp_chordscope.analysis.segmenter import NoteEvent
from chuk_mcp_chordscope.constants import DRUM_CHANNEL, ErrorMessages

logger = logging.getLogger(__name__)

# Default tempo until a set_tempo arrives (120 BPM)
DEFAULT_TEMPO_US = 500_000


def midi_to_note_events(mid: MidiFile, include_drums: bool = False) -> list[NoteEvent]:
    """
    Flatten a MidiFile into NoteEvents.

    Args:
        mid: A loaded mido MidiFile
        include_drums: Keep notes on the GM drum channel (off by default,
            drum hits are not pitches)

    Returns:
        Note events sorted by (start, pitch). Notes still held when the
        file ends are closed at the last message time.
    """
    ticks_per_beat = mid.ticks_per_beat
    tempo = DEFAULT_TEMPO_US
    now = 0.0
    held: dict[tuple[int, int], float] = {}
    events: list[NoteEvent] = []

    for msg in mido.merge_tracks(mid.tracks):
        now += mido.tick2second(msg.time, ticks_per_beat, tempo)

        if msg.is_meta:
            if msg.type == "set_tempo":
                tempo = msg.tempo
            continue

        if msg.type not in ("note_on", "note_off"):
            continue
        if msg.channel == DRUM_CHANNEL and not include_drums:
            continue

        key = (msg.channel, msg.note)
        if msg.type == "note_on" and msg.velocity > 0:
            # Retrigger closes the previous instance of the same note
            if key in held:
                start = held.pop(key)
                events.append(NoteEvent(msg.note, start, now - start))
            held[key] = now
        elif key in held:
            start = held.pop(key)
            events.append(NoteEvent(msg.note, start, now - start))

    for (_, pitch), start in held.items():
        events.append(NoteEvent(pitch, start, now - start))

    events.sort(key=lambda e: (e.start, e.pitch))
    return events


def read_midi_file(path: Path | str, include_drums: bool = False) -> list[NoteEvent]:
    """
    Read a MIDI file into NoteEvents.

    Args:
        path: Path to a .mid file
        include_drums: Keep notes on the GM drum channel

    Raises:
        FileNotFoundError: If the file does not exist
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(ErrorMessages.FILE_NOT_FOUND.format(path=path))

    mid = MidiFile(str(path))
    events = midi_to_note_events(mid, include_drums=include_drums)
    logger.debug(f"Read {len(events)} notes from {path.name} ({len(mid.tracks)} tracks)")
    return events
