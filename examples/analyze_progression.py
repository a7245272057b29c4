#!/usr/bin/env python3
"""
Example: Detect the chords in a MIDI file.

This demonstrates the analysis pipeline end to end: a ii-V-I is written
to MIDI, read back, segmented into chord events and re-rendered as
block chords.

Usage:
    python examples/analyze_progression.py
    # Creates: examples/output/two_five_one.mid
    #          examples/output/two_five_one_chords.mid
"""

from pathlib import Path

from chuk_mcp_chordscope.analysis import NoteEvent, analyze_notes, summarize_progression
from chuk_mcp_chordscope.core import PitchClass, get_chord_notes
from chuk_mcp_chordscope.midi import chord_events_to_midi, note_events_to_midi, read_midi_file


def main() -> None:
    """Write, read and analyze a short progression."""
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    print("Generating two_five_one.mid...")
    source = output_dir / "two_five_one.mid"
    note_events_to_midi(create_two_five_one()).save(str(source))
    print(f"  Created: {source}")

    print("\nAnalyzing...")
    chords = analyze_notes(read_midi_file(source))
    for chord in chords:
        print(f"  {chord.start_time:5.2f}s - {chord.end_time:5.2f}s  {chord.chord_name}")
    print(f"  Progression: {' -> '.join(summarize_progression(chords))}")

    print("\nGenerating two_five_one_chords.mid...")
    rendered = output_dir / "two_five_one_chords.mid"
    chord_events_to_midi(chords).save(str(rendered))
    print(f"  Created: {rendered}")


def create_two_five_one() -> list[NoteEvent]:
    """Dm7 - G7 - Cmaj7, one chord every two seconds."""
    events = []
    changes = [
        (PitchClass.D, "min7"),
        (PitchClass.G, "Dom7"),
        (PitchClass.C, "Maj7"),
    ]
    for bar, (root, quality) in enumerate(changes):
        start = bar * 2.0
        for note in get_chord_notes(root, quality, 3):
            events.append(NoteEvent(note.midi, start, 2.0))

    return events


if __name__ == "__main__":
    main()
