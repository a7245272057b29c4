"""
Timeline analysis - chord segmentation of note streams.

The pipeline:
    MIDI file / transcription → NoteEvent list
    → ChordSegmenter (samples + chord detection)
    → ChordEvent list (merged, "N.C." dropped)
"""

from chuk_mcp_chordscope.analysis.segmenter import (
    ChordEvent,
    ChordSegmenter,
    NoteEvent,
    analyze_notes,
    summarize_progression,
)

__all__ = [
    "ChordEvent",
    "ChordSegmenter",
    "NoteEvent",
    "analyze_notes",
    "summarize_progression",
]
