"""
Chord-sequence segmenter - turns a note timeline into chord events.

The timeline is sampled at a fixed step. At each sample the sounding
notes go through chord detection, and consecutive samples with the same
label are merged into one event. Unclassifiable spans ("N.C.") are
dropped from the result.

All operations are deterministic: same events → same chord events.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from chuk_mcp_chordscope.constants import NO_CHORD
from chuk_mcp_chordscope.core.chord import detect_chord
from chuk_mcp_chordscope.core.pitch import Note, note_from_midi
from chuk_mcp_chordscope.models.settings import AnalysisSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoteEvent:
    """
    A single note on the timeline, in seconds.

    Produced by the MIDI reader or by an external transcription step.
    """

    pitch: int  # MIDI note number
    start: float  # Seconds from the beginning
    duration: float  # Seconds

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"Start must be >= 0, got {self.start}")
        if self.duration < 0:
            raise ValueError(f"Duration must be >= 0, got {self.duration}")

    @property
    def end(self) -> float:
        return self.start + self.duration

    def is_active(self, time: float) -> bool:
        """Sounding at time (start inclusive, end exclusive)."""
        return self.start <= time < self.end


@dataclass(frozen=True)
class ChordEvent:
    """
    A maximal span with a constant chord label.

    Spans follow each other without overlap; one ends exactly where the
    next starts unless silence separates them.
    """

    start_time: float
    end_time: float
    chord_name: str

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def to_dict(self) -> dict[str, float | str]:
        return {
            "start_time": round(self.start_time, 6),
            "end_time": round(self.end_time, 6),
            "chord_name": self.chord_name,
        }


class ChordSegmenter:
    """
    Walks a note timeline and labels it with chords.

    The walk is a two-state machine: no open span, or one open span with
    a label. A label change closes the open span into a ChordEvent and
    opens a new one; the same label extends it. The open span is flushed
    at the end.
    """

    def __init__(self, settings: AnalysisSettings | None = None):
        """
        Initialize the segmenter.

        Args:
            settings: Step and safety limits (defaults to AnalysisSettings())
        """
        self.settings = settings or AnalysisSettings()

    def active_notes(self, events: Sequence[NoteEvent], time: float) -> list[Note]:
        """Notes sounding at time, one per MIDI number."""
        seen: set[int] = set()
        notes: list[Note] = []
        for event in events:
            if event.is_active(time) and event.pitch not in seen:
                seen.add(event.pitch)
                notes.append(note_from_midi(event.pitch))
        return notes

    def label_at(self, events: Sequence[NoteEvent], time: float) -> str:
        """Chord name sounding at time, or NO_CHORD."""
        chord = detect_chord(self.active_notes(events, time))
        return chord.name if chord else NO_CHORD

    def timeline_duration(self, events: Sequence[NoteEvent]) -> float:
        """Latest note end, clamped to the configured ceiling."""
        duration = max(event.end for event in events)
        if duration > self.settings.max_seconds:
            logger.debug(
                f"Clamping timeline from {duration:.2f}s to {self.settings.max_seconds:.2f}s"
            )
            duration = self.settings.max_seconds
        return duration

    def analyze(self, events: Iterable[NoteEvent]) -> list[ChordEvent]:
        """
        Segment a note timeline into chord events.

        Args:
            events: Note events, ideally ordered by start time

        Returns:
            Chord events in time order, without "N.C." spans
        """
        ordered = sorted(events, key=lambda e: e.start)
        if not ordered:
            return []

        duration = self.timeline_duration(ordered)
        if duration <= 0:
            return []

        step = self.settings.step
        chord_events: list[ChordEvent] = []
        # Open span: (label, start, end)
        current: tuple[str, float, float] | None = None

        index = 0
        while True:
            time = index * step
            if time >= duration:
                break
            if index >= self.settings.max_iterations:
                logger.warning(
                    f"Stopped analysis at {time:.2f}s after {index} samples (iteration cap)"
                )
                break

            label = self.label_at(ordered, time)

            if current is None or label != current[0]:
                if current is not None:
                    chord_events.append(ChordEvent(current[1], time, current[0]))
                current = (label, time, time + step)
            else:
                current = (label, current[1], time + step)

            index += 1

        if current is not None:
            label, start, end = current
            chord_events.append(ChordEvent(start, end, label))

        result = [event for event in chord_events if event.chord_name != NO_CHORD]
        logger.debug(f"Analyzed {len(ordered)} notes over {duration:.2f}s: {len(result)} chords")
        return result


def analyze_notes(
    events: Iterable[NoteEvent],
    settings: AnalysisSettings | None = None,
) -> list[ChordEvent]:
    """
    Segment a note timeline into chord events.

    Shortcut for ChordSegmenter(settings).analyze(events).

    Example:
        analyze_notes([NoteEvent(60, 0, 2), NoteEvent(64, 0, 2), NoteEvent(67, 0, 2)])
        → [ChordEvent(0.0, 2.0, "C Major")]
    """
    return ChordSegmenter(settings).analyze(events)


def summarize_progression(chord_events: Iterable[ChordEvent]) -> list[str]:
    """
    Collapse a chord timeline into its progression.

    Neighbouring events with the same name (split by a dropped "N.C."
    gap) count once.
    """
    progression: list[str] = []
    for event in chord_events:
        if not progression or progression[-1] != event.chord_name:
            progression.append(event.chord_name)
    return progression
