"""
Session Manager - live note sets driven by toggles.

A session is the caller-maintained set of sounding notes (key presses,
hardware note-on/off, a playback sweep) plus the chosen scale type.
Chord, scale and parent key are recomputed only when a snapshot is asked
for; nothing is cached between snapshots.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from pydantic import BaseModel, Field

from chuk_mcp_chordscope.core.chord import ChordResult, detect_chord, estimate_parent_key
from chuk_mcp_chordscope.core.pitch import Note, PitchClass, note_from_midi
from chuk_mcp_chordscope.core.scale import (
    Scale,
    ScaleType,
    compatible_scale_types,
    generate_scale,
)

DEFAULT_SESSION = "default"


class NoteSession(BaseModel):
    """
    A named live note set.

    active_notes holds MIDI numbers, kept sorted and unique.
    """

    name: str = Field(..., description="Session name")
    active_notes: list[int] = Field(default_factory=list, description="Sounding MIDI notes")
    scale_type: ScaleType = Field(ScaleType.MAJOR, description="Scale shown for the snapshot")

    def notes(self) -> list[Note]:
        return [note_from_midi(midi) for midi in self.active_notes]


@dataclass(frozen=True)
class SessionSnapshot:
    """Everything a view needs for the current note set."""

    notes: tuple[Note, ...]
    chord: ChordResult | None
    scale: Scale | None
    parent_key: PitchClass | None
    compatible_scales: tuple[ScaleType, ...]

    def to_dict(self) -> dict:
        return {
            "notes": [str(note) for note in self.notes],
            "midi": [note.midi for note in self.notes],
            "chord": (
                {
                    "root": self.chord.root.spell(),
                    "quality": self.chord.quality,
                    "name": self.chord.name,
                }
                if self.chord
                else None
            ),
            "scale": (
                {
                    "root": self.scale.root.spell(),
                    "type": self.scale.scale_type.value,
                    "notes": [pc.spell() for pc in self.scale.notes],
                }
                if self.scale
                else None
            ),
            "parent_key": self.parent_key.spell() if self.parent_key is not None else None,
            "compatible_scales": [s.value for s in self.compatible_scales],
        }


def build_snapshot(notes: Iterable[Note], scale_type: ScaleType | str) -> SessionSnapshot:
    """
    Compute chord, scale and parent key for a note set.

    The scale is rooted on the detected chord's root, or on the lowest
    note when no chord is detected. An empty set has no scale.
    """
    ordered = tuple(sorted({n.midi: n for n in notes}.values(), key=lambda n: n.midi))
    kind = ScaleType.parse(scale_type)

    if not ordered:
        return SessionSnapshot(ordered, None, None, None, tuple(ScaleType))

    chord = detect_chord(ordered)
    root = chord.root if chord else ordered[0].pitch_class

    return SessionSnapshot(
        notes=ordered,
        chord=chord,
        scale=generate_scale(root, kind),
        parent_key=estimate_parent_key(chord) if chord else None,
        compatible_scales=compatible_scale_types(chord.quality) if chord else tuple(ScaleType),
    )


class NoteSessionManager:
    """
    Manages named live note sessions in memory.

    Sessions are created on first use. All operations are async-ready to
    sit behind the MCP tools.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, NoteSession] = {}

    async def get(self, name: str = DEFAULT_SESSION) -> NoteSession:
        """Get a session, creating it if needed."""
        if name not in self._sessions:
            self._sessions[name] = NoteSession(name=name)
        return self._sessions[name]

    async def list_sessions(self) -> list[str]:
        return sorted(self._sessions)

    async def toggle(self, midi: int, name: str = DEFAULT_SESSION) -> bool:
        """
        Toggle a note on or off.

        Returns:
            True if the note is now sounding
        """
        session = await self.get(name)
        if midi in session.active_notes:
            session.active_notes.remove(midi)
            return False
        session.active_notes.append(midi)
        session.active_notes.sort()
        return True

    async def add(self, midi: int, name: str = DEFAULT_SESSION) -> None:
        """Note-on. Adding a sounding note is a no-op."""
        session = await self.get(name)
        if midi not in session.active_notes:
            session.active_notes.append(midi)
            session.active_notes.sort()

    async def remove(self, midi: int, name: str = DEFAULT_SESSION) -> None:
        """Note-off. Removing a silent note is a no-op."""
        session = await self.get(name)
        if midi in session.active_notes:
            session.active_notes.remove(midi)

    async def set_notes(self, midi_notes: Iterable[int], name: str = DEFAULT_SESSION) -> None:
        """Replace the whole note set (e.g. a playback-position sweep)."""
        session = await self.get(name)
        session.active_notes = sorted(set(midi_notes))

    async def clear(self, name: str = DEFAULT_SESSION) -> None:
        session = await self.get(name)
        session.active_notes = []

    async def set_scale_type(
        self,
        scale_type: ScaleType | str,
        name: str = DEFAULT_SESSION,
    ) -> None:
        """
        Choose the scale type shown for the session.

        Raises:
            ValueError: If the scale type is unknown
        """
        session = await self.get(name)
        session.scale_type = ScaleType.parse(scale_type)

    async def delete(self, name: str) -> bool:
        """Drop a session. Returns False if it did not exist."""
        return self._sessions.pop(name, None) is not None

    async def snapshot(self, name: str = DEFAULT_SESSION) -> SessionSnapshot:
        """Compute chord, scale and parent key for the current note set."""
        session = await self.get(name)
        return build_snapshot(session.notes(), session.scale_type)
