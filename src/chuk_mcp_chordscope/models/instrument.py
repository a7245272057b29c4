"""
Instrument model - a named tuning with a fret count.

Instruments are loaded from YAML presets (guitar, bass, ukulele, ...)
and feed the fretboard generator.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from chuk_mcp_chordscope.constants import DEFAULT_FRET_COUNT
from chuk_mcp_chordscope.core.fretboard import FretboardPosition, Tuning, generate_fretboard
from chuk_mcp_chordscope.core.pitch import PitchClass, note_from_midi


class Instrument(BaseModel):
    """
    A stringed instrument definition.

    The tuning lists open-string MIDI numbers, lowest string first.
    """

    name: str = Field(..., description="Instrument name (e.g., 'guitar-standard')")
    description: str = Field("", description="Human-readable description")
    tuning: list[int] = Field(..., min_length=1, description="Open-string MIDI numbers")
    fret_count: int = Field(DEFAULT_FRET_COUNT, ge=0, le=36, description="Number of frets")

    model_config = {"frozen": True}

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Ensure instrument name is a valid identifier."""
        if not v or not v.replace("_", "").replace("-", "").isalnum():
            raise ValueError(f"Invalid instrument name: {v}")
        return v.lower().replace("_", "-")

    @field_validator("tuning")
    @classmethod
    def validate_tuning(cls, v: list[int]) -> list[int]:
        """Open strings must be valid MIDI notes."""
        for midi in v:
            if not 0 <= midi <= 127:
                raise ValueError(f"Tuning notes must be 0-127, got {midi}")
        return v

    @property
    def string_count(self) -> int:
        return len(self.tuning)

    def get_tuning(self) -> Tuning:
        """Tuning as an immutable tuple."""
        return tuple(self.tuning)

    def tuning_names(self) -> list[str]:
        """Open strings spelled with octave, e.g. ['E2', 'A2', ...]."""
        return [str(note_from_midi(midi)) for midi in self.tuning]

    def fretboard(self, fret_count: int | None = None) -> list[list[FretboardPosition]]:
        """Generate the position grid for this instrument."""
        frets = self.fret_count if fret_count is None else fret_count
        return generate_fretboard(self.get_tuning(), frets)

    @classmethod
    def from_yaml_dict(cls, data: dict[str, Any]) -> Instrument:
        """
        Build an instrument from a YAML preset.

        Tuning entries may be MIDI numbers or note names like 'E2'.
        """
        tuning = [_parse_tuning_entry(entry) for entry in data.get("tuning", [])]
        return cls(
            name=data["name"],
            description=data.get("description", ""),
            tuning=tuning,
            fret_count=data.get("fret_count", DEFAULT_FRET_COUNT),
        )

    def to_yaml_dict(self) -> dict[str, Any]:
        """Serialize to a YAML-friendly dict."""
        return {
            "name": self.name,
            "description": self.description,
            "tuning": self.tuning_names(),
            "fret_count": self.fret_count,
        }


class InstrumentMetadata(BaseModel):
    """Lightweight instrument info for listings."""

    name: str
    description: str
    string_count: int
    tuning: list[str]

    @classmethod
    def from_instrument(cls, instrument: Instrument) -> InstrumentMetadata:
        return cls(
            name=instrument.name,
            description=instrument.description,
            string_count=instrument.string_count,
            tuning=instrument.tuning_names(),
        )


def _parse_tuning_entry(entry: int | str) -> int:
    """Accept 40 or 'E2' (sharps or flats, octave suffix may be negative)."""
    if isinstance(entry, int):
        return entry

    text = str(entry).strip()
    split = len(text)
    while split > 0 and (text[split - 1].isdigit() or text[split - 1] == "-"):
        split -= 1
    if split == len(text) or split == 0:
        raise ValueError(f"Invalid tuning note: {entry}")

    pitch = PitchClass.parse(text[:split])
    octave = int(text[split:])
    return pitch.to_midi(octave)
