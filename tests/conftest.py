"""
Pytest configuration and shared fixtures.
"""

import tempfile
from pathlib import Path

import pytest

from chuk_mcp_chordscope.analysis import NoteEvent


@pytest.fixture
def temp_dir() -> Path:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_midi_path(temp_dir: Path) -> Path:
    """Path for a temporary MIDI file."""
    return temp_dir / "test.mid"


@pytest.fixture
def c_major_events() -> list[NoteEvent]:
    """C4 E4 G4 held for two seconds."""
    return [NoteEvent(pitch, 0.0, 2.0) for pitch in (60, 64, 67)]
