"""
Instrument library - tuning presets for the fretboard.

Presets are YAML files; project presets override the built-in library.
"""

from chuk_mcp_chordscope.instruments.loader import DEFAULT_INSTRUMENT, InstrumentLoader

__all__ = [
    "DEFAULT_INSTRUMENT",
    "InstrumentLoader",
]
