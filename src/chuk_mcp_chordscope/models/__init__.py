"""
Pydantic models for the chordscope system.

This module provides:
- Instrument: Named tuning with a fret count
- InstrumentMetadata: Listing summary of an instrument
- AnalysisSettings: Segmenter configuration
"""

from chuk_mcp_chordscope.models.instrument import Instrument, InstrumentMetadata
from chuk_mcp_chordscope.models.settings import AnalysisSettings

__all__ = [
    "AnalysisSettings",
    "Instrument",
    "InstrumentMetadata",
]
