#!/usr/bin/env python3
"""
Async Chordscope MCP Server using chuk-mcp-server

This server exposes a music-theory engine as MCP tools: give it the notes
that are sounding and it names the chord, the scale and the parent key,
and lays them out on a fretboard or keyboard.

The server provides tools for:
- Detecting chords and spelling chords, scales and parent keys
- Generating fretboard grids for any tuning, and piano key ranges
- Segmenting MIDI files and note timelines into chord progressions
- Live note sessions driven by note toggles
"""

import logging
from pathlib import Path

from chuk_mcp_server import ChukMCPServer

from chuk_mcp_chordscope.instruments import InstrumentLoader
from chuk_mcp_chordscope.models import AnalysisSettings
from chuk_mcp_chordscope.session import NoteSessionManager
from chuk_mcp_chordscope.tools import (
    register_analysis_tools,
    register_fretboard_tools,
    register_session_tools,
    register_theory_tools,
)

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# Create the MCP server instance
mcp = ChukMCPServer("chuk-mcp-chordscope")

# Paths - use standard project structure
BASE_PATH = Path.cwd()
INSTRUMENTS_DIR = BASE_PATH / "instruments"
OUTPUT_DIR = BASE_PATH / "output"
INSTRUMENT_LIBRARY_PATH = Path(__file__).parent / "instruments" / "library"

# Create managers
instrument_loader = InstrumentLoader(
    library_path=INSTRUMENT_LIBRARY_PATH,
    project_path=INSTRUMENTS_DIR,
)
session_manager = NoteSessionManager()
analysis_settings = AnalysisSettings()

# Register all tools
theory_tools = register_theory_tools(mcp)
fretboard_tools = register_fretboard_tools(mcp, instrument_loader)
analysis_tools = register_analysis_tools(mcp, OUTPUT_DIR, analysis_settings)
session_tools = register_session_tools(mcp, session_manager)

# Export tool functions for direct access
chord_detect = theory_tools["chord_detect"]
chord_notes = theory_tools["chord_notes"]
chord_list_qualities = theory_tools["chord_list_qualities"]
scale_generate = theory_tools["scale_generate"]
scale_list_types = theory_tools["scale_list_types"]
scale_suggest = theory_tools["scale_suggest"]
key_estimate_parent = theory_tools["key_estimate_parent"]

fretboard_list_instruments = fretboard_tools["fretboard_list_instruments"]
fretboard_describe_instrument = fretboard_tools["fretboard_describe_instrument"]
fretboard_generate = fretboard_tools["fretboard_generate"]
piano_keys_range = fretboard_tools["piano_keys_range"]

analysis_analyze_events = analysis_tools["analysis_analyze_events"]
analysis_analyze_midi = analysis_tools["analysis_analyze_midi"]
analysis_export_progression = analysis_tools["analysis_export_progression"]

session_toggle_note = session_tools["session_toggle_note"]
session_set_notes = session_tools["session_set_notes"]
session_set_scale_type = session_tools["session_set_scale_type"]
session_clear = session_tools["session_clear"]
session_snapshot = session_tools["session_snapshot"]

logger.info("Chordscope MCP Server initialized")
logger.info(f"  Instrument library: {INSTRUMENT_LIBRARY_PATH}")
logger.info(f"  Project instruments: {INSTRUMENTS_DIR}")
logger.info(f"  Output dir: {OUTPUT_DIR}")
logger.info(f"  Analysis step: {analysis_settings.step}s")
