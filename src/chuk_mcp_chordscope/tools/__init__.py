"""
MCP tool implementations.

Tools are organized by domain:
- theory - Chord detection, chord/scale spelling, parent keys
- fretboard - Instruments, fretboard grids, piano keys
- analysis - Chord timelines from note events and MIDI files
- session - Live note sets and snapshots
"""

from chuk_mcp_chordscope.tools.analysis import register_analysis_tools
from chuk_mcp_chordscope.tools.fretboard import register_fretboard_tools
from chuk_mcp_chordscope.tools.session import register_session_tools
from chuk_mcp_chordscope.tools.theory import register_theory_tools

__all__ = [
    "register_analysis_tools",
    "register_fretboard_tools",
    "register_session_tools",
    "register_theory_tools",
]
