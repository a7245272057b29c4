"""
Live note sessions - toggle-driven note sets with on-demand snapshots.
"""

from chuk_mcp_chordscope.session.manager import (
    DEFAULT_SESSION,
    NoteSession,
    NoteSessionManager,
    SessionSnapshot,
    build_snapshot,
)

__all__ = [
    "DEFAULT_SESSION",
    "NoteSession",
    "NoteSessionManager",
    "SessionSnapshot",
    "build_snapshot",
]
