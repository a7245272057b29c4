"""
Session tools - MCP tools for live note sets.

Tools for toggling notes on and off and reading back the chord, scale
and parent key of what is currently sounding.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_chordscope.constants import SuccessMessages
from chuk_mcp_chordscope.session import DEFAULT_SESSION, NoteSessionManager

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def register_session_tools(
    mcp: ChukMCPServer,
    manager: NoteSessionManager,
) -> dict[str, Any]:
    """
    Register live-session tools with the MCP server.

    Args:
        mcp: The MCP server instance
        manager: The note session manager

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    async def snapshot_response(session: str, **extra: Any) -> str:
        snapshot = await manager.snapshot(session)
        return json.dumps({"status": "success", "session": session, **extra, **snapshot.to_dict()})

    @mcp.tool  # type: ignore[arg-type]
    async def session_toggle_note(midi: int, session: str = DEFAULT_SESSION) -> str:
        """
        Toggle a note on or off, like pressing a key.

        Args:
            midi: MIDI note number (e.g., 60 for C4)
            session: Session name (default 'default')

        Returns:
            JSON string with the new snapshot

        Example:
            session_toggle_note(midi=64)
        """
        try:
            sounding = await manager.toggle(midi, session)
            return await snapshot_response(session, toggled=midi, sounding=sounding)
        except Exception as e:
            logger.exception("Failed to toggle note")
            return json.dumps({"status": "error", "message": str(e)})

    tools["session_toggle_note"] = session_toggle_note

    @mcp.tool  # type: ignore[arg-type]
    async def session_set_notes(notes: list[int], session: str = DEFAULT_SESSION) -> str:
        """
        Replace the sounding notes of a session.

        Args:
            notes: MIDI note numbers
            session: Session name (default 'default')

        Returns:
            JSON string with the new snapshot

        Example:
            session_set_notes(notes=[57, 60, 64])
        """
        try:
            await manager.set_notes(notes, session)
            return await snapshot_response(session)
        except Exception as e:
            logger.exception("Failed to set notes")
            return json.dumps({"status": "error", "message": str(e)})

    tools["session_set_notes"] = session_set_notes

    @mcp.tool  # type: ignore[arg-type]
    async def session_set_scale_type(scale_type: str, session: str = DEFAULT_SESSION) -> str:
        """
        Choose the scale type shown for a session.

        Args:
            scale_type: Scale type (e.g., 'Dorian', 'Minor Pentatonic')
            session: Session name (default 'default')

        Returns:
            JSON string with the new snapshot

        Example:
            session_set_scale_type(scale_type="Dorian")
        """
        try:
            await manager.set_scale_type(scale_type, session)
            return await snapshot_response(session)
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to set scale type")
            return json.dumps({"status": "error", "message": str(e)})

    tools["session_set_scale_type"] = session_set_scale_type

    @mcp.tool  # type: ignore[arg-type]
    async def session_clear(session: str = DEFAULT_SESSION) -> str:
        """
        Silence every note in a session.

        Args:
            session: Session name (default 'default')

        Returns:
            JSON string confirming the clear

        Example:
            session_clear()
        """
        try:
            await manager.clear(session)
            return json.dumps(
                {
                    "status": "success",
                    "message": SuccessMessages.SESSION_CLEARED.format(name=session),
                }
            )
        except Exception as e:
            logger.exception("Failed to clear session")
            return json.dumps({"status": "error", "message": str(e)})

    tools["session_clear"] = session_clear

    @mcp.tool  # type: ignore[arg-type]
    async def session_snapshot(session: str = DEFAULT_SESSION) -> str:
        """
        Get the chord, scale and parent key of what is sounding.

        The scale is rooted on the chord root, or the lowest note when
        no chord is detected.

        Args:
            session: Session name (default 'default')

        Returns:
            JSON string with notes, chord, scale, parent key and
            compatible scale types

        Example:
            session_snapshot()
        """
        try:
            return await snapshot_response(session)
        except Exception as e:
            logger.exception("Failed to build snapshot")
            return json.dumps({"status": "error", "message": str(e)})

    tools["session_snapshot"] = session_snapshot

    return tools
