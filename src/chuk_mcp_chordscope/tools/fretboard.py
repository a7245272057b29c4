"""
Fretboard tools - MCP tools for instruments, fretboards and pianos.

Tools for listing tuning presets and producing the position data a
fretboard or keyboard view draws, marked against a scale and the
sounding notes.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_chordscope.constants import (
    DEFAULT_FRET_COUNT,
    PIANO_HIGHEST_MIDI,
    PIANO_LOWEST_MIDI,
    PositionMark,
)
from chuk_mcp_chordscope.core import (
    PitchClass,
    Scale,
    generate_fretboard,
    generate_scale,
    mark_position,
    note_from_midi,
    piano_keys,
)
from chuk_mcp_chordscope.instruments import DEFAULT_INSTRUMENT, InstrumentLoader

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _optional_scale(scale_root: str | None, scale_type: str | None) -> Scale | None:
    """Build the highlight scale when a root is given."""
    if scale_root is None:
        return None
    return generate_scale(PitchClass.parse(scale_root), scale_type or "Major")


def _mark_value(mark: PositionMark | None) -> str | None:
    return mark.value if mark else None


def register_fretboard_tools(
    mcp: ChukMCPServer,
    instrument_loader: InstrumentLoader,
) -> dict[str, Any]:
    """
    Register fretboard and keyboard tools with the MCP server.

    Args:
        mcp: The MCP server instance
        instrument_loader: The instrument preset loader

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_list_instruments() -> str:
        """
        List available instrument tunings.

        Returns:
            JSON string with instrument summaries

        Example:
            fretboard_list_instruments()
        """
        try:
            instruments = instrument_loader.list_instruments()
            return json.dumps(
                {
                    "status": "success",
                    "instruments": [i.model_dump() for i in instruments],
                    "count": len(instruments),
                }
            )
        except Exception as e:
            logger.exception("Failed to list instruments")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_list_instruments"] = fretboard_list_instruments

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_describe_instrument(name: str) -> str:
        """
        Get an instrument's tuning and fret count.

        Args:
            name: Instrument name (e.g., 'bass-5')

        Returns:
            JSON string with instrument details

        Example:
            fretboard_describe_instrument(name="guitar-drop-d")
        """
        try:
            instrument = instrument_loader.require_instrument(name)
            return json.dumps(
                {
                    "status": "success",
                    "instrument": {
                        "name": instrument.name,
                        "description": instrument.description,
                        "tuning": instrument.tuning_names(),
                        "tuning_midi": instrument.tuning,
                        "fret_count": instrument.fret_count,
                    },
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to describe instrument")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_describe_instrument"] = fretboard_describe_instrument

    @mcp.tool  # type: ignore[arg-type]
    async def fretboard_generate(
        instrument: str = DEFAULT_INSTRUMENT,
        tuning: list[int] | None = None,
        fret_count: int | None = None,
        scale_root: str | None = None,
        scale_type: str | None = None,
        active_notes: list[int] | None = None,
    ) -> str:
        """
        Generate a fretboard grid with marked positions.

        Each position is marked 'active' (sounding note), 'root' (scale
        root), 'scale' (scale tone) or null.

        Args:
            instrument: Instrument preset name (ignored when tuning is given)
            tuning: Custom open-string MIDI numbers, lowest string first
            fret_count: Override the instrument's fret count
            scale_root: Optional scale root to highlight (e.g., 'A')
            scale_type: Scale type for the highlight (default 'Major')
            active_notes: Sounding MIDI notes

        Returns:
            JSON string with strings → positions

        Example:
            fretboard_generate(instrument="bass-4", scale_root="E", scale_type="Minor Pentatonic")
        """
        try:
            if tuning is not None:
                open_strings = tuple(tuning)
                frets = DEFAULT_FRET_COUNT if fret_count is None else fret_count
            else:
                preset = instrument_loader.require_instrument(instrument)
                open_strings = preset.get_tuning()
                frets = preset.fret_count if fret_count is None else fret_count

            scale = _optional_scale(scale_root, scale_type)
            active = [note_from_midi(m) for m in active_notes or []]
            grid = generate_fretboard(open_strings, frets)

            return json.dumps(
                {
                    "status": "success",
                    "string_count": len(grid),
                    "fret_count": frets,
                    "scale": scale.name if scale else None,
                    "strings": [
                        [
                            {
                                "fret": position.fret,
                                "note": str(position.note),
                                "midi": position.note.midi,
                                "mark": _mark_value(mark_position(position, scale, active)),
                            }
                            for position in string
                        ]
                        for string in grid
                    ],
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate fretboard")
            return json.dumps({"status": "error", "message": str(e)})

    tools["fretboard_generate"] = fretboard_generate

    @mcp.tool  # type: ignore[arg-type]
    async def piano_keys_range(
        low: int = PIANO_LOWEST_MIDI,
        high: int = PIANO_HIGHEST_MIDI,
        scale_root: str | None = None,
        scale_type: str | None = None,
        active_notes: list[int] | None = None,
    ) -> str:
        """
        Generate piano keys with marks.

        Args:
            low: Lowest MIDI note (default 21, A0)
            high: Highest MIDI note (default 108, C8)
            scale_root: Optional scale root to highlight
            scale_type: Scale type for the highlight (default 'Major')
            active_notes: Sounding MIDI notes

        Returns:
            JSON string with one entry per key

        Example:
            piano_keys_range(low=48, high=72, active_notes=[60, 64, 67])
        """
        try:
            scale = _optional_scale(scale_root, scale_type)
            active = [note_from_midi(m) for m in active_notes or []]
            keys = piano_keys(low, high, scale, active)
            return json.dumps(
                {
                    "status": "success",
                    "keys": [
                        {
                            "note": str(key.note),
                            "midi": key.note.midi,
                            "black": key.is_black,
                            "mark": _mark_value(key.mark),
                        }
                        for key in keys
                    ],
                    "count": len(keys),
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate piano keys")
            return json.dumps({"status": "error", "message": str(e)})

    tools["piano_keys_range"] = piano_keys_range

    return tools
