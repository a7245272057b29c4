"""
Theory tools - MCP tools for chords, scales and parent keys.

Tools for detecting chords from notes, spelling chords and scales,
and estimating the parent key of a chord.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from chuk_mcp_chordscope.constants import DEFAULT_CHORD_OCTAVE
from chuk_mcp_chordscope.core import (
    CHORD_SHAPES,
    DIATONIC_SCALES,
    PENTATONIC_SCALES,
    ChordResult,
    PitchClass,
    ScaleType,
    compatible_scale_types,
    detect_chord_from_midi,
    estimate_parent_key,
    generate_scale,
    get_chord_notes,
    get_chord_shape,
    parent_key_scale,
)

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def chord_to_dict(chord: ChordResult | None) -> dict[str, Any] | None:
    """Serialize a chord result for tool output."""
    if chord is None:
        return None
    return {
        "root": chord.root.spell(),
        "quality": chord.quality,
        "name": chord.name,
        "parent_key": estimate_parent_key(chord).spell(),
    }


def register_theory_tools(mcp: ChukMCPServer) -> dict[str, Any]:
    """
    Register chord/scale/key tools with the MCP server.

    Args:
        mcp: The MCP server instance

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}

    @mcp.tool  # type: ignore[arg-type]
    async def chord_detect(notes: list[int]) -> str:
        """
        Identify the chord formed by a set of MIDI notes.

        The most fully-spelled matching chord wins (Maj7 over Major).
        Fewer than three distinct notes never form a chord.

        Args:
            notes: MIDI note numbers (e.g., [60, 64, 67])

        Returns:
            JSON string with the chord (or null) and its parent key

        Example:
            chord_detect(notes=[60, 64, 67, 71])
        """
        try:
            chord = detect_chord_from_midi(notes)
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord_to_dict(chord),
                    "message": chord.name if chord else "No chord",
                }
            )
        except Exception as e:
            logger.exception("Failed to detect chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chord_detect"] = chord_detect

    @mcp.tool  # type: ignore[arg-type]
    async def chord_notes(root: str, quality: str, octave: int = DEFAULT_CHORD_OCTAVE) -> str:
        """
        Spell a chord as concrete notes.

        Args:
            root: Root pitch class (e.g., 'C', 'F#', 'Bb')
            quality: Chord quality (e.g., 'Major', 'min7', '7#9')
            octave: Octave of the root (default 3)

        Returns:
            JSON string with note names and MIDI numbers

        Example:
            chord_notes(root="G", quality="Dom7", octave=3)
        """
        try:
            get_chord_shape(quality)
            notes = get_chord_notes(PitchClass.parse(root), quality, octave)
            return json.dumps(
                {
                    "status": "success",
                    "notes": [str(n) for n in notes],
                    "midi": [n.midi for n in notes],
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to spell chord")
            return json.dumps({"status": "error", "message": str(e)})

    tools["chord_notes"] = chord_notes

    @mcp.tool  # type: ignore[arg-type]
    async def chord_list_qualities() -> str:
        """
        List the chord qualities the detector knows.

        Returns:
            JSON string with qualities and their intervals, in match order

        Example:
            chord_list_qualities()
        """
        return json.dumps(
            {
                "status": "success",
                "qualities": [
                    {
                        "quality": shape.quality,
                        "intervals": [i.semitones for i in shape.intervals],
                    }
                    for shape in CHORD_SHAPES
                ],
                "count": len(CHORD_SHAPES),
            }
        )

    tools["chord_list_qualities"] = chord_list_qualities

    @mcp.tool  # type: ignore[arg-type]
    async def scale_generate(root: str, scale_type: str = ScaleType.MAJOR.value) -> str:
        """
        Generate the pitch classes of a scale.

        Args:
            root: Root pitch class (e.g., 'A')
            scale_type: Scale type (e.g., 'Major', 'Harmonic Minor', 'minor_pentatonic')

        Returns:
            JSON string with the scale notes in scale order

        Example:
            scale_generate(root="A", scale_type="Minor Pentatonic")
        """
        try:
            scale = generate_scale(PitchClass.parse(root), scale_type)
            return json.dumps(
                {
                    "status": "success",
                    "scale": {
                        "name": scale.name,
                        "root": scale.root.spell(),
                        "type": scale.scale_type.value,
                        "notes": [pc.spell() for pc in scale.notes],
                    },
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to generate scale")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scale_generate"] = scale_generate

    @mcp.tool  # type: ignore[arg-type]
    async def scale_list_types() -> str:
        """
        List scale types by family.

        Returns:
            JSON string with diatonic and pentatonic scale types

        Example:
            scale_list_types()
        """
        return json.dumps(
            {
                "status": "success",
                "diatonic": [s.value for s in DIATONIC_SCALES],
                "pentatonic": [s.value for s in PENTATONIC_SCALES],
            }
        )

    tools["scale_list_types"] = scale_list_types

    @mcp.tool  # type: ignore[arg-type]
    async def scale_suggest(quality: str) -> str:
        """
        Suggest scale types that fit a chord quality.

        Args:
            quality: Chord quality (e.g., 'min7')

        Returns:
            JSON string with compatible scale types

        Example:
            scale_suggest(quality="Dom7")
        """
        try:
            get_chord_shape(quality)
            return json.dumps(
                {
                    "status": "success",
                    "quality": quality,
                    "scales": [s.value for s in compatible_scale_types(quality)],
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to suggest scales")
            return json.dumps({"status": "error", "message": str(e)})

    tools["scale_suggest"] = scale_suggest

    @mcp.tool  # type: ignore[arg-type]
    async def key_estimate_parent(root: str, quality: str) -> str:
        """
        Estimate the major key a chord most likely belongs to.

        Minor chords are read as vi, dominants as V, diminished as vii
        and major-type chords as I.

        Args:
            root: Chord root (e.g., 'A')
            quality: Chord quality (e.g., 'Minor')

        Returns:
            JSON string with the parent key and its major scale

        Example:
            key_estimate_parent(root="A", quality="Minor")
        """
        try:
            get_chord_shape(quality)
            chord = ChordResult.of(PitchClass.parse(root), quality)
            scale = parent_key_scale(chord)
            return json.dumps(
                {
                    "status": "success",
                    "chord": chord.name,
                    "parent_key": scale.root.spell(),
                    "scale": [pc.spell() for pc in scale.notes],
                }
            )
        except ValueError as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to estimate parent key")
            return json.dumps({"status": "error", "message": str(e)})

    tools["key_estimate_parent"] = key_estimate_parent

    return tools
