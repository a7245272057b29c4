"""
Analysis tools - MCP tools for chord timelines.

Tools for segmenting note timelines or MIDI files into chord events and
exporting the detected progression as MIDI.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from chuk_mcp_chordscope.analysis import (
    ChordEvent,
    ChordSegmenter,
    NoteEvent,
    summarize_progression,
)
from chuk_mcp_chordscope.constants import DEFAULT_CHORD_OCTAVE, SuccessMessages
from chuk_mcp_chordscope.midi import chord_events_to_midi, read_midi_file
from chuk_mcp_chordscope.models import AnalysisSettings

if TYPE_CHECKING:
    from chuk_mcp_server import ChukMCPServer

logger = logging.getLogger(__name__)


def _analysis_result(notes: list[NoteEvent], chords: list[ChordEvent]) -> dict[str, Any]:
    duration = max((n.end for n in notes), default=0.0)
    return {
        "status": "success",
        "note_count": len(notes),
        "duration": round(duration, 6),
        "chords": [c.to_dict() for c in chords],
        "progression": summarize_progression(chords),
        "message": SuccessMessages.ANALYSIS_COMPLETE.format(count=len(chords), duration=duration),
    }


def register_analysis_tools(
    mcp: ChukMCPServer,
    output_dir: Path,
    settings: AnalysisSettings | None = None,
) -> dict[str, Any]:
    """
    Register timeline analysis tools with the MCP server.

    Args:
        mcp: The MCP server instance
        output_dir: Directory for exported MIDI files
        settings: Default segmenter settings

    Returns:
        Dictionary of registered tool functions
    """
    tools: dict[str, Any] = {}
    default_settings = settings or AnalysisSettings()

    def segmenter_for(step: float | None) -> ChordSegmenter:
        if step is None:
            return ChordSegmenter(default_settings)
        # model_copy does not validate; bounds must hold for overrides too
        return ChordSegmenter(
            AnalysisSettings.model_validate({**default_settings.model_dump(), "step": step})
        )

    @mcp.tool  # type: ignore[arg-type]
    async def analysis_analyze_events(
        events: list[dict[str, Any]],
        step: float | None = None,
    ) -> str:
        """
        Segment a note timeline into chord events.

        Args:
            events: Notes as {"pitch": int, "start": seconds, "duration": seconds}
            step: Optional sampling step in seconds (default 0.25, at most 2.0)

        Returns:
            JSON string with chord events and the collapsed progression

        Example:
            analysis_analyze_events(events=[
                {"pitch": 60, "start": 0, "duration": 2},
                {"pitch": 64, "start": 0, "duration": 2},
                {"pitch": 67, "start": 0, "duration": 2},
            ])
        """
        try:
            notes = [
                NoteEvent(int(e["pitch"]), float(e["start"]), float(e["duration"]))
                for e in events
            ]
            chords = segmenter_for(step).analyze(notes)
            return json.dumps(_analysis_result(notes, chords))
        except (ValidationError, ValueError, KeyError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to analyze events")
            return json.dumps({"status": "error", "message": str(e)})

    tools["analysis_analyze_events"] = analysis_analyze_events

    @mcp.tool  # type: ignore[arg-type]
    async def analysis_analyze_midi(
        path: str,
        include_drums: bool = False,
        step: float | None = None,
    ) -> str:
        """
        Read a MIDI file and segment it into chord events.

        All tracks are merged; the drum channel is skipped unless asked for.

        Args:
            path: Path to a .mid file
            include_drums: Keep notes on MIDI channel 10
            step: Optional sampling step in seconds (default 0.25, at most 2.0)

        Returns:
            JSON string with chord events and the collapsed progression

        Example:
            analysis_analyze_midi(path="songs/progression.mid")
        """
        try:
            notes = read_midi_file(path, include_drums=include_drums)
            chords = segmenter_for(step).analyze(notes)
            result = _analysis_result(notes, chords)
            result["path"] = str(path)
            return json.dumps(result)
        except (FileNotFoundError, ValidationError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to analyze MIDI file")
            return json.dumps({"status": "error", "message": str(e)})

    tools["analysis_analyze_midi"] = analysis_analyze_midi

    @mcp.tool  # type: ignore[arg-type]
    async def analysis_export_progression(
        path: str,
        output_name: str | None = None,
        octave: int = DEFAULT_CHORD_OCTAVE,
    ) -> str:
        """
        Analyze a MIDI file and export its chords as block-chord MIDI.

        Useful for hearing what the analysis found.

        Args:
            path: Path to the source .mid file
            output_name: Optional output filename (without .mid extension)
            octave: Octave for the chord roots (default 3)

        Returns:
            JSON string with the output path and progression

        Example:
            analysis_export_progression(path="songs/progression.mid", output_name="chords")
        """
        try:
            notes = read_midi_file(path)
            chords = segmenter_for(None).analyze(notes)

            filename = f"{output_name or Path(path).stem + '_chords'}.mid"
            output_path = output_dir / filename
            output_dir.mkdir(parents=True, exist_ok=True)

            chord_events_to_midi(chords, octave=octave).save(str(output_path))

            return json.dumps(
                {
                    "status": "success",
                    "path": str(output_path),
                    "progression": summarize_progression(chords),
                    "message": SuccessMessages.PROGRESSION_EXPORTED.format(
                        count=len(chords), path=output_path
                    ),
                }
            )
        except (FileNotFoundError, ValueError) as e:
            return json.dumps({"status": "error", "message": str(e)})
        except Exception as e:
            logger.exception("Failed to export progression")
            return json.dumps({"status": "error", "message": str(e)})

    tools["analysis_export_progression"] = analysis_export_progression

    return tools
