"""
Analysis settings - tunables for the chord-sequence segmenter.

The sampling step trades responsiveness for noise: a shorter step catches
quick chord changes but also passing tones.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from chuk_mcp_chordscope.constants import (
    ANALYSIS_STEP_SECONDS,
    MAX_ANALYSIS_ITERATIONS,
    MAX_ANALYSIS_SECONDS,
)


class AnalysisSettings(BaseModel):
    """Segmenter configuration. Constant for the whole of one analysis run."""

    step: float = Field(
        ANALYSIS_STEP_SECONDS,
        gt=0,
        le=2.0,
        description="Sampling step in seconds",
    )
    max_seconds: float = Field(
        MAX_ANALYSIS_SECONDS,
        gt=0,
        description="Timeline length ceiling in seconds",
    )
    max_iterations: int = Field(
        MAX_ANALYSIS_ITERATIONS,
        gt=0,
        description="Hard cap on the number of samples",
    )

    model_config = {"frozen": True}
