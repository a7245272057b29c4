#!/usr/bin/env python3
"""
Example: Print a scale map for any instrument.

Loads a tuning preset and prints each string with scale tones marked,
the way a fretboard view would highlight them.

Usage:
    python examples/fretboard_map.py [instrument] [root] [scale type]
    python examples/fretboard_map.py bass-5 E "Minor Pentatonic"
"""

import sys

from chuk_mcp_chordscope.constants import PositionMark
from chuk_mcp_chordscope.core import PitchClass, generate_scale, mark_position
from chuk_mcp_chordscope.instruments import DEFAULT_INSTRUMENT, InstrumentLoader

SYMBOLS = {
    PositionMark.ACTIVE: "*",
    PositionMark.ROOT: "R",
    PositionMark.SCALE: "o",
    None: "-",
}


def main() -> None:
    """Print the fretboard map."""
    name = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_INSTRUMENT
    root = PitchClass.parse(sys.argv[2]) if len(sys.argv) > 2 else PitchClass.A
    scale_type = sys.argv[3] if len(sys.argv) > 3 else "Minor Pentatonic"

    instrument = InstrumentLoader().require_instrument(name)
    scale = generate_scale(root, scale_type)
    grid = instrument.fretboard(fret_count=15)

    print(f"{instrument.name}: {scale.name}\n")
    print("     " + "".join(f"{fret:<3}" for fret in range(len(grid[0]))))

    # Highest string on top, as the player sees it
    for string in reversed(grid):
        label = str(string[0].note)
        cells = "".join(f"{SYMBOLS[mark_position(p, scale)]:<3}" for p in string)
        print(f"{label:<5}{cells}")


if __name__ == "__main__":
    main()
