# Copyright (c) 2026 TrailLensCo
# All rights reserved.
#
# This file is proprietary and confidential.
# Unauthorized copying, distribution, or use of this file,
# via any medium, is strictly prohibited without the express
# written permission of TrailLensCo.

"""
Read-only views of a finished crossword.

The character table is rebuilt from the crossword's cell map on every
call; nothing here touches search state.
"""

from typing import Any, List


def generate_char_table(crossword: 'Crossword', empty: Any = None) -> List[List[Any]]:
    """
    Project a crossword into a 2D table of symbols.

    Args:
        crossword: Crossword snapshot (already normalized to start at 0, 0)
        empty: Value used for cells no word occupies

    Returns:
        Rows of symbols, sized to the crossword's bounding box
    """
    table = [[empty for _ in range(crossword.width)] for _ in range(crossword.height)]
    for (row, col), symbol in crossword.cells.items():
        table[row][col] = symbol
    return table


def render_text(crossword: 'Crossword', empty: str = ".", separator: str = " ") -> str:
    """Convert a crossword to a printable block of text."""
    lines = []
    for row in generate_char_table(crossword, empty=empty):
        lines.append(separator.join(str(symbol) for symbol in row))
    return "\n".join(lines)
