from __future__ import annotations

from typing import Mapping, Sequence, Tuple

from esper import World

from puyo.systems.board_ops import get_board, set_cell

LEGEND = {'R': 'red', 'B': 'blue', 'G': 'green', 'Y': 'yellow', 'P': 'purple'}


def place(world: World, cells: Mapping[Tuple[int, int], str]) -> None:
    """Write {(row, col): color} straight into the grid."""
    for (row, col), color in cells.items():
        set_cell(world, row, col, color)


def place_rows(world: World, rows: Sequence[str]) -> None:
    """Fill the bottom of the board from strings, one char per column ('.' = empty)."""
    top = get_board(world).rows - len(rows)
    for offset, line in enumerate(rows):
        for col, char in enumerate(line):
            if char != '.':
                set_cell(world, top + offset, col, LEGEND[char])
