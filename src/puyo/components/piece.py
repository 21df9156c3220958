"""Falling pair model: an anchor puyo plus a satellite one step away."""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Tuple

Position = Tuple[int, int]


class Facing(Enum):
    """Satellite offset from the anchor as a (d_row, d_col) unit vector."""
    UP = (-1, 0)
    RIGHT = (0, 1)
    DOWN = (1, 0)
    LEFT = (0, -1)

    @property
    def d_row(self) -> int:
        return self.value[0]

    @property
    def d_col(self) -> int:
        return self.value[1]

    def rotated(self, clockwise: bool = True) -> Facing:
        d_row, d_col = self.value
        if clockwise:
            return Facing((-d_col, d_row))
        return Facing((d_col, -d_row))


@dataclass(slots=True)
class Piece:
    row: int
    col: int
    facing: Facing
    anchor_color: str
    satellite_color: str

    def satellite_position(self, d_row: int = 0, d_col: int = 0) -> Position:
        return (self.row + d_row + self.facing.d_row, self.col + d_col + self.facing.d_col)

    def anchor_position(self, d_row: int = 0, d_col: int = 0) -> Position:
        return (self.row + d_row, self.col + d_col)

    def cells(self) -> List[Tuple[int, int, str]]:
        """Absolute (row, col, color) for anchor then satellite."""
        sat_row, sat_col = self.satellite_position()
        return [
            (self.row, self.col, self.anchor_color),
            (sat_row, sat_col, self.satellite_color),
        ]

    def copy(self) -> Piece:
        return replace(self)
