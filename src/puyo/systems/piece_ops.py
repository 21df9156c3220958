"""Collision, movement, rotation and locking for the active pair."""
from __future__ import annotations

from typing import List, Tuple

from esper import World

from puyo.components.piece import Piece
from puyo.systems.board_ops import in_bounds, is_occupied, set_cell
from puyo.utils.session_state import get_chain_state, get_piece_queue

Position = Tuple[int, int]

# Anchor column shifts tried, in order, when a rotation is blocked: none, kick left, kick right.
ROTATION_KICKS: Tuple[int, ...] = (0, -1, 1)


def _cell_free(world: World, row: int, col: int) -> bool:
    return in_bounds(world, row, col) and not is_occupied(world, row, col)


def can_place(world: World, piece: Piece, d_row: int = 0, d_col: int = 0) -> bool:
    """True iff both cells of ``piece`` shifted by (d_row, d_col) are on the board and empty."""
    anchor = piece.anchor_position(d_row, d_col)
    satellite = piece.satellite_position(d_row, d_col)
    return _cell_free(world, *anchor) and _cell_free(world, *satellite)


def translate_piece(world: World, d_row: int, d_col: int) -> bool:
    queue = get_piece_queue(world)
    piece = queue.active
    if piece is None:
        return False
    if not can_place(world, piece, d_row, d_col):
        return False
    piece.row += d_row
    piece.col += d_col
    return True


def rotate_piece(world: World, clockwise: bool = True) -> int | None:
    """Rotate the active pair a quarter turn.

    Returns the anchor column shift that made the rotation fit (0 for an
    in-place rotation), or None when every kick is blocked and nothing changed.
    """
    queue = get_piece_queue(world)
    piece = queue.active
    if piece is None:
        return None
    candidate = piece.copy()
    candidate.facing = piece.facing.rotated(clockwise)
    for kick in ROTATION_KICKS:
        if can_place(world, candidate, 0, kick):
            piece.facing = candidate.facing
            piece.col += kick
            return kick
    return None


def lock_piece(world: World) -> List[Position]:
    """Write the active pair into the grid and hand control to chain resolution."""
    queue = get_piece_queue(world)
    piece = queue.active
    if piece is None:
        return []
    positions: List[Position] = []
    for row, col, color in piece.cells():
        set_cell(world, row, col, color)
        positions.append((row, col))
    queue.active = None
    chain = get_chain_state(world)
    chain.resolving = True
    chain.depth = 0
    return positions
