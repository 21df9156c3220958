from __future__ import annotations

import random
from enum import Enum, auto

from esper import World

from puyo.components.piece import Facing, Piece
from puyo.constants import SPAWN_ROW
from puyo.systems.board_ops import get_board, top_row_occupied
from puyo.systems.piece_ops import can_place
from puyo.utils.session_state import get_palette, get_piece_queue, get_session_state


class SpawnOutcome(Enum):
    SPAWNED = auto()
    SKIPPED = auto()       # a piece is already falling
    BLOCKED = auto()       # spawn cells occupied
    TOPPED_OUT = auto()    # spawn column filled up to the top row


def _rng(world: World, rng: random.Random | None) -> random.Random:
    if isinstance(rng, random.Random):
        return rng
    candidate = getattr(world, "random", None)
    if isinstance(candidate, random.Random):
        return candidate
    return random.Random()


def generate_piece(world: World, rng: random.Random | None = None) -> Piece:
    """New pair at the spawn point: anchor at SPAWN_ROW, middle column, satellite above."""
    board = get_board(world)
    choices = get_palette(world).spawnable_colors()
    chooser = _rng(world, rng)
    return Piece(
        row=SPAWN_ROW,
        col=board.cols // 2,
        facing=Facing.UP,
        anchor_color=chooser.choice(choices),
        satellite_color=chooser.choice(choices),
    )


def spawn_next(world: World, rng: random.Random | None = None) -> SpawnOutcome:
    queue = get_piece_queue(world)
    if queue.active is not None:
        return SpawnOutcome.SKIPPED
    state = get_session_state(world)
    upcoming = queue.preview or generate_piece(world, rng)
    queue.preview = generate_piece(world, rng)
    if top_row_occupied(world, upcoming.col):
        state.game_over = True
        return SpawnOutcome.TOPPED_OUT
    if not can_place(world, upcoming, 0, 0):
        state.game_over = True
        return SpawnOutcome.BLOCKED
    # Independent copy so later moves never reach back into the previewed pair.
    queue.active = upcoming.copy()
    state.pieces_spawned += 1
    return SpawnOutcome.SPAWNED
