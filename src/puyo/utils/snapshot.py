"""Read-only view of the session for renderers and tests."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from esper import World

from puyo.components.board_position import BoardPosition
from puyo.components.cell import Cell
from puyo.systems.board_ops import get_board
from puyo.utils.session_state import (
    get_chain_state,
    get_piece_queue,
    get_score_state,
    get_session_state,
)


@dataclass(frozen=True, slots=True)
class CellView:
    color: Optional[str]
    marked: bool


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    grid: Tuple[Tuple[CellView, ...], ...]
    active_cells: Optional[Tuple[Tuple[int, int, str], ...]]
    preview_colors: Optional[Tuple[str, str]]
    score: int
    current_chain: int
    max_chain: int
    last_step_points: int
    pieces_spawned: int
    game_over: bool
    paused: bool

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def color_at(self, row: int, col: int) -> Optional[str]:
        return self.grid[row][col].color


def build_snapshot(world: World) -> SessionSnapshot:
    board = get_board(world)
    rows = [[CellView(None, False)] * board.cols for _ in range(board.rows)]
    for _, (position, cell) in world.get_components(BoardPosition, Cell):
        rows[position.row][position.col] = CellView(cell.color, cell.marked)

    queue = get_piece_queue(world)
    active = tuple(queue.active.cells()) if queue.active is not None else None
    preview = (
        (queue.preview.anchor_color, queue.preview.satellite_color)
        if queue.preview is not None
        else None
    )
    score = get_score_state(world)
    state = get_session_state(world)
    return SessionSnapshot(
        grid=tuple(tuple(row) for row in rows),
        active_cells=active,
        preview_colors=preview,
        score=score.score,
        current_chain=get_chain_state(world).depth,
        max_chain=score.max_chain,
        last_step_points=score.last_step_points,
        pieces_spawned=state.pieces_spawned,
        game_over=state.game_over,
        paused=state.paused,
    )
