from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from esper import World

from puyo.components.board import Board
from puyo.components.board_position import BoardPosition
from puyo.components.cell import Cell

Position = Tuple[int, int]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    color: str


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def board_dimensions(world: World) -> Tuple[int, int] | None:
    for _, board in world.get_component(Board):
        return board.rows, board.cols
    return None


def in_bounds(world: World, row: int, col: int) -> bool:
    board = get_board(world)
    return 0 <= row < board.rows and 0 <= col < board.cols


def get_entity_at(world: World, row: int, col: int) -> int:
    assert in_bounds(world, row, col), f"cell {(row, col)} is outside the board"
    for entity, position in world.get_component(BoardPosition):
        if position.row == row and position.col == col:
            return entity
    raise RuntimeError(f"No cell entity at {(row, col)}")


def get_cell(world: World, row: int, col: int) -> Cell:
    return world.component_for_entity(get_entity_at(world, row, col), Cell)


def is_occupied(world: World, row: int, col: int) -> bool:
    """Occupancy query. Callers bounds-check first; out-of-range is a contract violation."""
    return get_cell(world, row, col).occupied


def set_cell(world: World, row: int, col: int, color: Optional[str]) -> None:
    get_cell(world, row, col).color = color


def mark_cell(world: World, row: int, col: int) -> None:
    get_cell(world, row, col).marked = True


def unmark_all(world: World) -> List[Position]:
    cleared: List[Position] = []
    for _, (position, cell) in world.get_components(BoardPosition, Cell):
        if cell.marked:
            cell.marked = False
            cleared.append((position.row, position.col))
    return sorted(cleared)


def marked_positions(world: World) -> List[Position]:
    return sorted(
        (position.row, position.col)
        for _, (position, cell) in world.get_components(BoardPosition, Cell)
        if cell.marked
    )


def cell_color_map(world: World) -> Dict[Position, str]:
    """Return mapping of occupied cell positions to their colors."""
    mapping: Dict[Position, str] = {}
    for _, (position, cell) in world.get_components(BoardPosition, Cell):
        if cell.color is not None:
            mapping[(position.row, position.col)] = cell.color
    return mapping


def clear_board(world: World) -> None:
    for _, cell in world.get_component(Cell):
        cell.color = None
        cell.marked = False


def top_row_occupied(world: World, col: int | None = None) -> bool:
    """Any occupied cell in row 0, or only in ``col`` when given."""
    return any(row == 0 and (col is None or c == col) for row, c in cell_color_map(world))


def compute_gravity_moves(world: World) -> List[GravityMove]:
    """Per-column compaction toward the bottom row, preserving top-to-bottom order."""
    dims = board_dimensions(world)
    if not dims:
        return []
    rows, cols = dims
    colors = cell_color_map(world)
    moves: List[GravityMove] = []
    for col in range(cols):
        filled_rows = [row for row in range(rows) if (row, col) in colors]
        first_target = rows - len(filled_rows)
        for offset, original_row in enumerate(filled_rows):
            target_row = first_target + offset
            if original_row == target_row:
                continue
            moves.append(GravityMove(
                source=(original_row, col),
                target=(target_row, col),
                color=colors[(original_row, col)],
            ))
    return moves


def apply_gravity_moves(world: World, moves: List[GravityMove]) -> None:
    # Lowest targets first so no move lands on a cell that has not been vacated yet.
    for move in sorted(moves, key=lambda m: m.target[0], reverse=True):
        src_cell = get_cell(world, *move.source)
        dst_cell = get_cell(world, *move.target)
        if src_cell.color is None:
            continue
        dst_cell.color = src_cell.color
        src_cell.color = None


def apply_gravity(world: World) -> List[GravityMove]:
    moves = compute_gravity_moves(world)
    if moves:
        apply_gravity_moves(world, moves)
    return moves


def settle(world: World) -> List[GravityMove]:
    """Clear pop markers and drop everything that floats."""
    unmark_all(world)
    return apply_gravity(world)
