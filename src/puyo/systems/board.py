from esper import World
from puyo.events.bus import EventBus
from puyo.components.board import Board
from puyo.components.board_position import BoardPosition
from puyo.components.cell import Cell
from puyo.constants import GRID_ROWS, GRID_COLS


class BoardSystem:
    """Owns the grid: one Board entity plus one entity per cell."""

    def __init__(self, world: World, event_bus: EventBus, rows: int = GRID_ROWS, cols: int = GRID_COLS):
        if rows < 2 or cols < 1:
            raise ValueError(f"Board must be at least 2x1, got {rows}x{cols}")
        self.world = world
        self.event_bus = event_bus
        # Create a single board entity with Board component
        self.board_entity = self.world.create_entity()
        self.world.add_component(self.board_entity, Board(rows=rows, cols=cols))
        self._init_board()

    def _init_board(self):
        board: Board = self.world.component_for_entity(self.board_entity, Board)
        for r in range(board.rows):
            for c in range(board.cols):
                self.world.create_entity(BoardPosition(row=r, col=c), Cell())

    @property
    def rows(self) -> int:
        return self.world.component_for_entity(self.board_entity, Board).rows

    @property
    def cols(self) -> int:
        return self.world.component_for_entity(self.board_entity, Board).cols
