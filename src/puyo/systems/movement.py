from esper import World
from puyo.events.bus import (EventBus, EVENT_PIECE_MOVED, EVENT_PIECE_MOVE_BLOCKED,
                             EVENT_PIECE_ROTATED, EVENT_PIECE_ROTATE_BLOCKED)
from puyo.systems.piece_ops import rotate_piece, translate_piece
from puyo.utils.session_state import get_piece_queue


class MovementSystem:
    """Applies translations and rotations to the active pair and reports the result.

    Blocked moves are not errors: state stays as it was and a *_blocked event
    goes out instead.
    """

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus

    def move(self, d_row: int, d_col: int) -> bool:
        if get_piece_queue(self.world).active is None:
            return False
        if translate_piece(self.world, d_row, d_col):
            piece = get_piece_queue(self.world).active
            self.event_bus.emit(EVENT_PIECE_MOVED, d_row=d_row, d_col=d_col, cells=piece.cells())
            return True
        self.event_bus.emit(EVENT_PIECE_MOVE_BLOCKED, d_row=d_row, d_col=d_col)
        return False

    def rotate(self, clockwise: bool) -> bool:
        if get_piece_queue(self.world).active is None:
            return False
        kick = rotate_piece(self.world, clockwise)
        if kick is None:
            self.event_bus.emit(EVENT_PIECE_ROTATE_BLOCKED, clockwise=clockwise)
            return False
        piece = get_piece_queue(self.world).active
        self.event_bus.emit(EVENT_PIECE_ROTATED, clockwise=clockwise, kick=kick, facing=piece.facing)
        return True
