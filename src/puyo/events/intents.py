"""Closed set of player and driver intents accepted by the session."""
from enum import Enum, auto


class Intent(Enum):
    MOVE_LEFT = auto()
    MOVE_RIGHT = auto()
    ROTATE_CW = auto()
    ROTATE_CCW = auto()
    SOFT_DROP_ON = auto()
    SOFT_DROP_OFF = auto()
    TOGGLE_PAUSE = auto()
    RESET = auto()
    ADVANCE = auto()


# Intents that still apply while paused; everything else is dropped.
PAUSE_EXEMPT = frozenset({Intent.TOGGLE_PAUSE, Intent.RESET})
# Intents that still apply after game over.
GAME_OVER_EXEMPT = frozenset({Intent.RESET})
