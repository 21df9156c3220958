"""Session-level flags and timers shared across systems."""
from dataclasses import dataclass


@dataclass
class SessionState:
    """Singleton component for the play session.

    ``game_over`` is terminal until a reset. ``paused`` suspends ticks and
    every intent except pause toggling and reset.
    """
    game_over: bool = False
    paused: bool = False
    soft_drop: bool = False
    fall_elapsed: float = 0.0
    settle_elapsed: float = 0.0
    pieces_spawned: int = 0
