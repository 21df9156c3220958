from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Use weak=False to retain strong reference to bound methods so systems not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def unsubscribe(self, name: str, fn):
        sig = self._signals.get(name)
        if sig:
            sig.disconnect(fn)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float


# ============================================================================
# INPUT & INTENTS
# ============================================================================
EVENT_KEY_PRESS = "key_press"              # payload: symbol=int, modifiers=int
EVENT_KEY_RELEASE = "key_release"          # payload: symbol=int, modifiers=int
EVENT_INTENT = "intent"                    # payload: intent=Intent


# ============================================================================
# PIECE CONTROL
# ============================================================================
EVENT_PIECE_SPAWNED = "piece_spawned"              # payload: cells=[(r,c,color),...], preview=(anchor_color, satellite_color)
EVENT_PIECE_MOVED = "piece_moved"                  # payload: d_row=int, d_col=int, cells=[(r,c,color),...]
EVENT_PIECE_MOVE_BLOCKED = "piece_move_blocked"    # payload: d_row=int, d_col=int
EVENT_PIECE_ROTATED = "piece_rotated"              # payload: clockwise=bool, kick=int, facing=Facing
EVENT_PIECE_ROTATE_BLOCKED = "piece_rotate_blocked"  # payload: clockwise=bool
EVENT_PIECE_LOCKED = "piece_locked"                # payload: positions=[(r,c),...]


# ============================================================================
# BOARD & CHAIN RESOLUTION
# ============================================================================
EVENT_MATCH_FOUND = "match_found"                  # payload: groups=[[(r,c),...],...], positions=[(r,c),...]
EVENT_MATCH_CLEARED = "match_cleared"              # payload: positions=[(r,c),...], groups=int, points=int, depth=int
EVENT_GRAVITY_APPLIED = "gravity_applied"          # payload: moves=[{'from':(r,c),'to':(r,c),'color':str},...]
EVENT_CASCADE_STEP = "cascade_step"                # payload: depth=int, positions=[(r,c),...]
EVENT_CASCADE_COMPLETE = "cascade_complete"        # payload: depth=int, max_chain=int
EVENT_SCORE_CHANGED = "score_changed"              # payload: score=int, delta=int


# ============================================================================
# SESSION
# ============================================================================
EVENT_PAUSE_TOGGLED = "pause_toggled"              # payload: paused=bool
EVENT_SOFT_DROP_CHANGED = "soft_drop_changed"      # payload: active=bool
EVENT_GAME_OVER = "game_over"                      # payload: reason=str, score=int, max_chain=int
EVENT_SESSION_RESET = "session_reset"              # payload: None
