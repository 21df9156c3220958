"""Turn progression for one play session.

spawn -> fall / player control -> lock -> chain resolution -> spawn, with
game over as a terminal flag and pause as a suspending one.
"""
from __future__ import annotations

import random

from esper import World

from puyo.constants import FALL_INTERVAL, FAST_FALL_INTERVAL, SETTLE_DELAY
from puyo.events.bus import (
    EVENT_GAME_OVER,
    EVENT_INTENT,
    EVENT_PAUSE_TOGGLED,
    EVENT_PIECE_LOCKED,
    EVENT_PIECE_MOVED,
    EVENT_PIECE_SPAWNED,
    EVENT_SESSION_RESET,
    EVENT_SOFT_DROP_CHANGED,
    EVENT_TICK,
    EventBus,
)
from puyo.events.intents import GAME_OVER_EXEMPT, PAUSE_EXEMPT, Intent
from puyo.systems.board_ops import clear_board
from puyo.systems.match_resolution import ChainResolutionSystem
from puyo.systems.movement import MovementSystem
from puyo.systems.piece_ops import can_place, lock_piece, translate_piece
from puyo.systems.spawn_ops import SpawnOutcome, generate_piece, spawn_next
from puyo.utils.session_state import (
    get_chain_state,
    get_piece_queue,
    get_score_state,
    get_session_state,
)
from puyo.utils.snapshot import SessionSnapshot, build_snapshot

_GAME_OVER_REASONS = {
    SpawnOutcome.BLOCKED: "spawn_blocked",
    SpawnOutcome.TOPPED_OUT: "top_out",
}


class SessionSystem:
    """Single entry point for intents and time; owns no state beyond timing config."""

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        movement: MovementSystem | None = None,
        resolution: ChainResolutionSystem | None = None,
        rng: random.Random | None = None,
        fall_interval: float = FALL_INTERVAL,
        fast_fall_interval: float = FAST_FALL_INTERVAL,
        settle_delay: float = SETTLE_DELAY,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.movement = movement or MovementSystem(world, event_bus)
        self.resolution = resolution or ChainResolutionSystem(world, event_bus)
        self._rng = rng or getattr(world, "random", None) or random.Random()
        self.fall_interval = fall_interval
        self.fast_fall_interval = fast_fall_interval
        self.settle_delay = settle_delay

        self.event_bus.subscribe(EVENT_INTENT, self.on_intent)
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_intent(self, sender, **payload) -> None:
        intent = payload.get("intent")
        if not isinstance(intent, Intent):
            raise TypeError(f"Expected an Intent, got {intent!r}")
        self.handle_intent(intent, elapsed=payload.get("elapsed"))

    def on_tick(self, sender, **payload) -> None:
        self.tick(payload.get("dt", 1 / 60))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def handle_intent(self, intent: Intent, elapsed: float | None = None) -> bool:
        """Apply one intent; returns False when the current state drops it."""
        state = get_session_state(self.world)
        if state.game_over and intent not in GAME_OVER_EXEMPT:
            return False
        if state.paused and intent not in PAUSE_EXEMPT:
            return False

        if intent is Intent.MOVE_LEFT:
            return self.movement.move(0, -1)
        if intent is Intent.MOVE_RIGHT:
            return self.movement.move(0, 1)
        if intent is Intent.ROTATE_CW:
            return self.movement.rotate(clockwise=True)
        if intent is Intent.ROTATE_CCW:
            return self.movement.rotate(clockwise=False)
        if intent is Intent.SOFT_DROP_ON:
            return self._set_soft_drop(True)
        if intent is Intent.SOFT_DROP_OFF:
            return self._set_soft_drop(False)
        if intent is Intent.TOGGLE_PAUSE:
            state.paused = not state.paused
            self.event_bus.emit(EVENT_PAUSE_TOGGLED, paused=state.paused)
            return True
        if intent is Intent.RESET:
            self.reset()
            return True
        if elapsed is None:
            self.advance()
        else:
            self.tick(float(elapsed))
        return True

    def tick(self, dt: float) -> None:
        """Advance the clock; runs a logical step whenever the fall interval elapses."""
        state = get_session_state(self.world)
        if state.game_over or state.paused:
            return
        if get_chain_state(self.world).settle_pending:
            state.settle_elapsed += dt
            if state.settle_elapsed >= self.settle_delay:
                state.settle_elapsed = 0.0
                self.resolution.settle()
            return
        state.fall_elapsed += dt
        interval = self.fast_fall_interval if state.soft_drop else self.fall_interval
        if state.fall_elapsed < interval:
            return
        state.fall_elapsed -= interval
        self.advance()

    def advance(self) -> None:
        """One logical step, independent of wall-clock time."""
        state = get_session_state(self.world)
        if state.game_over or state.paused:
            return
        if get_chain_state(self.world).settle_pending:
            self.resolution.settle()
            return
        piece = get_piece_queue(self.world).active
        if piece is not None:
            if can_place(self.world, piece, 1, 0):
                translate_piece(self.world, 1, 0)
                self.event_bus.emit(EVENT_PIECE_MOVED, d_row=1, d_col=0, cells=piece.cells())
            else:
                positions = lock_piece(self.world)
                self.event_bus.emit(EVENT_PIECE_LOCKED, positions=positions)
            return
        _, pending = self.resolution.step()
        if not pending:
            self.spawn()

    def spawn(self) -> SpawnOutcome:
        outcome = spawn_next(self.world, self._rng)
        queue = get_piece_queue(self.world)
        if outcome is SpawnOutcome.SPAWNED:
            preview = queue.preview
            self.event_bus.emit(
                EVENT_PIECE_SPAWNED,
                cells=queue.active.cells(),
                preview=(preview.anchor_color, preview.satellite_color) if preview else None,
            )
        elif outcome in _GAME_OVER_REASONS:
            score = get_score_state(self.world)
            self.event_bus.emit(
                EVENT_GAME_OVER,
                reason=_GAME_OVER_REASONS[outcome],
                score=score.score,
                max_chain=score.max_chain,
            )
        return outcome

    def reset(self) -> None:
        """Reinitialise every field: empty grid, zeroed stats, fresh preview."""
        clear_board(self.world)
        queue = get_piece_queue(self.world)
        queue.active = None
        queue.preview = generate_piece(self.world, self._rng)

        score = get_score_state(self.world)
        score.score = 0
        score.max_chain = 0
        score.last_step_points = 0

        chain = get_chain_state(self.world)
        chain.resolving = False
        chain.depth = 0
        chain.settle_pending = False

        state = get_session_state(self.world)
        state.game_over = False
        state.paused = False
        state.soft_drop = False
        state.fall_elapsed = 0.0
        state.settle_elapsed = 0.0
        state.pieces_spawned = 0
        self.event_bus.emit(EVENT_SESSION_RESET)

    def snapshot(self) -> SessionSnapshot:
        return build_snapshot(self.world)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _set_soft_drop(self, active: bool) -> bool:
        state = get_session_state(self.world)
        if state.soft_drop == active:
            return False
        state.soft_drop = active
        self.event_bus.emit(EVENT_SOFT_DROP_CHANGED, active=active)
        return True
