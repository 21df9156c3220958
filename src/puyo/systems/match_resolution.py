from enum import Enum, auto
from typing import List, Tuple

from esper import World
from puyo.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                             EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED)
from puyo.constants import MIN_GROUP_SIZE
from puyo.systems.board_ops import GravityMove, apply_gravity, settle
from puyo.systems.match_ops import StepKind, resolve_step
from puyo.utils.session_state import get_chain_state, get_score_state


class ResolutionStep(Enum):
    SETTLED = auto()        # gravity ran (after a pop, or to drop a split pair)
    CLEARED = auto()        # groups popped; a settle is now pending
    CHAIN_CLOSED = auto()   # nothing left to pop after at least one clear
    IDLE = auto()           # board is stable, next piece may spawn


class ChainResolutionSystem:
    """Drives the clear -> settle -> rescan cascade one sub-step at a time.

    Each call to ``step`` does one unit of work and reports whether more is
    pending, so the driver can insert an animation delay between a pop and
    the settle that follows it. ``resolve_all`` collapses the cascade.
    """

    def __init__(self, world: World, event_bus: EventBus, *, min_group_size: int = MIN_GROUP_SIZE):
        self.world = world
        self.event_bus = event_bus
        self.min_group_size = min_group_size

    @property
    def settle_pending(self) -> bool:
        return get_chain_state(self.world).settle_pending

    def settle(self) -> List[GravityMove]:
        chain = get_chain_state(self.world)
        chain.settle_pending = False
        moves = settle(self.world)
        self._emit_gravity(moves)
        return moves

    def step(self) -> Tuple[ResolutionStep, bool]:
        chain = get_chain_state(self.world)
        if chain.settle_pending:
            self.settle()
            return ResolutionStep.SETTLED, True
        # A horizontal pair can lock with one half hanging over a gap.
        moves = apply_gravity(self.world)
        if moves:
            self._emit_gravity(moves)
            return ResolutionStep.SETTLED, True

        outcome = resolve_step(self.world, self.min_group_size)
        if outcome.kind is StepKind.CLEARED:
            positions = outcome.positions
            self.event_bus.emit(EVENT_MATCH_FOUND, groups=outcome.groups, positions=positions)
            self.event_bus.emit(EVENT_CASCADE_STEP, depth=outcome.depth, positions=positions)
            self.event_bus.emit(
                EVENT_MATCH_CLEARED,
                positions=positions,
                groups=len(outcome.groups),
                points=outcome.points,
                depth=outcome.depth,
            )
            score = get_score_state(self.world)
            self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.score, delta=outcome.points)
            return ResolutionStep.CLEARED, True
        if outcome.kind is StepKind.CHAIN_CLOSED:
            score = get_score_state(self.world)
            self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=outcome.depth, max_chain=score.max_chain)
            return ResolutionStep.CHAIN_CLOSED, True
        chain.resolving = False
        return ResolutionStep.IDLE, False

    def resolve_all(self) -> int:
        """Run the cascade to completion without delays; returns the number of clears."""
        clears = 0
        pending = True
        while pending:
            kind, pending = self.step()
            if kind is ResolutionStep.CLEARED:
                clears += 1
        return clears

    def _emit_gravity(self, moves: List[GravityMove]) -> None:
        payload = [
            {'from': move.source, 'to': move.target, 'color': move.color}
            for move in moves
        ]
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=payload)
