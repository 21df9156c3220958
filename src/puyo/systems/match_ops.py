from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Mapping, Set, Tuple

from esper import World

from puyo.constants import BASE_POINTS, MIN_GROUP_SIZE
from puyo.systems.board_ops import cell_color_map, mark_cell, set_cell
from puyo.utils.session_state import get_chain_state, get_score_state

Position = Tuple[int, int]

NEIGHBOURS: Tuple[Position, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


class StepKind(Enum):
    CLEARED = auto()
    CHAIN_CLOSED = auto()
    IDLE = auto()


@dataclass(slots=True)
class StepOutcome:
    kind: StepKind
    groups: List[List[Position]] = field(default_factory=list)
    points: int = 0
    depth: int = 0

    @property
    def positions(self) -> List[Position]:
        return sorted(pos for group in self.groups for pos in group)


def _flood(colors: Mapping[Position, str], start: Position, visited: Set[Position]) -> List[Position]:
    color = colors[start]
    stack = [start]
    visited.add(start)
    group: List[Position] = []
    while stack:
        row, col = stack.pop()
        group.append((row, col))
        for d_row, d_col in NEIGHBOURS:
            nxt = (row + d_row, col + d_col)
            if nxt in visited or colors.get(nxt) != color:
                continue
            visited.add(nxt)
            stack.append(nxt)
    return sorted(group)


def find_groups(source: World | Mapping[Position, str], min_size: int = MIN_GROUP_SIZE) -> List[List[Position]]:
    """Maximal 4-connected same-color groups of at least ``min_size`` cells.

    Accepts either a world or a position -> color mapping of occupied cells.
    Groups are disjoint, each sorted, and returned in scan order of their
    top-left cell.
    """
    colors: Mapping[Position, str] = source if isinstance(source, Mapping) else cell_color_map(source)
    visited: Set[Position] = set()
    groups: List[List[Position]] = []
    for pos in sorted(colors):
        if pos in visited:
            continue
        group = _flood(colors, pos, visited)
        if len(group) >= min_size:
            groups.append(group)
    return groups


def score_for_step(removed: int, previous_depth: int, group_count: int) -> int:
    """Points for one removal step: cells x 10 x 2^(depth before this step) x groups."""
    return removed * BASE_POINTS * (2 ** previous_depth) * group_count


def resolve_step(world: World, min_size: int = MIN_GROUP_SIZE) -> StepOutcome:
    """Run one removal step of the chain on an already settled board.

    Cleared cells are marked for the renderer; gravity is the caller's next
    move (see ``board_ops.settle``).
    """
    chain = get_chain_state(world)
    groups = find_groups(world, min_size)
    if not groups:
        if chain.resolving and chain.depth > 0:
            score = get_score_state(world)
            closed_depth = chain.depth
            score.max_chain = max(score.max_chain, closed_depth)
            chain.depth = 0
            chain.resolving = False
            return StepOutcome(kind=StepKind.CHAIN_CLOSED, depth=closed_depth)
        return StepOutcome(kind=StepKind.IDLE, depth=chain.depth)

    removed = 0
    for group in groups:
        for row, col in group:
            set_cell(world, row, col, None)
            mark_cell(world, row, col)
            removed += 1
    previous_depth = chain.depth
    points = score_for_step(removed, previous_depth, len(groups))
    chain.depth = previous_depth + 1
    chain.resolving = True
    chain.settle_pending = True
    score = get_score_state(world)
    score.score += points
    score.last_step_points = points
    return StepOutcome(kind=StepKind.CLEARED, groups=groups, points=points, depth=chain.depth)
