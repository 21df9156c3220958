import random
from typing import Dict, Iterable, Tuple

from esper import World
from puyo.events.bus import EventBus
from puyo.components.chain_state import ChainState
from puyo.components.palette import PuyoPalette
from puyo.components.palette_registry import PaletteRegistry
from puyo.components.piece_queue import PieceQueue
from puyo.components.score_state import ScoreState
from puyo.components.session_state import SessionState
from puyo.constants import DEFAULT_COLORS


def create_world(
    event_bus: EventBus,
    *,
    rng: random.Random | None = None,
    colors: Dict[str, Tuple[int, int, int]] | None = None,
    spawnable: Iterable[str] | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Session singletons share one entity; systems look them up by component type.
    world.create_entity(
        SessionState(),
        ScoreState(),
        ChainState(),
        PieceQueue(),
    )

    # Create single registry entity with canonical colors
    world.create_entity(
        PaletteRegistry(),
        PuyoPalette(
            colors=dict(colors or DEFAULT_COLORS),
            spawnable=list(spawnable or []),
        ),
    )
    return world
