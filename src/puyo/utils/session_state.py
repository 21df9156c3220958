from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from puyo.components.chain_state import ChainState
from puyo.components.palette import PuyoPalette
from puyo.components.palette_registry import PaletteRegistry
from puyo.components.piece_queue import PieceQueue
from puyo.components.score_state import ScoreState
from puyo.components.session_state import SessionState

T = TypeVar("T")


def _get_or_create(world: World, component_type: Type[T]) -> T:
    existing = list(world.get_component(component_type))
    if existing:
        return existing[0][1]
    component = component_type()
    world.create_entity(component)
    return component


def get_session_state(world: World) -> SessionState:
    """Return the shared SessionState component, creating it if absent."""
    return _get_or_create(world, SessionState)


def get_score_state(world: World) -> ScoreState:
    return _get_or_create(world, ScoreState)


def get_chain_state(world: World) -> ChainState:
    return _get_or_create(world, ChainState)


def get_piece_queue(world: World) -> PieceQueue:
    return _get_or_create(world, PieceQueue)


def get_palette(world: World) -> PuyoPalette:
    for entity, _ in world.get_component(PaletteRegistry):
        return world.component_for_entity(entity, PuyoPalette)
    raise RuntimeError("PuyoPalette definitions not found")
