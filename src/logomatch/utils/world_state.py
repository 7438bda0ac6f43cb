from __future__ import annotations

from esper import World

from logomatch.components.board import Board
from logomatch.components.round_state import RoundState
from logomatch.components.tile_type_registry import TileTypeRegistry
from logomatch.components.tile_types import TileTypes


def get_tile_registry(world: World) -> TileTypes:
    for entity, _ in world.get_component(TileTypeRegistry):
        return world.component_for_entity(entity, TileTypes)
    raise RuntimeError("TileTypes definitions not found")


def get_board(world: World) -> Board:
    for _, board in world.get_component(Board):
        return board
    raise RuntimeError("Board not found")


def get_or_create_round_state(world: World) -> RoundState:
    """Return the shared RoundState component, creating it if absent."""
    existing = list(world.get_component(RoundState))
    if existing:
        return existing[0][1]
    world.create_entity(RoundState())
    return list(world.get_component(RoundState))[0][1]
