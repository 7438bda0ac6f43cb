import random
from typing import Optional

from esper import World

from logomatch.catalog import TILE_CATALOG
from logomatch.components.board import Board
from logomatch.components.round_state import RoundState
from logomatch.components.tile_type_registry import TileTypeRegistry
from logomatch.components.tile_types import TileTypes
from logomatch.constants import GAME_TIME, GRID_SIZE, MIN_VALID_MOVES
from logomatch.events.bus import EVENT_BOARD_GENERATED, EventBus
from logomatch.systems.fingerprint import grid_fingerprint
from logomatch.systems.board_ops import grid_type_ids
from logomatch.systems.generator import generate_grid
from logomatch.utils.world_state import get_board, get_or_create_round_state, get_tile_registry


def create_world(
    event_bus: EventBus,
    *,
    seed: Optional[int] = None,
    rng: random.Random | None = None,
    min_moves: int = MIN_VALID_MOVES,
    time_limit: float = GAME_TIME,
) -> World:
    """Create the play world and deal the first board."""
    world = World()
    setattr(world, "random", rng or random.Random())

    # Single registry entity with the canonical catalog
    world.create_entity(TileTypeRegistry(), TileTypes(types=TILE_CATALOG))
    world.create_entity(Board(rows=GRID_SIZE, cols=GRID_SIZE))
    world.create_entity(RoundState(time_left=float(time_limit)))

    start_round(world, event_bus, seed=seed, min_moves=min_moves, time_limit=time_limit)
    return world


def start_round(
    world: World,
    event_bus: EventBus,
    *,
    seed: Optional[int] = None,
    min_moves: int = MIN_VALID_MOVES,
    time_limit: float = GAME_TIME,
) -> None:
    """Deal a fresh board and reset score and timer."""
    generated = generate_grid(seed, min_moves)
    board = get_board(world)
    board.grid = generated.grid
    board.seed_used = generated.seed_used

    # Refills only use logos the player can see on the opening board.
    get_tile_registry(world).set_active(grid_type_ids(generated.grid))

    state = get_or_create_round_state(world)
    state.score = 0
    state.matches_made = 0
    state.time_left = float(time_limit)
    state.seed = generated.seed_used
    state.cascade_active = False
    state.cascade_depth = 0
    state.finished = False

    event_bus.emit(
        EVENT_BOARD_GENERATED,
        seed_requested=generated.seed_requested,
        seed_used=generated.seed_used,
        valid_moves=generated.valid_moves,
        degraded=generated.degraded,
        fingerprint=grid_fingerprint(generated.grid),
    )
