from __future__ import annotations

import logging
import random as _random
from dataclasses import dataclass
from typing import List, Optional, Sequence

from logomatch.catalog import TILE_CATALOG
from logomatch.components.board import Grid
from logomatch.components.tile import Tile, TileType
from logomatch.constants import (
    CANDY_TYPES_PER_GAME,
    GRID_SIZE,
    MAX_PLACEMENT_RETRIES,
    MAX_SEED_ATTEMPTS,
    MIN_VALID_MOVES,
    RANDOM_SEED_MIN,
    RANDOM_SEED_POOL_SIZE,
    TEST_SEEDS,
    TYPES_PER_TEST_SEED,
)
from logomatch.systems.board_ops import count_valid_moves, ensure_playable, resolve_cascades
from logomatch.utils.seeded_random import RandomStream, create_seeded_random, pick_index

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GeneratedBoard:
    """Outcome of :func:`generate_grid`.

    ``degraded`` is set when no attempt met the valid-move floor and the last
    board built was returned anyway.
    """
    grid: Grid
    seed_used: int
    seed_requested: int
    attempts: int
    valid_moves: int
    degraded: bool = False


def types_for_test_seed(seed: int, catalog: Sequence[TileType] = TILE_CATALOG) -> List[TileType]:
    """Fixed catalog block for a test seed (1111 -> first five, 2222 -> next five...)."""
    if seed not in TEST_SEEDS:
        return []
    start = TEST_SEEDS.index(seed) * TYPES_PER_TEST_SEED
    end = min(len(catalog), start + TYPES_PER_TEST_SEED)
    return list(catalog[start:end])


def pick_types_for_game(
    random: RandomStream,
    count: int = CANDY_TYPES_PER_GAME,
    catalog: Sequence[TileType] = TILE_CATALOG,
) -> List[TileType]:
    indices = list(range(len(catalog)))
    for i in range(len(indices) - 1, 0, -1):
        j = pick_index(random, i + 1)
        indices[i], indices[j] = indices[j], indices[i]
    return [catalog[i] for i in indices[:count]]


def select_types(seed: int, random: RandomStream) -> List[TileType]:
    """Tile types in play for ``seed``.

    Test seeds get their fixed block without touching ``random``; every other
    seed shuffles the catalog with the board's own stream.
    """
    test_types = types_for_test_seed(seed)
    if len(test_types) >= 3:
        return test_types
    return pick_types_for_game(random)


def _completes_run(grid: Grid, row: int, col: int, type_id: int) -> bool:
    if col >= 2:
        left1, left2 = grid[row][col - 1], grid[row][col - 2]
        if left1 and left2 and left1.id == type_id and left2.id == type_id:
            return True
    if row >= 2:
        up1, up2 = grid[row - 1][col], grid[row - 2][col]
        if up1 and up2 and up1.id == type_id and up2.id == type_id:
            return True
    return False


def build_board(
    active_types: Sequence[TileType],
    random: RandomStream,
    size: int = GRID_SIZE,
    *,
    max_retries: int = MAX_PLACEMENT_RETRIES,
) -> Grid:
    """Fill a ``size`` x ``size`` grid row by row without completing a run of three.

    A cell gives up after ``max_retries`` rejected draws and keeps the last one,
    which only happens with fewer than three types.
    """
    if not active_types:
        raise ValueError("Cannot build a board without tile types")
    grid: Grid = [[None] * size for _ in range(size)]
    for r in range(size):
        for c in range(size):
            candidate = active_types[pick_index(random, len(active_types))]
            retries = 0
            while _completes_run(grid, r, c, candidate.id) and retries < max_retries:
                candidate = active_types[pick_index(random, len(active_types))]
                retries += 1
            grid[r][c] = Tile(candidate, r, c)
    return grid


def generate_grid_with_seed(seed: int, min_moves: int = MIN_VALID_MOVES) -> Grid:
    """Build one board for ``seed``; the same seed always yields the same board."""
    random = create_seeded_random(seed)
    types_this_game = select_types(seed, random)
    type_ids = [tile_type.id for tile_type in types_this_game]
    grid = build_board(types_this_game, random)
    grid, _ = resolve_cascades(grid, type_ids, random)
    grid = ensure_playable(grid, min_moves)
    # Nudges never deal a match, but a clean board is a hard requirement.
    grid, _ = resolve_cascades(grid, type_ids, random)
    return grid


def _draw_pool_seed() -> int:
    return RANDOM_SEED_MIN + _random.randrange(RANDOM_SEED_POOL_SIZE)


def generate_grid(
    seed: Optional[int] = None,
    min_moves: int = MIN_VALID_MOVES,
    *,
    max_attempts: int = MAX_SEED_ATTEMPTS,
) -> GeneratedBoard:
    """Generate a playable board, stepping to the next seed when one is too hard.

    Without ``seed`` a seed is drawn from the pool. Candidates past the end of
    the pool wrap to its start; an explicit seed stops once the walk comes back
    around to it. Never raises: when the budget runs out the last board is
    returned with ``degraded`` set.
    """
    pool_start = RANDOM_SEED_MIN
    pool_end = RANDOM_SEED_MIN + RANDOM_SEED_POOL_SIZE
    requested = seed if seed is not None else _draw_pool_seed()
    candidate = requested
    grid: Grid = []
    built_seed = candidate
    valid_moves = 0
    attempts = 0
    for attempts in range(1, max(1, max_attempts) + 1):
        grid = generate_grid_with_seed(candidate, min_moves)
        built_seed = candidate
        valid_moves = count_valid_moves(grid)
        if valid_moves >= min_moves:
            logger.debug(
                "Board generated for seed %s (requested %s) with %s valid moves",
                built_seed, requested, valid_moves,
            )
            return GeneratedBoard(grid, built_seed, requested, attempts, valid_moves)
        candidate += 1
        if candidate >= pool_end:
            candidate = pool_start
        if seed is not None and candidate == requested:
            break
    logger.warning(
        "No board reached %s valid moves after %s attempts from seed %s; using seed %s with %s",
        min_moves, attempts, requested, built_seed, valid_moves,
    )
    return GeneratedBoard(grid, built_seed, requested, attempts, valid_moves, degraded=True)
