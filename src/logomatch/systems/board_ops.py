from __future__ import annotations

import random as _random
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Set, Tuple

from logomatch.catalog import TILE_CATALOG
from logomatch.components.board import Grid
from logomatch.components.tile import Tile, TileType
from logomatch.constants import MAX_CASCADE_STEPS, MAX_NUDGES
from logomatch.utils.seeded_random import RandomStream, pick_index

Position = Tuple[int, int]
Swap = Tuple[Position, Position]


@dataclass(slots=True)
class GravityMove:
    source: Position
    target: Position
    type_id: int


@dataclass(slots=True)
class ResolutionStep:
    grid: Grid
    cleared: List[Position] = field(default_factory=list)
    moves: List[GravityMove] = field(default_factory=list)
    spawned: List[Position] = field(default_factory=list)


def copy_grid(grid: Grid) -> Grid:
    # Tiles are immutable, so copying the rows is enough.
    return [list(row) for row in grid]


def grid_dimensions(grid: Grid) -> Tuple[int, int]:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    return rows, cols


def grid_type_ids(grid: Grid) -> List[int]:
    """Distinct tile ids present on the grid, in first-seen row-major order."""
    seen: List[int] = []
    for row in grid:
        for tile in row:
            if tile is not None and tile.id not in seen:
                seen.append(tile.id)
    return seen


def are_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def _swap_in_place(grid: Grid, a: Position, b: Position) -> None:
    (ar, ac), (br, bc) = a, b
    tile_a = grid[ar][ac]
    tile_b = grid[br][bc]
    grid[ar][ac] = tile_b.moved_to(ar, ac) if tile_b is not None else None
    grid[br][bc] = tile_a.moved_to(br, bc) if tile_a is not None else None


def swap_tiles(grid: Grid, a: Position, b: Position) -> Grid:
    """Return a copy of ``grid`` with the tiles at ``a`` and ``b`` exchanged."""
    swapped = copy_grid(grid)
    _swap_in_place(swapped, a, b)
    return swapped


def find_matches(grid: Grid) -> Set[Position]:
    """Return every cell that belongs to a run of three or more equal ids."""
    rows, cols = grid_dimensions(grid)
    matched: Set[Position] = set()
    # Horizontal windows
    for r in range(rows):
        for c in range(cols - 2):
            t1, t2, t3 = grid[r][c], grid[r][c + 1], grid[r][c + 2]
            if t1 and t2 and t3 and t1.id == t2.id == t3.id:
                matched.update(((r, c), (r, c + 1), (r, c + 2)))
    # Vertical windows
    for c in range(cols):
        for r in range(rows - 2):
            t1, t2, t3 = grid[r][c], grid[r + 1][c], grid[r + 2][c]
            if t1 and t2 and t3 and t1.id == t2.id == t3.id:
                matched.update(((r, c), (r + 1, c), (r + 2, c)))
    return matched


def find_match_groups(grid: Grid) -> List[List[Position]]:
    """Group matched cells into connected clusters (an L or T is one group)."""
    remaining = set(find_matches(grid))
    groups: List[List[Position]] = []
    while remaining:
        start = min(remaining)
        remaining.discard(start)
        group = {start}
        frontier = [start]
        while frontier:
            row, col = frontier.pop()
            for neighbour in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
                if neighbour in remaining:
                    remaining.discard(neighbour)
                    group.add(neighbour)
                    frontier.append(neighbour)
        groups.append(sorted(group))
    return groups


def _id_at(grid: Grid, row: int, col: int) -> Optional[int]:
    if 0 <= row < len(grid) and 0 <= col < len(grid[row]):
        tile = grid[row][col]
        return tile.id if tile is not None else None
    return None


def _has_line_match(grid: Grid, pos: Position) -> bool:
    """Return True if a horizontal or vertical run of three passes through pos."""
    row, col = pos
    tval = _id_at(grid, row, col)
    if tval is None:
        return False
    # Horizontal sweep
    h_run = 1
    c_left = col - 1
    while _id_at(grid, row, c_left) == tval:
        h_run += 1
        c_left -= 1
    c_right = col + 1
    while _id_at(grid, row, c_right) == tval:
        h_run += 1
        c_right += 1
    if h_run >= 3:
        return True
    # Vertical sweep
    v_run = 1
    r_up = row - 1
    while _id_at(grid, r_up, col) == tval:
        v_run += 1
        r_up -= 1
    r_down = row + 1
    while _id_at(grid, r_down, col) == tval:
        v_run += 1
        r_down += 1
    return v_run >= 3


def _exchange(grid: Grid, a: Position, b: Position) -> None:
    # Scratch-only exchange; coordinates are left stale, ids are all that is read.
    (ar, ac), (br, bc) = a, b
    grid[ar][ac], grid[br][bc] = grid[br][bc], grid[ar][ac]


def _swap_makes_match(scratch: Grid, src: Position, dst: Position, board_has_matches: bool) -> bool:
    (sr, sc), (dr, dc) = src, dst
    if scratch[sr][sc] is None or scratch[dr][dc] is None:
        return False
    _exchange(scratch, src, dst)
    try:
        if board_has_matches:
            return bool(find_matches(scratch))
        return _has_line_match(scratch, src) or _has_line_match(scratch, dst)
    finally:
        _exchange(scratch, src, dst)


def predict_swap_creates_match(grid: Grid, src: Position, dst: Position) -> bool:
    """Return True if swapping src/dst would leave at least one match on the board.

    On a match-free board any new run must pass through a swapped cell, so only
    those two lines are checked. Otherwise the whole board is rescanned.
    """
    return _swap_makes_match(copy_grid(grid), src, dst, bool(find_matches(grid)))


def find_valid_swaps(grid: Grid) -> List[Swap]:
    """Enumerate adjacent swaps (right, then down, row-major) that produce a match."""
    rows, cols = grid_dimensions(grid)
    has_matches = bool(find_matches(grid))
    scratch = copy_grid(grid)
    swaps: List[Swap] = []
    for row in range(rows):
        for col in range(cols):
            pos = (row, col)
            if grid[row][col] is None:
                continue
            right = (row, col + 1)
            if col + 1 < cols and _swap_makes_match(scratch, pos, right, has_matches):
                swaps.append((pos, right))
            down = (row + 1, col)
            if row + 1 < rows and _swap_makes_match(scratch, pos, down, has_matches):
                swaps.append((pos, down))
    return swaps


def count_valid_moves(grid: Grid) -> int:
    """Number of distinct adjacent swaps that would create at least one match."""
    return len(find_valid_swaps(grid))


def _refill_types(active_type_ids: Optional[Iterable[int]]) -> List[TileType]:
    type_ids = list(active_type_ids or [])
    if not type_ids:
        return list(TILE_CATALOG)
    return [tile_type for tile_type in TILE_CATALOG if tile_type.id in type_ids]


def resolve_matches_detailed(
    grid: Grid,
    matched: Iterable[Position],
    active_type_ids: Optional[Iterable[int]] = None,
    random: Optional[RandomStream] = None,
) -> ResolutionStep:
    """Clear ``matched``, drop surviving tiles per column and refill from the top.

    Refills draw from ``active_type_ids`` (catalog order); with no ids the whole
    catalog is used.
    """
    draw = random or _random.random
    result = copy_grid(grid)
    refill = _refill_types(active_type_ids)
    if not refill:
        return ResolutionStep(grid=result)
    rows, cols = grid_dimensions(result)
    matched_set = set(matched)
    cleared = sorted(pos for pos in matched_set if 0 <= pos[0] < rows and 0 <= pos[1] < cols)
    moves: List[GravityMove] = []
    spawned: List[Position] = []
    for c in range(cols):
        shift = 0
        for r in range(rows - 1, -1, -1):
            tile = result[r][c]
            if (r, c) in matched_set:
                shift += 1
                result[r][c] = None
            elif shift > 0 and tile is not None:
                result[r + shift][c] = tile.moved_to(r + shift, c)
                result[r][c] = None
                moves.append(GravityMove(source=(r, c), target=(r + shift, c), type_id=tile.id))
        for r in range(shift):
            tile_type = refill[pick_index(draw, len(refill))]
            result[r][c] = Tile(tile_type, r, c)
            spawned.append((r, c))
    return ResolutionStep(grid=result, cleared=cleared, moves=moves, spawned=spawned)


def resolve_matches(
    grid: Grid,
    matched: Iterable[Position],
    active_type_ids: Optional[Iterable[int]] = None,
    random: Optional[RandomStream] = None,
) -> Grid:
    return resolve_matches_detailed(grid, matched, active_type_ids, random).grid


def resolve_cascades(
    grid: Grid,
    active_type_ids: Optional[Iterable[int]] = None,
    random: Optional[RandomStream] = None,
    *,
    max_steps: int = MAX_CASCADE_STEPS,
) -> Tuple[Grid, int]:
    """Detect and resolve matches until the board is clean.

    Returns the resolved grid and the number of cascade steps taken.
    """
    type_ids = list(active_type_ids or [])
    result = grid
    depth = 0
    matched = find_matches(result)
    while matched and depth < max_steps:
        result = resolve_matches(result, matched, type_ids, random)
        depth += 1
        matched = find_matches(result)
    return result, depth


def _first_safe_nudge(grid: Grid, current_moves: int) -> Optional[Tuple[Swap, int]]:
    rows, cols = grid_dimensions(grid)
    has_matches = bool(find_matches(grid))
    scratch = copy_grid(grid)
    for r in range(rows):
        for c in range(cols):
            if grid[r][c] is None:
                continue
            candidates = []
            if c < cols - 1:
                candidates.append(((r, c), (r, c + 1)))
            if r < rows - 1:
                candidates.append(((r, c), (r + 1, c)))
            for src, dst in candidates:
                if grid[dst[0]][dst[1]] is None:
                    continue
                if _swap_makes_match(scratch, src, dst, has_matches):
                    continue
                moves = count_valid_moves(swap_tiles(grid, src, dst))
                if moves > current_moves:
                    return (src, dst), moves
    return None


def ensure_playable(grid: Grid, min_moves: int, *, max_nudges: int = MAX_NUDGES) -> Grid:
    """Raise the valid-move count towards ``min_moves`` without dealing a match.

    Applies at most one swap per pass: the first (row-major, right before down)
    that adds valid moves while leaving the board match-free once made. A pass
    that finds no such swap ends the search, so the result may stay below
    ``min_moves``.
    """
    result = copy_grid(grid)
    moves = count_valid_moves(result)
    nudges = 0
    while moves < min_moves and nudges < max_nudges:
        nudge = _first_safe_nudge(result, moves)
        if nudge is None:
            break
        (src, dst), moves = nudge
        _swap_in_place(result, src, dst)
        nudges += 1
    return result
