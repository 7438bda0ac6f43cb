from __future__ import annotations

from typing import List, Optional, Sequence

from logomatch.catalog import tile_type_by_id
from logomatch.components.board import Grid
from logomatch.components.tile import Tile


def base_ids(size: int = 6) -> List[List[int]]:
    """A match-free 6x6 id layout using ids 1-5.

    Neighbours differ by 1 (mod 5) across a row and by 2 (mod 5) down a column,
    so no three cells in a line ever share an id.
    """
    return [[((2 * r + c) % 5) + 1 for c in range(size)] for r in range(size)]


def grid_from_ids(ids: Sequence[Sequence[Optional[int]]]) -> Grid:
    return [
        [Tile(tile_type_by_id(type_id), r, c) if type_id is not None else None
         for c, type_id in enumerate(row)]
        for r, row in enumerate(ids)
    ]


def ids_of(grid: Grid) -> List[List[Optional[int]]]:
    return [[tile.id if tile is not None else None for tile in row] for row in grid]


def assert_coordinates_synced(grid: Grid) -> None:
    for r, row in enumerate(grid):
        for c, tile in enumerate(row):
            if tile is not None:
                assert (tile.row, tile.col) == (r, c), f'Tile at {(r, c)} thinks it is at {(tile.row, tile.col)}'
