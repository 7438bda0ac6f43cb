"""Compact string form of a grid, used in logs and by the board complexity tool.

Rows are joined with ``|``; within a row tile ids are written back to back and
empty cells as ``.``. Ids 10-20 take two digits, so parsing a row looks for a
split into exactly one id per column before falling back to a greedy read.
"""
from __future__ import annotations

import re
from typing import List, Optional

from logomatch.catalog import tile_type_by_id
from logomatch.components.board import Grid
from logomatch.components.tile import Tile
from logomatch.constants import GRID_SIZE

ROW_SEPARATOR = "|"
EMPTY_CELL = "."

_WHITESPACE = re.compile(r"\s+")


def grid_fingerprint(grid: Grid) -> str:
    return ROW_SEPARATOR.join(
        "".join(str(tile.id) if tile is not None else EMPTY_CELL for tile in row)
        for row in grid
    )


def _tokens_at(text: str, i: int) -> List[tuple]:
    """Candidate (cell, length) readings at ``i``, two-digit readings first."""
    options: List[tuple] = []
    ch = text[i]
    if ch == EMPTY_CELL:
        return [(None, 1)]
    if i + 1 < len(text):
        pair = text[i:i + 2]
        if pair.isdigit() and 10 <= int(pair) <= 20:
            options.append((int(pair), 2))
    if ch.isdigit() and 1 <= int(ch) <= 9:
        options.append((int(ch), 1))
    return options


def _split_exact(text: str, size: int) -> Optional[List[Optional[int]]]:
    def walk(i: int, cells: List[Optional[int]]) -> Optional[List[Optional[int]]]:
        if i == len(text):
            return cells if len(cells) == size else None
        if len(cells) == size:
            return None
        for cell, length in _tokens_at(text, i):
            found = walk(i + length, cells + [cell])
            if found is not None:
                return found
        return None

    return walk(0, [])


def _split_greedy(text: str, size: int) -> List[Optional[int]]:
    cells: List[Optional[int]] = []
    i = 0
    while i < len(text) and len(cells) < size:
        options = _tokens_at(text, i)
        if not options:
            i += 1
            continue
        cell, length = options[0]
        cells.append(cell)
        i += length
    return cells + [None] * (size - len(cells))


def parse_fingerprint_row(text: str, size: int = GRID_SIZE) -> List[Optional[int]]:
    """Tile ids (``None`` for empty) for one fingerprint row, padded to ``size``."""
    cleaned = _WHITESPACE.sub("", text)
    exact = _split_exact(cleaned, size)
    if exact is not None:
        return exact
    return _split_greedy(cleaned, size)


def grid_from_fingerprint(fingerprint: str, size: int = GRID_SIZE) -> Grid:
    rows = fingerprint.strip().split(ROW_SEPARATOR)
    grid: Grid = []
    for r in range(size):
        ids = parse_fingerprint_row(rows[r] if r < len(rows) else "", size)
        grid.append([
            Tile(tile_type_by_id(type_id), r, c) if type_id is not None else None
            for c, type_id in enumerate(ids)
        ])
    return grid
