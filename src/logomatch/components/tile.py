from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Optional


@dataclass(frozen=True, slots=True)
class TileType:
    """Catalog entry for one matchable logo.

    ``tile_bg`` overrides the tile background for logos that need a dark
    backdrop; ``None`` means the default white tile.
    """
    id: int
    char: str
    color: str
    text: str
    image: Optional[str] = None
    tile_bg: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Tile:
    """A tile type placed on the board.

    Tiles carry their own coordinates; every board operation returns tiles
    whose ``row``/``col`` match the cell holding them.
    """
    type: TileType
    row: int
    col: int

    @property
    def id(self) -> int:
        return self.type.id

    def moved_to(self, row: int, col: int) -> "Tile":
        return replace(self, row=row, col=col)
