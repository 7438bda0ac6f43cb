from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from logomatch.components.tile import TileType


@dataclass(slots=True)
class TileTypes:
    """Catalog of tile types plus the subset active on the current board.

    Lives on the TileTypeRegistry entity. Refills during play draw only from
    ``active``, so a round never introduces a logo the player did not see on
    the opening board.
    """
    types: Sequence[TileType]
    active: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.active = self._filter(self.active) or self.defined_ids()

    def _filter(self, type_ids: Iterable[int]) -> List[int]:
        known = {tile_type.id for tile_type in self.types}
        seen: set[int] = set()
        filtered: List[int] = []
        for type_id in type_ids:
            if type_id in known and type_id not in seen:
                filtered.append(type_id)
                seen.add(type_id)
        return filtered

    def by_id(self) -> Dict[int, TileType]:
        return {tile_type.id: tile_type for tile_type in self.types}

    def get(self, type_id: int) -> TileType:
        return self.by_id()[type_id]

    def defined_ids(self) -> List[int]:
        return [tile_type.id for tile_type in self.types]

    def active_ids(self) -> List[int]:
        return list(self.active)

    def active_types(self) -> List[TileType]:
        lookup = self.by_id()
        return [lookup[type_id] for type_id in self.active]

    def set_active(self, type_ids: Iterable[int]) -> None:
        # An empty or unknown selection falls back to the whole catalog.
        self.active = self._filter(type_ids) or self.defined_ids()
