from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from logomatch.components.tile import Tile

Grid = List[List[Optional[Tile]]]


@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    grid: Grid = field(default_factory=list)
    # Seed that actually produced the dealt board; reported with the score.
    seed_used: Optional[int] = None
