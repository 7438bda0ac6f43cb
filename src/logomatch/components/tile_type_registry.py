from dataclasses import dataclass

@dataclass(slots=True)
class TileTypeRegistry:
    """Empty tag component marking the single entity that stores the tile catalog.

    The same entity also carries a TileTypes component with the catalog and the
    ids in play on the current board.
    """
    pass
