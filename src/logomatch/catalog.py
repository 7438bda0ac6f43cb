"""Fixed catalog of the twenty sponsor logos that can appear on a board."""
from __future__ import annotations

from typing import Dict, Tuple

from logomatch.components.tile import TileType

TILE_CATALOG: Tuple[TileType, ...] = (
    TileType(1, '💎', 'bg-cyan-100', 'text-cyan-500', '/images/Absa.png'),
    TileType(2, '😊', 'bg-purple-100', 'text-purple-500', '/images/Assupol.png'),
    TileType(3, '⭐', 'bg-yellow-50', 'text-yellow-500', '/images/Cappello.png'),
    TileType(4, '🔵', 'bg-blue-100', 'text-blue-500', '/images/Carol%20Glamour.jpeg', tile_bg='#101010'),
    TileType(5, '❤️', 'bg-red-50', 'text-red-500', '/images/Clicks.png'),
    TileType(6, '🍪', 'bg-orange-100', 'text-orange-500', '/images/Footgear.png'),
    TileType(7, '🌟', 'bg-pink-100', 'text-pink-500', '/images/Legends.png'),
    TileType(8, '🛒', 'bg-slate-100', 'text-slate-500', '/images/Mr%20Price.png'),
    TileType(9, '💪', 'bg-emerald-100', 'text-emerald-500', '/images/Planet%20Fitness%20Just%20Gym.png'),
    TileType(10, '📦', 'bg-amber-100', 'text-amber-500', '/images/Postnet.png'),
    TileType(11, '👗', 'bg-rose-100', 'text-rose-500', '/images/Power%20Fahion.png'),
    TileType(12, '🛍️', 'bg-green-100', 'text-green-500', '/images/Shoprite.png'),
    TileType(13, '🍔', 'bg-orange-100', 'text-orange-600', '/images/Steers-Logo.png', tile_bg='#450f41'),
    TileType(14, '📱', 'bg-red-100', 'text-red-600', '/images/Telkom.png'),
    TileType(15, '🏪', 'bg-sky-100', 'text-sky-600', '/images/Apara.png'),
    TileType(16, '👟', 'bg-zinc-100', 'text-zinc-600', '/images/Bathu%20Logo_1.png'),
    TileType(17, '🔌', 'bg-indigo-100', 'text-indigo-600', '/images/BC%20Electronics.png'),
    TileType(18, '🌸', 'bg-pink-50', 'text-pink-600', '/images/M-Scents%20Logo.png'),
    TileType(19, '💄', 'bg-rose-50', 'text-rose-600', '/images/Avon.png'),
    TileType(20, '✨', 'bg-amber-50', 'text-amber-600', '/images/Sowetos%20Finest.jpg'),
)

_BY_ID: Dict[int, TileType] = {tile_type.id: tile_type for tile_type in TILE_CATALOG}


def tile_type_by_id(type_id: int) -> TileType:
    try:
        return _BY_ID[type_id]
    except KeyError:
        raise KeyError(f"Unknown tile type id {type_id}") from None
