from dataclasses import dataclass
from typing import Optional

from logomatch.constants import GAME_TIME


@dataclass(slots=True)
class RoundState:
    """Score, timer and cascade bookkeeping for the round being played."""

    score: int = 0
    matches_made: int = 0
    time_left: float = float(GAME_TIME)
    seed: Optional[int] = None
    cascade_active: bool = False
    cascade_depth: int = 0
    finished: bool = False
