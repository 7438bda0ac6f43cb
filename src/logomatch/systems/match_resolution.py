import logging
import random as _random
from typing import List, Tuple

from esper import World
from logomatch.constants import MAX_CASCADE_STEPS, SCORE_PER_MATCH
from logomatch.events.bus import (EventBus, EVENT_TILE_SWAP_FINALIZE, EVENT_MATCH_FOUND,
                                  EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED,
                                  EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE, EVENT_SCORE_CHANGED)
from logomatch.systems.board_ops import (ensure_playable, find_match_groups, find_matches,
                                         resolve_matches_detailed)
from logomatch.utils.world_state import get_board, get_or_create_round_state, get_tile_registry

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Clears matches after a swap and keeps resolving until the board settles.

    Each cascade step (detect, score, clear, drop, refill) finishes before the
    next detection runs.
    """

    def __init__(self, world: World, event_bus: EventBus, *,
                 score_per_tile: int = SCORE_PER_MATCH, max_steps: int = MAX_CASCADE_STEPS):
        self.world = world
        self.event_bus = event_bus
        self.score_per_tile = score_per_tile
        self.max_steps = max_steps
        self.event_bus.subscribe(EVENT_TILE_SWAP_FINALIZE, self.on_swap_finalize)

    def on_swap_finalize(self, sender, **kwargs):
        state = get_or_create_round_state(self.world)
        if state.cascade_active:
            return
        self.resolve_board(reason="swap")

    def resolve_board(self, reason: str) -> int:
        """Run cascades to completion; returns the number of steps taken.

        Per step: cascade_step, match_found, match_cleared, gravity_applied,
        refill_completed, then score_changed once the step has settled.
        """
        state = get_or_create_round_state(self.world)
        board = get_board(self.world)
        rng = getattr(self.world, "random", None)
        random = rng.random if isinstance(rng, _random.Random) else _random.random
        type_ids = get_tile_registry(self.world).active_ids()
        depth = 0
        matches = find_matches(board.grid)
        if not matches:
            return 0
        state.cascade_active = True
        try:
            while matches and depth < self.max_steps:
                depth += 1
                state.cascade_depth = depth
                positions = sorted(matches)
                groups = find_match_groups(board.grid)
                self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=positions, reason=reason)
                self.event_bus.emit(EVENT_MATCH_FOUND, positions=positions, groups=groups,
                                    size=len(positions), reason=reason)
                typed_before: List[Tuple[int, int, int]] = [
                    (row, col, board.grid[row][col].id) for row, col in positions
                ]
                step = resolve_matches_detailed(board.grid, positions, type_ids, random)
                self.event_bus.emit(EVENT_MATCH_CLEARED, positions=step.cleared, types=typed_before)
                self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=step.moves)
                board.grid = step.grid
                self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=step.spawned)
                # Keep at least one move available so a round never dead-ends.
                board.grid = ensure_playable(board.grid, 1)
                self._award(len(step.cleared))
                matches = find_matches(board.grid)
            if matches:
                logger.warning("Cascade stopped after %s steps with matches remaining", depth)
        finally:
            state.cascade_active = False
            state.cascade_depth = 0
        self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
        return depth

    def _award(self, tiles_cleared: int) -> None:
        state = get_or_create_round_state(self.world)
        delta = tiles_cleared * self.score_per_tile
        state.score += delta
        state.matches_made += tiles_cleared
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=state.score, delta=delta,
                            matches_made=state.matches_made)
