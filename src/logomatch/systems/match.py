from typing import Tuple
from esper import World
from logomatch.events.bus import EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID
from logomatch.systems.board_ops import are_adjacent, predict_swap_creates_match
from logomatch.utils.world_state import get_board, get_or_create_round_state


class MatchSystem:
    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        state = get_or_create_round_state(self.world)
        if state.cascade_active or state.finished:
            return
        # The board is only swapped once the move is known to match; rejected swaps leave it untouched.
        if self.creates_match(src, dst):
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
        else:
            self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)

    def creates_match(self, a: Tuple[int, int], b: Tuple[int, int]) -> bool:
        if not are_adjacent(a, b):
            return False
        board = get_board(self.world)
        for row, col in (a, b):
            if not (0 <= row < board.rows and 0 <= col < board.cols):
                return False
        return predict_swap_creates_match(board.grid, a, b)
