from typing import Optional, Tuple
from esper import World
from logomatch.constants import DRAG_THRESHOLD
from logomatch.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_SELECTED, EVENT_TILE_DESELECTED,
                                  EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_FINALIZE,
                                  EVENT_TILE_DRAG_START, EVENT_TILE_DRAG_END, EVENT_CASCADE_STEP)
from logomatch.systems.board_ops import are_adjacent, swap_tiles
from logomatch.utils.world_state import get_board, get_or_create_round_state


class BoardSystem:
    """Turns taps and swipes into swap requests and applies accepted swaps."""

    def __init__(self, world: World, event_bus: EventBus, *, drag_threshold: float = DRAG_THRESHOLD):
        self.world = world
        self.event_bus = event_bus
        self.drag_threshold = drag_threshold
        self.selected: Optional[Tuple[int, int]] = None
        self._drag_start: Optional[Tuple[float, float, int, int]] = None
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_TILE_DRAG_START, self.on_drag_start)
        self.event_bus.subscribe(EVENT_TILE_DRAG_END, self.on_drag_end)
        self.event_bus.subscribe(EVENT_TILE_SWAP_VALID, self.on_swap_valid)
        self.event_bus.subscribe(EVENT_CASCADE_STEP, self.on_cascade_step)

    def _input_locked(self) -> bool:
        state = get_or_create_round_state(self.world)
        return state.cascade_active or state.finished

    def _in_bounds(self, row: int, col: int) -> bool:
        board = get_board(self.world)
        return 0 <= row < board.rows and 0 <= col < board.cols

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None or not self._in_bounds(row, col):
            return
        if self._input_locked():
            return
        if self.selected is None:
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)
        elif are_adjacent(self.selected, (row, col)):
            src = self.selected
            self.selected = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=(row, col))
        else:
            # Change selection to new tile
            self.selected = (row, col)
            self.event_bus.emit(EVENT_TILE_SELECTED, row=row, col=col)

    def on_drag_start(self, sender, **kwargs):
        x, y = kwargs.get('x'), kwargs.get('y')
        row, col = kwargs.get('row'), kwargs.get('col')
        if None in (x, y, row, col):
            return
        self._drag_start = (x, y, row, col)

    def on_drag_end(self, sender, **kwargs):
        start = self._drag_start
        self._drag_start = None
        x, y = kwargs.get('x'), kwargs.get('y')
        if start is None or x is None or y is None or self._input_locked():
            return
        start_x, start_y, row, col = start
        dx = x - start_x
        dy = y - start_y
        if abs(dx) <= self.drag_threshold and abs(dy) <= self.drag_threshold:
            return
        if abs(dx) > abs(dy):
            target = (row, col + (1 if dx > 0 else -1))
        else:
            target = (row + (1 if dy > 0 else -1), col)
        if not self._in_bounds(*target):
            return
        if self.selected is not None:
            self.selected = None
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason='drag')
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=(row, col), dst=target)

    def on_cascade_step(self, sender, **kwargs):
        if self.selected is None:
            return
        self.selected = None
        self.event_bus.emit(EVENT_TILE_DESELECTED, reason='cascade')

    def on_swap_valid(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        board = get_board(self.world)
        board.grid = swap_tiles(board.grid, src, dst)
        self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=src, dst=dst)
