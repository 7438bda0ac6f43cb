import random

import pytest

from logomatch.events.bus import (
    EventBus,
    EVENT_BOARD_GENERATED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_ROUND_OVER,
    EVENT_SCORE_CHANGED,
    EVENT_TICK,
    EVENT_TILE_CLICK,
    EVENT_TILE_DESELECTED,
    EVENT_TILE_DRAG_END,
    EVENT_TILE_DRAG_START,
    EVENT_TILE_SELECTED,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from logomatch.systems.board import BoardSystem
from logomatch.systems.board_ops import find_matches, grid_type_ids
from logomatch.systems.fingerprint import grid_fingerprint
from logomatch.systems.match import MatchSystem
from logomatch.systems.match_resolution import MatchResolutionSystem
from logomatch.systems.round_timer import RoundTimerSystem
from logomatch.utils.world_state import get_board, get_or_create_round_state, get_tile_registry
from logomatch.world import create_world, start_round
from tests.helpers import assert_coordinates_synced, base_ids, grid_from_ids, ids_of


def _record(bus, name):
    events = []
    bus.subscribe(name, lambda sender, **payload: events.append(payload))
    return events


def _session(seed=1111):
    bus = EventBus()
    generated = _record(bus, EVENT_BOARD_GENERATED)
    world = create_world(bus, seed=seed, rng=random.Random(0))
    board_system = BoardSystem(world, bus)
    MatchSystem(world, bus)
    MatchResolutionSystem(world, bus)
    RoundTimerSystem(world, bus)
    return bus, world, board_system, generated


def _script_board(world):
    """Row 0 reads 7 7 3 7 5 1: swapping (0,2) with (0,3) lines up three 7s."""
    ids = base_ids()
    ids[0] = [7, 7, 3, 7, 5, 1]
    get_board(world).grid = grid_from_ids(ids)
    get_tile_registry(world).set_active([1, 2, 3, 4, 5, 7])


def test_create_world_deals_board_and_announces_it():
    bus, world, _, generated = _session()
    board = get_board(world)
    state = get_or_create_round_state(world)
    assert len(generated) == 1
    payload = generated[0]
    assert payload['seed_requested'] == 1111
    assert payload['seed_used'] == state.seed == board.seed_used
    assert payload['fingerprint'] == grid_fingerprint(board.grid)
    assert not find_matches(board.grid), 'Opening board must be match free'
    assert set(get_tile_registry(world).active_ids()) == set(grid_type_ids(board.grid))
    assert state.score == 0 and state.time_left == 45.0


def test_valid_swap_scores_and_settles():
    bus, world, _, _ = _session()
    _script_board(world)
    found = _record(bus, EVENT_MATCH_FOUND)
    scores = _record(bus, EVENT_SCORE_CHANGED)
    complete = _record(bus, EVENT_CASCADE_COMPLETE)

    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(0, 3))

    assert found, 'Swap should have produced a match'
    assert found[0]['positions'] == [(0, 0), (0, 1), (0, 2)]
    assert found[0]['groups'] == [[(0, 0), (0, 1), (0, 2)]]
    assert scores[0]['delta'] == 30
    state = get_or_create_round_state(world)
    assert state.score >= 30
    assert state.matches_made == sum(event['size'] for event in found)
    assert state.matches_made == state.score // 10
    assert complete and complete[-1]['depth'] == len(found)
    grid = get_board(world).grid
    assert not find_matches(grid), 'Board should be settled after the cascade'
    assert_coordinates_synced(grid)
    assert {tile.id for row in grid for tile in row} <= {1, 2, 3, 4, 5, 7}
    assert not state.cascade_active


def test_invalid_swap_leaves_board_untouched():
    bus, world, _, _ = _session()
    get_board(world).grid = grid_from_ids(base_ids())
    invalid = _record(bus, EVENT_TILE_SWAP_INVALID)
    before = ids_of(get_board(world).grid)

    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(0, 1))

    assert invalid == [{'src': (0, 0), 'dst': (0, 1)}]
    assert ids_of(get_board(world).grid) == before
    assert get_or_create_round_state(world).score == 0


def test_non_adjacent_request_is_invalid():
    bus, world, _, _ = _session()
    _script_board(world)
    invalid = _record(bus, EVENT_TILE_SWAP_INVALID)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 0), dst=(0, 3))
    assert len(invalid) == 1


def test_click_select_then_adjacent_click_swaps():
    bus, world, board_system, _ = _session()
    _script_board(world)
    selected = _record(bus, EVENT_TILE_SELECTED)
    valid = _record(bus, EVENT_TILE_SWAP_VALID)

    bus.emit(EVENT_TILE_CLICK, row=0, col=2)
    assert selected == [{'row': 0, 'col': 2}]
    bus.emit(EVENT_TILE_CLICK, row=0, col=3)

    assert valid == [{'src': (0, 2), 'dst': (0, 3)}]
    assert board_system.selected is None
    assert get_or_create_round_state(world).score >= 30


def test_click_far_tile_moves_selection():
    bus, world, board_system, _ = _session()
    requests = _record(bus, EVENT_TILE_SWAP_REQUEST)
    bus.emit(EVENT_TILE_CLICK, row=0, col=0)
    bus.emit(EVENT_TILE_CLICK, row=2, col=2)
    assert board_system.selected == (2, 2)
    assert requests == []


def test_click_outside_board_ignored():
    bus, world, board_system, _ = _session()
    bus.emit(EVENT_TILE_CLICK, row=6, col=0)
    assert board_system.selected is None


def test_drag_past_threshold_requests_swap():
    bus, world, board_system, _ = _session()
    _script_board(world)
    requests = _record(bus, EVENT_TILE_SWAP_REQUEST)
    deselected = _record(bus, EVENT_TILE_DESELECTED)
    bus.emit(EVENT_TILE_CLICK, row=4, col=4)

    bus.emit(EVENT_TILE_DRAG_START, x=100, y=100, row=0, col=2)
    bus.emit(EVENT_TILE_DRAG_END, x=150, y=105)

    assert requests == [{'src': (0, 2), 'dst': (0, 3)}]
    assert deselected[0] == {'reason': 'drag'}
    assert board_system.selected is None


def test_short_or_off_board_drag_ignored():
    bus, world, _, _ = _session()
    requests = _record(bus, EVENT_TILE_SWAP_REQUEST)
    bus.emit(EVENT_TILE_DRAG_START, x=100, y=100, row=3, col=3)
    bus.emit(EVENT_TILE_DRAG_END, x=120, y=80)
    bus.emit(EVENT_TILE_DRAG_START, x=100, y=100, row=0, col=5)
    bus.emit(EVENT_TILE_DRAG_END, x=200, y=100)
    bus.emit(EVENT_TILE_DRAG_START, x=100, y=100, row=0, col=0)
    bus.emit(EVENT_TILE_DRAG_END, x=110, y=20)
    assert requests == []


def test_vertical_drag_targets_row_below():
    bus, world, _, _ = _session()
    requests = _record(bus, EVENT_TILE_SWAP_REQUEST)
    bus.emit(EVENT_TILE_DRAG_START, x=100, y=100, row=2, col=1)
    bus.emit(EVENT_TILE_DRAG_END, x=90, y=160)
    assert requests == [{'src': (2, 1), 'dst': (3, 1)}]


def test_input_locked_during_cascade():
    bus, world, _, _ = _session()
    _script_board(world)
    selected = _record(bus, EVENT_TILE_SELECTED)
    bus.subscribe(EVENT_CASCADE_STEP, lambda sender, **payload: bus.emit(EVENT_TILE_CLICK, row=5, col=5))

    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(0, 3))

    assert selected == [], 'Clicks during a cascade should be ignored'


def test_swap_requests_ignored_once_round_finished():
    bus, world, _, _ = _session()
    _script_board(world)
    get_or_create_round_state(world).finished = True
    valid = _record(bus, EVENT_TILE_SWAP_VALID)
    invalid = _record(bus, EVENT_TILE_SWAP_INVALID)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(0, 3))
    assert valid == [] and invalid == []


def test_timer_ends_round_once():
    bus, world, _, _ = _session()
    over = _record(bus, EVENT_ROUND_OVER)
    for _ in range(4):
        bus.emit(EVENT_TICK, dt=10.0)
    assert over == []
    bus.emit(EVENT_TICK, dt=10.0)
    bus.emit(EVENT_TICK, dt=10.0)
    state = get_or_create_round_state(world)
    assert state.finished and state.time_left == 0.0
    assert len(over) == 1
    report = over[0]['report']
    assert report.score == 0
    assert report.submit is False
    assert report.seed == state.seed


def test_round_with_points_is_submitted():
    bus, world, _, _ = _session()
    _script_board(world)
    over = _record(bus, EVENT_ROUND_OVER)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(0, 3))
    bus.emit(EVENT_TICK, dt=60.0)
    report = over[0]['report']
    assert report.submit is True
    assert report.score == get_or_create_round_state(world).score
    assert report.matches_made == report.score // 10


def test_start_round_resets_state():
    bus, world, board_system, generated = _session()
    state = get_or_create_round_state(world)
    state.score = 120
    state.finished = True
    state.time_left = 0.0
    start_round(world, bus, seed=2222)
    assert state.score == 0 and not state.finished
    assert state.time_left == 45.0
    assert generated[-1]['seed_requested'] == 2222
    board = get_board(world)
    assert set(get_tile_registry(world).active_ids()) == set(grid_type_ids(board.grid))


@pytest.mark.parametrize('seed', [1020, 1028, 1111, 1500])
def test_refills_limited_to_logos_on_opening_board(seed):
    bus = EventBus()
    world = create_world(bus, seed=seed)
    on_board = {tile.id for row in get_board(world).grid for tile in row}
    active = get_tile_registry(world).active_ids()
    assert set(active) == on_board, f'Seed {seed} could refill with a logo missing from the opening board'


def test_step_events_fire_in_order_and_refill_reports_final_cells():
    bus, world, _, _ = _session()
    _script_board(world)
    order = []
    refills = []
    for name in (EVENT_CASCADE_STEP, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED,
                 EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED, EVENT_SCORE_CHANGED):
        bus.subscribe(name, lambda sender, _name=name, **payload: order.append(_name))

    moves = []
    bus.subscribe(EVENT_GRAVITY_APPLIED, lambda sender, **payload: moves.append(payload['moves']))

    def on_refill(sender, **payload):
        # The board seen at refill time is the one the gravity moves describe.
        grid = get_board(world).grid
        refills.append(all(grid[m.target[0]][m.target[1]].id == m.type_id for m in moves[-1])
                       and all(grid[r][c] is not None for r, c in payload['new_tiles']))

    bus.subscribe(EVENT_REFILL_COMPLETED, on_refill)
    bus.emit(EVENT_TILE_SWAP_REQUEST, src=(0, 2), dst=(0, 3))

    assert order[:6] == [EVENT_CASCADE_STEP, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED,
                         EVENT_GRAVITY_APPLIED, EVENT_REFILL_COMPLETED, EVENT_SCORE_CHANGED]
    assert len(order) % 6 == 0
    assert refills and all(refills)
