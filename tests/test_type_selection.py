import pytest

from logomatch.catalog import TILE_CATALOG
from logomatch.constants import CANDY_TYPES_PER_GAME
from logomatch.systems.generator import pick_types_for_game, select_types, types_for_test_seed
from logomatch.utils.seeded_random import create_seeded_random


def _ids(types):
    return [t.id for t in types]


def _no_draws():
    raise AssertionError('Test seeds must not consume random draws')


@pytest.mark.parametrize('seed, expected', [
    (1111, [1, 2, 3, 4, 5]),
    (2222, [6, 7, 8, 9, 10]),
    (3333, [11, 12, 13, 14, 15]),
    (4444, [16, 17, 18, 19, 20]),
])
def test_test_seeds_use_fixed_blocks(seed, expected):
    assert _ids(select_types(seed, _no_draws)) == expected


def test_non_test_seed_has_no_fixed_block():
    assert types_for_test_seed(1234) == []


def test_block_clipped_to_catalog_length():
    # Only two entries remain past the first block of a 7 entry catalog.
    short_catalog = TILE_CATALOG[:7]
    assert len(types_for_test_seed(2222, short_catalog)) == 2


def test_pool_seed_selects_distinct_subset():
    types = select_types(1500, create_seeded_random(1500))
    ids = _ids(types)
    assert len(ids) == CANDY_TYPES_PER_GAME
    assert len(set(ids)) == len(ids)
    assert set(ids) <= {t.id for t in TILE_CATALOG}
    assert ids == _ids(select_types(1500, create_seeded_random(1500)))


def test_shuffle_draw_order():
    draws = []

    def zero():
        draws.append(0.0)
        return 0.0

    # Always swapping with index 0 walks each index one slot down.
    assert _ids(pick_types_for_game(zero)) == [2, 3, 4, 5, 6, 7, 8, 9]
    assert len(draws) == len(TILE_CATALOG) - 1
