import math

import pytest

from cryptcrawl.dungeon.map import CARDINAL_COST, DIAGONAL_COST, Map
from cryptcrawl.dungeon.tiles import TileType
from cryptcrawl.exceptions import OutOfBoundsIndex


def test_dimensions_and_indexing(open_map):
    assert open_map.dimensions() == (10, 8)
    idx = open_map.xy_idx(3, 2)
    assert idx == 2 * 10 + 3
    assert open_map.idx_xy(idx) == (3, 2)


@pytest.mark.parametrize("x, y", [(-1, 0), (10, 0), (0, 8), (0, -1)])
def test_xy_idx_rejects_out_of_bounds(open_map, x, y):
    with pytest.raises(OutOfBoundsIndex):
        open_map.xy_idx(x, y)


def test_index_queries_reject_out_of_range(open_map):
    with pytest.raises(OutOfBoundsIndex):
        open_map.is_opaque(80)
    with pytest.raises(OutOfBoundsIndex):
        open_map.available_exits(-1)
    with pytest.raises(IndexError):
        open_map.pathing_distance(0, 1000)


def test_is_opaque_only_for_walls(open_map):
    assert open_map.is_opaque(open_map.xy_idx(0, 0))
    assert not open_map.is_opaque(open_map.xy_idx(4, 4))
    open_map.tiles[open_map.xy_idx(4, 4)] = TileType.DOWN_STAIRS
    assert not open_map.is_opaque(open_map.xy_idx(4, 4))


def test_pathing_distance_is_euclidean(open_map):
    a = open_map.xy_idx(1, 1)
    b = open_map.xy_idx(4, 5)
    assert open_map.pathing_distance(a, b) == pytest.approx(5.0)
    assert open_map.pathing_distance(a, a) == 0.0
    c = open_map.xy_idx(2, 2)
    assert open_map.pathing_distance(a, c) == pytest.approx(math.sqrt(2))


def test_open_tile_has_eight_exits_in_order(open_map):
    idx = open_map.xy_idx(4, 4)
    w = open_map.width
    assert open_map.available_exits(idx) == [
        (idx - 1, CARDINAL_COST),
        (idx + 1, CARDINAL_COST),
        (idx - w, CARDINAL_COST),
        (idx + w, CARDINAL_COST),
        (idx - w - 1, DIAGONAL_COST),
        (idx - w + 1, DIAGONAL_COST),
        (idx + w - 1, DIAGONAL_COST),
        (idx + w + 1, DIAGONAL_COST),
    ]


def test_blocked_neighbours_excluded(open_map):
    open_map.set_tile(5, 4, TileType.WALL)
    open_map.populate_blocked()
    exits = dict(open_map.available_exits(open_map.xy_idx(4, 4)))
    assert open_map.xy_idx(5, 4) not in exits
    assert len(exits) == 7


def test_blocked_flag_drives_exits_not_tile_type(open_map):
    # Exits read the derived flag, so a stale flag is visible until recomputed.
    open_map.set_tile(5, 4, TileType.WALL)
    assert open_map.xy_idx(5, 4) in dict(open_map.available_exits(open_map.xy_idx(4, 4)))
    open_map.populate_blocked()
    assert open_map.xy_idx(5, 4) not in dict(open_map.available_exits(open_map.xy_idx(4, 4)))


def test_corner_tile_exits_stay_inside_margin(open_map):
    exits = dict(open_map.available_exits(open_map.xy_idx(1, 1)))
    assert sorted(open_map.idx_xy(i) for i in exits) == [(1, 2), (2, 1), (2, 2)]


def test_margin_applies_even_when_border_is_open():
    m = Map(6, 6, default=TileType.FLOOR)
    m.populate_blocked()
    coords = {m.idx_xy(i) for i, _ in m.available_exits(m.xy_idx(1, 1))}
    assert all(1 <= x <= 4 and 1 <= y <= 4 for x, y in coords)
    assert m.available_exits(m.xy_idx(0, 0)) == [(m.xy_idx(1, 1), DIAGONAL_COST)]


def test_exits_symmetric_on_open_interior(open_map):
    for idx in range(len(open_map)):
        if open_map.blocked[idx]:
            continue
        for nxt, cost in open_map.available_exits(idx):
            back = dict(open_map.available_exits(nxt))
            assert back.get(idx) == cost
