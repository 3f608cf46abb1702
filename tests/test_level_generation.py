import itertools

import pytest

from cryptcrawl.dungeon.adjacency import reachable_indices
from cryptcrawl.dungeon.generator import RoomsGenerator, build_level, generate
from cryptcrawl.dungeon.tiles import TileType
from cryptcrawl.exceptions import MapGenerationFailed
from cryptcrawl.rng import RandomSource
from cryptcrawl.settings import GenerationSettings


def _level(seed, **kwargs):
    params = dict(depth=1, width=80, height=40, max_rooms=30, min_size=6, max_size=10)
    params.update(kwargs)
    return generate(rng=RandomSource(seed), **params)


def test_deterministic_layout():
    m1 = _level(12345)
    m2 = _level(12345)
    assert m1.snapshot() == m2.snapshot(), "Tiles differ with same seed"
    assert m1.rooms == m2.rooms


def test_different_seeds_differ():
    assert _level(1).snapshot() != _level(2).snapshot()


@pytest.mark.parametrize("seed", [0, 7, 99, 2024, 31337])
def test_rooms_never_overlap(seed):
    m = _level(seed)
    assert 1 <= len(m.rooms) <= 30
    for a, b in itertools.combinations(m.rooms, 2):
        assert not a.intersects(b)


@pytest.mark.parametrize("seed", [0, 7, 99, 2024, 31337])
def test_stairs_at_last_room_center(seed):
    m = _level(seed)
    cx, cy = m.rooms[-1].center()
    assert m.tile_at(cx, cy) is TileType.DOWN_STAIRS
    stairs = [i for i, t in enumerate(m.tiles) if t is TileType.DOWN_STAIRS]
    assert stairs == [m.xy_idx(cx, cy)]


@pytest.mark.parametrize("seed", [0, 7, 99, 2024, 31337])
def test_every_open_tile_reachable_from_first_room(seed):
    m = _level(seed)
    start = m.xy_idx(*m.rooms[0].center())
    open_tiles = {i for i, t in enumerate(m.tiles) if t is not TileType.WALL}
    assert reachable_indices(m, start) == open_tiles


def test_border_stays_wall():
    m = _level(55, width=50, height=30)
    for x in range(m.width):
        assert m.tile_at(x, 0) is TileType.WALL
        assert m.tile_at(x, m.height - 1) is TileType.WALL
    for y in range(m.height):
        assert m.tile_at(0, y) is TileType.WALL
        assert m.tile_at(m.width - 1, y) is TileType.WALL


def test_blocked_populated_after_generation():
    m = _level(8)
    assert len(m.tiles) == m.width * m.height
    assert m.blocked == [t is TileType.WALL for t in m.tiles]


def test_room_interiors_are_open():
    m = _level(3)
    for room in m.rooms:
        for x, y in room.interior():
            assert m.tile_at(x, y) is not TileType.WALL


def test_single_attempt_places_one_room():
    m = _level(4, max_rooms=1)
    assert len(m.rooms) == 1
    assert m.stairs_position() == m.rooms[0].center()


def test_zero_attempts_fails_loudly():
    with pytest.raises(MapGenerationFailed):
        _level(4, max_rooms=0)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(min_size=0),
        dict(min_size=6, max_size=6),
        dict(width=12),
        dict(height=12),
        dict(max_rooms=-1),
        dict(depth=0),
        dict(depth=-2),
    ],
)
def test_invalid_parameters_rejected(kwargs):
    with pytest.raises(ValueError):
        _level(1, **kwargs)


def test_smallest_grid_that_fits_rooms():
    m = _level(9, width=13, height=13, max_rooms=5)
    assert m.rooms
    assert m.stairs_position() is not None


def test_depth_recorded():
    assert _level(1, depth=6).depth == 6


def test_build_level_derives_seed_per_depth():
    settings = GenerationSettings(seed=777)
    a = build_level(settings, 2)
    b = build_level(settings, 2)
    c = build_level(settings, 3)
    assert a.snapshot() == b.snapshot()
    assert a.snapshot() != c.snapshot()
    assert c.depth == 3


def test_build_level_uses_explicit_rng():
    settings = GenerationSettings(max_rooms=12)
    a = build_level(settings, 1, rng=RandomSource(5))
    b = RoomsGenerator.from_settings(settings).generate(1, settings.width, settings.height, RandomSource(5))
    assert a.snapshot() == b.snapshot()


def test_generation_logs_summary(caplog):
    with caplog.at_level("INFO", logger="cryptcrawl.dungeon.generator"):
        _level(10, depth=2)
    assert any("Generated depth 2" in r.getMessage() for r in caplog.records)


def test_build_level_accepts_negative_seed():
    a = build_level(GenerationSettings(seed=-1), 1)
    b = build_level(GenerationSettings(seed=-1), 1)
    assert a.snapshot() == b.snapshot()
    assert a.snapshot() != build_level(GenerationSettings(seed=1), 1).snapshot()


def test_generated_levels_can_always_be_saved():
    m = _level(1, depth=1, width=40, height=20, max_rooms=5, min_size=4, max_size=6)
    assert m.to_state().depth == 1
