import pytest

from cryptcrawl.rng import RandomSource, derive_seed


def test_range_is_half_open():
    rng = RandomSource(seed=11)
    draws = {rng.range(0, 2) for _ in range(200)}
    assert draws == {0, 1}
    assert all(rng.range(3, 4) == 3 for _ in range(20))


def test_empty_range_rejected():
    rng = RandomSource(seed=1)
    with pytest.raises(ValueError):
        rng.range(5, 5)


def test_same_seed_same_stream():
    a = RandomSource(seed=2024)
    b = RandomSource(seed=2024)
    assert [a.range(0, 1000) for _ in range(10)] == [b.range(0, 1000) for _ in range(10)]


def test_derive_seed_is_stable_per_depth():
    assert derive_seed(42, "level_layout", 3) == derive_seed(42, "level_layout", 3)
    assert derive_seed(42, "level_layout", 3) != derive_seed(42, "level_layout", 4)
    assert derive_seed("run-abc", "level_layout", 1) == derive_seed("run-abc", "level_layout", 1)


def test_roll_dice_bounds():
    rng = RandomSource(seed=5)
    for _ in range(50):
        assert 3 <= rng.roll_dice(3, 6) <= 18
    with pytest.raises(ValueError):
        rng.roll_dice(1, 0)


def test_negative_master_seed_has_its_own_stream():
    assert derive_seed(-5, "level_layout", 1) == derive_seed(-5, "level_layout", 1)
    assert derive_seed(-5, "level_layout", 1) != derive_seed(5, "level_layout", 1)
    assert RandomSource.for_depth(-5, 2).range(0, 1000) == RandomSource.for_depth(-5, 2).range(0, 1000)


def test_randint_is_inclusive():
    rng = RandomSource(seed=3)
    assert {rng.randint(1, 3) for _ in range(200)} == {1, 2, 3}


def test_random_is_unit_interval():
    rng = RandomSource(seed=8)
    assert all(0.0 <= rng.random() < 1.0 for _ in range(100))


def test_choice():
    rng = RandomSource(seed=4)
    picks = {rng.choice(("orc", "goblin")) for _ in range(100)}
    assert picks == {"orc", "goblin"}
    assert rng.choice(x for x in [9]) == 9
    with pytest.raises(ValueError):
        rng.choice([])
