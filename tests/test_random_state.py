"""Tests for per-stream random state."""
import numpy as np
import pytest

from utils.random_state import RandomStateManager


def _draws(manager, n=256):
    return manager.uniform(-1.0, 1.0, size=n)


class TestRandomStateManager:
    def test_same_seed_same_sequence(self) -> None:
        assert np.array_equal(_draws(RandomStateManager(42)), _draws(RandomStateManager(42)))

    def test_different_seeds_differ(self) -> None:
        assert not np.array_equal(_draws(RandomStateManager(1)), _draws(RandomStateManager(2)))

    def test_unseeded_picks_entropy_seed(self) -> None:
        a, b = RandomStateManager(), RandomStateManager()
        assert isinstance(a.seed, int)
        assert a.seed != b.seed
        assert not np.array_equal(_draws(a), _draws(b))

    def test_scalar_uniform_within_bounds(self) -> None:
        manager = RandomStateManager(3)
        values = [manager.uniform(-0.5, 0.5) for _ in range(1000)]
        assert all(-0.5 <= v < 0.5 for v in values)

    def test_random_in_unit_interval(self) -> None:
        manager = RandomStateManager(3)
        value = manager.random()
        assert isinstance(value, float)
        assert 0.0 <= value < 1.0

    def test_generator_is_numpy_generator(self) -> None:
        assert isinstance(RandomStateManager(5).generator, np.random.Generator)


class TestIndependent:
    def test_count(self) -> None:
        assert len(RandomStateManager.independent(4, seed=1)) == 4
        assert RandomStateManager.independent(0) == []

    def test_negative_count_rejected(self) -> None:
        with pytest.raises(ValueError):
            RandomStateManager.independent(-1)

    def test_children_are_uncorrelated(self) -> None:
        a, b = RandomStateManager.independent(2, seed=7)
        x, y = _draws(a, 20000), _draws(b, 20000)
        assert not np.array_equal(x, y)
        assert abs(np.corrcoef(x, y)[0, 1]) < 0.05

    def test_seeded_children_are_reproducible(self) -> None:
        first = [_draws(m) for m in RandomStateManager.independent(3, seed=11)]
        second = [_draws(m) for m in RandomStateManager.independent(3, seed=11)]
        for x, y in zip(first, second):
            assert np.array_equal(x, y)

    def test_unseeded_children_differ(self) -> None:
        a, b = RandomStateManager.independent(2)
        assert not np.array_equal(_draws(a), _draws(b))
