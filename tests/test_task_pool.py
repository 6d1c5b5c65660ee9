"""
Tests for Target Generation
============================
"""

import random
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from clockduel.game.task_pool import TaskPool, build_task_pool, random_clock_time
from clockduel.recognition.clock_decoder import ClockTime


class FixedRandom:
    """Returns the same value from random()."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


class TestRandomClockTime:

    def test_lowest_draw(self):
        assert random_clock_time(FixedRandom(0.0)) == ClockTime(1, 0)

    def test_highest_draw(self):
        assert random_clock_time(FixedRandom(0.9999999)) == ClockTime(12, 55)

    def test_bounds(self):
        rng = random.Random(42)
        for _ in range(500):
            t = random_clock_time(rng)
            assert 1 <= t.hour <= 12
            assert t.minute in range(0, 60, 5)

    def test_build_pool_size(self):
        assert len(build_task_pool(7, random.Random(1))) == 7


class TestTaskPool:
    """Lazy batch refill, pop from the end."""

    @pytest.fixture
    def pool(self):
        return TaskPool(size=5, rng=random.Random(3))

    def test_starts_empty(self, pool):
        assert len(pool) == 0
        assert pool.refill_count == 0

    def test_first_draw_fills_batch(self, pool):
        pool.draw()
        assert pool.refill_count == 1
        assert len(pool) == 4

    def test_exhausted_pool_refills_exact_batch(self, pool):
        for _ in range(5):
            pool.draw()
        assert len(pool) == 0
        assert pool.refill_count == 1

        target = pool.draw()
        assert pool.refill_count == 2
        assert len(pool) == 4
        assert 1 <= target.hour <= 12
        assert target.minute % 5 == 0

    def test_pops_from_end(self, pool):
        pool.refill()
        expected = list(pool._tasks)
        drawn = [pool.draw() for _ in range(5)]
        assert drawn == list(reversed(expected))

    def test_same_seed_same_targets(self):
        a = TaskPool(10, random.Random(9))
        b = TaskPool(10, random.Random(9))
        assert [a.draw() for _ in range(25)] == [b.draw() for _ in range(25)]

    @pytest.mark.parametrize("size", [0, -3])
    def test_rejects_non_positive_size(self, size):
        with pytest.raises(ValueError):
            TaskPool(size)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
