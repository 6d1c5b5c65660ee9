"""
Target time generation: a direct uniform draw, or a pre-generated pool
consumed from the end and refilled in batches.
"""

import logging
import random
from typing import List, Optional

from ..recognition.clock_decoder import ClockTime

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 120


def random_clock_time(rng: Optional[random.Random] = None) -> ClockTime:
    """Uniform over the 144 dial positions."""
    rng = rng or random
    return ClockTime(
        hour=int(rng.random() * 12) + 1,
        minute=int(rng.random() * 12) * 5,
    )


def build_task_pool(size: int = DEFAULT_POOL_SIZE,
                    rng: Optional[random.Random] = None) -> List[ClockTime]:
    return [random_clock_time(rng) for _ in range(size)]


class TaskPool:
    """
    Batch of target times. Repeats are allowed, within and across batches.

    Example:
        >>> pool = TaskPool(size=120, rng=random.Random(7))
        >>> target = pool.draw()
    """

    def __init__(self, size: int = DEFAULT_POOL_SIZE, rng: Optional[random.Random] = None):
        if size <= 0:
            raise ValueError(f"Pool size must be positive, got {size}")
        self.size = size
        self._rng = rng or random.Random()
        self._tasks: List[ClockTime] = []
        self.refill_count = 0

    def refill(self) -> None:
        self._tasks = build_task_pool(self.size, self._rng)
        self.refill_count += 1
        logger.debug("Task pool refilled with %d targets", self.size)

    def draw(self) -> ClockTime:
        """Pop the next target, refilling first when the pool is empty."""
        if not self._tasks:
            self.refill()
        return self._tasks.pop()

    def __len__(self) -> int:
        return len(self._tasks)
