"""
Round Scheduler
================

One-shot deferred callbacks for the single-threaded game loop.

Nothing runs in the background: the application calls run_due() once per
frame and due callbacks fire on that thread, before the frame's detections
are processed. The clock is injectable so tests can step time manually.
"""

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class ManualClock:
    """Clock for tests: time only moves when advance() is called."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now

    def __call__(self) -> float:
        return self.now


@dataclass(order=True)
class ScheduledTask:
    """Handle for a pending callback."""
    deadline: float
    seq: int
    callback: Callable[[], None] = field(compare=False)
    name: str = field(default="", compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> bool:
        """Cancel if still pending. Returns True if this call cancelled it."""
        if self.fired or self.cancelled:
            return False
        self.cancelled = True
        logger.debug("Cancelled task '%s'", self.name)
        return True

    @property
    def is_pending(self) -> bool:
        return not (self.fired or self.cancelled)


class RoundScheduler:
    """
    Deadline-ordered queue of one-shot callbacks.

    Example:
        >>> scheduler = RoundScheduler()
        >>> scheduler.schedule(0.9, controller.next_round, name="next_round")
        >>> while running:
        ...     scheduler.run_due()
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self._clock = clock or time.monotonic
        self._queue: List[ScheduledTask] = []
        self._seq = itertools.count()

    def schedule(self, delay_s: float, callback: Callable[[], None], name: str = "") -> ScheduledTask:
        """Run callback once, at the first run_due() at least delay_s from now."""
        task = ScheduledTask(
            deadline=self._clock() + max(0.0, delay_s),
            seq=next(self._seq),
            callback=callback,
            name=name or getattr(callback, "__name__", "task"),
        )
        heapq.heappush(self._queue, task)
        logger.debug("Scheduled '%s' in %.3fs", task.name, delay_s)
        return task

    def run_due(self) -> int:
        """Fire every task whose deadline has passed. Returns how many fired."""
        now = self._clock()
        fired = 0
        while self._queue and self._queue[0].deadline <= now:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue
            task.fired = True
            task.callback()
            fired += 1
        return fired

    def cancel_all(self) -> int:
        cancelled = sum(1 for task in self._queue if task.cancel())
        self._queue.clear()
        return cancelled

    @property
    def pending(self) -> int:
        return sum(1 for task in self._queue if task.is_pending)

    def time_until_next(self) -> Optional[float]:
        """Seconds until the next pending task, or None."""
        deadlines = [t.deadline for t in self._queue if t.is_pending]
        if not deadlines:
            return None
        return max(0.0, min(deadlines) - self._clock())
