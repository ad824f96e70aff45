"""
Deferred, cancellable tasks on the session clock.

These are the timers that live outside the simulation step (glitch
auto-clear, breakout delay). They fire when the clock passed to run_due()
reaches their due time, so tests can drive them without sleeping.
"""

import heapq
import itertools
import logging
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


class DeferredTask:
    """Handle for a scheduled callback."""

    def __init__(self, due: float, name: str, callback: Callable[[], None], seq: int):
        self.due = due
        self.name = name
        self.callback = callback
        self.seq = seq
        self.cancelled = False
        self.fired = False

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def cancel(self) -> None:
        self.cancelled = True

    def __lt__(self, other: "DeferredTask") -> bool:
        return (self.due, self.seq) < (other.due, other.seq)

    def __repr__(self):
        state = "cancelled" if self.cancelled else "fired" if self.fired else "pending"
        return f"<DeferredTask {self.name} due={self.due} {state}>"


class DeferredScheduler:
    """
    Min-heap of DeferredTasks keyed by due time.

    Tasks due at the same time fire in scheduling order.
    """

    def __init__(self):
        self._heap: List[DeferredTask] = []
        self._counter = itertools.count()
        self.now = 0.0

    def schedule(self, delay: float, callback: Callable[[], None], name: str = "task") -> DeferredTask:
        if delay < 0:
            raise ValueError(f"Delay must not be negative, got {delay}")
        task = DeferredTask(self.now + delay, name, callback, next(self._counter))
        heapq.heappush(self._heap, task)
        logger.debug("Scheduled %s at %.1f", name, task.due)
        return task

    def cancel(self, task: Optional[DeferredTask]) -> None:
        if task is not None and task.pending:
            task.cancel()
            logger.debug("Cancelled %s", task.name)

    def cancel_all(self) -> int:
        """Cancel every pending task. Returns how many were cancelled."""
        cancelled = 0
        for task in self._heap:
            if task.pending:
                task.cancel()
                cancelled += 1
        self._heap = []
        return cancelled

    def reset(self, now: float) -> None:
        self.cancel_all()
        self.now = now

    def run_due(self, now: float) -> int:
        """
        Fire every pending task due at or before now.

        Tasks scheduled by a callback are measured from the due time of the
        task that scheduled them. Returns the number of callbacks fired.
        """
        fired = 0
        while self._heap and self._heap[0].due <= now:
            task = heapq.heappop(self._heap)
            if not task.pending:
                continue
            self.now = max(self.now, task.due)
            task.fired = True
            logger.debug("Running %s", task.name)
            task.callback()
            fired += 1
        self.now = max(self.now, now)
        return fired

    @property
    def pending_tasks(self) -> List[DeferredTask]:
        return sorted(task for task in self._heap if task.pending)

    def __len__(self) -> int:
        return len(self.pending_tasks)
