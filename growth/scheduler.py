"""
Scheduler - explicit task queue on a virtual millisecond clock.

Every deferred piece of work (a branch step, a child birth, a periodic
root spawn or fade) is a ScheduledTask in one binary heap ordered by due
time, then by insertion order. Tasks run one at a time to completion, so
the surface never sees interleaved writes. Pending work is counted per
tag, which lets the engine cap runaway growth.
"""

import heapq
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from .profiling import profiler


@dataclass(order=True)
class ScheduledTask:
    due: float
    seq: int
    callback: Callable = field(compare=False)
    args: Tuple[Any, ...] = field(compare=False, default=())
    interval: Optional[float] = field(compare=False, default=None)
    tag: str = field(compare=False, default='task')
    cancelled: bool = field(compare=False, default=False)
    done: bool = field(compare=False, default=False)

    @property
    def periodic(self) -> bool:
        return self.interval is not None

    @property
    def active(self) -> bool:
        return not (self.cancelled or self.done)


class Scheduler:
    def __init__(self, start_ms: float = 0.0):
        self.now = float(start_ms)
        self._queue: List[ScheduledTask] = []
        self._seq = 0
        self._counts: Dict[str, int] = defaultdict(int)
        self.executed = 0

    def _push(self, task: ScheduledTask):
        heapq.heappush(self._queue, task)

    def call_later(self, delay: float, callback: Callable, *args, tag: str = 'task') -> ScheduledTask:
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self._seq += 1
        task = ScheduledTask(self.now + delay, self._seq, callback, args, tag=tag)
        self._push(task)
        self._counts[tag] += 1
        return task

    def call_every(self, interval: float, callback: Callable, *args, tag: str = 'interval') -> ScheduledTask:
        """Run callback every `interval` ms, first after one interval."""
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")
        self._seq += 1
        task = ScheduledTask(self.now + interval, self._seq, callback, args,
                             interval=interval, tag=tag)
        self._push(task)
        self._counts[tag] += 1
        return task

    def cancel(self, task: Optional[ScheduledTask]) -> bool:
        """Cancel a pending task. Cancelled entries are dropped lazily."""
        if task is None or not task.active:
            return False
        task.cancelled = True
        self._counts[task.tag] -= 1
        return True

    def cancel_tag(self, tag: str) -> int:
        cancelled = 0
        for task in self._queue:
            if task.tag == tag and self.cancel(task):
                cancelled += 1
        return cancelled

    def cancel_all(self) -> int:
        cancelled = sum(1 for task in self._queue if self.cancel(task))
        self._queue.clear()
        return cancelled

    @property
    def pending(self) -> int:
        return sum(self._counts.values())

    def pending_for(self, tag: str) -> int:
        return self._counts.get(tag, 0)

    def tasks(self, tag: Optional[str] = None) -> List[ScheduledTask]:
        """Active tasks in the order they will run."""
        return sorted(t for t in self._queue if t.active and (tag is None or t.tag == tag))

    @property
    def next_due(self) -> Optional[float]:
        while self._queue and self._queue[0].cancelled:
            heapq.heappop(self._queue)
        return self._queue[0].due if self._queue else None

    def run_until(self, target_ms: float) -> int:
        """
        Run every task due at or before target_ms, including tasks that
        get scheduled along the way, then move the clock to target_ms.
        Returns the number of callbacks executed.
        """
        if target_ms < self.now:
            raise ValueError(f"cannot move clock back from {self.now} to {target_ms}")

        ran = 0
        while self._queue and self._queue[0].due <= target_ms:
            task = heapq.heappop(self._queue)
            if task.cancelled:
                continue

            self.now = task.due
            if not task.periodic:
                task.done = True
                self._counts[task.tag] -= 1

            with profiler.timed(f'tag:{task.tag}'):
                task.callback(*task.args)
            ran += 1

            if task.periodic and not task.cancelled:
                self._seq += 1
                task.due += task.interval
                task.seq = self._seq
                self._push(task)

        self.now = target_ms
        self.executed += ran
        return ran

    def advance(self, delta_ms: float) -> int:
        return self.run_until(self.now + delta_ms)

    def run_pending(self) -> int:
        """Run everything due right now without moving the clock."""
        return self.run_until(self.now)

    def __len__(self) -> int:
        return self.pending

    def __repr__(self) -> str:
        return f"Scheduler(now={self.now:.1f}ms, pending={self.pending})"
