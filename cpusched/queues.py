from __future__ import annotations

import heapq
import itertools
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Iterable, List, Optional, Tuple

from .errors import EmptyQueueError
from .models import Process


@dataclass
class Job:
    """
    Working copy of a Process for one policy run.

    Only ``remaining`` changes while the simulation runs; the Process itself
    is shared read-only between runs.
    """

    process: Process
    remaining: int = field(init=False)
    seq: int = -1  # admission order, assigned by ArrivalPool.admit

    def __post_init__(self) -> None:
        self.remaining = self.process.burst

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def arrival(self) -> int:
        return self.process.arrival

    @property
    def priority(self) -> int:
        return self.process.priority

    def run(self, units: int) -> int:
        """Consume up to ``units`` of CPU time and return what was actually used."""
        used = min(units, self.remaining)
        self.remaining -= used
        return used

    @property
    def done(self) -> bool:
        return self.remaining == 0


class PriorityReadyQueue:
    """
    Ready queue ordered by shortest remaining burst, then by larger priority
    value, then by admission order.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, int, int, Job]] = []
        self._counter = itertools.count()

    def enqueue(self, job: Job) -> None:
        # The counter keeps heap entries comparable without ever comparing Jobs.
        heapq.heappush(self._heap, (job.remaining, -job.priority, job.seq, next(self._counter), job))

    def dequeue(self) -> Job:
        if not self._heap:
            raise EmptyQueueError("dequeue from an empty priority ready queue")
        return heapq.heappop(self._heap)[-1]

    def peek(self) -> Optional[Job]:
        return self._heap[0][-1] if self._heap else None

    def __len__(self) -> int:
        return len(self._heap)


class FifoReadyQueue:
    """Plain first-in first-out ready queue used by round-robin."""

    def __init__(self) -> None:
        self._items: Deque[Job] = deque()

    def enqueue(self, job: Job) -> None:
        self._items.append(job)

    def dequeue(self) -> Job:
        if not self._items:
            raise EmptyQueueError("dequeue from an empty FIFO ready queue")
        return self._items.popleft()

    def peek(self) -> Optional[Job]:
        return self._items[0] if self._items else None

    def __len__(self) -> int:
        return len(self._items)


class ArrivalPool:
    """
    Processes that have not arrived yet, ordered by arrival time.

    Ties on arrival keep the order of the input list.
    """

    def __init__(self, processes: Iterable[Process]):
        # sorted() is stable, so equal arrivals stay in input order.
        self._pending: Deque[Job] = deque(
            Job(p) for p in sorted(processes, key=lambda p: p.arrival)
        )
        self._counter = itertools.count()

    def admit(self, queue, now: int) -> int:
        """
        Move every job with ``arrival <= now`` into ``queue``.

        Returns the number of jobs admitted; zero when nothing is eligible.
        """
        admitted = 0
        while self._pending and self._pending[0].arrival <= now:
            job = self._pending.popleft()
            job.seq = next(self._counter)
            queue.enqueue(job)
            admitted += 1
        return admitted

    @property
    def next_arrival(self) -> Optional[int]:
        return self._pending[0].arrival if self._pending else None

    def __bool__(self) -> bool:
        return bool(self._pending)
