from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival: int
    burst: int
    priority: int = 0


@dataclass
class TimeSlice:
    """
    One contiguous interval during which a process held the CPU.

    ``stop`` is exclusive.
    """

    pid: int
    start: int
    stop: int

    @property
    def length(self) -> int:
        return self.stop - self.start


@dataclass
class ScheduleRow:
    pid: int
    priority: int
    burst: int
    arrival: int
    wait: int
    turnaround: int
    completion: int

    @classmethod
    def finished(cls, process: Process, completion: int) -> "ScheduleRow":
        """
        Build the row for a process that left the CPU for good at ``completion``.
        """
        turnaround = completion - process.arrival
        return cls(
            pid=process.pid,
            priority=process.priority,
            burst=process.burst,
            arrival=process.arrival,
            wait=turnaround - process.burst,
            turnaround=turnaround,
            completion=completion,
        )


@dataclass
class Metrics:
    avg_wait: float
    avg_turnaround: float
    throughput: float
    makespan: int
    cpu_busy_time: int
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    rows: List[ScheduleRow] = field(default_factory=list)
    timeline: List[TimeSlice] = field(default_factory=list)
    metrics: Optional[Metrics] = None

    def row_for(self, pid: int) -> ScheduleRow:
        for row in self.rows:
            if row.pid == pid:
                return row
        raise KeyError(pid)
