"""
cpusched package.

Simulates classical CPU scheduling policies (FCFS, SJF, SJF with priority
tie-break, Round Robin) over a fixed set of processes and reports per-process
timings, a Gantt trace and aggregate metrics.
"""

from .algorithms import ALGORITHMS, run_algorithm, run_all
from .errors import DegenerateInputError, EmptyQueueError, InvalidInputError, SchedulerError
from .models import Metrics, Process, ScheduleResult, ScheduleRow, TimeSlice

__all__ = [
    "ALGORITHMS",
    "run_algorithm",
    "run_all",
    "DegenerateInputError",
    "EmptyQueueError",
    "InvalidInputError",
    "SchedulerError",
    "Metrics",
    "Process",
    "ScheduleResult",
    "ScheduleRow",
    "TimeSlice",
    "cli",
]
