from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from . import config
from .errors import InvalidInputError
from .metrics import summarize
from .models import Process, ScheduleResult, ScheduleRow, TimeSlice
from .queues import ArrivalPool, FifoReadyQueue, PriorityReadyQueue

logger = logging.getLogger(__name__)


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Check every record before a policy runs and return them as a list.

    Raises InvalidInputError on the first bad record; nothing is simulated
    in that case.
    """
    checked: List[Process] = []
    seen: set[int] = set()

    for index, p in enumerate(processes):
        for name in ("pid", "arrival", "burst", "priority"):
            value = getattr(p, name, None)
            if not _is_int(value):
                raise InvalidInputError(
                    f"process #{index}: {name} must be an integer, got {value!r}", record=p
                )
        if p.pid <= 0:
            raise InvalidInputError(f"process #{index}: pid must be positive, got {p.pid}", record=p)
        if p.pid in seen:
            raise InvalidInputError(f"process #{index}: duplicate pid {p.pid}", record=p)
        if p.arrival < 0:
            raise InvalidInputError(
                f"process {p.pid}: arrival must be non-negative, got {p.arrival}", record=p
            )
        if p.burst <= 0:
            raise InvalidInputError(f"process {p.pid}: burst must be positive, got {p.burst}", record=p)

        seen.add(p.pid)
        checked.append(p)

    return checked


def _append_slice(timeline: List[TimeSlice], pid: int, start: int, stop: int) -> None:
    # Extend the previous slice when the same process simply keeps running.
    if timeline and timeline[-1].pid == pid and timeline[-1].stop == start:
        timeline[-1].stop = stop
    else:
        timeline.append(TimeSlice(pid=pid, start=start, stop=stop))


def _finish(
    algorithm: str, quantum: Optional[int], rows: List[ScheduleRow], timeline: List[TimeSlice]
) -> ScheduleResult:
    rows.sort(key=lambda r: r.pid)
    result = ScheduleResult(algorithm=algorithm, quantum=quantum, rows=rows, timeline=timeline)
    summarize(result)
    return result


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run to completion in arrival order; equal arrivals keep their
    input order. The CPU idles when the next process has not arrived yet.
    """
    processes = validate_processes(processes)

    time = 0
    timeline: List[TimeSlice] = []
    rows: List[ScheduleRow] = []

    for p in sorted(processes, key=lambda p: p.arrival):
        if time < p.arrival:
            logger.debug("fcfs: cpu idle from %d to %d", time, p.arrival)
            time = p.arrival

        start = time
        time = start + p.burst

        timeline.append(TimeSlice(pid=p.pid, start=start, stop=time))
        rows.append(ScheduleRow.finished(p, completion=time))

    return _finish("FCFS", quantum, rows, timeline)


def schedule_sjf_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive) with a priority tie-break.

    Whenever the CPU frees up, the ready process with the smallest burst is
    dispatched; among equal bursts the larger priority value wins. A shorter
    job arriving while another runs waits for it to finish.
    """
    processes = validate_processes(processes)

    pool = ArrivalPool(processes)
    ready = PriorityReadyQueue()

    time = 0
    timeline: List[TimeSlice] = []
    rows: List[ScheduleRow] = []

    while ready or pool:
        if not ready:
            # Nothing to run: jump to the next arrival.
            time = max(time, pool.next_arrival)
            pool.admit(ready, time)
            continue

        job = ready.dequeue()
        start = max(time, job.arrival)
        time = start + job.run(job.remaining)
        logger.debug("sjf-priority: pid %d runs %d-%d", job.pid, start, time)

        timeline.append(TimeSlice(pid=job.pid, start=start, stop=time))
        rows.append(ScheduleRow.finished(job.process, completion=time))

        pool.admit(ready, time)

    return _finish("SJF (priority, non-preemptive)", quantum, rows, timeline)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The clock advances one unit at a time. Each unit goes to the ready
    process with the least remaining burst, and arrivals are admitted after
    every unit so a shorter newcomer preempts the running process.
    """
    processes = validate_processes(processes)

    pool = ArrivalPool(processes)
    ready = PriorityReadyQueue()

    time = 0
    timeline: List[TimeSlice] = []
    rows: List[ScheduleRow] = []

    while ready or pool:
        if not ready:
            time = max(time, pool.next_arrival)
            pool.admit(ready, time)
            continue

        job = ready.dequeue()
        start = time
        time += job.run(1)
        _append_slice(timeline, job.pid, start, time)

        pool.admit(ready, time)

        if job.done:
            logger.debug("sjf: pid %d completes at %d", job.pid, time)
            rows.append(ScheduleRow.finished(job.process, completion=time))
        else:
            ready.enqueue(job)

    return _finish("SJF (preemptive, SRTF)", quantum, rows, timeline)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes join the FIFO queue when they arrive. A process preempted at
    the end of its quantum rejoins the tail after everything that arrived
    during its slice.
    """
    if not _is_int(quantum) or quantum <= 0:
        raise InvalidInputError(f"Round Robin requires a positive integer quantum, got {quantum!r}")

    processes = validate_processes(processes)

    pool = ArrivalPool(processes)
    ready = FifoReadyQueue()

    time = 0
    timeline: List[TimeSlice] = []
    rows: List[ScheduleRow] = []

    while ready or pool:
        if not ready:
            time = max(time, pool.next_arrival)
            pool.admit(ready, time)
            continue

        job = ready.dequeue()
        start = time
        time += job.run(quantum)
        timeline.append(TimeSlice(pid=job.pid, start=start, stop=time))

        pool.admit(ready, time)

        if job.done:
            rows.append(ScheduleRow.finished(job.process, completion=time))
        else:
            logger.debug("rr: pid %d preempted at %d, %d left", job.pid, time, job.remaining)
            ready.enqueue(job)

    return _finish("Round Robin", quantum, rows, timeline)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "sjf-priority": schedule_sjf_priority,
    "rr": schedule_rr,
}


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Only round-robin uses the quantum.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)


def run_all(processes: List[Process], quantum: int = config.DEFAULT_QUANTUM) -> Dict[str, ScheduleResult]:
    """
    Run the default battery of policies on the same input, keyed by title.
    """
    results: Dict[str, ScheduleResult] = {}
    for name, title in config.DEFAULT_BATTERY:
        q = quantum if name in config.QUANTUM_ALGORITHMS else None
        results[title] = run_algorithm(name, processes, quantum=q)
    return results
