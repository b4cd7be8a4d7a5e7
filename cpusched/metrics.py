from __future__ import annotations

import logging
from typing import List, Optional

from .errors import DegenerateInputError
from .models import Metrics, ScheduleResult, ScheduleRow, TimeSlice

logger = logging.getLogger(__name__)


def compute_metrics(rows: List[ScheduleRow], timeline: List[TimeSlice]) -> Metrics:
    """
    Compute averages, throughput and CPU utilization for a finished run.

    Throughput is the number of processes divided by the last completion
    time. Raises DegenerateInputError when there are no rows to average.
    """
    if not rows:
        raise DegenerateInputError("cannot compute metrics for zero processes")

    count = len(rows)
    makespan = max(r.completion for r in rows)
    cpu_busy_time = sum(slice_.length for slice_ in timeline)

    throughput = count / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return Metrics(
        avg_wait=sum(r.wait for r in rows) / count,
        avg_turnaround=sum(r.turnaround for r in rows) / count,
        throughput=throughput,
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_utilization,
    )


def summarize(result: ScheduleResult) -> Optional[Metrics]:
    """
    Attach metrics to ``result``. Empty runs keep ``metrics`` as None.
    """
    if not result.rows:
        logger.info("%s: no processes scheduled, metrics omitted", result.algorithm)
        result.metrics = None
        return None

    result.metrics = compute_metrics(result.rows, result.timeline)
    return result.metrics
