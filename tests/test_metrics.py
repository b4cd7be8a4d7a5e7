import pytest

from cpusched.algorithms import schedule_fcfs
from cpusched.errors import DegenerateInputError
from cpusched.metrics import compute_metrics, summarize
from cpusched.models import Process, ScheduleResult, ScheduleRow, TimeSlice


def test_fcfs_metrics():
    res = schedule_fcfs(
        [
            Process(1, arrival=0, burst=5),
            Process(2, arrival=1, burst=3),
            Process(3, arrival=2, burst=1),
        ]
    )
    m = res.metrics
    assert m.avg_wait == pytest.approx(10 / 3)
    assert m.avg_turnaround == pytest.approx(19 / 3)
    assert m.throughput == pytest.approx(3 / 9)
    assert m.makespan == 9
    assert m.cpu_utilization == pytest.approx(1.0)


def test_utilization_counts_idle_time():
    rows = [
        ScheduleRow.finished(Process(1, arrival=0, burst=2), completion=2),
        ScheduleRow.finished(Process(2, arrival=6, burst=2), completion=8),
    ]
    timeline = [TimeSlice(1, 0, 2), TimeSlice(2, 6, 8)]
    m = compute_metrics(rows, timeline)
    assert m.cpu_busy_time == 4
    assert m.cpu_utilization == pytest.approx(0.5)
    assert m.throughput == pytest.approx(0.25)


def test_compute_metrics_rejects_empty():
    with pytest.raises(DegenerateInputError):
        compute_metrics([], [])


def test_summarize_skips_empty_result():
    result = ScheduleResult(algorithm="FCFS", quantum=None)
    assert summarize(result) is None
    assert result.metrics is None


def test_finished_row_invariants():
    row = ScheduleRow.finished(Process(4, arrival=3, burst=5, priority=2), completion=12)
    assert (row.wait, row.turnaround, row.completion, row.priority) == (4, 9, 12, 2)
