from pathlib import Path

import pytest

from cpusched.algorithms import schedule_fcfs
from cpusched.cli import build_parser, build_schedule_table, main
from cpusched.models import Process


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "procs.csv"
    p.write_text("1,5,0\n2,3,1\n3,1,2\n")
    return p


def test_run_plain(workload, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(workload), "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Gantt schedule" in out
    assert "Schedule table" in out
    assert "3.33" in out


def test_all_reports_every_policy(workload, capsys):
    assert main(["all", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    for title in ("First-come, first-serve", "Shortest-job-first", "SJFPrioritySchedule", "Round-robin"):
        assert title in out


def test_compare(workload, capsys):
    assert main(["compare", "-w", str(workload), "-a", "fcfs", "rr"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "Round Robin" in out


def test_bad_workload_exits_with_error(tmp_path: Path, capsys):
    p = tmp_path / "bad.csv"
    p.write_text("1,five,0\n")
    assert main(["run", "-a", "sjf", "-w", str(p)]) == 2
    assert "Error" in capsys.readouterr().out


def test_missing_file_exits_with_error(tmp_path: Path, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(tmp_path / "nope.csv")]) == 2


def test_unknown_algorithm_rejected_by_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["run", "-a", "lottery", "-w", "x.csv"])


def test_schedule_table_footer():
    table = build_schedule_table(schedule_fcfs([Process(1, arrival=0, burst=4)]))
    footers = [column.footer for column in table.columns]
    assert footers[4:] == ["Average\n0.00", "Average\n4.00", "Throughput\n0.25/t"]
    assert table.row_count == 1


def test_undecodable_workload_exits_with_error(tmp_path: Path, capsys):
    p = tmp_path / "bytes.csv"
    p.write_bytes(b"1,5,0\n2,\xff\xfe,1\n")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2
    assert "Error" in capsys.readouterr().out
