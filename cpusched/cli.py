from __future__ import annotations

import argparse
import logging
from pathlib import Path

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import config
from .algorithms import ALGORITHMS, run_algorithm, run_all
from .errors import SchedulerError
from .gantt import build_rich_gantt, render_gantt, render_title
from .models import ScheduleResult
from .workload_io import load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cpusched",
        description="Offline CPU scheduling simulator (FCFS, SJF, SJF-priority, RR).",
    )
    parser.add_argument(
        "--log-level",
        default=config.LOGGING["level"],
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging verbosity (default: {config.LOGGING['level']}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling policy on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        type=str.lower,
        choices=list(ALGORITHMS),
        help="Algorithm to use (fcfs, sjf, sjf-priority, rr).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to CSV or JSON workload file.",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=config.DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {config.DEFAULT_QUANTUM}).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the plain-text Gantt chart instead of the colored one.",
    )

    all_parser = subparsers.add_parser(
        "all",
        help="Run FCFS, SJF, SJF-priority and round-robin and report each.",
    )
    all_parser.add_argument("--workload", "-w", required=True, help="Path to CSV or JSON workload file.")
    all_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=config.DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {config.DEFAULT_QUANTUM}).",
    )
    all_parser.add_argument("--plain", action="store_true", help="Print plain-text Gantt charts.")

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several policies on the same workload and compare average metrics.",
    )
    compare_parser.add_argument("--workload", "-w", required=True, help="Path to CSV or JSON workload file.")
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        type=str.lower,
        choices=list(ALGORITHMS),
        default=list(ALGORITHMS),
        help="Algorithms to compare (default: all).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=config.DEFAULT_QUANTUM,
        help=f"Time quantum used for round-robin when included (default: {config.DEFAULT_QUANTUM}).",
    )

    return parser


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format=config.LOGGING["format"],
        datefmt=config.LOGGING["datefmt"],
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def build_schedule_table(result: ScheduleResult) -> Table:
    """
    Per-process schedule table with the averages and throughput in the footer.
    """
    m = result.metrics
    footers = ["", "", "", ""]
    if m is None:
        footers += ["Average\n-", "Average\n-", "Throughput\n-"]
    else:
        footers += [
            f"Average\n{m.avg_wait:.2f}",
            f"Average\n{m.avg_turnaround:.2f}",
            f"Throughput\n{m.throughput:.2f}/t",
        ]

    headers = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for h, footer in zip(headers, footers):
        justify = "center" if h in {"ID", "Priority"} else "right"
        table.add_column(h, justify=justify, footer=footer)

    for row in result.rows:
        table.add_row(
            str(row.pid),
            str(row.priority),
            str(row.burst),
            str(row.arrival),
            str(row.wait),
            str(row.turnaround),
            str(row.completion),
        )
    return table


def _print_result(result: ScheduleResult, title: str | None = None, plain: bool = False) -> None:
    console = Console()

    console.print(render_title(title or result.algorithm), markup=False, highlight=False)
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()
    console.print(build_schedule_table(result))

    if result.metrics is not None:
        m = result.metrics
        console.print(
            f"[dim]makespan {m.makespan}, cpu busy {m.cpu_busy_time}, "
            f"utilization {m.cpu_utilization * 100:.1f}%[/dim]"
        )
    console.print()


def _print_comparison(results: list[ScheduleResult], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg wait", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for result in results:
        m = result.metrics
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            "-" if m is None else f"{m.avg_wait:.2f}",
            "-" if m is None else f"{m.avg_turnaround:.2f}",
            "-" if m is None else f"{m.throughput:.3f}",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    console = Console()

    try:
        processes = load_workload(Path(args.workload))

        if args.command == "run":
            q = args.quantum if args.algorithm in config.QUANTUM_ALGORITHMS else None
            result = run_algorithm(args.algorithm, processes, quantum=q)
            _print_result(result, plain=args.plain)
            return 0

        if args.command == "all":
            for title, result in run_all(processes, quantum=args.quantum).items():
                _print_result(result, title=title, plain=args.plain)
            return 0

        if args.command == "compare":
            results = []
            for alg in args.algorithms:
                q = args.quantum if alg in config.QUANTUM_ALGORITHMS else None
                results.append(run_algorithm(alg, processes, quantum=q))
            _print_comparison(results, console)
            return 0
    except (SchedulerError, OSError) as exc:
        logger.debug("run aborted", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
