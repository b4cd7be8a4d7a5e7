from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from . import config
from .models import TimeSlice


def render_title(title: str) -> str:
    """
    Dashed banner around a report title.
    """
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def render_gantt(slices: List[TimeSlice]) -> str:
    """
    Plain-text Gantt chart: one fixed-width cell per slice, followed by the
    start time of each slice and the stop time of the last one.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    cells = "|"
    for sl in slices:
        pid = str(sl.pid)
        padding = " " * ((config.GANTT_CELL_WIDTH - len(pid)) // 2)
        cells += f"{padding}{pid}{padding}|"

    marks = "".join(f"{sl.start}\t" for sl in slices) + str(slices[-1].stop)

    return "\n".join(["Gantt schedule", cells, marks])


_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

# Columns taken by the panel border and padding before the first cell.
_PANEL_INDENT = 2


def _cell_width(label: str, start: int, length: int) -> int:
    # Wide enough for the label and for the start mark printed under the cell.
    return max(length, len(label) + 2, len(str(start)) + 1)


def build_rich_gantt(slices: List[TimeSlice]) -> tuple[Panel, str]:
    """
    Build a colored Gantt panel and the time-mark line printed under it.

    Each slice is a cell at least as wide as its slice length, and never
    narrower than the pid it shows. Idle stretches get an uncolored cell.
    The start of every cell is marked directly below its left edge, followed
    by the stop time of the last slice.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    pid_to_color: Dict[int, str] = {}
    bars = Text()
    labels = Text()
    marks = " " * _PANEL_INDENT
    clock = 0

    for sl in sorted(slices, key=lambda s: (s.start, s.stop)):
        if sl.start > clock:
            width = _cell_width("", clock, sl.start - clock)
            bars.append(" " * width)
            labels.append(" " * width)
            marks += str(clock).ljust(width)

        color = pid_to_color.setdefault(sl.pid, _COLORS[len(pid_to_color) % len(_COLORS)])
        label = str(sl.pid)
        width = _cell_width(label, sl.start, sl.length)
        bars.append(" " * width, style=f"on {color}")
        labels.append(label.center(width), style="bold")
        marks += str(sl.start).ljust(width)
        clock = sl.stop

    marks += str(clock)

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, marks
