from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Mapping, Sequence

from .errors import InvalidInputError
from .models import Process

logger = logging.getLogger(__name__)

# Accepted column names for each field, in lookup order.
_COLUMNS = {
    "pid": ("pid", "id"),
    "burst": ("burst_time", "burst"),
    "arrival": ("arrival_time", "arrival"),
    "priority": ("priority",),
}


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.

    CSV files may carry a header row; without one each line is read as
    ``id,burst,arrival[,priority]``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        processes = _load_json(path)
    elif suffix == ".csv":
        processes = _load_csv(path)
    else:
        raise InvalidInputError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    logger.info("loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise InvalidInputError(f"{path}: invalid JSON: {exc}") from exc

    if not isinstance(raw, list):
        raise InvalidInputError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, where=f"entry {i}") for i, entry in enumerate(raw)]


def _load_csv(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        try:
            # Keep the file line number of each record for error messages.
            rows = [(reader.line_num, row) for row in reader if any(cell.strip() for cell in row)]
        except (csv.Error, UnicodeDecodeError) as exc:
            raise InvalidInputError(f"{path}: unreadable CSV: {exc}") from exc

    if not rows:
        return []

    if _is_header(rows[0][1]):
        header = [cell.strip().lower() for cell in rows[0][1]]
        return [
            _process_from_mapping(dict(zip(header, row)), where=f"line {n}")
            for n, row in rows[1:]
        ]

    return [_process_from_row(row, where=f"line {n}") for n, row in rows]


def _is_header(row: Sequence[str]) -> bool:
    known = {name for names in _COLUMNS.values() for name in names}
    return any(cell.strip().lower() in known for cell in row)


def _to_int(value, field: str, where: str, record) -> int:
    if isinstance(value, bool):
        raise InvalidInputError(f"{where}: {field} must be an integer, got {value!r}", record=record)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{where}: {field} must be an integer, got {value!r}", record=record) from exc


def _lookup(mapping: Mapping, field: str):
    for key in _COLUMNS[field]:
        if key in mapping:
            return mapping[key]
    return None


def _build(pid, burst, arrival, priority, where: str, record) -> Process:
    for field, value in (("pid", pid), ("burst", burst), ("arrival", arrival)):
        if value is None or value == "":
            raise InvalidInputError(f"{where}: missing required field '{field}'", record=record)

    process = Process(
        pid=_to_int(pid, "pid", where, record),
        burst=_to_int(burst, "burst", where, record),
        arrival=_to_int(arrival, "arrival", where, record),
        priority=0 if priority in (None, "") else _to_int(priority, "priority", where, record),
    )

    if process.burst <= 0:
        raise InvalidInputError(f"{where}: burst must be positive, got {process.burst}", record=record)
    if process.arrival < 0:
        raise InvalidInputError(f"{where}: arrival must be non-negative, got {process.arrival}", record=record)
    return process


def _process_from_mapping(mapping, where: str) -> Process:
    if not isinstance(mapping, Mapping):
        raise InvalidInputError(f"{where}: expected an object, got {mapping!r}", record=mapping)

    return _build(
        _lookup(mapping, "pid"),
        _lookup(mapping, "burst"),
        _lookup(mapping, "arrival"),
        _lookup(mapping, "priority"),
        where=where,
        record=mapping,
    )


def _process_from_row(row: Iterable[str], where: str) -> Process:
    cells = list(row)
    if len(cells) not in (3, 4):
        raise InvalidInputError(
            f"{where}: expected 'id,burst,arrival[,priority]', got {len(cells)} fields", record=cells
        )

    priority = cells[3] if len(cells) == 4 else None
    return _build(cells[0], cells[1], cells[2], priority, where=where, record=cells)
