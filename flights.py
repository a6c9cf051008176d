from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

import yaml

from graph import EdgeRecord, MalformedInput, Metric


FIELD_SEPARATOR = "|"


@dataclass(frozen=True)
class SearchRequest:
    source: str
    destination: str
    metric: Metric


def load_config(path: Path) -> Dict:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _read_counted_rows(path: Path) -> List[Tuple[int, List[str]]]:
    """Read a file whose first line holds the number of rows that follow.

    Returns (line_number, fields) pairs so callers can point at the bad line.
    """
    try:
        with path.open("r", encoding="utf-8") as handle:
            lines = handle.read().splitlines()
    except UnicodeDecodeError as exc:
        raise MalformedInput(f"{path}: file is not valid UTF-8.") from exc

    if not lines:
        raise MalformedInput(f"{path}: file is empty, expected a record count on line 1.")
    try:
        count = int(lines[0].strip())
    except ValueError as exc:
        raise MalformedInput(f"{path}:1: record count {lines[0]!r} is not an integer.") from exc

    rows = lines[1 : count + 1]
    if len(rows) < count:
        raise MalformedInput(f"{path}: expected {count} records, found {len(rows)}.")

    return [
        (line_number, [field.strip() for field in row.split(FIELD_SEPARATOR)])
        for line_number, row in enumerate(rows, start=2)
    ]


def read_edge_records(path: Path) -> List[EdgeRecord]:
    records: List[EdgeRecord] = []
    for line_number, fields in _read_counted_rows(path):
        if len(fields) != 4:
            raise MalformedInput(
                f"{path}:{line_number}: expected from|to|cost|time, got {len(fields)} fields."
            )
        origin, target, cost, time = fields
        try:
            records.append((origin, target, int(cost), int(time)))
        except ValueError as exc:
            raise MalformedInput(
                f"{path}:{line_number}: cost and time must be integers."
            ) from exc
    return records


def read_search_requests(path: Path) -> List[SearchRequest]:
    requests: List[SearchRequest] = []
    for line_number, fields in _read_counted_rows(path):
        if len(fields) != 3:
            raise MalformedInput(
                f"{path}:{line_number}: expected from|to|C or from|to|T, got {len(fields)} fields."
            )
        origin, target, metric = fields
        try:
            requests.append(SearchRequest(origin, target, Metric.parse(metric)))
        except MalformedInput as exc:
            raise MalformedInput(f"{path}:{line_number}: {exc}") from exc
    return requests
