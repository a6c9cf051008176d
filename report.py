from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, List, Optional, Sequence, TextIO

if TYPE_CHECKING:
    from flights import SearchRequest
    from graph import Snapshot


NO_PATH = "No available path."
PATH_SEPARATOR = " -> "


def describe_path(snapshot: Optional["Snapshot"], origin: Optional[str] = None) -> str:
    """Render a ranked snapshot as `A -> B -> C. Time: t, Cost: c`.

    A snapshot without a predecessor was never reached from the origin, so it
    renders as NO_PATH unless it is the origin itself.
    """
    if snapshot is None:
        return NO_PATH
    if snapshot.predecessor is None and snapshot.name != origin:
        return NO_PATH

    path = PATH_SEPARATOR.join(snapshot.names())
    return f"{path}. Time: {snapshot.time}, Cost: {snapshot.cost}"


def flight_header(number: int, request: "SearchRequest") -> str:
    return (
        f"FLIGHT {number}: from {request.source.upper()} "
        f"to {request.destination.upper()} (by {request.metric.name})"
    )


def flight_lines(number: int, request: "SearchRequest", paths: Sequence[str]) -> List[str]:
    lines = [flight_header(number, request)]
    lines.extend(f"Path {rank}: {path}" for rank, path in enumerate(paths, start=1))
    lines.append("")
    return lines


def write_report(lines: Iterable[str], handle: TextIO) -> None:
    for line in lines:
        handle.write(line + "\n")
