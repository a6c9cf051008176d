from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from logger_config import LOGGER_NAME
from report import describe_path


logger = logging.getLogger(LOGGER_NAME)

UNREACHED = math.inf
RANKS = 3

EdgeRecord = Tuple[str, str, int, int]


class MalformedInput(ValueError):
    """Raised when an edge record cannot be turned into a graph edge."""


class Metric(Enum):
    COST = "C"
    TIME = "T"

    @classmethod
    def parse(cls, value: str) -> "Metric":
        token = str(value).strip().upper()
        for metric in cls:
            if token in (metric.value, metric.name):
                return metric
        raise MalformedInput(f"Unknown metric {value!r}; expected C, T, COST or TIME.")

    def of(self, item) -> float:
        """Return the field of a vertex, edge or snapshot this metric compares."""
        return item.cost if self is Metric.COST else item.time


@dataclass(frozen=True)
class Edge:
    origin: str
    target: str
    cost: int
    time: int

    @property
    def key(self) -> Tuple[str, str]:
        return (self.origin, self.target)


@dataclass(frozen=True)
class Snapshot:
    """Frozen copy of a vertex together with the path that reached it."""

    name: str
    cost: float
    time: float
    predecessor: Optional["Snapshot"] = None

    def names(self) -> List[str]:
        chain: List[str] = []
        node: Optional[Snapshot] = self
        while node is not None:
            chain.append(node.name)
            node = node.predecessor
        chain.reverse()
        return chain

    def contains(self, name: str) -> bool:
        node: Optional[Snapshot] = self
        while node is not None:
            if node.name == name:
                return True
            node = node.predecessor
        return False

    def extend(self, via: "Vertex", edge: Edge) -> "Snapshot":
        """Copy this snapshot as if it were reached from `via` across `edge`."""
        return Snapshot(
            name=self.name,
            cost=via.cost + edge.cost,
            time=via.time + edge.time,
            predecessor=via.snapshot(),
        )


class Vertex:
    def __init__(self, name: str) -> None:
        self.name = name
        self.cost: float = 0
        self.time: float = 0
        self.predecessor: Optional[Vertex] = None
        self.adjacency: List[Vertex] = []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vertex):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __repr__(self) -> str:
        return f"Vertex({self.name!r}, cost={self.cost}, time={self.time})"

    def reset(self, is_source: bool) -> None:
        start = 0 if is_source else UNREACHED
        self.cost = start
        self.time = start
        self.predecessor = None

    def relax(self, via: "Vertex", edge: Edge) -> None:
        # Both fields move together whichever metric drove the comparison.
        self.cost = via.cost + edge.cost
        self.time = via.time + edge.time
        self.predecessor = via

    def snapshot(self) -> Snapshot:
        ancestors: List[Vertex] = []
        node = self.predecessor
        while node is not None:
            ancestors.append(node)
            node = node.predecessor

        frozen: Optional[Snapshot] = None
        for vertex in reversed(ancestors):
            frozen = Snapshot(vertex.name, vertex.cost, vertex.time, frozen)
        return Snapshot(self.name, self.cost, self.time, frozen)


def _validate_record(record: Sequence) -> EdgeRecord:
    fields = tuple(record)
    if len(fields) != 4:
        raise MalformedInput(
            f"Edge record {fields!r} has {len(fields)} fields; expected 4 (from, to, cost, time)."
        )
    origin, target, cost, time = fields
    return str(origin), str(target), _weight(cost, fields), _weight(time, fields)


def _weight(value, fields: Tuple) -> int:
    if isinstance(value, float) and not value.is_integer():
        raise MalformedInput(f"Edge record {fields!r} has a non-integer weight.")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise MalformedInput(f"Edge record {fields!r} has a non-integer weight.") from exc


class Graph:
    """Directed graph whose edges carry both a cost and a time weight."""

    def __init__(self, records: Iterable[Sequence] = ()) -> None:
        self.vertices: List[Vertex] = []
        self.edges: List[Edge] = []
        self._by_name: Dict[str, Vertex] = {}
        # First declared edge per ordered pair; later duplicates stay in `edges` only.
        self._edge_index: Dict[Tuple[str, str], Edge] = {}

        for record in records:
            self.add_edge(record)

        logger.debug(
            "Built graph with %d vertices and %d edges.", self.vertex_count(), self.edge_count()
        )

    def _vertex_for(self, name: str) -> Vertex:
        vertex = self._by_name.get(name)
        if vertex is None:
            vertex = Vertex(name)
            self._by_name[name] = vertex
            self.vertices.append(vertex)
        return vertex

    def add_edge(self, record: Sequence) -> Edge:
        origin_name, target_name, cost, time = _validate_record(record)

        origin = self._vertex_for(origin_name)
        target = self._vertex_for(target_name)
        edge = Edge(origin_name, target_name, cost, time)
        self.edges.append(edge)
        if edge.key in self._edge_index:
            logger.warning(
                "Duplicate edge %s -> %s ignored for lookups; the first declaration wins.",
                origin_name,
                target_name,
            )
        else:
            self._edge_index[edge.key] = edge
        origin.adjacency.append(target)
        return edge

    def vertex(self, name: str) -> Optional[Vertex]:
        return self._by_name.get(name)

    def edge_between(self, origin: str, target: str) -> Optional[Edge]:
        return self._edge_index.get((origin, target))

    def vertex_count(self) -> int:
        return len(self.vertices)

    def edge_count(self) -> int:
        return len(self.edges)

    def _reset(self, source: str) -> None:
        for vertex in self.vertices:
            vertex.reset(vertex.name == source)

    def ranked_paths(
        self, source: str, destination: str, metric: Metric
    ) -> List[Optional[Snapshot]]:
        """Track the three best distinct path values into `destination` in one pass.

        This is Dijkstra over a fully re-sorted queue, with two twists: the
        destination is never expanded while other vertices remain, and every
        value reaching the destination that does not beat the current best is
        checked against the 2nd and 3rd best slots. The result holds a frozen
        snapshot per rank, or None where no path value was found.
        """
        self._reset(source)

        values: List[float] = [UNREACHED] * RANKS
        slots: List[Optional[Snapshot]] = [None] * RANKS

        if source == destination and source in self._by_name:
            slots[0] = self._by_name[source].snapshot()
            values[0] = 0

        key = metric.of
        queue: List[Vertex] = list(self.vertices)

        while queue:
            queue.sort(key=key)
            current = queue.pop(0)

            # Hold the destination back so later vertices can still reach it.
            if current.name == destination and queue:
                queue.sort(key=key)
                deferred, current = current, queue.pop(0)
                queue.append(deferred)

            for adjacent in current.adjacency:
                if adjacent not in queue:
                    continue

                edge = self._edge_index[(current.name, adjacent.name)]
                candidate = key(current) + key(edge)

                if candidate < key(adjacent):
                    adjacent.relax(current, edge)
                    if adjacent.name == destination:
                        slots[1:] = slots[:-1]
                        values[1:] = values[:-1]
                        slots[0] = adjacent.snapshot()
                        values[0] = candidate
                    continue

                if adjacent.name != destination or self._reaches_through(current, adjacent):
                    continue

                first, second = slots[0], slots[1]
                if first is not None and values[0] < candidate < values[1]:
                    if second is not None and second.contains(adjacent.name):
                        slots[2], values[2] = second, values[1]
                    slots[1] = first.extend(current, edge)
                    values[1] = candidate
                elif second is not None and values[1] < candidate < values[2]:
                    slots[2] = second.extend(current, edge)
                    values[2] = candidate

            if queue:
                queue.append(queue.pop(0))

        logger.debug(
            "Ranked %s -> %s by %s: %s", source, destination, metric.name, values
        )
        return slots

    @staticmethod
    def _reaches_through(current: Vertex, vertex: Vertex) -> bool:
        node: Optional[Vertex] = current
        while node is not None:
            if node.name == vertex.name:
                return True
            node = node.predecessor
        return False

    def find_top_three_paths(self, source: str, destination: str, metric: Metric) -> List[str]:
        """Return the three ranked paths formatted for the flight report."""
        return [
            describe_path(snapshot, source)
            for snapshot in self.ranked_paths(source, destination, metric)
        ]
