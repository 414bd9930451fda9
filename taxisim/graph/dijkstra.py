"""Single-source shortest paths using Dijkstra's algorithm.

Each run builds its own state table (distance, predecessor, visited, tie
flag per vertex) and returns it as a ``ShortestPathTree``. The graph is
never written to, so two trees from different sources can be held and
compared side by side.

A vertex is flagged as tied when an edge relaxation reaches it at exactly
its current best distance. Only the flag and the cost are meaningful for
tied vertices; which of the equal predecessors was kept depends on heap
order.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from ..domain.errors import (
    NegativeEdgeError,
    NoRouteFoundError,
    SearchTimeoutError,
    VertexNotFoundError,
)
from .model import Graph

INFINITY = float("inf")


@dataclass(slots=True)
class VertexState:
    """Scratch state for one vertex during one run."""

    distance: float = INFINITY
    predecessor: Optional[str] = None
    visited: bool = False
    has_tie: bool = False


@dataclass(frozen=True)
class ShortestPathTree:
    """Result of one run from ``source``.

    Attributes:
        source: The run's start vertex
        states: Per-vertex state, one entry for every vertex in the graph
    """

    source: str
    states: Mapping[str, VertexState]

    def state(self, target: str) -> VertexState:
        """Return the run state of ``target``.

        Raises:
            VertexNotFoundError: If ``target`` was not in the graph.
        """
        try:
            return self.states[target]
        except KeyError:
            raise VertexNotFoundError(
                f"Vertex not found: {target}", vertex=target
            ) from None

    def cost(self, target: str) -> float:
        """Shortest cost from the source to ``target``, infinite if unreachable."""
        return self.state(target).distance

    def is_reachable(self, target: str) -> bool:
        return self.state(target).distance != INFINITY

    def has_tie(self, target: str) -> bool:
        return self.state(target).has_tie

    def path_to(self, target: str) -> Tuple[str, ...]:
        """Vertex names from the source to ``target``, both inclusive.

        Raises:
            VertexNotFoundError: If ``target`` was not in the graph.
            NoRouteFoundError: If ``target`` is unreachable.
        """
        if not self.is_reachable(target):
            raise NoRouteFoundError(
                f"{target} is unreachable from {self.source}",
                source=self.source,
                target=target,
            )

        path: List[str] = []
        current: Optional[str] = target
        while current is not None:
            path.append(current)
            current = self.states[current].predecessor

        path.reverse()
        return tuple(path)


def shortest_paths(
    graph: Graph, source: str, deadline: Optional[float] = None
) -> ShortestPathTree:
    """Run Dijkstra from ``source`` over the whole graph.

    Parameters
    ----------
    graph:
        Graph to search. Only read.
    source:
        Name of the start vertex.
    deadline:
        Optional ``time.monotonic()`` value; checked before each vertex
        is expanded.

    Returns
    -------
    ShortestPathTree
        Distances, predecessors and tie flags for every vertex.

    Raises
    ------
    VertexNotFoundError
        If ``source`` is not in the graph.
    NegativeEdgeError
        If any edge reachable from ``source`` has a negative weight.
    SearchTimeoutError
        If ``deadline`` passes before the run completes.
    """
    if source not in graph:
        raise VertexNotFoundError(f"Source vertex not found: {source}", vertex=source)

    states: Dict[str, VertexState] = {name: VertexState() for name in graph}
    states[source].distance = 0.0

    # The counter keeps entries with equal distance from comparing names.
    counter = itertools.count()
    heap: List[Tuple[float, int, str]] = [(0.0, next(counter), source)]
    seen = 0
    total = len(states)

    while heap and seen < total:
        if deadline is not None and time.monotonic() > deadline:
            raise SearchTimeoutError(
                f"Search from {source} exceeded its deadline",
                source=source,
                visited=seen,
            )

        _, _, name = heapq.heappop(heap)
        current = states[name]

        if current.visited:
            continue

        current.visited = True
        seen += 1

        for edge in graph.lookup(name).edges:
            if edge.weight < 0:
                raise NegativeEdgeError(
                    f"Edge {name} -> {edge.target} has negative weight {edge.weight}",
                    source=name,
                    target=edge.target,
                    weight=edge.weight,
                )

            neighbor = states[edge.target]
            new_distance = current.distance + edge.weight
            if new_distance < neighbor.distance:
                neighbor.distance = new_distance
                neighbor.predecessor = name
                neighbor.has_tie = False
                heapq.heappush(heap, (new_distance, next(counter), edge.target))
            elif new_distance == neighbor.distance:
                neighbor.has_tie = True

    return ShortestPathTree(source=source, states=states)


def cost(graph: Graph, source: str, target: str) -> float:
    """Shortest cost from ``source`` to ``target``, infinite if unreachable."""
    return shortest_paths(graph, source).cost(target)


def describe_path(graph: Graph, source: str, target: str) -> Optional[Tuple[str, ...]]:
    """Vertex names along the shortest route, or None when there is no route."""
    tree = shortest_paths(graph, source)
    if not tree.is_reachable(target):
        return None
    return tree.path_to(target)


@dataclass
class DijkstraEngine:
    """Shortest-path engine with an optional per-run time limit.

    Attributes:
        timeout_seconds: Wall-clock limit for each run, None for no limit
    """

    timeout_seconds: Optional[float] = None
    runs: int = field(default=0, init=False)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def run(self, graph: Graph, source: str) -> ShortestPathTree:
        """Compute shortest paths from ``source``.

        Raises:
            VertexNotFoundError: If ``source`` is not in the graph.
            NegativeEdgeError: If a reachable edge is negative.
            SearchTimeoutError: If the run exceeds ``timeout_seconds``.
        """
        deadline = None
        if self.timeout_seconds is not None:
            deadline = time.monotonic() + self.timeout_seconds

        tree = shortest_paths(graph, source, deadline=deadline)
        self.runs += 1
        self._logger.debug(
            "Shortest paths computed",
            extra={"source": source, "vertices": len(tree.states)},
        )
        return tree
