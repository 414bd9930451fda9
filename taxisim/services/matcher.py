"""Nearest-candidate matching for dispatch.

For every candidate the matcher runs one full shortest-path search, from
the candidate when cost is measured towards the client, from the client
when it is measured away from it. The per-candidate costs are reduced to
the set of candidates sharing the minimal cost. Unreachable candidates
never match; if none is reachable the result is empty.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from ..domain.models import Direction, Match, MatchResult
from ..graph.dijkstra import INFINITY, DijkstraEngine, ShortestPathTree
from ..graph.model import Graph, Vertex, company_key
from ..ports.graph import ShortestPathEnginePort

VertexPredicate = Callable[[Vertex], bool]


def is_shop(company: Optional[str] = None) -> VertexPredicate:
    """Predicate matching shops, optionally only those of ``company``."""

    def predicate(vertex: Vertex) -> bool:
        if not vertex.is_shop:
            return False
        if company is None:
            return True
        return vertex.company is not None and company_key(vertex.company) == company_key(company)

    return predicate


@dataclass
class DispatchMatcher:
    """Finds the minimal-cost candidates for a client.

    Attributes:
        graph: Road network with roles assigned
        engine: Shortest-path engine, one run per candidate
    """

    graph: Graph
    engine: ShortestPathEnginePort = field(default_factory=DijkstraEngine)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def nearest_matching(
        self, predicate: VertexPredicate, client: str, direction: Direction
    ) -> MatchResult:
        """Minimal-cost vertices satisfying ``predicate``.

        Raises:
            VertexNotFoundError: If ``client`` is not in the graph.
        """
        candidates = sorted(vertex.name for vertex in self.graph.vertices() if predicate(vertex))
        return self.nearest(candidates, client, direction)

    def nearest_taxis(self, client: str, company: Optional[str] = None) -> MatchResult:
        """Taxis (waiting at shops) that reach ``client`` most cheaply."""
        return self.nearest(self.graph.shops(company), client, Direction.TO_CLIENT)

    def nearest_shops(self, client: str, company: Optional[str] = None) -> MatchResult:
        """Shops that ``client`` reaches most cheaply."""
        return self.nearest(self.graph.shops(company), client, Direction.FROM_CLIENT)

    def nearest(
        self, candidates: Iterable[str], client: str, direction: Direction
    ) -> MatchResult:
        """Reduce ``candidates`` to those sharing the minimal cost.

        Raises:
            VertexNotFoundError: If ``client`` or a candidate is not in the graph.
        """
        self.graph.lookup(client)

        best = INFINITY
        matches: List[Match] = []
        examined = 0
        for candidate in candidates:
            examined += 1
            tree, target = self._search(candidate, client, direction)
            cost = tree.cost(target)
            if cost == INFINITY or cost > best:
                continue

            match = self._match(tree, candidate, target)
            if cost < best:
                best = cost
                matches = [match]
            else:
                matches.append(match)

        result = MatchResult(client=client, direction=direction, matches=tuple(matches))
        self._logger.debug(
            "Candidates matched",
            extra={
                "client": client,
                "direction": direction.name,
                "candidates": examined,
                "matched": len(result.matches),
                "cost": result.cost,
            },
        )
        return result

    def _search(
        self, candidate: str, client: str, direction: Direction
    ) -> tuple[ShortestPathTree, str]:
        if direction is Direction.TO_CLIENT:
            return self.engine.run(self.graph, candidate), client
        if direction is Direction.FROM_CLIENT:
            return self.engine.run(self.graph, client), candidate
        raise TypeError(f"Unknown direction: {direction!r}")

    @staticmethod
    def _match(tree: ShortestPathTree, candidate: str, target: str) -> Match:
        tied = tree.has_tie(target)
        return Match(
            name=candidate,
            cost=tree.cost(target),
            path=None if tied else tree.path_to(target),
            tied=tied,
        )
