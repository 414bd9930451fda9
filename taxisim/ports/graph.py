"""Graph ports - Abstractions for scenario loading and path search.

These protocols define the contracts for getting a road network into
memory and for running shortest-path searches over it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import SimulationPlan
    from ..graph.dijkstra import ShortestPathTree
    from ..graph.model import Graph


class ScenarioRepositoryPort(Protocol):
    """Port for loading a simulation scenario.

    Implementation: adapters/scenario/text_repository.py

    The repository parses the road network, shop and client roles and
    the list of calls, failing fast on malformed input.
    """

    def load(self) -> SimulationPlan:
        """Load the scenario.

        Returns:
            The graph with roles assigned and the calls to simulate.
        """
        ...


class ShortestPathEnginePort(Protocol):
    """Port for single-source shortest-path runs.

    Implementation: graph/dijkstra.py (DijkstraEngine)
    """

    def run(self, graph: Graph, source: str) -> ShortestPathTree:
        """Compute shortest paths from ``source`` to every vertex.

        Args:
            graph: The road network.
            source: Start vertex name.

        Returns:
            Per-vertex distance, predecessor and tie flag.
        """
        ...
