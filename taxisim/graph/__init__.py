"""Road network and shortest-path computation.

This subpackage holds the in-memory graph and the Dijkstra engine that
runs over it.
"""

from .dijkstra import (
    INFINITY,
    DijkstraEngine,
    ShortestPathTree,
    VertexState,
    describe_path,
    cost,
    shortest_paths,
)
from .model import Edge, Graph, Vertex, company_key

__all__ = [
    "Graph",
    "Vertex",
    "Edge",
    "company_key",
    "INFINITY",
    "VertexState",
    "ShortestPathTree",
    "DijkstraEngine",
    "shortest_paths",
    "cost",
    "describe_path",
]
