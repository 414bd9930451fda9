"""In-memory road network.

The graph owns vertices and their outgoing edges. Topology is built once
by a scenario loader; shortest-path runs only read it. Roles are indexed
as they are assigned so dispatch can look up a company's shops directly
instead of scanning every vertex per call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..domain.errors import NegativeEdgeError, VertexNotFoundError
from ..domain.models import NO_ROLE, Client, NoRole, Role, Shop


def company_key(company: str) -> str:
    """Normalise a company identifier; companies compare case-insensitively."""
    return company.strip().casefold()


@dataclass(frozen=True, slots=True)
class Edge:
    """Directed edge owned by its source vertex."""

    target: str
    weight: float


@dataclass(slots=True)
class Vertex:
    """A named node with its outgoing edges and role.

    Attributes:
        name: Unique identifier within the graph
        edges: Outgoing edges in insertion order
        role: NoRole, Shop(company) or Client
    """

    name: str
    edges: List[Edge] = field(default_factory=list)
    role: Role = NO_ROLE

    @property
    def company(self) -> Optional[str]:
        """Company of a shop vertex, None for every other role."""
        if isinstance(self.role, Shop):
            return self.role.company
        return None

    @property
    def is_shop(self) -> bool:
        return isinstance(self.role, Shop)

    @property
    def is_client(self) -> bool:
        return isinstance(self.role, Client)


@dataclass
class Graph:
    """Directed weighted graph keyed by vertex name.

    Attributes:
        strict_weights: Reject negative weights in ``add_edge``. When False
            they are stored and the engine rejects them during a run.
    """

    strict_weights: bool = True

    _vertices: Dict[str, Vertex] = field(default_factory=dict, repr=False)
    _shops: Set[str] = field(default_factory=set, repr=False)
    _shops_by_company: Dict[str, Set[str]] = field(default_factory=dict, repr=False)
    _clients: Set[str] = field(default_factory=set, repr=False)

    def __contains__(self, name: object) -> bool:
        return name in self._vertices

    def __len__(self) -> int:
        return len(self._vertices)

    def __iter__(self) -> Iterator[str]:
        return iter(self._vertices)

    def upsert_vertex(self, name: str) -> Vertex:
        """Return the vertex called ``name``, creating it if needed."""
        vertex = self._vertices.get(name)
        if vertex is None:
            vertex = Vertex(name=name)
            self._vertices[name] = vertex
        return vertex

    def add_edge(self, source: str, target: str, weight: float) -> Edge:
        """Append a directed edge, creating either endpoint if missing.

        Raises:
            NegativeEdgeError: If ``weight`` is negative on a strict graph.
        """
        if self.strict_weights and weight < 0:
            raise NegativeEdgeError(
                f"Edge {source} -> {target} has negative weight {weight}",
                source=source,
                target=target,
                weight=weight,
            )
        src = self.upsert_vertex(source)
        self.upsert_vertex(target)
        edge = Edge(target=target, weight=weight)
        src.edges.append(edge)
        return edge

    def lookup(self, name: str) -> Vertex:
        """Return the vertex called ``name``.

        Raises:
            VertexNotFoundError: If no such vertex exists.
        """
        vertex = self._vertices.get(name)
        if vertex is None:
            raise VertexNotFoundError(f"Vertex not found: {name}", vertex=name)
        return vertex

    def vertices(self) -> Tuple[Vertex, ...]:
        return tuple(self._vertices.values())

    def edge_count(self) -> int:
        return sum(len(vertex.edges) for vertex in self._vertices.values())

    def assign_role(self, name: str, role: Role) -> Vertex:
        """Set the role of an existing vertex and keep the indices current.

        Raises:
            VertexNotFoundError: If ``name`` is not in the graph.
        """
        vertex = self.lookup(name)
        self._unindex(vertex)
        vertex.role = role
        self._index(vertex)
        return vertex

    def shops(self, company: Optional[str] = None) -> Tuple[str, ...]:
        """Names of shops, optionally only those of ``company``, sorted."""
        if company is None:
            return tuple(sorted(self._shops))
        return tuple(sorted(self._shops_by_company.get(company_key(company), ())))

    def clients(self) -> Tuple[str, ...]:
        return tuple(sorted(self._clients))

    def companies(self) -> Tuple[str, ...]:
        """Company identifiers of all shops, as first written."""
        seen: Dict[str, str] = {}
        for name in sorted(self._shops):
            company = self._vertices[name].company
            if company is not None:
                seen.setdefault(company_key(company), company)
        return tuple(seen.values())

    def _index(self, vertex: Vertex) -> None:
        role = vertex.role
        if isinstance(role, Shop):
            self._shops.add(vertex.name)
            if role.company is not None:
                key = company_key(role.company)
                self._shops_by_company.setdefault(key, set()).add(vertex.name)
        elif isinstance(role, Client):
            self._clients.add(vertex.name)
        elif isinstance(role, NoRole):
            pass
        else:
            raise TypeError(f"Unknown role: {role!r}")

    def _unindex(self, vertex: Vertex) -> None:
        self._shops.discard(vertex.name)
        self._clients.discard(vertex.name)
        for names in self._shops_by_company.values():
            names.discard(vertex.name)
