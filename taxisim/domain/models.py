"""Immutable domain models for the taxi dispatch simulator.

Roles form a closed variant (NoRole, Shop, Client). Code that branches on
a role uses an isinstance chain ending in a TypeError, as ``role_name``
does, so an unhandled role fails loudly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, Optional, Union

if TYPE_CHECKING:
    from ..graph.model import Graph


@dataclass(frozen=True, slots=True)
class NoRole:
    """A plain intersection: neither a shop nor a client."""


@dataclass(frozen=True, slots=True)
class Shop:
    """A shop, which is also where its company's taxis wait.

    Attributes:
        company: Company the shop belongs to, if any
    """

    company: Optional[str] = None


@dataclass(frozen=True, slots=True)
class Client:
    """A vertex that places calls."""


Role = Union[NoRole, Shop, Client]

NO_ROLE = NoRole()
CLIENT = Client()


def role_name(role: Role) -> str:
    """Return the display name of a role."""
    if isinstance(role, Shop):
        return "Shop"
    if isinstance(role, Client):
        return "Client"
    if isinstance(role, NoRole):
        return "None"
    raise TypeError(f"Unknown role: {role!r}")


class Direction(Enum):
    """Which way a dispatch search measures cost.

    Edges are directed, so the cost from a taxi to a client is unrelated
    to the cost from that client to a shop.
    """

    TO_CLIENT = auto()
    FROM_CLIENT = auto()


@dataclass(frozen=True, slots=True)
class Tariff:
    """Pricing for one company.

    Attributes:
        booking_fee: Flat fee charged per trip
        pickup_rate: Fraction of the pickup cost charged to the client
    """

    booking_fee: float
    pickup_rate: float

    def __post_init__(self) -> None:
        if self.booking_fee < 0:
            raise ValueError(f"Booking fee must be non-negative, got {self.booking_fee}")
        if self.pickup_rate < 0:
            raise ValueError(f"Pickup rate must be non-negative, got {self.pickup_rate}")


@dataclass(frozen=True, slots=True)
class Match:
    """One candidate that achieved the minimal cost.

    Attributes:
        name: The candidate vertex
        cost: Cost of the matched route
        path: Vertex names along the route, None when the route is tied
        tied: Whether the engine saw more than one minimal route
    """

    name: str
    cost: float
    path: Optional[tuple[str, ...]] = None
    tied: bool = False


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Minimal-cost candidates for one client and direction.

    Attributes:
        client: The client the search was made for
        direction: Whether cost was measured towards or away from the client
        matches: Every candidate sharing the minimal cost
    """

    client: str
    direction: Direction
    matches: tuple[Match, ...] = field(default_factory=tuple)

    @property
    def is_empty(self) -> bool:
        """Check if no candidate could reach (or be reached by) the client."""
        return len(self.matches) == 0

    @property
    def vertices(self) -> tuple[str, ...]:
        """Names of the matched candidates."""
        return tuple(match.name for match in self.matches)

    @property
    def cost(self) -> float:
        """The shared minimal cost, infinite if nothing matched."""
        if self.is_empty:
            return float("inf")
        return self.matches[0].cost

    @property
    def tied(self) -> bool:
        """Whether any matched route has equal-cost alternatives."""
        return any(match.tied for match in self.matches)


@dataclass(frozen=True, slots=True)
class Call:
    """A client asking for a taxi.

    Attributes:
        client: Name of the calling client vertex
        company: Preferred company, or None for any shop
    """

    client: str
    company: Optional[str] = None


@dataclass(frozen=True, slots=True)
class SimulationPlan:
    """Everything a simulation run needs, fixed at load time.

    Attributes:
        graph: The road network with roles assigned
        calls: Calls in the order they are placed
    """

    graph: Graph
    calls: tuple[Call, ...] = field(default_factory=tuple)

    @property
    def num_calls(self) -> int:
        """Return the number of calls in the plan."""
        return len(self.calls)


class CallOutcome(Enum):
    """How a call ended."""

    HELPED = auto()
    CANNOT_BE_HELPED = auto()
    DECLINED = auto()


@dataclass(frozen=True, slots=True)
class CallReport:
    """Result of simulating one call.

    Attributes:
        call: The call that was handled
        outcome: How the call ended
        lines: Report lines in output order
        fare: Amount due, only set when the call was helped
    """

    call: Call
    outcome: CallOutcome
    lines: tuple[str, ...] = field(default_factory=tuple)
    fare: Optional[float] = None

    def render(self) -> str:
        """Return the report as newline separated text."""
        return "\n".join(self.lines)
