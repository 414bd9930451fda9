"""Domain layer - models and errors with no external dependencies."""

from .errors import (
    ConfigurationError,
    NegativeEdgeError,
    NoRouteFoundError,
    ScenarioError,
    ScenarioParseError,
    SearchTimeoutError,
    TaxiSimError,
    UnknownCompanyError,
    VertexNotFoundError,
)
from .models import (
    CLIENT,
    NO_ROLE,
    Call,
    CallOutcome,
    CallReport,
    Client,
    Direction,
    Match,
    MatchResult,
    NoRole,
    Role,
    Shop,
    SimulationPlan,
    Tariff,
    role_name,
)

__all__ = [
    # Errors
    "TaxiSimError",
    "VertexNotFoundError",
    "NegativeEdgeError",
    "NoRouteFoundError",
    "SearchTimeoutError",
    "ScenarioError",
    "ScenarioParseError",
    "UnknownCompanyError",
    "ConfigurationError",
    # Roles
    "Role",
    "NoRole",
    "Shop",
    "Client",
    "NO_ROLE",
    "CLIENT",
    "role_name",
    # Dispatch
    "Direction",
    "Tariff",
    "Match",
    "MatchResult",
    "Call",
    "SimulationPlan",
    "CallOutcome",
    "CallReport",
]
