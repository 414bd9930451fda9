"""Typed domain errors for the taxi dispatch simulator.

Every failure the graph, engine, loader and simulator can raise is one of
these types, so callers can tell a missing vertex from a malformed scenario
without string matching.

All errors inherit from TaxiSimError and can optionally wrap a root cause
exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class TaxiSimError(Exception):
    """Base error for the taxi simulator domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class VertexNotFoundError(TaxiSimError):
    """A referenced vertex name does not exist in the graph.

    Attributes:
        vertex: The name that could not be resolved
    """

    vertex: str = ""


@dataclass
class NegativeEdgeError(TaxiSimError):
    """An edge with a negative weight was added or traversed.

    Raised by ``Graph.add_edge`` on strict graphs, or by the engine in the
    middle of a run. In the latter case the run produces no result.

    Attributes:
        source: Name of the edge's source vertex
        target: Name of the edge's target vertex
        weight: The offending weight
    """

    source: str = ""
    target: str = ""
    weight: float = 0.0


@dataclass
class NoRouteFoundError(TaxiSimError):
    """No path exists between the requested vertices.

    Attributes:
        source: Start of the requested path
        target: End of the requested path
    """

    source: str = ""
    target: str = ""


@dataclass
class SearchTimeoutError(TaxiSimError):
    """A shortest-path run exceeded its deadline.

    Attributes:
        source: The run's source vertex
        visited: Number of vertices expanded before the deadline hit
    """

    source: str = ""
    visited: int = 0


@dataclass
class ScenarioError(TaxiSimError):
    """A scenario could not be loaded.

    Attributes:
        file_path: Path to the scenario file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class ScenarioParseError(ScenarioError):
    """Scenario text is structurally invalid.

    Attributes:
        line_number: 1-based line of the offending input (0 if unknown)
        field_name: Which part of the line was wrong
    """

    line_number: int = 0
    field_name: str = ""

    def __str__(self) -> str:
        location = f"line {self.line_number}" if self.line_number else "input"
        if self.file_path:
            location = f"{self.file_path}:{location}"
        text = f"{location}: {self.message}"
        if self.cause:
            return f"{text}: {self.cause}"
        return text


@dataclass
class UnknownCompanyError(TaxiSimError):
    """No tariff is configured for a company.

    Attributes:
        company: The company identifier that was looked up
    """

    company: str = ""


@dataclass
class ConfigurationError(TaxiSimError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None
