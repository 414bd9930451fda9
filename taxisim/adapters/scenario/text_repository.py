"""Plain-text scenario repository.

Scenario files look like this (blank lines are ignored)::

    4                  <- number of vertex lines
    A B 1 D 5          <- source, then (destination cost) pairs
    B C 1
    C D 1
    D
    1 QnQ              <- shop section: count and optional company
    A
    1                  <- last section: the calls
    D QnQ              <- count clients, or count (client company) pairs

Any number of shop sections may precede the calls section. A shop
section whose header names no company takes the next entry of
``ScenarioConfig.section_companies``. Structural problems raise
ScenarioParseError with the offending line number.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from ...config import ScenarioConfig, get_config
from ...domain.errors import NegativeEdgeError, ScenarioError, ScenarioParseError
from ...domain.models import CLIENT, Call, Shop, SimulationPlan
from ...graph.model import Graph

# (1-based line number, tokens)
_Line = Tuple[int, List[str]]


@dataclass
class _Cursor:
    lines: Sequence[_Line]
    file_path: Optional[str] = None
    position: int = 0

    def at_end(self) -> bool:
        return self.position >= len(self.lines)

    def next(self, field_name: str) -> _Line:
        if self.at_end():
            last = self.lines[-1][0] if self.lines else 0
            raise self.error(f"Unexpected end of input, expected {field_name}", last, field_name)
        line = self.lines[self.position]
        self.position += 1
        return line

    def error(
        self,
        message: str,
        line_number: int,
        field_name: str,
        cause: Optional[Exception] = None,
    ) -> ScenarioParseError:
        return ScenarioParseError(
            message,
            cause=cause,
            file_path=self.file_path,
            line_number=line_number,
            field_name=field_name,
        )


def _parse_count(cursor: _Cursor, number: int, token: str, field_name: str) -> int:
    try:
        count = int(token)
    except ValueError as e:
        raise cursor.error(f"Expected an integer {field_name}, got {token!r}", number, field_name, e)
    if count < 0:
        raise cursor.error(f"{field_name} must not be negative, got {count}", number, field_name)
    return count


def _parse_edges(cursor: _Cursor, graph: Graph) -> None:
    number, tokens = cursor.next("vertex count")
    if len(tokens) != 1:
        raise cursor.error("Vertex count line must hold a single integer", number, "vertex_count")
    count = _parse_count(cursor, number, tokens[0], "vertex_count")

    for _ in range(count):
        number, tokens = cursor.next("vertex line")
        source, rest = tokens[0], tokens[1:]
        if len(rest) % 2 != 0:
            raise cursor.error(
                f"Vertex {source} has an unpaired destination {rest[-1]!r}", number, "edges"
            )
        graph.upsert_vertex(source)
        for target, raw_cost in zip(rest[0::2], rest[1::2]):
            try:
                cost = int(raw_cost)
            except ValueError as e:
                raise cursor.error(
                    f"Cost of {source} -> {target} must be an integer, got {raw_cost!r}",
                    number,
                    "cost",
                    e,
                )
            try:
                graph.add_edge(source, target, cost)
            except NegativeEdgeError as e:
                raise cursor.error(e.message, number, "cost", e)


@dataclass
class _Section:
    header_line: int
    count: int
    header: List[str]
    body_line: int
    names: List[str] = field(default_factory=list)


def _parse_sections(cursor: _Cursor) -> List[_Section]:
    sections: List[_Section] = []
    while not cursor.at_end():
        number, header = cursor.next("section header")
        count = _parse_count(cursor, number, header[0], "section_count")
        section = _Section(header_line=number, count=count, header=header, body_line=number)
        if count > 0:
            section.body_line, section.names = cursor.next("section body")
        sections.append(section)
    return sections


def _assign_shops(
    cursor: _Cursor,
    graph: Graph,
    sections: Sequence[_Section],
    section_companies: Sequence[str],
) -> None:
    for index, section in enumerate(sections):
        if len(section.header) > 2:
            raise cursor.error(
                "Shop header holds more than a count and a company",
                section.header_line,
                "company",
            )
        if len(section.header) == 2:
            company = section.header[1]
        elif index < len(section_companies):
            company = section_companies[index]
        else:
            raise cursor.error(
                f"Shop section {index + 1} names no company and no default is configured",
                section.header_line,
                "company",
            )

        if len(section.names) != section.count:
            raise cursor.error(
                f"Shop section declares {section.count} shops but lists {len(section.names)}",
                section.body_line,
                "shops",
            )
        for name in section.names:
            if name not in graph:
                raise cursor.error(f"Shop {name} is not a vertex", section.body_line, "shops")
            graph.assign_role(name, Shop(company=company))


def _parse_calls(cursor: _Cursor, graph: Graph, section: _Section) -> Tuple[Call, ...]:
    if len(section.header) != 1:
        raise cursor.error("Calls header must hold a single integer", section.header_line, "calls")

    tokens = section.names
    if len(tokens) == section.count:
        calls = [Call(client=name) for name in tokens]
    elif len(tokens) == 2 * section.count:
        calls = [
            Call(client=client, company=company)
            for client, company in zip(tokens[0::2], tokens[1::2])
        ]
    else:
        raise cursor.error(
            f"Calls section declares {section.count} calls but lists {len(tokens)} tokens",
            section.body_line,
            "calls",
        )

    for call in calls:
        if call.client not in graph:
            raise cursor.error(f"Client {call.client} is not a vertex", section.body_line, "calls")
        graph.assign_role(call.client, CLIENT)
    return tuple(calls)


def parse_scenario(
    text: str,
    strict_weights: bool = True,
    section_companies: Sequence[str] = ("QnQ", "Shopify"),
    file_path: Optional[str] = None,
) -> SimulationPlan:
    """Parse scenario text into a simulation plan.

    Raises:
        ScenarioParseError: If the text is malformed.
    """
    lines = [
        (number, line.split())
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    cursor = _Cursor(lines=lines, file_path=file_path)
    graph = Graph(strict_weights=strict_weights)

    _parse_edges(cursor, graph)
    sections = _parse_sections(cursor)
    if not sections:
        last = lines[-1][0] if lines else 0
        raise cursor.error("Missing calls section", last, "calls")

    _assign_shops(cursor, graph, sections[:-1], section_companies)
    calls = _parse_calls(cursor, graph, sections[-1])
    return SimulationPlan(graph=graph, calls=calls)


@dataclass
class TextScenarioRepository:
    """Scenario repository that reads the plain-text format.

    This adapter implements ScenarioRepositoryPort.

    Attributes:
        config: Scenario configuration (path, weight policy, companies)
        path: Explicit scenario file, overriding the configured one
    """

    config: ScenarioConfig = field(default_factory=lambda: get_config().scenario)
    path: Optional[Path] = None
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _plan: Optional[SimulationPlan] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def scenario_path(self) -> Path:
        return self.path if self.path is not None else self.config.scenario_path

    def load(self) -> SimulationPlan:
        """Load and parse the scenario file.

        Raises:
            ScenarioError: If the file cannot be read.
            ScenarioParseError: If its content is malformed.
        """
        if self._plan is not None:
            return self._plan

        path = self.scenario_path
        self._logger.debug("Loading scenario", extra={"path": str(path)})

        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ScenarioError(
                f"Failed to read scenario: {path}",
                cause=e,
                file_path=str(path),
            )

        plan = parse_scenario(
            text,
            strict_weights=self.config.strict_weights,
            section_companies=self.config.section_companies,
            file_path=str(path),
        )
        self._plan = plan
        self._logger.info(
            "Scenario loaded",
            extra={
                "vertices": len(plan.graph),
                "edges": plan.graph.edge_count(),
                "shops": len(plan.graph.shops()),
                "calls": plan.num_calls,
            },
        )
        return plan

    def clear_cache(self) -> None:
        """Forget the cached plan so the next load re-reads the file."""
        self._plan = None
        self._logger.debug("Scenario cache cleared")
