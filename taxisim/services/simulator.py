"""Call simulator - Main orchestrator.

Handles each call in a SimulationPlan in order:
1. Match the nearest taxis (towards the client) and shops (away from it)
2. Give up with "cannot be helped" if either set is empty
3. Ask the decider whether the driver takes the call; a decline names the
   first taxi and stops there
4. Report each matched route, or only its cost when the route is tied
5. Charge the fare summed over every (taxi, shop) pair
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from ..config import DispatchConfig, get_config
from ..domain.models import Call, CallOutcome, CallReport, Match, MatchResult, SimulationPlan
from ..graph.dijkstra import DijkstraEngine
from ..ports.decision import CallDeciderPort
from ..ports.graph import ShortestPathEnginePort
from .fare import TariffBook, fare
from .matcher import DispatchMatcher

CANNOT_BE_HELPED = "cannot be helped"
DRIVER_DECLINED = "taxi driver declined the call"


def route_line(match: Match) -> str:
    """The path of a matched route, or only its cost when it is tied."""
    if match.tied or match.path is None:
        return f"multiple solutions cost {match.cost:.0f}"
    return " ".join(match.path)


@dataclass
class CallSimulator:
    """Runs every call of a simulation plan.

    Attributes:
        plan: Graph and calls, fixed at load time
        decider: Accept/decline source
        tariffs: Pricing per company
        engine: Shortest-path engine behind the dispatch matcher
        default_company: Tariff used for calls that name no company
        currency_symbol: Prefix of the amount due
        matcher: Dispatch matcher over the plan's graph
    """

    plan: SimulationPlan
    decider: CallDeciderPort
    tariffs: TariffBook = field(default_factory=TariffBook.from_config)
    engine: ShortestPathEnginePort = field(default_factory=DijkstraEngine)
    default_company: str = "QnQ"
    currency_symbol: str = "R"

    matcher: DispatchMatcher = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.matcher = DispatchMatcher(self.plan.graph, engine=self.engine)
        # Every call must be billable before any call runs.
        for call in self.plan.calls:
            self.tariffs.get(self._billing_company(call))

    @classmethod
    def from_config(
        cls,
        plan: SimulationPlan,
        decider: CallDeciderPort,
        config: Optional[DispatchConfig] = None,
        engine: Optional[ShortestPathEnginePort] = None,
    ) -> CallSimulator:
        config = config or get_config().dispatch
        return cls(
            plan=plan,
            decider=decider,
            tariffs=TariffBook.from_config(config),
            engine=engine or DijkstraEngine(timeout_seconds=config.search_timeout_seconds),
            default_company=config.default_company,
            currency_symbol=config.currency_symbol,
        )

    def run(self) -> List[CallReport]:
        """Handle every call in plan order."""
        return list(self.iter_reports())

    def iter_reports(self) -> Iterator[CallReport]:
        for call in self.plan.calls:
            yield self.handle(call)

    def handle(self, call: Call) -> CallReport:
        """Simulate one call.

        Raises:
            VertexNotFoundError: If the client is not in the graph.
            UnknownCompanyError: If the call's company has no tariff.
        """
        lines: List[str] = [f"client {call.client}"]
        if call.company is not None:
            lines.append(f"company {call.company.lower()}")

        taxis = self.matcher.nearest_taxis(call.client, call.company)
        shops = self.matcher.nearest_shops(call.client, call.company)

        if taxis.is_empty or shops.is_empty:
            self._logger.warning(
                "Call cannot be helped",
                extra={
                    "client": call.client,
                    "company": call.company,
                    "taxis": len(taxis.matches),
                    "shops": len(shops.matches),
                },
            )
            lines.append(CANNOT_BE_HELPED)
            return CallReport(call=call, outcome=CallOutcome.CANNOT_BE_HELPED, lines=tuple(lines))

        if not self.decider.accepts(call):
            self._logger.info("Driver declined call", extra={"client": call.client})
            lines.append(f"taxi {taxis.matches[0].name}")
            lines.append(DRIVER_DECLINED)
            return CallReport(call=call, outcome=CallOutcome.DECLINED, lines=tuple(lines))

        for match in taxis.matches:
            lines.append(f"taxi {match.name}")
            lines.append(route_line(match))
        for match in shops.matches:
            lines.append(f"shop {match.name}")
            lines.append(route_line(match))

        amount = self.total_fare(call, taxis, shops)
        lines.append(f"amount due for this client is {self.currency_symbol}{amount:.2f}")

        self._logger.info(
            "Call completed",
            extra={
                "client": call.client,
                "taxis": len(taxis.matches),
                "shops": len(shops.matches),
                "fare": amount,
            },
        )
        return CallReport(
            call=call, outcome=CallOutcome.HELPED, lines=tuple(lines), fare=amount
        )

    def total_fare(self, call: Call, taxis: MatchResult, shops: MatchResult) -> float:
        """Fare summed over every (taxi, shop) pair of the two result sets."""
        tariff = self.tariffs.get(self._billing_company(call))
        return sum(
            fare(taxi.cost, shop.cost, tariff)
            for taxi in taxis.matches
            for shop in shops.matches
        )

    def _billing_company(self, call: Call) -> str:
        return call.company if call.company is not None else self.default_company
