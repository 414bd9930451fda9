from __future__ import annotations

from typing import Iterable, Optional, Tuple

import pytest

from taxisim.config import reset_config
from taxisim.domain.models import CLIENT, Call, Shop, SimulationPlan
from taxisim.graph.model import Graph


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def build_graph(
    edges: Iterable[Tuple[str, str, float]],
    shops: Iterable[Tuple[str, Optional[str]]] = (),
    clients: Iterable[str] = (),
    strict_weights: bool = True,
) -> Graph:
    graph = Graph(strict_weights=strict_weights)
    for source, target, weight in edges:
        graph.add_edge(source, target, weight)
    for name, company in shops:
        graph.assign_role(name, Shop(company=company))
    for name in clients:
        graph.assign_role(name, CLIENT)
    return graph


@pytest.fixture
def chain_plan() -> SimulationPlan:
    # A -> B -> C -> D costs 3, the direct edge costs 5.
    graph = build_graph(
        [("A", "B", 1), ("B", "C", 1), ("C", "D", 1), ("A", "D", 5), ("D", "A", 2)],
        shops=[("A", "QnQ")],
        clients=["D"],
    )
    return SimulationPlan(graph=graph, calls=(Call(client="D", company="QnQ"),))


@pytest.fixture
def make_graph():
    return build_graph
