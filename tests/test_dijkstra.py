import math
import random
import time

import pytest

from taxisim.domain.errors import (
    NegativeEdgeError,
    NoRouteFoundError,
    SearchTimeoutError,
    VertexNotFoundError,
)
from taxisim.graph.dijkstra import DijkstraEngine, cost, describe_path, shortest_paths
from taxisim.graph.model import Graph


def _random_graph(seed: int, size: int) -> Graph:
    rng = random.Random(seed)
    graph = Graph()
    names = [f"v{i}" for i in range(size)]
    for name in names:
        graph.upsert_vertex(name)
    for source in names:
        for target in names:
            if source != target and rng.random() < 0.35:
                graph.add_edge(source, target, rng.randint(0, 9))
    return graph


def _brute_force_cost(graph: Graph, source: str, target: str) -> float:
    best = math.inf

    def walk(name: str, cost: float, seen: set) -> None:
        nonlocal best
        if name == target:
            best = min(best, cost)
            return
        for edge in graph.lookup(name).edges:
            if edge.target not in seen:
                walk(edge.target, cost + edge.weight, seen | {edge.target})

    walk(source, 0.0, {source})
    return best


@pytest.mark.parametrize("seed", range(12))
def test_distances_match_brute_force(seed):
    graph = _random_graph(seed, size=3 + seed % 6)

    for source in graph:
        tree = shortest_paths(graph, source)
        for target in graph:
            assert tree.cost(target) == _brute_force_cost(graph, source, target)


@pytest.mark.parametrize("seed", range(6))
def test_paths_are_consistent_with_costs(seed):
    graph = _random_graph(seed, size=8)
    tree = shortest_paths(graph, "v0")

    for target in graph:
        if not tree.is_reachable(target):
            continue
        path = tree.path_to(target)
        assert path[0] == "v0"
        assert path[-1] == target
        assert len(set(path)) == len(path)
        total = sum(
            min(e.weight for e in graph.lookup(a).edges if e.target == b)
            for a, b in zip(path, path[1:])
        )
        assert total == tree.cost(target)


def test_source_has_zero_cost_and_trivial_path():
    graph = Graph()
    graph.add_edge("A", "B", 3)

    tree = shortest_paths(graph, "A")

    assert tree.cost("A") == 0
    assert tree.path_to("A") == ("A",)
    assert tree.state("A").predecessor is None


def test_prefers_cheaper_multi_hop_route():
    graph = Graph()
    graph.add_edge("A", "B", 1)
    graph.add_edge("B", "C", 1)
    graph.add_edge("C", "D", 1)
    graph.add_edge("A", "D", 5)

    tree = shortest_paths(graph, "A")

    assert tree.cost("D") == 3
    assert tree.path_to("D") == ("A", "B", "C", "D")
    assert not tree.has_tie("D")


def test_repeated_runs_give_identical_results():
    graph = _random_graph(3, size=8)

    first = shortest_paths(graph, "v1")
    second = shortest_paths(graph, "v1")

    assert first.states == second.states


def test_runs_from_different_sources_do_not_share_state():
    graph = Graph()
    graph.add_edge("A", "B", 1)
    graph.add_edge("B", "C", 1)

    from_a = shortest_paths(graph, "A")
    from_c = shortest_paths(graph, "C")

    assert from_a.cost("C") == 2
    assert math.isinf(from_c.cost("A"))
    assert from_a.cost("C") == 2


def test_equal_cost_routes_set_tie_flag():
    graph = Graph()
    graph.add_edge("S", "A", 1)
    graph.add_edge("S", "B", 1)
    graph.add_edge("A", "T", 1)
    graph.add_edge("B", "T", 1)

    tree = shortest_paths(graph, "S")

    assert tree.cost("T") == 2
    assert tree.has_tie("T")
    assert tree.state("T").predecessor in {"A", "B"}
    assert not tree.has_tie("A")


def test_cheaper_route_clears_earlier_tie():
    graph = Graph()
    # A and B tie on T at 6 before C, popped last, finds 3.
    graph.add_edge("S", "A", 1)
    graph.add_edge("S", "B", 1)
    graph.add_edge("A", "T", 5)
    graph.add_edge("B", "T", 5)
    graph.add_edge("S", "C", 2)
    graph.add_edge("C", "T", 1)

    tree = shortest_paths(graph, "S")

    assert tree.cost("T") == 3
    assert not tree.has_tie("T")
    assert tree.path_to("T") == ("S", "C", "T")


def test_unreachable_vertex_has_infinite_cost():
    graph = Graph()
    graph.add_edge("A", "B", 1)
    graph.upsert_vertex("Z")

    tree = shortest_paths(graph, "A")

    assert math.isinf(tree.cost("Z"))
    assert not tree.is_reachable("Z")
    with pytest.raises(NoRouteFoundError):
        tree.path_to("Z")


def test_unknown_source_raises():
    graph = Graph()
    graph.add_edge("A", "B", 1)

    with pytest.raises(VertexNotFoundError):
        shortest_paths(graph, "Z")


def test_unknown_target_raises():
    graph = Graph()
    graph.add_edge("A", "B", 1)
    tree = shortest_paths(graph, "A")

    with pytest.raises(VertexNotFoundError):
        tree.cost("Z")


def test_negative_edge_off_the_shortest_path_fails_the_run():
    graph = Graph(strict_weights=False)
    graph.add_edge("S", "T", 1)
    graph.add_edge("S", "A", 5)
    graph.add_edge("A", "Z", -2)

    with pytest.raises(NegativeEdgeError) as excinfo:
        shortest_paths(graph, "S")

    assert excinfo.value.source == "A"
    assert excinfo.value.weight == -2


def test_unreachable_negative_edge_is_not_traversed():
    graph = Graph(strict_weights=False)
    graph.add_edge("S", "T", 1)
    graph.add_edge("X", "Y", -1)

    tree = shortest_paths(graph, "S")

    assert tree.cost("T") == 1


def test_expired_deadline_raises_timeout():
    graph = Graph()
    graph.add_edge("A", "B", 1)

    with pytest.raises(SearchTimeoutError) as excinfo:
        shortest_paths(graph, "A", deadline=time.monotonic() - 1)

    assert excinfo.value.source == "A"


def test_cost_and_describe_path():
    graph = Graph()
    graph.add_edge("A", "B", 2)
    graph.upsert_vertex("Z")

    assert cost(graph, "A", "B") == 2
    assert math.isinf(cost(graph, "A", "Z"))
    assert describe_path(graph, "A", "B") == ("A", "B")
    assert describe_path(graph, "A", "Z") is None


def test_engine_counts_runs():
    graph = Graph()
    graph.add_edge("A", "B", 2)
    engine = DijkstraEngine(timeout_seconds=5.0)

    engine.run(graph, "A")
    tree = engine.run(graph, "B")

    assert engine.runs == 2
    assert tree.cost("B") == 0
