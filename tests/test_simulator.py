import pytest

from taxisim.adapters.decision import FixedCallDecider, ScriptedCallDecider
from taxisim.config import DispatchConfig
from taxisim.domain.errors import UnknownCompanyError
from taxisim.domain.models import Call, CallOutcome, SimulationPlan
from taxisim.graph.dijkstra import DijkstraEngine
from taxisim.services.simulator import CallSimulator


def _simulator(plan, accept=True, **kwargs):
    return CallSimulator.from_config(
        plan, decider=FixedCallDecider(accept=accept), config=DispatchConfig(**kwargs)
    )


def test_helped_call_reports_paths_and_fare(chain_plan):
    report = _simulator(chain_plan).handle(chain_plan.calls[0])

    assert report.outcome is CallOutcome.HELPED
    assert report.lines == (
        "client D",
        "company qnq",
        "taxi A",
        "A B C D",
        "shop A",
        "D A",
        "amount due for this client is R17.10",
    )
    assert report.fare == pytest.approx(17.10)


def test_declined_call_names_taxi_and_stops_before_paths_and_fare(chain_plan):
    report = _simulator(chain_plan, accept=False).handle(chain_plan.calls[0])

    assert report.outcome is CallOutcome.DECLINED
    assert report.lines == (
        "client D",
        "company qnq",
        "taxi A",
        "taxi driver declined the call",
    )
    assert report.fare is None


def test_call_without_reachable_shop_cannot_be_helped(make_graph):
    graph = make_graph(
        [("A", "C", 1)],
        shops=[("A", "QnQ")],
        clients=["C"],
    )
    plan = SimulationPlan(graph=graph, calls=(Call(client="C", company="QnQ"),))
    decider = ScriptedCallDecider([])

    report = CallSimulator.from_config(plan, decider=decider, config=DispatchConfig()).handle(
        plan.calls[0]
    )

    assert report.outcome is CallOutcome.CANNOT_BE_HELPED
    assert report.lines == ("client C", "company qnq", "cannot be helped")
    assert report.fare is None
    assert decider.asked == []


def test_call_for_company_without_shops_cannot_be_helped(chain_plan):
    plan = SimulationPlan(graph=chain_plan.graph, calls=(Call(client="D", company="Shopify"),))

    report = _simulator(plan).handle(plan.calls[0])

    assert report.render() == "client D\ncompany shopify\ncannot be helped"


def test_tied_route_reports_cost_only(make_graph):
    graph = make_graph(
        [("S", "P", 1), ("S", "Q", 1), ("P", "C", 1), ("Q", "C", 1), ("C", "S", 4)],
        shops=[("S", "QnQ")],
        clients=["C"],
    )
    plan = SimulationPlan(graph=graph, calls=(Call(client="C", company="QnQ"),))

    report = _simulator(plan).handle(plan.calls[0])

    assert report.lines == (
        "client C",
        "company qnq",
        "taxi S",
        "multiple solutions cost 2",
        "shop S",
        "C S",
        "amount due for this client is R18.90",
    )


def test_fare_is_summed_over_every_taxi_shop_pair(make_graph):
    graph = make_graph(
        [("X", "C", 1), ("Y", "C", 1), ("C", "X", 2), ("C", "Y", 2)],
        shops=[("X", "QnQ"), ("Y", "QnQ")],
        clients=["C"],
    )
    plan = SimulationPlan(graph=graph, calls=(Call(client="C", company="QnQ"),))

    report = _simulator(plan).handle(plan.calls[0])

    # Four pairs at 14.50 + 0.20 * 1 + 2 each.
    assert report.fare == pytest.approx(66.80)
    assert report.lines[2:10] == (
        "taxi X",
        "X C",
        "taxi Y",
        "Y C",
        "shop X",
        "C X",
        "shop Y",
        "C Y",
    )
    assert report.lines[-1] == "amount due for this client is R66.80"


def test_company_tariff_is_used(make_graph):
    graph = make_graph(
        [("X", "C", 10), ("C", "X", 5)],
        shops=[("X", "Shopify")],
        clients=["C"],
    )
    plan = SimulationPlan(graph=graph, calls=(Call(client="C", company="Shopify"),))

    report = _simulator(plan).handle(plan.calls[0])

    assert report.fare == pytest.approx(16.00 + 1.50 + 5)


def test_call_without_company_uses_any_shop_and_default_tariff(make_graph):
    graph = make_graph(
        [("X", "C", 10), ("C", "X", 5)],
        shops=[("X", "Shopify")],
        clients=["C"],
    )
    plan = SimulationPlan(graph=graph, calls=(Call(client="C"),))

    report = _simulator(plan, currency_symbol="$").handle(plan.calls[0])

    assert report.lines[0] == "client C"
    assert report.lines[1] == "taxi X"
    assert report.fare == pytest.approx(14.50 + 2.00 + 5)
    assert report.lines[-1] == "amount due for this client is $21.50"


def test_unknown_company_fails_at_construction(chain_plan):
    plan = SimulationPlan(graph=chain_plan.graph, calls=(Call(client="D", company="Uber"),))

    with pytest.raises(UnknownCompanyError):
        _simulator(plan)


def test_run_handles_calls_in_order(chain_plan):
    plan = SimulationPlan(
        graph=chain_plan.graph,
        calls=(Call(client="D", company="QnQ"), Call(client="D", company="QnQ")),
    )
    decider = ScriptedCallDecider([False, True])

    reports = CallSimulator.from_config(plan, decider=decider, config=DispatchConfig()).run()

    assert [r.outcome for r in reports] == [CallOutcome.DECLINED, CallOutcome.HELPED]
    assert len(decider.asked) == 2


def test_tied_shop_route_reports_only_its_cost(make_graph):
    graph = make_graph(
        [("S", "C", 1), ("C", "P", 1), ("C", "Q", 1), ("P", "S", 1), ("Q", "S", 1)],
        shops=[("S", "QnQ")],
        clients=["C"],
    )
    plan = SimulationPlan(graph=graph, calls=(Call(client="C", company="QnQ"),))

    report = _simulator(plan).handle(plan.calls[0])

    assert report.lines == (
        "client C",
        "company qnq",
        "taxi S",
        "S C",
        "shop S",
        "multiple solutions cost 2",
        "amount due for this client is R16.70",
    )
    assert report.fare == pytest.approx(16.70)


def test_simulator_matches_through_the_injected_engine(chain_plan):
    engine = DijkstraEngine()
    simulator = CallSimulator(
        chain_plan, decider=FixedCallDecider(accept=True), engine=engine
    )

    simulator.run()

    assert simulator.matcher.engine is engine
    assert engine.runs == 2
