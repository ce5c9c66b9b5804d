from dataclasses import dataclass

import pytest

from tsp_arena import (
    DistanceModel,
    Evaluator,
    InvalidRouteError,
    SessionStore,
    default_heuristics,
    make_rng,
    new_instance,
    normalize_route,
    route_distance,
    solve_exact,
)


def make_triangle() -> DistanceModel:
    return DistanceModel(
        cities=("A", "B", "C"),
        matrix=[
            [0, 50, 100],
            [50, 0, 75],
            [100, 75, 0],
        ],
    )


def make_evaluator(seed: int = 0) -> Evaluator:
    return Evaluator(default_heuristics(budget=100, seed=seed))


def make_session(model: DistanceModel, home: str):
    store = SessionStore()
    sid = store.create(model, home, model.cities)
    return store.get(sid)


@pytest.mark.parametrize("route", [["A", "B", "C", "A"], ["A", "C", "B", "A"]])
def test_either_optimal_direction_is_correct(route):
    session = make_session(make_triangle(), "A")
    report = make_evaluator().evaluate(session, route)
    assert report.correct
    assert report.your.distance == 225
    assert report.optimal.distance == 225
    assert report.your.route == tuple(route)
    assert "Perfect" in report.message


def test_report_covers_every_algorithm():
    model, home = new_instance(pool_size=10, rng=make_rng(4))
    session = make_session(model, home)
    selected = [c for c in model.cities if c != home][:6]
    route = [home, *selected, home]
    report = make_evaluator().evaluate(session, route)
    assert set(report.algorithms) == {"bruteforce", "nearest_neighbor", "mst_prim", "random_search"}
    assert report.algorithms["bruteforce"] == report.optimal
    for res in report.algorithms.values():
        assert res.distance >= report.optimal.distance
        assert res.elapsed_ms >= 0.0
        assert sorted(res.route[1:-1]) == sorted(selected)
    assert report.your.distance == route_distance(model, route)
    assert report.correct == (report.your.distance == report.optimal.distance)


def test_exact_route_round_trips_as_correct():
    model, home = new_instance(pool_size=10, rng=make_rng(21))
    session = make_session(model, home)
    selected = [c for c in model.cities if c != home][:5]
    optimal_route, _ = solve_exact(model, home, selected)
    assert make_evaluator().evaluate(session, list(optimal_route)).correct


def test_suboptimal_route_reports_gap():
    model = DistanceModel(
        cities=("A", "B", "C", "D"),
        matrix=[
            [0, 10, 15, 20],
            [10, 0, 35, 25],
            [15, 35, 0, 30],
            [20, 25, 30, 0],
        ],
    )
    report = make_evaluator().evaluate(make_session(model, "A"), ["A", "B", "C", "D", "A"])
    assert not report.correct
    assert report.your.distance == 95
    assert report.optimal.distance == 80
    assert "15 longer" in report.message


@pytest.mark.parametrize(
    "route",
    [
        [],
        ["A"],
        ["A", "A"],
        ["B", "C", "A"],
        ["A", "B", "C"],
        ["A", "B", "B", "A"],
        ["A", "B", "A", "C", "A"],
        ["A", "Z", "A"],
        ["A", 3, "A"],
    ],
)
def test_invalid_routes_rejected_before_solving(route):
    calls = []

    @dataclass
    class Spy:
        name = "spy"
        complexity = "O(1)"

        def solve(self, model, home, selected):
            calls.append(selected)
            return (home, *selected, home), 0

    evaluator = Evaluator([Spy()])
    with pytest.raises(InvalidRouteError):
        evaluator.evaluate(make_session(make_triangle(), "A"), route)
    assert calls == []


def test_registered_heuristic_joins_report():
    @dataclass
    class Reverse:
        name = "reverse_input"
        complexity = "O(k)"

        def solve(self, model, home, selected):
            route = (home, *reversed(list(selected)), home)
            return route, route_distance(model, route)

    evaluator = Evaluator([*default_heuristics(budget=10, seed=0), Reverse()])
    report = evaluator.evaluate(make_session(make_triangle(), "A"), ["A", "B", "C", "A"])
    assert report.algorithms["reverse_input"].route == ("A", "C", "B", "A")
    assert "reverse_input" in evaluator.complexity_table()


def test_duplicate_solver_names_rejected():
    with pytest.raises(ValueError):
        Evaluator(default_heuristics() + default_heuristics())


def test_normalize_route_forms():
    assert normalize_route("A", route=["A", "B", "A"]) == ["A", "B", "A"]
    assert normalize_route("A", route_between=["B", "C"]) == ["A", "B", "C", "A"]
    with pytest.raises(InvalidRouteError):
        normalize_route("A")
    with pytest.raises(InvalidRouteError):
        normalize_route("A", route=["A", "B", "A"], route_between=["B"])


def test_complexity_table_lists_all_solvers():
    table = make_evaluator().complexity_table()
    assert set(table) == {"bruteforce", "nearest_neighbor", "mst_prim", "random_search"}
    assert "k!" in table["bruteforce"]
