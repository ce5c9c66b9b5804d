from __future__ import annotations

import logging
import time
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from .core import DistanceModel, Route, route_distance
from .errors import InvalidRouteError
from .exact import BruteForceSolver
from .sessions import Session
from .solution import AlgorithmResult, EvaluationReport, Solver, check_distance, validate_route

logger = logging.getLogger(__name__)


def normalize_route(home: str, route: Optional[Sequence[str]] = None, route_between: Optional[Sequence[str]] = None) -> List[str]:
    """
    Accept either a full home-to-home route or only the cities in between.
    Exactly one of the two must be provided.
    """
    if route is not None and route_between is not None:
        raise InvalidRouteError("Provide either route or routeBetween, not both")
    if route is not None:
        return list(route)
    if route_between is not None:
        return [home, *route_between, home]
    raise InvalidRouteError("A route is required")


def _timed(name: str, fn: Callable[[], Tuple[Route, int]]) -> AlgorithmResult:
    start = time.perf_counter()
    route, distance = fn()
    elapsed_ms = (time.perf_counter() - start) * 1000.0
    return AlgorithmResult(name=name, route=tuple(route), distance=int(distance), elapsed_ms=elapsed_ms)


def judge(your_distance: int, optimal_distance: int) -> Tuple[bool, str]:
    """Distance-based verdict; any equal-length tour counts as optimal."""
    if your_distance == optimal_distance:
        return True, "Perfect route! You matched the optimal distance."
    gap = your_distance - optimal_distance
    pct = 100.0 * gap / optimal_distance if optimal_distance else 0.0
    return False, f"A shorter route exists: yours is {gap} longer than optimal ({pct:.1f}% over)."


class Evaluator:
    """
    Score a submitted route against the exact optimum and every registered heuristic.

    Heuristics are an open collection of Solver objects; adding one only means
    passing it in, the evaluation loop never names them.
    """

    def __init__(self, heuristics: Sequence[Solver], exact: Optional[Solver] = None) -> None:
        self.exact = exact if exact is not None else BruteForceSolver()
        self.heuristics = list(heuristics)
        names = [self.exact.name] + [h.name for h in self.heuristics]
        if len(set(names)) != len(names):
            raise ValueError(f"Solver names must be unique, got {names}")

    @property
    def solvers(self) -> List[Solver]:
        return [self.exact, *self.heuristics]

    def evaluate_route(self, model: DistanceModel, home: str, route: Sequence[str]) -> EvaluationReport:
        # Validate before any solver runs.
        selected = validate_route(model, home, route)
        your = _timed("yours", lambda: (tuple(route), route_distance(model, route)))

        optimal = _timed(self.exact.name, lambda: self.exact.solve(model, home, selected))
        algorithms: Dict[str, AlgorithmResult] = {optimal.name: optimal}
        for heuristic in self.heuristics:
            algorithms[heuristic.name] = _timed(heuristic.name, lambda h=heuristic: h.solve(model, home, selected))
        for res in algorithms.values():
            check_distance(model, res)

        correct, message = judge(your.distance, optimal.distance)
        logger.info(
            "evaluated %d-stop route: yours=%d optimal=%d correct=%s",
            len(selected),
            your.distance,
            optimal.distance,
            correct,
        )
        return EvaluationReport(your=your, optimal=optimal, correct=correct, message=message, algorithms=algorithms)

    def evaluate(self, session: Session, route: Sequence[str]) -> EvaluationReport:
        return self.evaluate_route(session.model, session.home, route)

    def complexity_table(self) -> Dict[str, str]:
        return {s.name: s.complexity for s in self.solvers}
