from __future__ import annotations

import io
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple

from .core import DistanceModel, Route, route_distance
from .errors import InvalidRouteError


class Solver(Protocol):
    """Anything that turns (model, home, selected) into a closed route."""

    name: str
    complexity: str

    def solve(self, model: DistanceModel, home: str, selected: Sequence[str]) -> Tuple[Route, int]:
        ...


@dataclass(frozen=True)
class AlgorithmResult:
    name: str
    route: Route
    distance: int
    elapsed_ms: float


@dataclass(frozen=True)
class EvaluationReport:
    your: AlgorithmResult
    optimal: AlgorithmResult
    correct: bool
    message: str
    algorithms: Mapping[str, AlgorithmResult]


def validate_route(model: DistanceModel, home: str, route: Sequence[str]) -> List[str]:
    """
    Check a submitted closed route and return its interior cities.
    - Starts and ends at home, home does not appear in the middle.
    - Every city exists in the model.
    - No interior city repeats, and at least one is visited.
    """
    route = list(route)
    if len(route) < 2:
        raise InvalidRouteError("Route must start and end at the home city")
    if route[0] != home or route[-1] != home:
        raise InvalidRouteError(f"Route must start and end at home city {home}")
    interior = route[1:-1]
    if not interior:
        raise InvalidRouteError("Select at least one city to visit")
    seen = set()
    for city in interior:
        if not isinstance(city, str) or not model.contains(city):
            raise InvalidRouteError(f"Unknown city {city!r}")
        if city == home:
            raise InvalidRouteError(f"Home city {home} may only appear at the start and end")
        if city in seen:
            raise InvalidRouteError(f"City {city} is visited more than once")
        seen.add(city)
    return interior


def result_payload(result: AlgorithmResult) -> Dict[str, Any]:
    return {
        "route": list(result.route),
        "distance": int(result.distance),
        "durationMs": float(result.elapsed_ms),
    }


def report_payload(report: EvaluationReport) -> Dict[str, Any]:
    """JSON shape returned by the evaluate endpoint."""
    return {
        "correct": report.correct,
        "message": report.message,
        "yourRoute": list(report.your.route),
        "yourDistance": int(report.your.distance),
        "yourDurationMs": float(report.your.elapsed_ms),
        "optimalRoute": list(report.optimal.route),
        "optimalDistance": int(report.optimal.distance),
        "algorithms": {name: result_payload(res) for name, res in report.algorithms.items()},
    }


def instance_payload(session_id: int, model: DistanceModel, home: str) -> Dict[str, Any]:
    return {
        "sessionId": session_id,
        "cities": list(model.cities),
        "homeCity": home,
        "distanceMatrix": model.to_lists(),
    }


def emit_report(report: EvaluationReport, out: Optional[io.TextIOBase] = None) -> None:
    """
    Write a plain-text comparison to stdout (or the provided stream):
    Result: <message>
    Yours   <route> <distance>
    Optimal <route> <distance>
    <algorithm> <route> <distance> <ms>
    """
    out_stream = sys.stdout if out is None else out
    out_stream.write(f"Result: {report.message}\n")
    out_stream.write(f"Yours    {' -> '.join(report.your.route)}  distance={report.your.distance}\n")
    out_stream.write(f"Optimal  {' -> '.join(report.optimal.route)}  distance={report.optimal.distance}\n")
    width = max(len(name) for name in report.algorithms)
    for name, res in report.algorithms.items():
        out_stream.write(
            f"{name:<{width}}  {' -> '.join(res.route)}  distance={res.distance}  time_ms={res.elapsed_ms:.3f}\n"
        )
    out_stream.flush()


def check_distance(model: DistanceModel, result: AlgorithmResult) -> None:
    """Recompute a result's distance from the matrix and fail on mismatch."""
    recomputed = route_distance(model, result.route)
    if recomputed != result.distance:
        raise ValueError(f"{result.name}: distance mismatch, recomputed {recomputed} vs {result.distance}")
