from __future__ import annotations

import time
from dataclasses import dataclass
from itertools import permutations
from typing import List, Optional, Sequence, Tuple

from .core import DistanceModel, Route, close_route, order_cities, tour_distance_idx
from .errors import ConfigurationError, InvalidRouteError, SolverTimeoutError

MAX_SELECTED = 8
DEFAULT_TIME_LIMIT_SEC = 5.0
# Deadline is checked once per this many permutations.
DEADLINE_CHECK_EVERY = 1024


def check_cap(max_selected: int, time_limit_sec: Optional[float]) -> None:
    """A cap above 8 cities needs a time limit on the enumeration."""
    if max_selected < 1:
        raise ConfigurationError(f"max_selected must be at least 1, got {max_selected}")
    if max_selected > MAX_SELECTED and time_limit_sec is None:
        raise ConfigurationError(
            f"max_selected above {MAX_SELECTED} requires an exact solver time limit, got {max_selected}"
        )
    if time_limit_sec is not None and time_limit_sec < 0:
        raise ConfigurationError(f"time limit must be non-negative, got {time_limit_sec}")


def check_selection(model: DistanceModel, home: str, selected: Sequence[str]) -> List[str]:
    """Return selected de-duplicated in model order, rejecting home/unknown cities."""
    if not model.contains(home):
        raise InvalidRouteError(f"Unknown home city {home!r}")
    for city in selected:
        if not model.contains(city):
            raise InvalidRouteError(f"Unknown city {city!r}")
        if city == home:
            raise InvalidRouteError(f"Home city {home} cannot be selected as a stop")
    ordered = order_cities(model, selected)
    if not ordered:
        raise InvalidRouteError("Select at least one city to visit")
    return ordered


def solve_exact(
    model: DistanceModel,
    home: str,
    selected: Sequence[str],
    max_selected: int = MAX_SELECTED,
    time_limit_sec: Optional[float] = None,
) -> Tuple[Route, int]:
    """
    Brute force over every permutation of selected.

    Permutations are enumerated lexicographically over selected sorted by
    model order, and only a strictly shorter tour replaces the incumbent, so
    the first minimal tour found wins ties.

    With time_limit_sec set, SolverTimeoutError is raised once the limit
    passes mid-enumeration.
    """
    ordered = check_selection(model, home, selected)
    if len(ordered) > max_selected:
        raise InvalidRouteError(f"At most {max_selected} cities can be selected, got {len(ordered)}")

    rows = model.rows
    h = model.index(home)
    idx = [model.index(c) for c in ordered]

    best_order: Tuple[int, ...] = tuple(idx)
    best_distance = tour_distance_idx(rows, h, best_order)
    deadline = None if time_limit_sec is None else time.monotonic() + time_limit_sec
    for count, perm in enumerate(permutations(idx)):
        if deadline is not None and count % DEADLINE_CHECK_EVERY == 0 and time.monotonic() >= deadline:
            raise SolverTimeoutError(
                f"Brute force over {len(idx)} cities exceeded {time_limit_sec:g}s after {count} permutations"
            )
        d = tour_distance_idx(rows, h, perm)
        if d < best_distance:
            best_distance = d
            best_order = perm

    route = close_route(home, (model.cities[i] for i in best_order))
    return route, best_distance


@dataclass
class BruteForceSolver:
    max_selected: int = MAX_SELECTED
    time_limit_sec: Optional[float] = DEFAULT_TIME_LIMIT_SEC

    name = "bruteforce"
    complexity = "O(k!): tries every ordering of the k selected cities; exact but explodes past ~10 cities."

    def __post_init__(self) -> None:
        check_cap(self.max_selected, self.time_limit_sec)

    def solve(self, model: DistanceModel, home: str, selected: Sequence[str]) -> Tuple[Route, int]:
        return solve_exact(
            model, home, selected, max_selected=self.max_selected, time_limit_sec=self.time_limit_sec
        )
