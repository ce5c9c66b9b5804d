from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from .core import DistanceModel, Route, close_route, tour_distance_idx
from .errors import SearchBudgetError
from .exact import check_selection
from .solution import Solver


@dataclass
class NearestNeighborSolver:
    """Greedy walk: always step to the closest unvisited city, then go home."""

    name = "nearest_neighbor"
    complexity = "O(k^2): one scan of the unvisited cities per step; fast, no optimality guarantee."

    def solve(self, model: DistanceModel, home: str, selected: Sequence[str]) -> Tuple[Route, int]:
        ordered = check_selection(model, home, selected)
        rows = model.rows
        h = model.index(home)
        unvisited = [model.index(c) for c in ordered]
        tour: List[int] = []
        u = h
        while unvisited:
            # Ties go to the lower city index.
            v = min(unvisited, key=lambda j: (rows[u][j], j))
            tour.append(v)
            unvisited.remove(v)
            u = v
        route = close_route(home, (model.cities[i] for i in tour))
        return route, tour_distance_idx(rows, h, tour)


@dataclass
class MSTPrimSolver:
    """
    Minimum spanning tree tour.

    Prim's algorithm grows a tree over {home} + selected starting at home; at
    each step the lightest edge from the tree to an outside vertex is added,
    ties broken by (outside vertex order, tree vertex order). The tree is then
    walked in pre-order from home, visiting children lightest-edge first and by
    city order on equal weights. Shortcutting repeated vertices gives the tour.
    """

    name = "mst_prim"
    complexity = "O(k^2): Prim's MST on the adjacency matrix plus a pre-order walk; at most 2x optimal on metric instances."

    def build_tree(self, model: DistanceModel, home: str, ordered: Sequence[str]) -> Dict[int, List[int]]:
        rows = model.rows
        h = model.index(home)
        outside = [model.index(c) for c in ordered]
        # best[v] = (weight, parent) of the lightest known edge into v
        best: Dict[int, Tuple[int, int]] = {v: (rows[h][v], h) for v in outside}
        children: Dict[int, List[int]] = {h: []}
        while best:
            v = min(best, key=lambda j: (best[j][0], j, best[j][1]))
            _, parent = best.pop(v)
            children[parent].append(v)
            children[v] = []
            for w in best:
                if (rows[v][w], v) < (best[w][0], best[w][1]):
                    best[w] = (rows[v][w], v)
        for parent, kids in children.items():
            kids.sort(key=lambda c: (rows[parent][c], c))
        return children

    def solve(self, model: DistanceModel, home: str, selected: Sequence[str]) -> Tuple[Route, int]:
        ordered = check_selection(model, home, selected)
        h = model.index(home)
        children = self.build_tree(model, home, ordered)
        tour: List[int] = []
        stack = list(reversed(children[h]))
        while stack:
            v = stack.pop()
            tour.append(v)
            stack.extend(reversed(children[v]))
        route = close_route(home, (model.cities[i] for i in tour))
        return route, tour_distance_idx(model.rows, h, tour)


@dataclass
class RandomSearchSolver:
    """
    Monte-Carlo baseline: sample budget random orderings and keep the best.

    With a seed, every solve starts from a fresh generator so repeated runs on
    the same instance return the same route.
    """

    budget: int = 1000
    seed: Optional[int] = None

    name = "random_search"
    complexity = "O(b*k): b random orderings of k cities, each scored in linear time; quality is probabilistic."

    def __post_init__(self) -> None:
        if self.budget <= 0:
            raise SearchBudgetError(f"Random search budget must be positive, got {self.budget}")

    def solve(self, model: DistanceModel, home: str, selected: Sequence[str]) -> Tuple[Route, int]:
        ordered = check_selection(model, home, selected)
        rng = np.random.default_rng(self.seed)
        rows = model.rows
        h = model.index(home)
        idx = np.array([model.index(c) for c in ordered], dtype=np.int64)
        best_order: List[int] = []
        best_distance = None
        for _ in range(self.budget):
            perm = rng.permutation(idx).tolist()
            d = tour_distance_idx(rows, h, perm)
            if best_distance is None or d < best_distance:
                best_distance = d
                best_order = perm
        route = close_route(home, (model.cities[i] for i in best_order))
        return route, best_distance


def default_heuristics(budget: int = 1000, seed: Optional[int] = None) -> List[Solver]:
    """Registered heuristics, in presentation order."""
    return [
        NearestNeighborSolver(),
        MSTPrimSolver(),
        RandomSearchSolver(budget=budget, seed=seed),
    ]
