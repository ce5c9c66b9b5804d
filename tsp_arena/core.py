from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

import numpy as np

from .errors import ConfigurationError

CITY_POOL: Tuple[str, ...] = tuple("ABCDEFGHIJ")

Route = Tuple[str, ...]


@dataclass(frozen=True, eq=False)
class DistanceModel:
    """
    Cities plus their symmetric integer distance matrix.

    matrix[i][j] aligns with cities[i] / cities[j]. The array is flagged
    read-only on construction so a stored model can be shared between
    concurrent evaluations without copying.
    """

    cities: Tuple[str, ...]
    matrix: np.ndarray
    _index: Dict[str, int] = field(init=False, repr=False, compare=False)
    _rows: List[List[int]] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        cities = tuple(self.cities)
        matrix = np.array(self.matrix, dtype=np.int64, copy=True)
        n = len(cities)
        if n < 2:
            raise ConfigurationError(f"A distance model needs at least 2 cities, got {n}")
        if len(set(cities)) != n:
            raise ConfigurationError("City identifiers must be unique")
        if matrix.shape != (n, n):
            raise ConfigurationError(f"Matrix shape {matrix.shape} does not match {n} cities")
        if np.any(np.diag(matrix) != 0):
            raise ConfigurationError("Matrix diagonal must be zero")
        if not np.array_equal(matrix, matrix.T):
            raise ConfigurationError("Matrix must be symmetric")
        if np.any(matrix < 0):
            raise ConfigurationError("Distances must be non-negative")
        matrix.setflags(write=False)
        object.__setattr__(self, "cities", cities)
        object.__setattr__(self, "matrix", matrix)
        object.__setattr__(self, "_index", {c: i for i, c in enumerate(cities)})
        # Plain-int rows for the solver loops.
        object.__setattr__(self, "_rows", matrix.tolist())

    @property
    def size(self) -> int:
        return len(self.cities)

    def contains(self, city: str) -> bool:
        return city in self._index

    def index(self, city: str) -> int:
        return self._index[city]

    def dist(self, a: str, b: str) -> int:
        """Distance between two cities by identifier."""
        return self._rows[self._index[a]][self._index[b]]

    @property
    def rows(self) -> List[List[int]]:
        return self._rows

    def to_lists(self) -> List[List[int]]:
        return [list(row) for row in self._rows]


def route_distance(model: DistanceModel, route: Sequence[str]) -> int:
    """Sum of matrix weights over consecutive pairs of the route."""
    total = 0
    for a, b in zip(route, route[1:]):
        total += model.dist(a, b)
    return total


def tour_distance_idx(rows: List[List[int]], home: int, order: Iterable[int]) -> int:
    """Closed tour length home -> order... -> home on raw index rows."""
    total = 0
    prev = home
    for node in order:
        total += rows[prev][node]
        prev = node
    return total + rows[prev][home]


def close_route(home: str, interior: Iterable[str]) -> Route:
    return (home, *interior, home)


def order_cities(model: DistanceModel, cities: Iterable[str]) -> List[str]:
    """De-duplicate and sort cities by their position in the model."""
    return sorted(set(cities), key=model.index)
