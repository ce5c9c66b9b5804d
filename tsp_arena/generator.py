from __future__ import annotations

import logging
from typing import Optional, Tuple

import numpy as np

from .core import CITY_POOL, DistanceModel
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Seeded generator for tests; seed=None draws fresh OS entropy."""
    return np.random.default_rng(seed)


def new_instance(
    pool_size: int = len(CITY_POOL),
    min_distance: int = 50,
    max_distance: int = 100,
    rng: Optional[np.random.Generator] = None,
) -> Tuple[DistanceModel, str]:
    """
    Generate a random symmetric instance over the first pool_size cities.

    The upper triangle is drawn uniformly from [min_distance, max_distance]
    (inclusive), mirrored into the lower triangle, and the diagonal is zero.
    The home city is picked uniformly among the generated cities.
    """
    if pool_size < 2:
        raise ConfigurationError(f"pool_size must be at least 2, got {pool_size}")
    if pool_size > len(CITY_POOL):
        raise ConfigurationError(f"pool_size must not exceed {len(CITY_POOL)}, got {pool_size}")
    if min_distance > max_distance:
        raise ConfigurationError(f"min_distance ({min_distance}) must not exceed max_distance ({max_distance})")
    if min_distance < 0:
        raise ConfigurationError(f"min_distance must be non-negative, got {min_distance}")
    if rng is None:
        rng = make_rng()

    cities = CITY_POOL[:pool_size]
    upper = np.triu(rng.integers(min_distance, max_distance + 1, size=(pool_size, pool_size), dtype=np.int64), k=1)
    matrix = upper + upper.T
    home = cities[int(rng.integers(0, pool_size))]
    model = DistanceModel(cities=cities, matrix=matrix)
    logger.debug("generated %d-city instance, home=%s", pool_size, home)
    return model, home
