from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping, Optional

from .core import CITY_POOL
from .errors import ConfigurationError
from .exact import DEFAULT_TIME_LIMIT_SEC, check_cap

ENV_PREFIX = "TSP_ARENA_"


@dataclass
class ArenaConfig:
    """Knobs for instance generation, solvers and the session store."""

    pool_size: int = 10
    min_distance: int = 50
    max_distance: int = 100
    random_search_budget: int = 1000
    # Caps brute force at 8! permutations; raising it needs exact_time_limit_sec.
    max_selected: int = 8
    exact_time_limit_sec: Optional[float] = DEFAULT_TIME_LIMIT_SEC
    max_sessions: Optional[int] = 1000
    seed: Optional[int] = None

    def validate(self) -> "ArenaConfig":
        if self.pool_size < 2 or self.pool_size > len(CITY_POOL):
            raise ConfigurationError(f"pool_size must be in [2, {len(CITY_POOL)}], got {self.pool_size}")
        if self.min_distance < 0:
            raise ConfigurationError(f"min_distance must be non-negative, got {self.min_distance}")
        if self.min_distance > self.max_distance:
            raise ConfigurationError(
                f"min_distance ({self.min_distance}) must not exceed max_distance ({self.max_distance})"
            )
        check_cap(self.max_selected, self.exact_time_limit_sec)
        if self.max_sessions is not None and self.max_sessions < 1:
            raise ConfigurationError(f"max_sessions must be at least 1, got {self.max_sessions}")
        return self

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ArenaConfig":
        """
        Build a config from TSP_ARENA_<FIELD> variables, e.g. TSP_ARENA_POOL_SIZE=8.
        Unset variables keep their defaults; an empty value means None for optional fields.
        """
        env = os.environ if environ is None else environ
        values = {}
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            raw = raw.strip()
            if raw == "" and f.name in ("max_sessions", "seed", "exact_time_limit_sec"):
                values[f.name] = None
                continue
            try:
                values[f.name] = float(raw) if f.name == "exact_time_limit_sec" else int(raw)
            except ValueError:
                raise ConfigurationError(f"{ENV_PREFIX}{f.name.upper()} must be a number, got {raw!r}") from None
        return cls(**values).validate()
