from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Sequence

import numpy as np

from .config import ArenaConfig
from .evaluator import Evaluator, normalize_route
from .exact import BruteForceSolver
from .generator import make_rng, new_instance
from .heuristics import default_heuristics
from .sessions import Session, SessionStore
from .solution import EvaluationReport

logger = logging.getLogger(__name__)


class Arena:
    """
    Wires generator, session store and evaluator together behind the two game
    operations: start a round and check an answer.
    """

    def __init__(
        self,
        config: Optional[ArenaConfig] = None,
        rng: Optional[np.random.Generator] = None,
        evaluator: Optional[Evaluator] = None,
        store: Optional[SessionStore] = None,
    ) -> None:
        self.config = (config or ArenaConfig()).validate()
        self.rng = rng if rng is not None else make_rng(self.config.seed)
        # numpy Generators are not thread-safe.
        self._rng_lock = threading.Lock()
        self.store = store if store is not None else SessionStore(max_sessions=self.config.max_sessions)
        self.evaluator = evaluator or Evaluator(
            heuristics=default_heuristics(budget=self.config.random_search_budget, seed=self.config.seed),
            exact=BruteForceSolver(
                max_selected=self.config.max_selected,
                time_limit_sec=self.config.exact_time_limit_sec,
            ),
        )

    def new_game(self, player_name: Optional[str] = None) -> Session:
        cfg = self.config
        with self._rng_lock:
            model, home = new_instance(
                pool_size=cfg.pool_size,
                min_distance=cfg.min_distance,
                max_distance=cfg.max_distance,
                rng=self.rng,
            )
        return self.store.create_session(model, home, model.cities, player_name=player_name)

    def check_answer(
        self,
        session_id: int,
        route: Optional[Sequence[str]] = None,
        route_between: Optional[Sequence[str]] = None,
        player_name: Optional[str] = None,
    ) -> EvaluationReport:
        session = self.store.get(session_id)
        full_route = normalize_route(session.home, route=route, route_between=route_between)
        report = self.evaluator.evaluate(session, full_route)
        logger.info(
            "session %d player=%s correct=%s",
            session_id,
            player_name or session.player_name or "-",
            report.correct,
        )
        return report

    def complexity(self) -> Dict[str, str]:
        return self.evaluator.complexity_table()
