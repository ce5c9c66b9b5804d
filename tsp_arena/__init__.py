from .core import CITY_POOL, DistanceModel, route_distance
from .errors import (
    ArenaError,
    ConfigurationError,
    InvalidRouteError,
    SearchBudgetError,
    SessionNotFoundError,
    SolverTimeoutError,
)
from .config import ArenaConfig
from .generator import make_rng, new_instance
from .exact import BruteForceSolver, solve_exact
from .heuristics import MSTPrimSolver, NearestNeighborSolver, RandomSearchSolver, default_heuristics
from .solution import AlgorithmResult, EvaluationReport, Solver, emit_report, validate_route
from .sessions import Session, SessionStore
from .evaluator import Evaluator, normalize_route
from .arena import Arena

__all__ = [
    "CITY_POOL",
    "DistanceModel",
    "route_distance",
    "ArenaError",
    "ConfigurationError",
    "InvalidRouteError",
    "SearchBudgetError",
    "SessionNotFoundError",
    "SolverTimeoutError",
    "ArenaConfig",
    "make_rng",
    "new_instance",
    "BruteForceSolver",
    "solve_exact",
    "MSTPrimSolver",
    "NearestNeighborSolver",
    "RandomSearchSolver",
    "default_heuristics",
    "AlgorithmResult",
    "EvaluationReport",
    "Solver",
    "emit_report",
    "validate_route",
    "Session",
    "SessionStore",
    "Evaluator",
    "normalize_route",
    "Arena",
]
