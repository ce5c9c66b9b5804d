from __future__ import annotations


class ArenaError(Exception):
    """Base class for every failure the engine reports back to a caller."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(ArenaError, ValueError):
    """Generator or solver parameters are unusable."""


class SearchBudgetError(ArenaError, ValueError):
    """Random search was configured with a non-positive sample budget."""


class InvalidRouteError(ArenaError, ValueError):
    status_code = 400


class SessionNotFoundError(ArenaError, LookupError):
    """Unknown, stale or evicted session id. Recoverable by starting a new round."""

    status_code = 404


class SolverTimeoutError(ArenaError):
    """Brute force ran past its time limit."""

    status_code = 503
