from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Optional, Sequence, Tuple

from .core import DistanceModel
from .errors import ConfigurationError, SessionNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Session:
    session_id: int
    model: DistanceModel
    home: str
    cities: Tuple[str, ...]
    player_name: Optional[str] = None
    created_at: float = field(default_factory=time.time)


class SessionStore:
    """
    Lock-guarded map of session id -> Session.

    Ids come from a counter that never goes backwards, so an id is never
    reused even after its session is evicted. Sessions are write-once: there
    is no update, only create/get.
    """

    def __init__(self, max_sessions: Optional[int] = None) -> None:
        if max_sessions is not None and max_sessions < 1:
            raise ConfigurationError(f"max_sessions must be at least 1, got {max_sessions}")
        self.max_sessions = max_sessions
        self._lock = threading.Lock()
        self._sessions: "OrderedDict[int, Session]" = OrderedDict()
        self._next_id = 1

    def create_session(
        self,
        model: DistanceModel,
        home: str,
        cities: Sequence[str],
        player_name: Optional[str] = None,
    ) -> Session:
        """Store a new session and return it without a second lookup."""
        if not model.contains(home):
            raise ConfigurationError(f"Home city {home!r} is not part of the model")
        with self._lock:
            session = Session(
                session_id=self._next_id,
                model=model,
                home=home,
                cities=tuple(cities),
                player_name=player_name,
            )
            self._next_id += 1
            self._sessions[session.session_id] = session
            # Oldest-first eviction.
            while self.max_sessions is not None and len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.debug("evicted session %d", evicted)
        logger.info("created session %d (home=%s, %d cities)", session.session_id, home, len(cities))
        return session

    def create(
        self,
        model: DistanceModel,
        home: str,
        cities: Sequence[str],
        player_name: Optional[str] = None,
    ) -> int:
        return self.create_session(model, home, cities, player_name=player_name).session_id

    def get(self, session_id: int) -> Session:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(f"Session {session_id} not found; start a new game")
        return session

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def __contains__(self, session_id: object) -> bool:
        with self._lock:
            return session_id in self._sessions
