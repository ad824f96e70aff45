"""
In-memory registry of live game sessions for the HTTP API.

Sessions are not thread-safe; the registry lock guards
the mapping and serialises calls into a given session.
"""

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from domain.config import WorldConfig
from domain.random_source import SystemRandomSource
from domain.session import GameSession

logger = logging.getLogger(__name__)

MAX_SESSIONS = 100


class SessionNotFound(KeyError):
    """Raised when a session id is not registered."""


@dataclass
class SessionEntry:
    game_id: str
    session: GameSession
    seed: Optional[int] = None
    lock: threading.Lock = field(default_factory=threading.Lock)


class SessionRegistry:
    def __init__(self, config: Optional[WorldConfig] = None, max_sessions: int = MAX_SESSIONS):
        self.config = config or WorldConfig()
        self.max_sessions = max_sessions
        self._entries: Dict[str, SessionEntry] = {}
        self._lock = threading.Lock()

    def create(self, now: float = 0.0, seed: Optional[int] = None,
               config: Optional[WorldConfig] = None) -> SessionEntry:
        """
        Create and start a new session.

        When the registry is full, finished sessions (game over, escaped or
        torn down) are evicted first. Raises RuntimeError if every slot is
        still held by a running session.
        """
        with self._lock:
            if len(self._entries) >= self.max_sessions:
                self._evict_finished()
            if len(self._entries) >= self.max_sessions:
                raise RuntimeError(f"Too many live sessions (limit {self.max_sessions})")
            game_id = str(uuid.uuid4())
            session = GameSession(config=config or self.config, rng=SystemRandomSource(seed))
            session.start_session(now=now)
            entry = SessionEntry(game_id=game_id, session=session, seed=seed)
            self._entries[game_id] = entry

        logger.info(f"Created session {game_id} (seed={seed})")
        return entry

    def _evict_finished(self) -> None:
        finished = [game_id for game_id, entry in self._entries.items() if not entry.session.active]
        for game_id in finished:
            self._entries.pop(game_id).session.teardown()
        if finished:
            logger.info(f"Evicted {len(finished)} finished sessions")

    def get(self, game_id: str) -> SessionEntry:
        with self._lock:
            entry = self._entries.get(game_id)
        if entry is None:
            raise SessionNotFound(game_id)
        return entry

    def remove(self, game_id: str) -> None:
        """Tear the session down and forget it."""
        with self._lock:
            entry = self._entries.pop(game_id, None)
        if entry is None:
            raise SessionNotFound(game_id)
        with entry.lock:
            entry.session.teardown()
        logger.info(f"Removed session {game_id}")

    def clear(self) -> None:
        with self._lock:
            entries = list(self._entries.values())
            self._entries.clear()
        for entry in entries:
            entry.session.teardown()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, game_id: str) -> bool:
        with self._lock:
            return game_id in self._entries
