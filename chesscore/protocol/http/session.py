from __future__ import annotations

import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from ...engine.game import Game


@dataclass
class GameSession:
    """One player's game as held by the HTTP layer."""

    game_id: str
    game: Game
    created_at: float = field(default_factory=time.monotonic)

    def age_seconds(self) -> float:
        return time.monotonic() - self.created_at


class InMemorySessionStore:
    """Game sessions keyed by id, shared across request handlers.

    The map itself is guarded by a re-entrant lock. Handlers either mutate
    a session's ``Game`` in place (moves, undo, bot replies) or swap in a
    new one with ``replace`` (position loads, resets). Searches never touch
    the stored board; they run on a copy.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, GameSession] = {}

    def create(self, game: Optional[Game] = None) -> GameSession:
        session = GameSession(game_id=uuid.uuid4().hex, game=game if game is not None else Game.new())
        with self._lock:
            self._sessions[session.game_id] = session
        return session

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.get(game_id)

    def replace(self, game_id: str, game: Game) -> GameSession:
        """Install ``game`` in an existing session.

        Raises:
            KeyError: If there is no session ``game_id``.
        """
        with self._lock:
            session = self._sessions[game_id]
            session.game = game
            return session

    def delete(self, game_id: str) -> Optional[GameSession]:
        """Remove and return a session, or None if it did not exist."""
        with self._lock:
            return self._sessions.pop(game_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
