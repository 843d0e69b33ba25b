import random
import threading
import time
from typing import Dict, Optional, Tuple

from .errors import SessionNotFound
from .session import GameSession, GuessEntry, generate_session_id, normalize_player_name


class SessionRegistry:
    """Active rounds of this process, keyed by session id.

    One round per player name: starting a new round drops the player's
    previous one. Won rounds stay readable until the next ``start``, which
    clears them out. Evaluation of a guess and storing the resulting session
    happen under one lock, so a session sees its guesses in submission order.
    """

    def __init__(self, clock=time.time, rng: Optional[random.Random] = None):
        self.clock = clock
        self.rng = rng or random.Random()
        self._sessions: Dict[str, GameSession] = {}
        self._by_player: Dict[str, str] = {}
        self._lock = threading.Lock()

    def __len__(self):
        return len(self._sessions)

    def start(self, player_name) -> Tuple[GameSession, Optional[GameSession]]:
        """Create a round; returns it with the player's replaced round, if any."""
        name = normalize_player_name(player_name)
        with self._lock:
            self._prune_won(keep=self._by_player.get(name))
            session_id = generate_session_id(rng=self.rng)
            while session_id in self._sessions:
                session_id = generate_session_id(rng=self.rng)
            session = GameSession.start(name, clock=self.clock, rng=self.rng, session_id=session_id)
            previous = None
            prev_id = self._by_player.get(name)
            if prev_id:
                previous = self._sessions.pop(prev_id, None)
            self._sessions[session.session_id] = session
            self._by_player[name] = session.session_id
            return session, previous

    def _prune_won(self, keep: Optional[str] = None) -> None:
        # Caller holds the lock. ``keep`` is handed back to start() as the replaced round.
        for sid in [sid for sid, s in self._sessions.items() if s.is_won and sid != keep]:
            session = self._sessions.pop(sid)
            if self._by_player.get(session.player_name) == sid:
                del self._by_player[session.player_name]

    def get(self, session_id: str) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFound(f'No active round {session_id}')
        return session

    def submit_guess(self, session_id: str, raw) -> Tuple[GameSession, GuessEntry]:
        with self._lock:
            session = self.get(session_id)
            session, entry = session.submit_guess(raw)
            self._sessions[session_id] = session
            return session, entry

    def abandon(self, session_id: str) -> GameSession:
        with self._lock:
            session = self._sessions.pop(session_id, None)
            if session is None:
                raise SessionNotFound(f'No active round {session_id}')
            if self._by_player.get(session.player_name) == session_id:
                del self._by_player[session.player_name]
            return session
