"""Score reconciliation against the persistent store.

``ScoreLedger.reconcile`` is the only writer of score records. It reads the
player's record and then, only if needed, writes it. The two steps are not
atomic: two rounds of the same player finishing at the same moment could let
a worse result overwrite a better one. One active round per player is assumed;
the unique ``player_name`` column keeps concurrent first rounds from producing
duplicate records (the losing insert raises ``StorageError``).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from . import ranking as default_ranking
from .session import normalize_player_name


INSERTED = 'inserted'
UPDATED = 'updated'
UNCHANGED = 'unchanged'


@dataclass(frozen=True)
class ScoreRecord:
    player_name: str
    attempts: int
    time_seconds: float
    created_at: Optional[datetime] = None

    def to_dict(self):
        return {
            'player_name': self.player_name,
            'attempts': self.attempts,
            'time_seconds': self.time_seconds,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


class ScoreStore(ABC):
    """Persistent collaborator holding one ScoreRecord per player name.

    Implementations raise ``StorageError`` on backend failure.
    """

    @abstractmethod
    def find_by_player(self, player_name: str) -> Optional[ScoreRecord]:
        ...

    @abstractmethod
    def find_best_overall(self) -> Optional[ScoreRecord]:
        ...

    @abstractmethod
    def find_top(self, limit: int) -> List[ScoreRecord]:
        ...

    @abstractmethod
    def insert(self, record: ScoreRecord) -> None:
        ...

    @abstractmethod
    def update_by_player(self, player_name: str, fields: dict) -> None:
        ...


def _utcnow():
    return datetime.now(timezone.utc)


class ScoreLedger:
    def __init__(self, store: ScoreStore, ranking=default_ranking, now: Callable[[], datetime] = _utcnow):
        self.store = store
        self.ranking = ranking
        self.now = now

    def reconcile(self, player_name: str, score) -> str:
        """Record ``score`` for the player if it is their first or a better one.

        Returns ``INSERTED``, ``UPDATED`` or ``UNCHANGED``.
        """
        name = normalize_player_name(player_name)
        existing = self.store.find_by_player(name)
        if existing is None:
            self.store.insert(ScoreRecord(
                player_name=name,
                attempts=score.attempts,
                time_seconds=score.time_seconds,
                created_at=self.now(),
            ))
            return INSERTED

        if not self.ranking.is_better(score, existing):
            return UNCHANGED

        self.store.update_by_player(name, {
            'attempts': score.attempts,
            'time_seconds': score.time_seconds,
            'created_at': self.now(),
        })
        return UPDATED
