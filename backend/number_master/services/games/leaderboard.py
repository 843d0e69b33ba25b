from typing import List, Optional

from .ledger import ScoreRecord, ScoreStore
from .session import normalize_player_name


MAX_TOP_LIMIT = 100


class LeaderboardQuery:
    """Read-only views over the score store: champion, top list, player lookup."""

    def __init__(self, store: ScoreStore):
        self.store = store

    def best_overall(self) -> Optional[ScoreRecord]:
        return self.store.find_best_overall()

    def top(self, limit: int = 10) -> List[ScoreRecord]:
        limit = max(1, min(int(limit), MAX_TOP_LIMIT))
        return self.store.find_top(limit)

    def lookup_player(self, player_name: str) -> Optional[ScoreRecord]:
        return self.store.find_by_player(normalize_player_name(player_name))
