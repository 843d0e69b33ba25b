"""Ranking policy: the one definition of a "better" result.

Fewer attempts wins; on equal attempts the lower time wins; a result equal on
both fields is not better. The SQL store orders by ``RANK_FIELDS`` too, so the
database and this module always agree.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


RANK_FIELDS = ('attempts', 'time_seconds')


@dataclass(frozen=True)
class Score:
    attempts: int
    time_seconds: float

    def to_dict(self):
        return {'attempts': self.attempts, 'time_seconds': self.time_seconds}


def rank_key(result) -> Tuple:
    return tuple(getattr(result, f) for f in RANK_FIELDS)


def is_better(candidate, incumbent) -> bool:
    return rank_key(candidate) < rank_key(incumbent)


def best_of(results: Iterable) -> Optional[object]:
    best = None
    for r in results:
        if best is None or is_better(r, best):
            best = r
    return best
