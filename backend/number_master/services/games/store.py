from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError

from number_master.models import GameRecord
from .errors import StorageError
from .ledger import ScoreRecord, ScoreStore
from .ranking import RANK_FIELDS


def _to_record(row: Optional[GameRecord]) -> Optional[ScoreRecord]:
    if row is None:
        return None
    return ScoreRecord(
        player_name=row.player_name,
        attempts=row.attempts,
        time_seconds=row.time_seconds,
        created_at=row.created_at,
    )


class SqlScoreStore(ScoreStore):
    """ScoreStore backed by the ``game_records`` table.

    Any SQLAlchemy failure rolls the session back and surfaces as StorageError.
    """

    def __init__(self, db):
        self.db = db

    def _ranked(self):
        return GameRecord.query.order_by(*[getattr(GameRecord, f).asc() for f in RANK_FIELDS])

    def _fail(self, action: str, exc: Exception):
        self.db.session.rollback()
        raise StorageError(f'Could not {action}: {exc.__class__.__name__}') from exc

    def find_by_player(self, player_name: str) -> Optional[ScoreRecord]:
        try:
            return _to_record(GameRecord.query.filter_by(player_name=player_name).first())
        except SQLAlchemyError as exc:
            self._fail('read player record', exc)

    def find_best_overall(self) -> Optional[ScoreRecord]:
        try:
            return _to_record(self._ranked().first())
        except SQLAlchemyError as exc:
            self._fail('read best record', exc)

    def find_top(self, limit: int) -> List[ScoreRecord]:
        try:
            return [_to_record(r) for r in self._ranked().limit(limit).all()]
        except SQLAlchemyError as exc:
            self._fail('read leaderboard', exc)

    def insert(self, record: ScoreRecord) -> None:
        try:
            row = GameRecord(
                player_name=record.player_name,
                attempts=record.attempts,
                time_seconds=record.time_seconds,
            )
            if record.created_at is not None:
                row.created_at = record.created_at
            self.db.session.add(row)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            self._fail('insert record', exc)

    def update_by_player(self, player_name: str, fields: dict) -> None:
        try:
            GameRecord.query.filter_by(player_name=player_name).update(fields)
            self.db.session.commit()
        except SQLAlchemyError as exc:
            self._fail('update record', exc)
