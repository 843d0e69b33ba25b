from datetime import datetime, timezone

from number_master import db


def _utcnow():
    return datetime.now(timezone.utc)


class GameRecord(db.Model):
    """Best result of one player. ``player_name`` is the natural key."""
    __tablename__ = 'game_records'
    id = db.Column(db.Integer, primary_key=True)
    player_name = db.Column(db.String(64), unique=True, nullable=False, index=True)
    attempts = db.Column(db.Integer, nullable=False)
    time_seconds = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'player_name': self.player_name,
            'attempts': self.attempts,
            'time_seconds': self.time_seconds,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<GameRecord(player_name='{self.player_name}', attempts={self.attempts}, time_seconds={self.time_seconds})>"
