import pytest
from sqlalchemy.exc import OperationalError

from number_master.models import GameRecord
from number_master.services.games.errors import InvalidPlayerName, StorageError
from number_master.services.games.ranking import Score, best_of


def test_empty_store_has_no_champion(leaderboard):
    assert leaderboard.best_overall() is None
    assert leaderboard.top() == []


def test_first_insert_becomes_champion(ledger, leaderboard):
    ledger.reconcile('Ann', Score(3, 14.2))
    best = leaderboard.best_overall()
    assert best.player_name == 'Ann'
    assert best.attempts == 3


def test_champion_follows_ranking_order(ledger, leaderboard):
    ledger.reconcile('Ann', Score(3, 14.2))
    ledger.reconcile('Bo', Score(3, 9.8))
    ledger.reconcile('Cy', Score(5, 1.0))
    assert leaderboard.best_overall().player_name == 'Bo'

    # An update that beats the champion is reflected on the next query
    ledger.reconcile('Cy', Score(2, 40.0))
    assert leaderboard.best_overall().player_name == 'Cy'


def test_champion_matches_in_process_ranking(ledger, leaderboard):
    scores = {'a': Score(7, 3.3), 'b': Score(4, 8.1), 'c': Score(4, 8.09), 'd': Score(9, 0.5)}
    for name, score in scores.items():
        ledger.reconcile(name, score)
    expected = best_of(GameRecord.query.all())
    assert leaderboard.best_overall().player_name == expected.player_name == 'c'


def test_top_is_ordered_and_limited(ledger, leaderboard):
    for i, name in enumerate(['p1', 'p2', 'p3', 'p4']):
        ledger.reconcile(name, Score(10 - i, 5.0))
    top = leaderboard.top(limit=2)
    assert [r.player_name for r in top] == ['p4', 'p3']
    assert len(leaderboard.top(limit=0)) == 1


def test_lookup_player(ledger, leaderboard):
    assert leaderboard.lookup_player('Ann') is None
    ledger.reconcile('Ann', Score(3, 1.0))
    assert leaderboard.lookup_player(' Ann ').attempts == 3
    with pytest.raises(InvalidPlayerName):
        leaderboard.lookup_player('  ')


def test_read_failure_raises_storage_error(leaderboard, monkeypatch):
    def broken_first(self):
        raise OperationalError('SELECT', {}, Exception('connection lost'))

    monkeypatch.setattr('sqlalchemy.orm.Query.first', broken_first)
    with pytest.raises(StorageError):
        leaderboard.best_overall()
