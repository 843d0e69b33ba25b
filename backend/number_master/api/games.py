from flask import Blueprint, jsonify, request, current_app
from number_master import socketio
from number_master.services.games.errors import GameError, StorageError
from number_master.services.games.ledger import INSERTED, UPDATED
from number_master.services.games.session import WON


games = Blueprint('games', __name__)


def _sessions():
    return current_app.extensions['game_sessions']


def _room(session_id: str) -> str:
    return f"session:{session_id}"


def _emit(event: str, payload: dict, session_id: str) -> None:
    socketio.emit(event, payload, to=_room(session_id), namespace='/ws')


@games.errorhandler(GameError)
def handle_game_error(exc: GameError):
    return jsonify(exc.to_dict()), exc.status


@games.route('/start', methods=['POST'])
def start_game():
    data = request.get_json(silent=True) or {}
    session, previous = _sessions().start(data.get('player_name'))
    if previous is not None and previous.state != WON:
        current_app.logger.info(f"[abandon] session={previous.session_id} player={previous.player_name} replaced")
        _emit('abandoned', {'session_id': previous.session_id}, previous.session_id)

    existing_player = None
    try:
        existing_player = current_app.extensions['leaderboard'].lookup_player(session.player_name) is not None
    except StorageError as exc:
        current_app.logger.warning(f"[start] player lookup failed for {session.player_name}: {exc}")

    current_app.logger.info(f"[start] session={session.session_id} player={session.player_name}")
    _emit('started', {'session_id': session.session_id, 'player_name': session.player_name}, session.session_id)
    return jsonify({'session': session.to_dict(), 'existing_player': existing_player}), 201


@games.route('/<string:session_id>/state', methods=['GET'])
def get_state(session_id):
    return jsonify(_sessions().get(session_id).to_dict())


@games.route('/<string:session_id>/guess', methods=['POST'])
def submit_guess(session_id):
    data = request.get_json(silent=True) or {}
    session, entry = _sessions().submit_guess(session_id, data.get('guess'))
    current_app.logger.info(
        f"[guess] session={session_id} number={entry.number} result={entry.result} attempts={session.attempts}"
    )
    _emit('guessed', {'session_id': session_id, 'entry': entry.to_dict()}, session_id)

    payload = {'entry': entry.to_dict(), 'session': session.to_dict()}
    if not session.is_won:
        return jsonify(payload)

    score = session.score
    current_app.logger.info(
        f"[won] session={session_id} player={session.player_name} attempts={score.attempts} time={score.time_seconds}s"
    )
    _emit('won', dict(score.to_dict(), session_id=session_id), session_id)
    payload['score'] = score.to_dict()
    payload.update(_record_win(session.player_name, score))
    return jsonify(payload)


def _record_win(player_name: str, score) -> dict:
    """Reconcile a won round and refresh the champion.

    Best-effort: storage failures are logged and reported, the win stands.
    """
    result = {'ledger': None, 'best': None}
    try:
        outcome = current_app.extensions['score_ledger'].reconcile(player_name, score)
    except StorageError as exc:
        current_app.logger.error(f"[reconcile-failed] player={player_name}: {exc}")
        result['ledger_error'] = str(exc)
        return result
    current_app.logger.info(f"[reconcile] player={player_name} outcome={outcome}")
    result['ledger'] = outcome

    try:
        best = current_app.extensions['leaderboard'].best_overall()
    except StorageError as exc:
        current_app.logger.error(f"[leaderboard-failed] {exc}")
        return result
    result['best'] = best.to_dict() if best else None
    if outcome in (INSERTED, UPDATED):
        socketio.emit('leaderboard_update', {'best': result['best']}, namespace='/ws')
    return result


@games.route('/<string:session_id>/abandon', methods=['POST'])
def abandon_game(session_id):
    session = _sessions().abandon(session_id)
    current_app.logger.info(f"[abandon] session={session_id} player={session.player_name} state={session.state}")
    _emit('abandoned', {'session_id': session_id}, session_id)
    return jsonify({'abandoned': True, 'session_id': session_id})
