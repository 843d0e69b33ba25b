from flask import Blueprint, jsonify, request, current_app
from number_master.services.games.errors import GameError, StorageError


leaderboard = Blueprint('leaderboard', __name__)


def _query():
    return current_app.extensions['leaderboard']


@leaderboard.errorhandler(GameError)
def handle_game_error(exc: GameError):
    return jsonify(exc.to_dict()), exc.status


@leaderboard.errorhandler(StorageError)
def handle_storage_error(exc: StorageError):
    current_app.logger.error(f"[leaderboard-failed] {request.path}: {exc}")
    return jsonify(exc.to_dict()), exc.status


@leaderboard.route('/leaderboard/best', methods=['GET'])
def best_overall():
    best = _query().best_overall()
    return jsonify({'best': best.to_dict() if best else None})


@leaderboard.route('/leaderboard/top', methods=['GET'])
def top_scores():
    default_limit = int(current_app.config.get('LEADERBOARD_TOP_LIMIT', 10))
    limit = request.args.get('limit', default_limit, type=int)
    return jsonify({'records': [r.to_dict() for r in _query().top(limit)]})


@leaderboard.route('/players/<string:player_name>', methods=['GET'])
def lookup_player(player_name):
    record = _query().lookup_player(player_name)
    return jsonify({
        'player_name': player_name.strip(),
        'exists': record is not None,
        'record': record.to_dict() if record else None,
    })
