from flask_socketio import join_room, leave_room, emit
from flask import current_app


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    room = f"session:{session_id}"
    join_room(room)
    emit('joined', {'room': room})


def handle_leave_session(data):
    session_id = (data or {}).get('session_id')
    if not session_id:
        emit('error', {'message': 'session_id is required'})
        return
    room = f"session:{session_id}"
    leave_room(room)
    emit('left', {'room': room})


def handle_leaderboard(data=None):
    """Push the current champion to the requesting client only."""
    from number_master.services.games.errors import StorageError
    try:
        best = current_app.extensions['leaderboard'].best_overall()
    except StorageError as exc:
        current_app.logger.error(f"[leaderboard-failed] socket request: {exc}")
        emit('error', exc.to_dict())
        return
    emit('leaderboard_update', {'best': best.to_dict() if best else None})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from number_master import socketio

    namespaces = ['/ws', '/'] if testing else ['/ws']
    for ns in namespaces:
        socketio.on_event('connect', handle_connect, namespace=ns)
        socketio.on_event('join_session', handle_join_session, namespace=ns)
        socketio.on_event('leave_session', handle_leave_session, namespace=ns)
        socketio.on_event('leaderboard', handle_leaderboard, namespace=ns)
        socketio.on_event('ping', handle_ping, namespace=ns)
