from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from number_master.config import Config

db = SQLAlchemy()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    allowed_origins = flask_app.config.get('CORS_ORIGINS') or []

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One store handle per app, shared by the ledger and the leaderboard
    from number_master.services.games.store import SqlScoreStore
    from number_master.services.games.ledger import ScoreLedger
    from number_master.services.games.leaderboard import LeaderboardQuery
    from number_master.services.games.registry import SessionRegistry
    store = SqlScoreStore(db)
    flask_app.extensions['score_ledger'] = ScoreLedger(store)
    flask_app.extensions['leaderboard'] = LeaderboardQuery(store)
    flask_app.extensions['game_sessions'] = SessionRegistry()

    from number_master.main import main
    flask_app.register_blueprint(main)

    from number_master.api.games import games
    flask_app.register_blueprint(games, url_prefix='/api/games')

    from number_master.api.leaderboard import leaderboard
    flask_app.register_blueprint(leaderboard, url_prefix='/api')

    from number_master.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    @click.command('db-reset')
    def db_reset_command():
        """Drops and recreates the score tables."""
        import number_master.models  # noqa: F401
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            print('Database has been reset!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
