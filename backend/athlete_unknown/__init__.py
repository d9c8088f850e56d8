from flask import Flask, jsonify
from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
import json
from config import Config

db = SQLAlchemy()
login_manager = LoginManager()
migrate = Migrate()
socketio = SocketIO(async_mode=None)


def _allowed_origins(flask_app):
    raw = flask_app.config.get('CORS_ORIGINS') or ''
    if isinstance(raw, (list, tuple)):
        return list(raw)
    return [o.strip() for o in raw.split(',') if o.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    # Fail fast on inconsistent penalty/threshold settings
    from athlete_unknown.services.games.rules import GameRules
    flask_app.extensions['game_rules'] = GameRules.from_config(flask_app.config)

    allowed_origins = _allowed_origins(flask_app)
    db.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from athlete_unknown.main import main
    flask_app.register_blueprint(main)

    from athlete_unknown.api.rounds import rounds
    flask_app.register_blueprint(rounds, url_prefix='/v1')

    from athlete_unknown.api.stats import stats
    flask_app.register_blueprint(stats, url_prefix='/v1')

    from athlete_unknown.socketio_events import register_socketio_handlers
    register_socketio_handlers(testing=flask_app.config.get('TESTING', False))

    # Identity comes from the upstream auth layer as request headers
    from athlete_unknown.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @login_manager.request_loader
    def load_user_from_request(request):
        external_id = (request.headers.get('X-User-Id') or '').strip()
        if not external_id:
            return None
        user = User.query.filter_by(external_id=external_id).first()
        if user is None:
            user = User(external_id=external_id, username=request.headers.get('X-User-Name') or external_id)
            db.session.add(user)
            db.session.commit()
            flask_app.logger.info(f"[user-created] user={user.id} external_id={external_id}")
        return user

    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Authentication required'}), 401

    @click.command('db-reset')
    def db_reset_command():
        """Drops, recreates, and seeds the database with sample rounds."""
        from athlete_unknown.seed import SAMPLE_ROUNDS, upsert_round
        with flask_app.app_context():
            db.drop_all()
            db.create_all()
            for data in SAMPLE_ROUNDS:
                upsert_round(data)
            db.session.commit()
            print('Database has been reset and seeded!')

    @click.command('import-rounds')
    @click.argument('path', type=click.Path(exists=True, dir_okay=False))
    def import_rounds_command(path):
        """Loads a JSON list of rounds, replacing any round with the same sport and play date."""
        from athlete_unknown.seed import upsert_round
        with open(path, encoding='utf-8') as fh:
            items = json.load(fh)
        with flask_app.app_context():
            for data in items:
                upsert_round(data)
            db.session.commit()
            print(f'Imported {len(items)} rounds.')

    flask_app.cli.add_command(db_reset_command)
    flask_app.cli.add_command(import_rounds_command)

    return flask_app
