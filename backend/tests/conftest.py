import os
import sys
import pytest
from flask import g

# Ensure the backend root (containing the `athlete_unknown` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from athlete_unknown import create_app, db, socketio
from athlete_unknown.services.games.board import PlayerFact


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    CORS_ORIGINS = 'http://localhost:3000'


BABE_RUTH = {
    'roundId': 'baseball-12',
    'sport': 'baseball',
    'playDate': '2025-06-01',
    'player': {
        'name': 'Babe Ruth',
        'bio': 'Born in Baltimore',
        'playerInformation': 'Outfielder',
        'draftInformation': 'Signed 1914',
        'yearsActive': '1914-1935',
        'teamsPlayedOn': 'BOS, NYY, BSN',
        'jerseyNumbers': '3',
        'careerStats': '714 HR',
        'personalAchievements': '7x champion',
        'photo': 'ruth.jpg',
    },
}


@pytest.fixture()
def babe_ruth():
    return PlayerFact.from_dict({**BABE_RUTH['player'], 'sport': 'baseball'})


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)

    @application.before_request
    def forget_cached_user():
        # The app context below outlives each request, and Flask-Login caches the user on g
        g.pop('_login_user', None)

    with application.app_context():
        # Ensure models are imported so tables are created
        import athlete_unknown.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def seeded_round(flask_app):
    from athlete_unknown.seed import upsert_round
    rnd = upsert_round(BABE_RUTH)
    db.session.commit()
    return rnd


@pytest.fixture()
def alice():
    return {'X-User-Id': 'auth0|alice', 'X-User-Name': 'Alice'}


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass
