"""
Pytest fixtures and configuration for Ops Board tests
"""
import os
import sys
import pytest

# Add app directory to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), 'app'))

ADMIN_NAME = 'Head Chef'
ADMIN_PIN = '1234'


class RecordingBroadcaster:
    """Stand-in for the realtime fan-out that remembers every refresh"""

    def __init__(self):
        self.reasons = []

    def notify_board_changed(self, reason='mutation'):
        self.reasons.append(reason)
        return True


@pytest.fixture
def app_config(tmp_path):
    """Testing overrides applied on top of the loaded settings"""
    return {
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///' + str(tmp_path / 'opsboard-test.db'),
        'SECRET_KEY': 'test-secret-key',
        'SESSION_EXPIRY_SECONDS': 3600,
        'SOCKETIO_ASYNC_MODE': 'threading',
        'SOCKETIO_MESSAGE_QUEUE': None,
        'RATELIMIT_ENABLED': False,
        'RATELIMIT_STORAGE_URI': 'memory://',
        'NOTE_EXPIRY_SWEEP_SECONDS': 0,
        'SEED_DEMO_DATA': False,
        'ADMIN_NAME': ADMIN_NAME,
        'ADMIN_PIN': ADMIN_PIN,
    }


@pytest.fixture
def app(app_config):
    from app import create_app

    _app = create_app(app_config)
    yield _app

    from db import db
    with _app.app_context():
        db.session.remove()
        db.engine.dispose()


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def admin_token(client):
    response = client.post('/api/auth/login', json={'name': ADMIN_NAME, 'pin': ADMIN_PIN})
    assert response.status_code == 200
    return response.get_json()['data']['token']


@pytest.fixture
def auth_headers(admin_token):
    return {'Authorization': f'Bearer {admin_token}'}


@pytest.fixture
def staff_headers(app, client):
    from auth import create_user

    with app.app_context():
        create_user('Line Cook', '5678')
    response = client.post('/api/auth/login', json={'name': 'Line Cook', 'pin': '5678'})
    return {'Authorization': f"Bearer {response.get_json()['data']['token']}"}


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def service(app, broadcaster):
    """A BoardService bound to a recording broadcaster, inside an app context"""
    from services.board_service import BoardService

    with app.app_context():
        yield BoardService(broadcaster)


@pytest.fixture
def admin_id(app):
    from repositories.user_repository import UserRepository

    with app.app_context():
        return UserRepository.find_by_name(ADMIN_NAME).id
