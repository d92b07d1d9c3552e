import os
import sys
import tempfile
from pathlib import Path

# Ensure the application package under src/ is importable when running tests
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / 'src'
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))

os.environ.setdefault('FLASK_ENV', 'testing')
os.environ.setdefault('LOG_DIR', str(Path(tempfile.gettempdir()) / 'uiforge-test-logs'))

import pytest

from uiforge.factory import create_app
from uiforge.extensions import db as _db
from uiforge.services.completion_client import CompletionError
from uiforge.services.user_store import InMemoryUserStore


class FakeCompletionClient:
    """Completion client double: replays queued replies and records calls.

    A queued ``Exception`` instance is raised instead of returned. When the
    queue is empty every call fails with ``CompletionError``.
    """

    model_name = 'fake-model'

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []

    def queue(self, *replies):
        self.replies.extend(replies)
        return self

    def complete(self, messages, *, max_tokens=2048, temperature=0.3):
        self.calls.append({'messages': messages, 'max_tokens': max_tokens, 'temperature': temperature})
        if not self.replies:
            raise CompletionError("no reply queued", status_code=503)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def app():
    """Create application for the tests with a fresh in-memory database.

    No context stays pushed while requests run; Flask-Login caches the user
    on the app context, which would leak between test clients.
    """
    app = create_app('testing')
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def app_context(app):
    """Application context for tests that use the database directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create a test client."""
    return app.test_client()


@pytest.fixture
def components(app):
    return app.extensions['app_components']


@pytest.fixture
def completion_double():
    """Standalone fake completion client (fails until replies are queued)."""
    return FakeCompletionClient()


@pytest.fixture
def fake_client(components, completion_double):
    """Fake completion client installed into the app."""
    components.set_completion_client(completion_double)
    return completion_double


@pytest.fixture
def memory_store():
    return InMemoryUserStore(bcrypt_rounds=4)


@pytest.fixture
def registered_client(client):
    """Test client logged in as a freshly registered user."""
    response = client.post('/api/auth/register', json={
        'email': 'ada@example.com',
        'password': 'correct-horse',
        'username': 'ada',
        'firstName': 'Ada',
        'lastName': 'Lovelace',
    })
    assert response.status_code == 201
    return client
