import os
import sys
import pytest

# Ensure the backend root (containing the `cardrps` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from cardrps import create_app, socketio
from cardrps.coordinator import Coordinator
from cardrps.dispatcher import Dispatcher
from cardrps.services.games.deck import CARD_TYPES


class TestConfig:
    TESTING = True
    SECRET_KEY = 'test-secret'
    SOCKETIO_NAMESPACE = '/'
    CORS_ORIGINS = '*'
    CARDS_PER_PLAYER = 15
    TURN_TIMEOUT_SEC = 0


class RecordingDispatcher(Dispatcher):
    """Collects (recipient, event, payload) tuples; recipient '*' means everyone."""

    def __init__(self):
        self.sent = []

    def to_one(self, sid, event, payload=None):
        self.sent.append((sid, event, payload))

    def to_all(self, event, payload=None):
        self.sent.append(('*', event, payload))

    def events_for(self, sid, event=None):
        return [
            (name, payload) for to, name, payload in self.sent
            if to in (sid, '*') and (event is None or name == event)
        ]

    def payloads(self, sid, event):
        return [payload for _, payload in self.events_for(sid, event)]

    def clear(self):
        self.sent.clear()


def unshuffled_deck(hand_size):
    return [CARD_TYPES[i % 3] for i in range(hand_size * 2)]


@pytest.fixture()
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture()
def coordinator(dispatcher):
    return Coordinator(dispatcher, cards_per_player=15, deck_factory=unshuffled_deck)


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_factory(flask_app):
    clients = []

    def _make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        clients.append(test_client)
        return test_client

    yield _make
    for test_client in clients:
        try:
            if test_client.is_connected():
                test_client.disconnect()
        except Exception:
            pass
