from functools import partial

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config
from cardrps.coordinator import Coordinator
from cardrps.dispatcher import SocketIODispatcher

socketio = SocketIO(async_mode=None)


def _allowed_origins(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    if not value or value.strip() == '*':
        return '*'
    return [origin.strip() for origin in value.split(',') if origin.strip()]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = _allowed_origins(flask_app.config.get('CORS_ORIGINS', '*'))
    CORS(flask_app, origins=allowed_origins)
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # One coordinator per app; handlers look it up through app.extensions
    from cardrps.services.games.scheduler import schedule_turn_timer
    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    flask_app.extensions['cardrps'] = Coordinator(
        SocketIODispatcher(socketio, namespace=namespace),
        cards_per_player=int(flask_app.config.get('CARDS_PER_PLAYER', 15)),
        logger=flask_app.logger,
        turn_scheduler=partial(schedule_turn_timer, flask_app),
    )

    from cardrps.main import main
    flask_app.register_blueprint(main)

    from cardrps.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=namespace)

    return flask_app
