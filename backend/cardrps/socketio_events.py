from flask import current_app, request
from flask_socketio import emit

from cardrps import socketio
from cardrps.coordinator import Coordinator
from cardrps.models import parse_message


def get_coordinator() -> Coordinator:
    return current_app.extensions['cardrps']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _dispatch(event, data=None):
    message = parse_message(event, data)
    if message is None:
        current_app.logger.debug(f"[discard] sid={_get_sid()} malformed {event} payload={data!r}")
        return
    get_coordinator().handle(_get_sid(), message)


def handle_connect(auth=None):
    current_app.logger.info(f"[connect] sid={_get_sid()}")
    emit('lobbies_update', get_coordinator().lobby_summaries())


def handle_disconnect(reason=None):
    current_app.logger.info(f"[disconnect] sid={_get_sid()} reason={reason}")
    _dispatch('disconnect')


def handle_set_username(data=None):
    _dispatch('set_username', data)


def handle_create_lobby(data=None):
    _dispatch('create_lobby', data)


def handle_join_lobby(data=None):
    _dispatch('join_lobby', data)


def handle_play_card(data=None):
    _dispatch('play_card', data)


def handle_chat_message(data=None):
    _dispatch('chat_message', data)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('set_username', handle_set_username, namespace=namespace)
    socketio.on_event('create_lobby', handle_create_lobby, namespace=namespace)
    socketio.on_event('join_lobby', handle_join_lobby, namespace=namespace)
    socketio.on_event('play_card', handle_play_card, namespace=namespace)
    socketio.on_event('chat_message', handle_chat_message, namespace=namespace)
