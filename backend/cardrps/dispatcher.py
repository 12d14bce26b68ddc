"""Outbound event delivery.

The coordinator only knows about this interface, so it can be driven by the
Socket.IO server in production and by a recording stub in tests.
"""
from abc import ABC, abstractmethod
from typing import Any, Iterable


class Dispatcher(ABC):
    """Deliver named events to one connection, a set of them, or everyone."""

    @abstractmethod
    def to_one(self, sid: str, event: str, payload: Any = None) -> None:
        raise NotImplementedError

    def to_set(self, sids: Iterable[str], event: str, payload: Any = None) -> None:
        for sid in sids:
            self.to_one(sid, event, payload)

    @abstractmethod
    def to_all(self, event: str, payload: Any = None) -> None:
        raise NotImplementedError


def _args(payload: Any) -> tuple:
    # Payload-less events (game_over, player_disconnected) go out with no arguments
    return () if payload is None else (payload,)


class SocketIODispatcher(Dispatcher):
    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def to_one(self, sid, event, payload=None):
        self.socketio.emit(event, *_args(payload), to=sid, namespace=self.namespace)

    def to_all(self, event, payload=None):
        self.socketio.emit(event, *_args(payload), namespace=self.namespace)
