from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from cardrps.services.games.deck import CARD_TYPES


@dataclass
class Participant:
    sid: str
    cards: List[str] = field(default_factory=list)
    current_card: Optional[str] = None

    def to_dict(self):
        return {
            'sid': self.sid,
            'cards': list(self.cards),
            'current_card': self.current_card,
        }


@dataclass
class Lobby:
    name: str
    players: List[Participant]
    deck: List[str]
    game_state: str = 'waiting'  # waiting, playing, finished
    current_player: Optional[int] = None
    messages: List[Dict[str, str]] = field(default_factory=list)
    turn_seq: int = 0

    def seat_of(self, sid: str) -> Optional[int]:
        for idx, player in enumerate(self.players):
            if player.sid == sid:
                return idx
        return None

    def sids(self) -> List[str]:
        return [p.sid for p in self.players]

    def is_full(self) -> bool:
        return len(self.players) >= 2

    def cards_in_hands(self) -> int:
        return sum(len(p.cards) for p in self.players)

    def to_dict(self):
        return {
            'name': self.name,
            'players': [p.to_dict() for p in self.players],
            'game_state': self.game_state,
            'current_player': self.current_player,
            'messages': list(self.messages),
        }


# ---- Inbound message variants ----

@dataclass(frozen=True)
class SetUsername:
    username: str


@dataclass(frozen=True)
class CreateLobby:
    name: str


@dataclass(frozen=True)
class JoinLobby:
    name: str


@dataclass(frozen=True)
class PlayCard:
    lobby_name: str
    card: str


@dataclass(frozen=True)
class ChatMessage:
    lobby_name: str
    text: str


@dataclass(frozen=True)
class Disconnect:
    pass


Message = Union[SetUsername, CreateLobby, JoinLobby, PlayCard, ChatMessage, Disconnect]


def _lobby_name(data: Any) -> Optional[str]:
    # Clients send either the bare name or {'name': ...}; names are kept verbatim
    if isinstance(data, dict):
        data = data.get('name')
    if isinstance(data, str) and data.strip():
        return data
    return None


def parse_message(event: str, data: Any = None) -> Optional[Message]:
    """Turn a raw Socket.IO event into a message variant.

    Returns None for unknown events and malformed payloads.
    """
    if event == 'disconnect':
        return Disconnect()
    if event == 'set_username':
        if isinstance(data, str) and data.strip():
            return SetUsername(data.strip())
        return None
    if event in ('create_lobby', 'join_lobby'):
        name = _lobby_name(data)
        if name is None:
            return None
        return CreateLobby(name) if event == 'create_lobby' else JoinLobby(name)
    if not isinstance(data, dict):
        return None
    lobby_name = data.get('lobby_name')
    if not isinstance(lobby_name, str):
        return None
    if event == 'play_card':
        card = data.get('card')
        if card not in CARD_TYPES:
            return None
        return PlayCard(lobby_name, card)
    if event == 'chat_message':
        text = data.get('text')
        if not isinstance(text, str) or not text.strip():
            return None
        return ChatMessage(lobby_name, text)
    return None
