import itertools
import logging
import threading
from typing import Callable, Dict, List, Optional

from cardrps.dispatcher import Dispatcher
from cardrps.models import (
    ChatMessage,
    CreateLobby,
    Disconnect,
    JoinLobby,
    Lobby,
    Message,
    Participant,
    PlayCard,
    SetUsername,
)
from cardrps.services.games.deck import generate_deck
from cardrps.services.games.resolver import resolve_round


class Coordinator:
    """Owns the lobby registry and connection directory for one server.

    Every inbound message goes through ``handle``, which runs the whole
    mutation and its outbound events under one lock.
    """

    def __init__(
        self,
        dispatcher: Dispatcher,
        cards_per_player: int = 15,
        logger: Optional[logging.Logger] = None,
        deck_factory: Callable[[int], List[str]] = generate_deck,
        turn_scheduler: Optional[Callable[[str, int], None]] = None,
    ):
        self.dispatcher = dispatcher
        self.cards_per_player = cards_per_player
        self.logger = logger or logging.getLogger(__name__)
        self.deck_factory = deck_factory
        self.turn_scheduler = turn_scheduler
        self.lobbies: Dict[str, Lobby] = {}
        self.users: Dict[str, str] = {}
        self._lock = threading.RLock()
        # Turn ids are unique across every lobby this coordinator has hosted
        self._turn_ids = itertools.count(1)

    # ---- Dispatch ----

    def handle(self, sid: str, message: Message) -> None:
        with self._lock:
            if isinstance(message, SetUsername):
                self.set_username(sid, message.username)
            elif isinstance(message, CreateLobby):
                self.create_lobby(sid, message.name)
            elif isinstance(message, JoinLobby):
                self.join_lobby(sid, message.name)
            elif isinstance(message, PlayCard):
                self.play_card(sid, message.lobby_name, message.card)
            elif isinstance(message, ChatMessage):
                self.chat_message(sid, message.lobby_name, message.text)
            elif isinstance(message, Disconnect):
                self.disconnect(sid)
            else:
                self.logger.debug(f"[discard] sid={sid} unknown message {message!r}")

    # ---- Lobby registry ----

    def get_lobby(self, name: str) -> Optional[Lobby]:
        return self.lobbies.get(name)

    def lobby_of(self, sid: str) -> Optional[Lobby]:
        for lobby in self.lobbies.values():
            if lobby.seat_of(sid) is not None:
                return lobby
        return None

    def lobby_summaries(self) -> List[dict]:
        with self._lock:
            return [
                {'name': lobby.name, 'host': self.users.get(lobby.players[0].sid)}
                for lobby in self.lobbies.values()
            ]

    def broadcast_lobbies(self) -> None:
        self.dispatcher.to_all('lobbies_update', self.lobby_summaries())

    def delete_lobby(self, name: str) -> Optional[Lobby]:
        lobby = self.lobbies.pop(name, None)
        if lobby:
            lobby.game_state = 'finished'
        return lobby

    def create_lobby(self, sid: str, name: str) -> None:
        if name in self.lobbies:
            self.logger.debug(f"[discard] create lobby={name} sid={sid}: name taken")
            return
        if self.lobby_of(sid):
            self.logger.debug(f"[discard] create lobby={name} sid={sid}: already seated")
            return
        self.lobbies[name] = Lobby(
            name=name,
            players=[Participant(sid)],
            deck=self.deck_factory(self.cards_per_player),
        )
        self.logger.info(f"[lobby-create] lobby={name} host={sid} username={self.users.get(sid)}")
        self.dispatcher.to_one(sid, 'lobby_created', name)
        self.broadcast_lobbies()

    def join_lobby(self, sid: str, name: str) -> None:
        lobby = self.lobbies.get(name)
        if not lobby:
            self.logger.debug(f"[discard] join lobby={name} sid={sid}: no such lobby")
            return
        if lobby.is_full():
            self.logger.debug(f"[discard] join lobby={name} sid={sid}: lobby full")
            return
        if self.lobby_of(sid):
            self.logger.debug(f"[discard] join lobby={name} sid={sid}: already seated")
            return

        lobby.players.append(Participant(sid))
        hand = self.cards_per_player
        lobby.players[0].cards = list(lobby.deck[:hand])
        lobby.players[1].cards = list(lobby.deck[hand:])
        lobby.game_state = 'playing'
        lobby.current_player = 0
        lobby.turn_seq = next(self._turn_ids)

        for seat, player in enumerate(lobby.players):
            opponent = lobby.players[1 - seat]
            self.dispatcher.to_one(player.sid, 'game_start', {
                'seat': seat,
                'player1_cards': list(player.cards),
                'player2_cards': list(opponent.cards),
                'current_player': lobby.current_player,
                'opponent_username': self.users.get(opponent.sid),
                'messages': list(lobby.messages),
            })
        self.broadcast_lobbies()
        self.logger.info(
            f"[game-start] lobby={name} players={self.users.get(lobby.players[0].sid)},{self.users.get(sid)}"
        )
        self._schedule_turn(lobby)

    # ---- Session state machine ----

    def play_card(self, sid: str, lobby_name: str, card: str) -> None:
        lobby = self.lobbies.get(lobby_name)
        if not lobby or lobby.game_state != 'playing':
            self.logger.debug(f"[discard] play lobby={lobby_name} sid={sid}: not playing")
            return
        seat = lobby.seat_of(sid)
        if seat is None or seat != lobby.current_player:
            self.logger.debug(f"[discard] play lobby={lobby_name} sid={sid}: out of turn")
            return
        player = lobby.players[seat]
        opponent = lobby.players[1 - seat]
        if card not in player.cards:
            self.logger.debug(f"[discard] play lobby={lobby_name} sid={sid}: {card} not in hand")
            return

        player.cards.remove(card)
        player.current_card = card

        if opponent.current_card:
            # The mover is the first card; the payload stays in seat order
            first, second = lobby.players
            winner = resolve_round(player.current_card, opponent.current_card)
            self.dispatcher.to_set(lobby.sids(), 'round_result', {
                'player1_card': first.current_card,
                'player2_card': second.current_card,
                'winner': winner,
                'player1_cards': list(first.cards),
                'player2_cards': list(second.cards),
            })
            self.logger.info(
                f"[round] lobby={lobby_name} {first.current_card} vs {second.current_card} winner={winner}"
            )
            first.current_card = None
            second.current_card = None

            if not first.cards and not second.cards:
                self.dispatcher.to_set(lobby.sids(), 'game_over')
                self.delete_lobby(lobby_name)
                self.logger.info(f"[game-over] lobby={lobby_name}")
                self.broadcast_lobbies()
                self._pass_turn(lobby, schedule=False)
                return

        self._pass_turn(lobby)

    def _pass_turn(self, lobby: Lobby, schedule: bool = True) -> None:
        lobby.current_player = 1 - lobby.current_player
        lobby.turn_seq = next(self._turn_ids)
        self.dispatcher.to_set(lobby.sids(), 'turn_change', lobby.current_player)
        if schedule:
            self._schedule_turn(lobby)

    def _schedule_turn(self, lobby: Lobby) -> None:
        if self.turn_scheduler:
            self.turn_scheduler(lobby.name, lobby.turn_seq)

    def expire_turn(self, lobby_name: str, turn_seq: int) -> bool:
        """Pass the turn if ``lobby_name`` is still waiting on turn ``turn_seq``."""
        with self._lock:
            lobby = self.lobbies.get(lobby_name)
            if not lobby or lobby.game_state != 'playing' or lobby.turn_seq != turn_seq:
                self.logger.info(f"[timer-abort] lobby={lobby_name} turn={turn_seq} stale")
                return False
            self.logger.info(f"[timer-fire] lobby={lobby_name} turn={turn_seq} seat={lobby.current_player} timed out")
            self._pass_turn(lobby)
            return True

    def chat_message(self, sid: str, lobby_name: str, text: str) -> None:
        lobby = self.lobbies.get(lobby_name)
        username = self.users.get(sid)
        if not lobby or not username or lobby.seat_of(sid) is None:
            self.logger.debug(f"[discard] chat lobby={lobby_name} sid={sid}")
            return
        message = {'username': username, 'text': text}
        lobby.messages.append(message)
        self.dispatcher.to_set(lobby.sids(), 'chat_message', message)

    # ---- Connection directory ----

    def set_username(self, sid: str, username: str) -> None:
        self.users[sid] = username
        self.logger.info(f"[identity] sid={sid} username={username}")
        self.broadcast_lobbies()

    def disconnect(self, sid: str) -> None:
        username = self.users.pop(sid, None)
        lobby = self.lobby_of(sid)
        if not lobby:
            return
        remaining = [s for s in lobby.sids() if s != sid]
        self.dispatcher.to_set(remaining, 'player_disconnected')
        self.delete_lobby(lobby.name)
        self.logger.info(f"[lobby-delete] lobby={lobby.name} ({username} disconnected)")
        self.broadcast_lobbies()
