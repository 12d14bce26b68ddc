from cardrps.models import (
    ChatMessage,
    CreateLobby,
    Disconnect,
    JoinLobby,
    Lobby,
    Participant,
    PlayCard,
    SetUsername,
    parse_message,
)


def test_parse_lobby_events_accept_string_or_dict():
    assert parse_message('create_lobby', 'A') == CreateLobby('A')
    assert parse_message('create_lobby', {'name': 'A', 'username': 'x'}) == CreateLobby('A')
    assert parse_message('join_lobby', 'A') == JoinLobby('A')


def test_lobby_names_are_kept_verbatim():
    assert parse_message('create_lobby', 'A ') == CreateLobby('A ')
    assert parse_message('create_lobby', 'A ') != CreateLobby('A')


def test_parse_rejects_malformed_payloads():
    assert parse_message('create_lobby', '') is None
    assert parse_message('join_lobby', 42) is None
    assert parse_message('set_username', None) is None
    assert parse_message('play_card', 'rock') is None
    assert parse_message('play_card', {'lobby_name': 'A', 'card': 'lizard'}) is None
    assert parse_message('chat_message', {'lobby_name': 'A', 'text': '   '}) is None
    assert parse_message('no_such_event', {}) is None


def test_parse_game_events():
    assert parse_message('set_username', 'Alice') == SetUsername('Alice')
    assert parse_message('play_card', {'lobby_name': 'A', 'card': 'rock'}) == PlayCard('A', 'rock')
    assert parse_message('chat_message', {'lobby_name': 'A', 'text': 'gg'}) == ChatMessage('A', 'gg')
    assert parse_message('disconnect') == Disconnect()


def test_lobby_seat_lookup():
    lobby = Lobby(name='A', players=[Participant('x'), Participant('y')], deck=[])
    assert lobby.seat_of('x') == 0
    assert lobby.seat_of('y') == 1
    assert lobby.seat_of('z') is None
    assert lobby.is_full()
    assert lobby.to_dict()['players'][1]['sid'] == 'y'
