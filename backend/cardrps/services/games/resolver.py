from .deck import CARD_TYPES

DRAW = 'draw'
FIRST_WINS = 'player1'
SECOND_WINS = 'player2'

# winner -> the card it beats
_BEATS = {
    'rock': 'scissors',
    'paper': 'rock',
    'scissors': 'paper',
}


def resolve_round(card_a: str, card_b: str) -> str:
    """Return DRAW, FIRST_WINS or SECOND_WINS for ``card_a`` against ``card_b``."""
    for card in (card_a, card_b):
        if card not in CARD_TYPES:
            raise ValueError(f'unknown card: {card!r}')
    if card_a == card_b:
        return DRAW
    if _BEATS[card_a] == card_b:
        return FIRST_WINS
    return SECOND_WINS
