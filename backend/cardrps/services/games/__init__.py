"""Game domain services: deck, round resolution and turn timers.

This package contains pure(ish) domain logic that is imported by the
coordinator, keeping transport concerns separated from core game mechanics.
"""

from .deck import CARD_TYPES, generate_deck
from .resolver import DRAW, FIRST_WINS, SECOND_WINS, resolve_round

__all__ = [
    'CARD_TYPES',
    'generate_deck',
    'DRAW',
    'FIRST_WINS',
    'SECOND_WINS',
    'resolve_round',
]
