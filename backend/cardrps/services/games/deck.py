import random
from typing import List, Optional

CARD_TYPES = ('rock', 'paper', 'scissors')


def generate_deck(hand_size: int, rng: Optional[random.Random] = None) -> List[str]:
    """Build a shuffled deck holding two hands of ``hand_size`` cards.

    Slots are filled cyclically (rock, paper, scissors, rock, ...), so the
    counts per value are only balanced when ``2 * hand_size`` is a multiple
    of three. The order is a uniform permutation; the composition is fixed.
    """
    if hand_size < 1:
        raise ValueError(f'hand_size must be positive, got {hand_size}')
    cards = [CARD_TYPES[i % len(CARD_TYPES)] for i in range(hand_size * 2)]
    (rng or random).shuffle(cards)
    return cards
