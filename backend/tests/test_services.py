import random
from collections import Counter

import pytest

from cardrps.services.games import (
    CARD_TYPES,
    DRAW,
    FIRST_WINS,
    SECOND_WINS,
    generate_deck,
    resolve_round,
)


@pytest.mark.parametrize('hand_size', [1, 2, 4, 15])
def test_deck_length_and_cyclic_composition(hand_size):
    deck = generate_deck(hand_size)
    assert len(deck) == hand_size * 2
    expected = Counter(CARD_TYPES[i % 3] for i in range(hand_size * 2))
    assert Counter(deck) == expected


def test_default_deck_is_balanced():
    # 30 slots split evenly across the three values
    assert Counter(generate_deck(15)) == {'rock': 10, 'paper': 10, 'scissors': 10}


def test_unbalanced_deck_follows_cycle():
    # 2 * 4 = 8 slots: r p s r p s r p
    assert Counter(generate_deck(4)) == {'rock': 3, 'paper': 3, 'scissors': 2}


def test_deck_uses_supplied_rng():
    a = generate_deck(15, rng=random.Random(7))
    b = generate_deck(15, rng=random.Random(7))
    assert a == b


def test_deck_rejects_empty_hand():
    with pytest.raises(ValueError):
        generate_deck(0)


@pytest.mark.parametrize('winner,loser', [
    ('rock', 'scissors'),
    ('paper', 'rock'),
    ('scissors', 'paper'),
])
def test_resolve_precedence_and_swap_symmetry(winner, loser):
    assert resolve_round(winner, loser) == FIRST_WINS
    assert resolve_round(loser, winner) == SECOND_WINS


@pytest.mark.parametrize('card', CARD_TYPES)
def test_resolve_same_card_draws(card):
    assert resolve_round(card, card) == DRAW


def test_resolve_rejects_unknown_card():
    with pytest.raises(ValueError):
        resolve_round('rock', 'lizard')
