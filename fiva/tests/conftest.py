import pytest

from fiva.engine.cards import Card
from fiva.engine.engine_core import GameEngine
from fiva.engine.state import GameConfig


def start_engine(seed=42, **cfg):
    engine = GameEngine(); engine.seed(seed)
    engine.start_new(GameConfig(**cfg))
    return engine


def give_card(engine, player, code):
    """Swap a copy of `code` into the player's hand without breaking card conservation."""
    card = Card.parse(code)
    hand = engine.state.hands[player]
    if card in hand:
        return card
    deck = engine.deck.deck
    if card in deck:
        i = deck.index(card)
        deck[i], hand[0] = hand[0], card
        return card
    for other, other_hand in enumerate(engine.state.hands):
        if other != player and card in other_hand:
            j = other_hand.index(card)
            other_hand[j], hand[0] = hand[0], card
            return card
    raise AssertionError(f"no free copy of {code}")


@pytest.fixture
def engine():
    return start_engine()


@pytest.fixture
def give():
    return give_card
