import random

import pytest

from fiva.engine.cards import Card
from fiva.engine.deck import DeckTracker
from fiva.engine.errors import IntegrityError


def test_fresh_deck_is_conserved():
    deck = DeckTracker(random.Random(7))
    assert deck.cards_remaining == 104 and deck.discards_count == 0 and deck.cards_on_board == 0
    assert deck.verify_integrity()
    hand = deck.draw_cards(7)
    assert len(hand) == 7 and deck.cards_remaining == 97
    assert deck.verify_integrity(hand)
    with pytest.raises(IntegrityError):
        deck.verify_integrity()


def test_board_and_discard_bookkeeping():
    deck = DeckTracker(random.Random(1))
    a, b = deck.draw(), deck.draw()
    deck.place_on_board(a)
    deck.discard(b)
    assert deck.is_in_play(a) and deck.is_discarded(b)
    assert deck.total_tracked == 104
    deck.discard(a, from_board=True)
    assert not deck.is_in_play(a) and deck.cards_on_board == 0
    assert deck.discards_count == 2
    assert deck.verify_integrity()


def test_reshuffle_only_when_deck_empty():
    deck = DeckTracker(random.Random(3))
    deck.discard(deck.draw())
    before = list(deck.deck)
    assert deck.reshuffle_discards() is False
    assert deck.deck == before and deck.discards_count == 1


def test_draw_reshuffles_discards_when_empty():
    deck = DeckTracker(random.Random(3))
    cards = deck.draw_cards(104)
    assert deck.cards_remaining == 0
    for c in cards[:3]:
        deck.discard(c)
    drawn = deck.draw()
    assert drawn in cards[:3]
    assert deck.cards_remaining == 2 and deck.discards_count == 0
    assert deck.verify_integrity(cards[3:] + [drawn])


def test_empty_supply():
    deck = DeckTracker(random.Random(3))
    held = deck.draw_cards(110)
    assert len(held) == 104
    assert deck.draw() is None
    assert deck.draw_cards(3) == []
    assert deck.reshuffle_discards() is False


def test_same_seed_same_order_and_snapshot():
    d1 = DeckTracker(random.Random(123)); d2 = DeckTracker(random.Random(123))
    assert d1.deck == d2.deck
    d1.place_on_board(d1.draw()); d1.discard(d1.draw())
    restored = DeckTracker.from_dict(d1.to_dict())
    assert restored.deck == d1.deck
    assert restored.discard_pile == d1.discard_pile
    assert restored.in_play == d1.in_play
    assert restored.is_in_deck(d1.deck[-1])
    assert Card.parse("2C") in DeckTracker.standard_cards()


def test_snapshot_keeps_shuffle_state():
    deck = DeckTracker(random.Random(11))
    restored = DeckTracker.from_dict(deck.to_dict())
    for tracker in (deck, restored):
        tracker.discard_pile = tracker.draw_cards(104)
    assert deck.draw_cards(10) == restored.draw_cards(10)
