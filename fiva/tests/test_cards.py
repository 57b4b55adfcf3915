import pytest

from fiva.engine.cards import (
    Card, CardKind, Rank, Suit, classify, create_full_deck, is_one_eyed_jack, is_two_eyed_jack,
)


def test_parse_codes():
    assert Card.parse("10H") == Card(Rank.TEN, Suit.HEARTS)
    assert Card.parse("AS").code == "AS"
    assert str(Card.parse("QC")) == "QC"
    for bad in ["", "1H", "JX", "BONUS", "H", None]:
        with pytest.raises(ValueError):
            Card.parse(bad)


def test_jack_types():
    assert is_two_eyed_jack(Card.parse("JD")); assert is_two_eyed_jack(Card.parse("JC"))
    assert not is_two_eyed_jack(Card.parse("JH"))
    assert is_one_eyed_jack(Card.parse("JH")); assert is_one_eyed_jack(Card.parse("JS"))
    assert not is_one_eyed_jack(Card.parse("QD"))
    assert not is_one_eyed_jack(None)
    assert classify(Card.parse("7S")) is CardKind.STANDARD
    assert Card.parse("JS").kind is CardKind.ONE_EYED_JACK


def test_full_deck_and_ordering():
    deck = create_full_deck()
    assert len(deck) == 52 and len(set(deck)) == 52
    ranks = sorted(deck, key=lambda c: c.sort_key)
    assert ranks[0] == Card.parse("2D") and ranks[-1] == Card.parse("AS")
    assert Rank.TEN.order < Rank.JACK.order < Rank.ACE.order
