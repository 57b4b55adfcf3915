"""
Card catalog for Fiva: ranks, suits, card identity and jack classification.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"

    @property
    def order(self) -> int:
        return _RANK_ORDER[self]


class Suit(str, Enum):
    DIAMONDS = "D"
    HEARTS = "H"
    CLUBS = "C"
    SPADES = "S"

    @property
    def order(self) -> int:
        return _SUIT_ORDER[self]


_RANK_ORDER = {rank: i for i, rank in enumerate(Rank)}
_SUIT_ORDER = {suit: i for i, suit in enumerate(Suit)}

# Printed on layouts in place of a card; all of them mean "wild corner"
CORNER_CODES = ("BONUS", "RedJoker", "BlackJoker")


class CardKind(str, Enum):
    STANDARD = "standard"
    TWO_EYED_JACK = "twoEyedJack"   # JD, JC: place a chip on any empty cell
    ONE_EYED_JACK = "oneEyedJack"   # JH, JS: remove an unlocked opponent chip


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    @classmethod
    def parse(cls, code: str) -> "Card":
        """Build a card from its code, e.g. '10H' or 'JD'."""
        if not isinstance(code, str) or len(code) < 2:
            raise ValueError(f"Invalid card code: {code!r}")
        try:
            return cls(Rank(code[:-1]), Suit(code[-1]))
        except ValueError:
            raise ValueError(f"Invalid card code: {code!r}") from None

    @property
    def code(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    @property
    def kind(self) -> CardKind:
        return classify(self)

    @property
    def sort_key(self):
        return (self.rank.order, self.suit.order)

    def __str__(self) -> str:
        return self.code


def classify(card: Card) -> CardKind:
    if card.rank is not Rank.JACK:
        return CardKind.STANDARD
    if card.suit in (Suit.DIAMONDS, Suit.CLUBS):
        return CardKind.TWO_EYED_JACK
    return CardKind.ONE_EYED_JACK


def is_two_eyed_jack(card: Optional[Card]) -> bool:
    return card is not None and classify(card) is CardKind.TWO_EYED_JACK


def is_one_eyed_jack(card: Optional[Card]) -> bool:
    return card is not None and classify(card) is CardKind.ONE_EYED_JACK


def create_full_deck() -> List[Card]:
    """One standard 52-card deck (no jokers)."""
    return [Card(rank, suit) for suit in Suit for rank in Rank]


# Two physical copies of every identity
COPIES_PER_CARD = 2
TOTAL_CARDS = 52 * COPIES_PER_CARD
