"""
DeckTracker: owns the life cycle of the 104 physical cards.

Every card is in exactly one of: the draw pile, the discard pile, on the
board (in play, under a chip) or in a hand. Hands live outside the tracker,
which is why `verify_integrity` takes the held cards as an argument.
"""
from __future__ import annotations

import random
from collections import Counter
from typing import Any, Dict, Iterable, List, Optional

from .cards import COPIES_PER_CARD, TOTAL_CARDS, Card, create_full_deck
from .errors import IntegrityError


class DeckTracker:
    """Two combined decks (104 cards)."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self.deck: List[Card] = []
        self.discard_pile: List[Card] = []
        self.in_play: Counter = Counter()
        self.shuffle_new_game()

    @staticmethod
    def standard_cards() -> List[Card]:
        return create_full_deck() * COPIES_PER_CARD

    # ---- primary operations ----------------------------------------------

    def shuffle_new_game(self) -> None:
        self.discard_pile.clear()
        self.in_play.clear()
        self.deck = self.standard_cards()
        self.rng.shuffle(self.deck)

    def reshuffle_discards(self) -> bool:
        """Move the discard pile into an exhausted deck.

        Does nothing unless the deck is empty and the discard pile is not.
        Returns whether a reshuffle happened.
        """
        if self.deck or not self.discard_pile:
            return False
        self.deck = list(self.discard_pile)
        self.discard_pile.clear()
        self.rng.shuffle(self.deck)
        return True

    def draw(self) -> Optional[Card]:
        """Top card of the deck, reshuffling discards first if needed; None on empty supply."""
        if not self.deck:
            self.reshuffle_discards()
        if not self.deck:
            return None
        return self.deck.pop()

    def draw_cards(self, n: int) -> List[Card]:
        drawn: List[Card] = []
        for _ in range(max(0, int(n))):
            card = self.draw()
            if card is None:
                break
            drawn.append(card)
        return drawn

    # ---- card movement ---------------------------------------------------

    def discard(self, card: Card, from_board: bool = False) -> None:
        if from_board:
            self.remove_from_board(card)
        self.discard_pile.append(card)

    def place_on_board(self, card: Card) -> None:
        self.in_play[card] += 1

    def remove_from_board(self, card: Card) -> None:
        if self.in_play[card] > 0:
            self.in_play[card] -= 1
        if self.in_play[card] <= 0:
            del self.in_play[card]

    # ---- queries -----------------------------------------------------------

    @property
    def cards_remaining(self) -> int:
        return len(self.deck)

    @property
    def discards_count(self) -> int:
        return len(self.discard_pile)

    @property
    def cards_on_board(self) -> int:
        return sum(self.in_play.values())

    @property
    def total_tracked(self) -> int:
        return self.cards_remaining + self.discards_count + self.cards_on_board

    def is_in_deck(self, card: Card) -> bool:
        return card in self.deck

    def is_discarded(self, card: Card) -> bool:
        return card in self.discard_pile

    def is_in_play(self, card: Card) -> bool:
        return self.in_play[card] > 0

    def verify_integrity(self, held_cards: Iterable[Card] = ()) -> bool:
        """Check all 104 cards are accounted for; raise IntegrityError otherwise."""
        held = Counter(held_cards)
        found = Counter(self.deck) + Counter(self.discard_pile) + self.in_play + held
        total = self.total_tracked + sum(held.values())
        expected = Counter(self.standard_cards())
        if total != TOTAL_CARDS or found != expected:
            missing = sorted(c.code for c in (expected - found).elements())
            extra = sorted(c.code for c in (found - expected).elements())
            raise IntegrityError(
                f"Deck integrity failed: {total}/{TOTAL_CARDS} cards, missing={missing}, extra={extra}"
            )
        return True

    # ---- snapshots ---------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "deck": [c.code for c in self.deck],
            "discardPile": [c.code for c in self.discard_pile],
            "inPlay": sorted(c.code for c in self.in_play.elements()),
            "rngState": _state_to_json(self.rng.getstate()),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], rng: Optional[random.Random] = None) -> "DeckTracker":
        tracker = cls.__new__(cls)
        tracker.rng = rng or random.Random()
        if "rngState" in data:
            tracker.rng.setstate(_state_from_json(data["rngState"]))
        tracker.deck = [Card.parse(code) for code in data.get("deck", [])]
        tracker.discard_pile = [Card.parse(code) for code in data.get("discardPile", [])]
        tracker.in_play = Counter(Card.parse(code) for code in data.get("inPlay", []))
        return tracker


def _state_to_json(state) -> List[Any]:
    version, internal, gauss_next = state
    return [version, list(internal), gauss_next]


def _state_from_json(data: List[Any]):
    version, internal, gauss_next = data
    return int(version), tuple(int(x) for x in internal), gauss_next
