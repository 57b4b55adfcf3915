# fiva/engine/validator.py
"""
Move validation: decides whether a card may be played on a cell and what the
play does. Pure; never touches the board.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .board import BoardModel
from .cards import Card, CardKind, classify
from .errors import ErrorCode


class ActionKind(str, Enum):
    PLACE_CHIP = "place"
    REMOVE_CHIP = "remove"
    DISCARD_DEAD = "discard"
    INVALID = "invalid"


@dataclass(frozen=True)
class Verdict:
    kind: ActionKind
    reason: Optional[ErrorCode] = None

    @property
    def is_valid(self) -> bool:
        return self.kind is not ActionKind.INVALID


def _invalid(reason: ErrorCode) -> Verdict:
    return Verdict(ActionKind.INVALID, reason)


class MoveValidator:

    @staticmethod
    def validate(card: Card, cell: Optional[int], team: int, board: BoardModel) -> Verdict:
        """Classify playing `card` on `cell` for `team`.

        `cell=None` asks for a dead-card discard, which bypasses targeting.
        """
        if cell is None:
            if MoveValidator.is_dead(card, board):
                return Verdict(ActionKind.DISCARD_DEAD)
            return _invalid(ErrorCode.ERR_CARD_NOT_DEAD)

        if not board.in_range(cell):
            return _invalid(ErrorCode.ERR_OUT_OF_RANGE)
        target = board[cell]
        kind = classify(card)

        if kind is CardKind.TWO_EYED_JACK:
            # corners are permanently held by the wild marker
            if target.is_corner or target.occupant is not None:
                return _invalid(ErrorCode.ERR_CELL_OCCUPIED)
            return Verdict(ActionKind.PLACE_CHIP)

        if kind is CardKind.ONE_EYED_JACK:
            if target.occupant is None or target.occupant == team:
                return _invalid(ErrorCode.ERR_NO_REMOVABLE_CHIP)
            if target.locked:
                return _invalid(ErrorCode.ERR_SEQUENCE_PROTECTED)
            return Verdict(ActionKind.REMOVE_CHIP)

        if target.underlying != card:
            return _invalid(ErrorCode.ERR_CARD_MISMATCH)
        if target.occupant is not None:
            return _invalid(ErrorCode.ERR_CELL_OCCUPIED)
        return Verdict(ActionKind.PLACE_CHIP)

    @staticmethod
    def is_dead(card: Card, board: BoardModel) -> bool:
        """A standard card is dead when every cell printed with it holds a chip."""
        if classify(card) is not CardKind.STANDARD:
            return False
        return all(board[idx].occupant is not None for idx in board.positions_of(card))

    @staticmethod
    def targets_for(card: Card, team: int, board: BoardModel) -> List[int]:
        """All cells on which `card` is currently legal for `team`, ascending."""
        kind = classify(card)
        if kind is CardKind.STANDARD:
            candidates = board.positions_of(card)
        elif kind is CardKind.TWO_EYED_JACK:
            candidates = board.empty_cells()
        else:
            candidates = [c.index for c in board if c.occupant is not None]
        return sorted(idx for idx in candidates
                      if MoveValidator.validate(card, idx, team, board).is_valid)
