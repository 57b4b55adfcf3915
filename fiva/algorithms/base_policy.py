# fiva/algorithms/base_policy.py
from __future__ import annotations
from typing import List, Optional

from ..engine.engine_core import Action
from .scoring import MoveContext, ScoredMove, tie_key


class BasePolicy:
    """
    Superclass for move-selection policies.
    Override: select_action(ctx) -> Optional[Action]
    """
    def reset(self) -> None:
        pass

    def select_action(self, ctx: MoveContext) -> Optional[Action]:
        raise NotImplementedError

    @staticmethod
    def winning_move(moves: List[ScoredMove]) -> Optional[Action]:
        """A move that wins the game outright, lowest tie key first."""
        wins = [m.action for m in moves if m.wins]
        return min(wins, key=tie_key) if wins else None
