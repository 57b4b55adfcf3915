# fiva/algorithms/baselines/blocking_policy.py
from __future__ import annotations
from typing import Optional

from overrides import overrides

from ..base_policy import BasePolicy
from ..scoring import MoveContext, best_of, score_moves
from ...engine.engine_core import Action


class BlockingPolicy(BasePolicy):
    """
    Medium tier, hard priorities first:
    - if we can win, do it
    - else if we can stop an opponent from completing a sequence, do it
    - else take the best offense + defense score
    """

    @overrides
    def select_action(self, ctx: MoveContext) -> Optional[Action]:
        moves = score_moves(ctx, with_defense=True)
        if not moves:
            return None
        win = self.winning_move(moves)
        if win is not None:
            return win

        blocks = [m for m in moves if m.blocks]
        if blocks:
            return best_of(blocks).action
        return best_of(moves).action
