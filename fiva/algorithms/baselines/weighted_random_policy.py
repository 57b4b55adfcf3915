# fiva/algorithms/baselines/weighted_random_policy.py
from __future__ import annotations
from typing import Optional

import numpy as np
from overrides import overrides

from ..base_policy import BasePolicy
from ..scoring import DISCARD_WEIGHT, MoveContext, score_moves
from ...engine.engine_core import Action
from ...engine.validator import ActionKind


class WeightedRandomPolicy(BasePolicy):
    """
    Easy tier: takes a win when there is one, otherwise samples a legal move
    with probability proportional to its offensive value. Ignores defense.
    """
    def __init__(self, seed: Optional[int] = None):
        self.rng = np.random.default_rng(seed)

    @overrides
    def select_action(self, ctx: MoveContext) -> Optional[Action]:
        moves = score_moves(ctx, with_defense=False)
        if not moves:
            return None
        win = self.winning_move(moves)
        if win is not None:
            return win

        weights = np.array(
            [DISCARD_WEIGHT if m.action.kind is ActionKind.DISCARD_DEAD else max(m.offense, 1e-6)
             for m in moves],
            dtype=np.float64,
        )
        idx = int(self.rng.choice(len(moves), p=weights / weights.sum()))
        return moves[idx].action
