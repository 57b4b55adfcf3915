# fiva/algorithms/advanced/lookahead_policy.py
from __future__ import annotations
from typing import Optional

from overrides import overrides

from ..base_policy import BasePolicy
from ..scoring import WIN_SCORE, MoveContext, offensive_score, score_moves, tie_key
from ...engine.board import BoardModel
from ...engine.engine_core import Action


class LookaheadPolicy(BasePolicy):
    """
    Hard tier: Medium's priorities plus a 2-ply look at the beam of the top_k
    candidates. Each candidate is re-valued as
        my_score - alpha * best_reply
    where best_reply is the next opposing team's strongest single placement on
    any empty cell after our move (their hand is hidden, so any cell is fair).
    """
    def __init__(self, top_k: int = 4, alpha: float = 0.8):
        self.top_k = max(int(top_k), 0)
        self.alpha = float(alpha)

    @staticmethod
    def best_reply(ctx: MoveContext, board: BoardModel, opp: int) -> float:
        best = 0.0
        for idx in board.empty_cells():
            if ctx.wins_with(board, idx, opp):
                return WIN_SCORE
            best = max(best, offensive_score(board, idx, opp))
        return best

    @overrides
    def select_action(self, ctx: MoveContext) -> Optional[Action]:
        moves = score_moves(ctx, with_defense=True)
        if not moves:
            return None
        win = self.winning_move(moves)
        if win is not None:
            return win

        pool = [m for m in moves if m.blocks] or moves
        ranked = sorted(pool, key=lambda m: (-m.total(), tie_key(m.action)))
        if self.top_k == 0 or ctx.next_opponent is None:
            return ranked[0].action

        best_action, best_key = None, None
        for move in ranked[: self.top_k]:
            board = ctx.apply(move.action)
            value = move.total() - self.alpha * self.best_reply(ctx, board, ctx.next_opponent)
            key = (-value, tie_key(move.action))
            if best_key is None or key < best_key:
                best_action, best_key = move.action, key
        return best_action
