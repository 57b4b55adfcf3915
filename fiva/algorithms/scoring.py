# fiva/algorithms/scoring.py
"""
Move scoring shared by every AI tier.

A move is scored from the acting team's point of view on the cell it touches:
  - offense: run lengths (capped at 5) the team reaches through the cell on
    each of the four axes, plus a bonus for a run of exactly four;
  - defense: the longest runs an opponent would reach through the same cell,
    which the move takes away;
  - cost: jacks are scarce, so using one is charged a little.
Dead-card discards score DEAD_DISCARD_SCORE, so a jack move that gains less
than its cost loses to a discard.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set, Tuple

from ..engine.board import DIRECTIONS, BoardModel
from ..engine.board_layout import BOARD_CELLS
from ..engine.cards import CardKind
from ..engine.engine_core import Action, GameEngine
from ..engine.sequences import SequenceDetector, SequenceRecord
from ..engine.validator import ActionKind

MAX_RUN = 5
WIN_SCORE = 1e6
RUN_WEIGHTS = (0.0, 1.0, 4.0, 12.0, 40.0, 100.0)       # by run length 0..5
DEFENSE_WEIGHTS = (0.0, 0.0, 2.0, 8.0, 30.0, 90.0)
FOUR_BONUS = 25.0
REMOVAL_OFFENSE_FACTOR = 0.5
JACK_COST = {CardKind.STANDARD: 0.0, CardKind.TWO_EYED_JACK: 10.0, CardKind.ONE_EYED_JACK: 8.0}
DEAD_DISCARD_SCORE = 0.0
DISCARD_WEIGHT = 1.0


def axis_runs(board: BoardModel, cell: int, team: int) -> List[int]:
    """Run length through `cell` on each axis as if `team` held the cell, capped at 5."""
    return [min(len(board.gather_run(cell, dr, dc, team)), MAX_RUN) for dr, dc, _ in DIRECTIONS]


def offensive_score(board: BoardModel, cell: int, team: int) -> float:
    runs = axis_runs(board, cell, team)
    score = sum(RUN_WEIGHTS[r] for r in runs)
    if 4 in runs:
        score += FOUR_BONUS
    return score


def defensive_score(board: BoardModel, cell: int, opponents: Sequence[int]) -> float:
    best = 0.0
    for opp in opponents:
        best = max(best, sum(DEFENSE_WEIGHTS[r] for r in axis_runs(board, cell, opp)))
    return best


def tie_key(action: Action) -> Tuple[int, int, int, str]:
    """Lowest cell first (discards last), then lowest card rank."""
    cell = BOARD_CELLS if action.cell is None else action.cell
    return (cell, action.card.rank.order, action.card.suit.order, action.kind.value)


@dataclass
class ScoredMove:
    action: Action
    offense: float = 0.0
    defense: float = 0.0
    cost: float = 0.0
    wins: bool = False
    blocks: bool = False

    def total(self, with_defense: bool = True) -> float:
        if self.wins:
            return WIN_SCORE
        if self.action.kind is ActionKind.DISCARD_DEAD:
            return DEAD_DISCARD_SCORE
        return self.offense + (self.defense if with_defense else 0.0) - self.cost


@dataclass
class MoveContext:
    """Read-only view of one decision: board, counted sequences, teams and legal moves."""
    board: BoardModel
    detector: SequenceDetector
    team: int
    opponents: List[int]
    next_opponent: Optional[int]
    sequences: List[SequenceRecord]
    sequence_counts: Dict[int, int]
    win_threshold: int
    legal: List[Action] = field(default_factory=list)

    @classmethod
    def from_engine(cls, engine: GameEngine, player: int) -> "MoveContext":
        state = engine.state
        team = state.team_of(player)
        opponents = sorted(t for t in state.sequence_counts if t != team)
        next_opponent = None
        for step in range(1, state.num_players):
            other = state.team_of((player + step) % state.num_players)
            if other != team:
                next_opponent = other
                break
        return cls(
            board=engine.board.copy(),
            detector=engine.detector,
            team=team,
            opponents=opponents,
            next_opponent=next_opponent,
            sequences=list(state.sequences),
            sequence_counts=dict(state.sequence_counts),
            win_threshold=state.win_threshold,
            legal=sorted(engine.legal_actions(player), key=tie_key),
        )

    def completions(self, board: BoardModel, cell: int, team: int) -> List[SequenceRecord]:
        """Sequences `team` would newly complete by holding the empty `cell` on `board`."""
        target = board[cell]
        previous = target.occupant
        target.occupant = team
        try:
            return self.detector.find_new(board, cell, team, self.sequences)
        finally:
            target.occupant = previous

    def wins_with(self, board: BoardModel, cell: int, team: int) -> bool:
        found = self.completions(board, cell, team)
        return bool(found) and self.sequence_counts.get(team, 0) + len(found) >= self.win_threshold

    def threats(self) -> Dict[int, Set[int]]:
        """Per opponent: every cell of a sequence they could complete next move (empty cell included)."""
        out: Dict[int, Set[int]] = {}
        empties = self.board.empty_cells()
        for opp in self.opponents:
            cells: Set[int] = set()
            for idx in empties:
                for rec in self.completions(self.board, idx, opp):
                    cells.update(rec.cells)
            out[opp] = cells
        return out

    def apply(self, action: Action) -> BoardModel:
        """A copy of the board after `action` by the acting team."""
        board = self.board.copy()
        if action.kind is ActionKind.PLACE_CHIP:
            board[action.cell].occupant = self.team
        elif action.kind is ActionKind.REMOVE_CHIP:
            board[action.cell].occupant = None
        return board


def score_moves(ctx: MoveContext, with_defense: bool = True) -> List[ScoredMove]:
    threats = ctx.threats() if with_defense else {}
    scored: List[ScoredMove] = []
    for action in ctx.legal:
        move = ScoredMove(action, cost=JACK_COST[action.card.kind])
        if action.kind is ActionKind.PLACE_CHIP:
            move.offense = offensive_score(ctx.board, action.cell, ctx.team)
            move.wins = ctx.wins_with(ctx.board, action.cell, ctx.team)
            if with_defense:
                move.defense = defensive_score(ctx.board, action.cell, ctx.opponents)
                move.blocks = any(action.cell in cells for cells in threats.values())
        elif action.kind is ActionKind.REMOVE_CHIP:
            owner = ctx.board[action.cell].occupant
            move.offense = REMOVAL_OFFENSE_FACTOR * offensive_score(ctx.board, action.cell, ctx.team)
            if with_defense:
                move.defense = defensive_score(ctx.board, action.cell, [owner])
                move.blocks = action.cell in threats.get(owner, set())
        else:
            move.cost = 0.0
        scored.append(move)
    return scored


def best_of(moves: Sequence[ScoredMove], with_defense: bool = True) -> Optional[ScoredMove]:
    """Highest total; ties go to the lowest tie_key."""
    if not moves:
        return None
    return min(moves, key=lambda m: (-m.total(with_defense), tie_key(m.action)))
