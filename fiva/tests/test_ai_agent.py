import pytest

from fiva.agents.ai_agent import AIAgent, Difficulty, make_agent, make_policy
from fiva.algorithms.advanced.lookahead_policy import LookaheadPolicy
from fiva.algorithms.baselines.blocking_policy import BlockingPolicy
from fiva.algorithms.baselines.weighted_random_policy import WeightedRandomPolicy
from fiva.algorithms.scoring import (
    WIN_SCORE, MoveContext, ScoredMove, axis_runs, best_of, offensive_score, tie_key,
)
from fiva.engine.cards import Card
from fiva.engine.engine_core import Action
from fiva.engine.state import Phase
from fiva.engine.validator import ActionKind

C = Card.parse
DIFFICULTIES = ["easy", "medium", "hard"]


def set_hand(engine, player, codes):
    engine.state.hands[player] = [C(code) for code in codes]


def occupy(engine, cells, team):
    for idx in cells:
        engine.board[idx].occupant = team


def test_difficulty_parsing():
    assert Difficulty.parse("HARD") is Difficulty.HARD
    assert Difficulty.parse(Difficulty.EASY) is Difficulty.EASY
    with pytest.raises(ValueError):
        Difficulty.parse("impossible")
    assert isinstance(make_policy(Difficulty.EASY, seed=1), WeightedRandomPolicy)
    assert isinstance(make_policy(Difficulty.MEDIUM), BlockingPolicy)
    assert isinstance(make_policy(Difficulty.HARD, top_k=2), LookaheadPolicy)
    agent = make_agent(difficulty="hard", top_k=2)
    assert agent.display_name == "AI (Hard)"
    clone = agent.make_new_agent()
    assert clone.difficulty is Difficulty.HARD and clone.top_k == 2


def test_axis_runs_and_scores(engine):
    occupy(engine, [1, 2, 3], 0)
    assert axis_runs(engine.board, 4, 0) == [5, 1, 1, 1]
    assert offensive_score(engine.board, 4, 0) > offensive_score(engine.board, 44, 0)


@pytest.mark.parametrize("difficulty", DIFFICULTIES)
def test_every_tier_takes_an_immediate_win(engine, difficulty):
    occupy(engine, [1, 2, 3], 0)
    set_hand(engine, 0, ["9S", "5H", "KS"])
    action = engine.ai_choose_action(0, difficulty, seed=11)
    assert action == Action(C("5H"), 4, ActionKind.PLACE_CHIP)


@pytest.mark.parametrize("difficulty", ["medium", "hard"])
def test_blocks_an_opponent_about_to_win(engine, difficulty):
    occupy(engine, [1, 2, 3], 1)
    set_hand(engine, 0, ["2S", "5H", "KS"])
    action = engine.ai_choose_action(0, difficulty)
    assert action.cell == 4 and action.card == C("5H")


@pytest.mark.parametrize("difficulty", ["medium", "hard"])
def test_winning_beats_blocking(engine, difficulty):
    occupy(engine, [1, 2, 3], 1)
    occupy(engine, [60, 61, 62, 63], 0)
    set_hand(engine, 0, ["5H", "3H"])
    assert engine.ai_choose_action(0, difficulty) == Action(C("3H"), 64, ActionKind.PLACE_CHIP)


@pytest.mark.parametrize("difficulty", DIFFICULTIES)
def test_choosing_never_mutates_the_game(engine, difficulty):
    occupy(engine, [11, 12], 1)
    before = engine.snapshot()
    action = engine.ai_choose_action(0, difficulty, seed=3)
    assert action in engine.legal_actions(0)
    assert engine.snapshot() == before


def test_tie_break_prefers_lowest_cell_then_rank():
    a = Action(C("3C"), 2, ActionKind.PLACE_CHIP)
    b = Action(C("2C"), 1, ActionKind.PLACE_CHIP)
    c = Action(C("JD"), 1, ActionKind.PLACE_CHIP)
    d = Action(C("2C"), None, ActionKind.DISCARD_DEAD)
    assert sorted([d, c, a, b], key=tie_key) == [b, c, a, d]
    moves = [ScoredMove(a, offense=5.0), ScoredMove(c, offense=5.0), ScoredMove(b, offense=5.0)]
    assert best_of(moves).action == b
    assert best_of([]) is None


def test_lookahead_sees_opponent_win(engine):
    ctx = MoveContext.from_engine(engine, 0)
    assert ctx.team == 0 and ctx.opponents == [1] and ctx.next_opponent == 1
    quiet = LookaheadPolicy.best_reply(ctx, ctx.board, 1)
    assert 0 < quiet < WIN_SCORE
    occupy(engine, [1, 2, 3], 1)
    ctx = MoveContext.from_engine(engine, 0)
    assert LookaheadPolicy.best_reply(ctx, ctx.board, 1) == WIN_SCORE


def test_no_action_after_game_over(engine):
    engine.state.phase = Phase.GAME_OVER
    assert AIAgent("medium").select_action(engine, 0) is None


def test_easy_is_reproducible_with_seed(engine):
    first = [AIAgent("easy", seed=7).choose(engine, 0) for _ in range(3)]
    assert first[0] == first[1] == first[2]
