# fiva/agents/ai_agent.py
from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from overrides import overrides

from .base_agent import BaseAgent
from ..algorithms.advanced.lookahead_policy import LookaheadPolicy
from ..algorithms.base_policy import BasePolicy
from ..algorithms.baselines.blocking_policy import BlockingPolicy
from ..algorithms.baselines.weighted_random_policy import WeightedRandomPolicy
from ..algorithms.scoring import MoveContext
from ..engine.engine_core import Action, GameEngine
from ..engine.state import Phase


class Difficulty(str, Enum):
    EASY = "easy"       # weighted random by offense
    MEDIUM = "medium"   # win > block > offense + defense
    HARD = "hard"       # medium + one ply of lookahead

    @classmethod
    def parse(cls, value: Union[str, "Difficulty"]) -> "Difficulty":
        return value if isinstance(value, cls) else cls(str(value).strip().lower())


def make_policy(difficulty: Difficulty, seed: Optional[int] = None,
                top_k: int = 4, alpha: float = 0.8) -> BasePolicy:
    if difficulty is Difficulty.EASY:
        return WeightedRandomPolicy(seed=seed)
    if difficulty is Difficulty.MEDIUM:
        return BlockingPolicy()
    return LookaheadPolicy(top_k=top_k, alpha=alpha)


class AIAgent(BaseAgent):

    def __init__(self, difficulty: Union[str, Difficulty] = Difficulty.MEDIUM, seed: Optional[int] = None,
                 top_k: int = 4, alpha: float = 0.8):
        self.difficulty = Difficulty.parse(difficulty)
        self.seed = seed
        self.top_k = top_k
        self.alpha = alpha
        self.policy = make_policy(self.difficulty, seed=seed, top_k=top_k, alpha=alpha)

    @overrides
    def reset(self, engine: GameEngine, seat: int) -> None:
        self.policy.reset()

    @overrides
    def select_action(self, engine: GameEngine, player: int) -> Optional[Action]:
        state = engine.state
        if state is None or state.phase is not Phase.PLAYING:
            return None
        return self.policy.select_action(MoveContext.from_engine(engine, player))

    def choose(self, engine: GameEngine, player: int) -> Optional[Action]:
        return self.select_action(engine, player)

    @overrides
    def make_new_agent(self):
        return AIAgent(self.difficulty, seed=self.seed, top_k=self.top_k, alpha=self.alpha)

    @property
    def display_name(self) -> str:
        return f"AI ({self.difficulty.value.capitalize()})"


def make_agent(**kwargs) -> AIAgent:
    return AIAgent(**kwargs)
