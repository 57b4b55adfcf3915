# fiva/agents/base_agent.py
from __future__ import annotations

from typing import Optional

from ..engine.engine_core import Action, GameEngine


class BaseAgent:
    """
    Minimal agent interface: look at the engine, return the move for a seat.
    Agents never mutate the engine; the caller passes the move to apply_action.
    """

    def reset(self, engine: GameEngine, seat: int) -> None:
        pass

    def select_action(self, engine: GameEngine, player: int) -> Optional[Action]:
        raise NotImplementedError

    def make_new_agent(self):
        return self.__class__()
