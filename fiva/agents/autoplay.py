# fiva/agents/autoplay.py
from __future__ import annotations

import threading
from typing import Any, Callable, Dict, List, Mapping, Optional

from .base_agent import BaseAgent
from ..engine.engine_core import Action, GameEngine
from ..utils.timers import Timer

# Called with (seat, chosen action) before the action is applied, e.g. a UI pause
DelayFn = Callable[[int, Action], None]


class AutoPlayer:
    """
    Plays consecutive AI turns on one engine.

    Seats missing from `agents` are treated as human: the run stops when one
    of them is to move. `cancel()` may be called from any thread; it is honoured
    between turns only, so the engine is always left in a consistent state.
    """

    def __init__(self, engine: GameEngine, agents: Mapping[int, BaseAgent],
                 delay: Optional[DelayFn] = None, max_turns: int = 400):
        self.engine = engine
        self.agents = dict(agents)
        self.delay = delay
        self.max_turns = int(max_turns)
        self._cancel = threading.Event()

    def cancel(self) -> None:
        self._cancel.set()

    @property
    def cancel_requested(self) -> bool:
        return self._cancel.is_set()

    def run(self) -> Dict[str, Any]:
        engine = self.engine
        state = engine.state
        for seat, agent in self.agents.items():
            agent.reset(engine, seat)

        moves: List[Dict[str, Any]] = []
        timer = Timer()
        consecutive_passes = 0
        cancelled = truncated = stalled = False
        waiting_on: Optional[int] = None

        while not engine.is_terminal():
            if self._cancel.is_set():
                cancelled = True
                break
            if len(moves) >= self.max_turns:
                truncated = True
                break
            seat = state.current_player
            agent = self.agents.get(seat)
            if agent is None:
                waiting_on = seat
                break

            timer.start()
            action = agent.select_action(engine, seat)
            think_ms = int(timer.elapsed() * 1000)

            if action is None:
                outcome = engine.pass_turn(seat)
                consecutive_passes += 1
            else:
                if self.delay is not None:
                    self.delay(seat, action)
                outcome = engine.apply_action(seat, action.card, action.cell)
                consecutive_passes = 0
            moves.append({**outcome.to_record(), "thinkMs": think_ms})

            if consecutive_passes >= state.num_players:
                stalled = True
                break

        self._cancel.clear()
        return {
            "turns": len(moves),
            "winner": engine.winner_team(),
            "cancelled": cancelled,
            "truncated": truncated,
            "stalled": stalled,
            "waiting_on": waiting_on,
            "sequences": dict(state.sequence_counts),
            "moves": moves,
        }
