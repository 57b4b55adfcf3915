# fiva/engine/engine_core.py
from __future__ import annotations

import random
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Set

from .board import BoardModel
from .board_layout import Layout, load_layout
from .cards import Card
from .deck import DeckTracker
from .errors import EngineError, ErrorCode, IntegrityError
from .sequences import SequenceDetector, SequenceRecord
from .state import MAX_PLAYERS, MAX_TEAMS, MIN_PLAYERS, MIN_TEAMS, GameConfig, GameState, Phase
from .validator import ActionKind, MoveValidator, Verdict


class Action(NamedTuple):
    card: Card
    cell: Optional[int]     # None for a dead-card discard
    kind: ActionKind


@dataclass
class TurnOutcome:
    player: int
    team: int
    action: Optional[Action]                # None when the turn was passed
    new_sequences: List[SequenceRecord] = field(default_factory=list)
    removed_card: Optional[Card] = None     # card that lay under a removed chip
    drawn: Optional[Card] = None
    supply_exhausted: bool = False
    game_over: bool = False
    winner: Optional[int] = None
    next_player: int = 0

    def to_record(self) -> Dict[str, Any]:
        """JSON-safe move record for logs and replays."""
        action = self.action
        return {
            "player": self.player,
            "team": self.team,
            "type": action.kind.value if action else "pass",
            "card": action.card.code if action else None,
            "cell": action.cell if action else None,
            "removedCard": self.removed_card.code if self.removed_card else None,
            "sequences": [list(rec.cells) for rec in self.new_sequences],
            "supplyExhausted": self.supply_exhausted,
            "gameOver": self.game_over,
            "winner": self.winner,
            "nextPlayer": self.next_player,
        }


class GameEngine:
    """Turn engine: the single place where board, deck and hands are mutated."""

    def __init__(self, move_logger: Optional[Callable[[Dict[str, Any]], None]] = None):
        self.random_seed: Optional[int] = None
        self.game_config: Optional[GameConfig] = None
        self.state: Optional[GameState] = None
        self.board: Optional[BoardModel] = None
        self.deck: Optional[DeckTracker] = None
        self.detector = SequenceDetector()
        self.move_logger = move_logger
        self._lock = threading.RLock()

    def seed(self, seed: Optional[int]) -> None:
        self.random_seed = seed

    # ---- setup ---------------------------------------------------------------

    def new_game(self, players: int, teams: int, layout: Optional[Layout] = None) -> GameState:
        return self.start_new(GameConfig(players=players, teams=teams), layout=layout)

    def start_new(self, config: GameConfig, layout: Optional[Layout] = None) -> GameState:
        if not (MIN_PLAYERS <= config.players <= MAX_PLAYERS) \
                or not (MIN_TEAMS <= config.teams <= MAX_TEAMS) \
                or config.players < config.teams:
            raise EngineError(
                ErrorCode.ERR_INVALID_PLAYER_COUNT,
                details={"players": config.players, "teams": config.teams},
            )

        with self._lock:
            seed = self.random_seed if self.random_seed is not None else config.seed
            self.game_config = config
            self.detector = SequenceDetector(max_shared_cells=config.max_shared_cells)
            self.board = BoardModel(layout if layout is not None else load_layout(config.layout))
            self.deck = DeckTracker(rng=random.Random(seed))

            hand_size = config.resolved_hand_size
            hands: List[List[Card]] = []
            for _ in range(config.players):
                hand = self.deck.draw_cards(hand_size)
                if len(hand) < hand_size:
                    raise EngineError(ErrorCode.ERR_EMPTY_SUPPLY, "Deck exhausted during initial deal",
                                      details={"player": len(hands), "dealt": len(hand)})
                hands.append(hand)

            self.state = GameState(
                phase=Phase.PLAYING,
                hands=hands,
                player_teams=[p % config.teams for p in range(config.players)],
                sequence_counts={team: 0 for team in range(config.teams)},
                win_threshold=config.resolved_win_threshold,
            )
            return self.state

    # ---- queries ---------------------------------------------------------------

    def _require_started(self) -> GameState:
        if self.state is None or self.board is None or self.deck is None:
            raise RuntimeError("Game not started")
        return self.state

    def _require_player(self, player: int) -> GameState:
        state = self._require_started()
        if not isinstance(player, int) or not 0 <= player < state.num_players:
            raise EngineError(ErrorCode.ERR_UNKNOWN_PLAYER,
                              details={"player": player, "players": state.num_players})
        return state

    def legal_actions(self, player: int) -> Set[Action]:
        """Everything the validator accepts for `player`'s current hand."""
        state = self._require_player(player)
        if state.phase is not Phase.PLAYING:
            return set()
        team = state.team_of(player)
        actions: Set[Action] = set()
        for card in set(state.hands[player]):
            for idx in MoveValidator.targets_for(card, team, self.board):
                verdict = MoveValidator.validate(card, idx, team, self.board)
                actions.add(Action(card, idx, verdict.kind))
            if MoveValidator.is_dead(card, self.board):
                actions.add(Action(card, None, ActionKind.DISCARD_DEAD))
        return actions

    def validate(self, player: int, card: Card, cell: Optional[int]) -> Verdict:
        """Full check of a proposed action; raises EngineError when it is rejected."""
        state = self._require_player(player)
        if state.phase is not Phase.PLAYING:
            raise EngineError(ErrorCode.ERR_GAME_NOT_ACTIVE, details={"phase": state.phase.value})
        if player != state.current_player:
            raise EngineError(ErrorCode.ERR_NOT_YOUR_TURN,
                              details={"player": player, "current": state.current_player})
        if card not in state.hands[player]:
            raise EngineError(ErrorCode.ERR_CARD_NOT_IN_HAND, details={"card": card.code})
        verdict = MoveValidator.validate(card, cell, state.team_of(player), self.board)
        if not verdict.is_valid:
            raise EngineError(verdict.reason, details={"card": card.code, "cell": cell})
        return verdict

    # ---- main step ---------------------------------------------------------------

    def apply_action(self, player: int, card: Card, cell: Optional[int]) -> TurnOutcome:
        """Play `card` on `cell` (or discard it as dead with cell=None).

        Rejections raise EngineError and leave every piece of state untouched.
        """
        with self._lock:
            verdict = self.validate(player, card, cell)
            state = self.state
            team = state.team_of(player)
            hand = state.hands[player]
            outcome = TurnOutcome(player=player, team=team, action=Action(card, cell, verdict.kind))

            hand.remove(card)
            if verdict.kind is ActionKind.PLACE_CHIP:
                self.board[cell].occupant = team
                state.chip_cards[cell] = card
                self.deck.place_on_board(card)
            elif verdict.kind is ActionKind.REMOVE_CHIP:
                removed = state.chip_cards.pop(cell, None)
                self.board[cell].occupant = None
                if removed is not None:
                    self.deck.discard(removed, from_board=True)
                self.deck.discard(card)
                outcome.removed_card = removed
            else:
                self.deck.discard(card)

            if cell is not None:
                found = self.detector.scan(self.board, cell, team, state.sequences)
                state.sequences.extend(found)
                state.sequence_counts[team] = state.sequence_counts.get(team, 0) + len(found)
                outcome.new_sequences = found
                if state.sequence_counts[team] >= state.win_threshold:
                    state.phase = Phase.GAME_OVER
                    state.winner = team

            if state.phase is Phase.PLAYING:
                drawn = self.deck.draw()
                if drawn is None:
                    outcome.supply_exhausted = True
                else:
                    hand.append(drawn)
                    outcome.drawn = drawn
                self._advance_turn()
            state.turns_count += 1

            outcome.game_over = state.phase is Phase.GAME_OVER
            outcome.winner = state.winner
            outcome.next_player = state.current_player
            self._log(outcome)
            return outcome

    def discard_dead(self, player: int, card: Card) -> TurnOutcome:
        return self.apply_action(player, card, None)

    def pass_turn(self, player: int) -> TurnOutcome:
        """Skip a turn; only allowed when the player has no legal action at all."""
        with self._lock:
            state = self._require_player(player)
            if state.phase is not Phase.PLAYING:
                raise EngineError(ErrorCode.ERR_GAME_NOT_ACTIVE, details={"phase": state.phase.value})
            if player != state.current_player:
                raise EngineError(ErrorCode.ERR_NOT_YOUR_TURN,
                                  details={"player": player, "current": state.current_player})
            if self.legal_actions(player):
                raise EngineError(ErrorCode.ERR_HAS_LEGAL_MOVE, details={"player": player})
            outcome = TurnOutcome(player=player, team=state.team_of(player), action=None)
            self._advance_turn()
            state.turns_count += 1
            outcome.next_player = state.current_player
            self._log(outcome)
            return outcome

    def ai_choose_action(self, player: int, difficulty="medium", seed: Optional[int] = None) -> Optional[Action]:
        """Ask the AI for a move; nothing is applied until it goes through apply_action."""
        from ..agents.ai_agent import AIAgent
        self._require_player(player)
        cfg = self.game_config or GameConfig()
        agent = AIAgent(difficulty, seed=seed, top_k=cfg.top_k, alpha=cfg.alpha)
        return agent.choose(self, player)

    def _advance_turn(self) -> None:
        state = self.state
        state.current_player = (state.current_player + 1) % state.num_players

    def _log(self, outcome: TurnOutcome) -> None:
        if self.move_logger is not None:
            self.move_logger(outcome.to_record())

    # ---- bookkeeping -----------------------------------------------------------

    def verify_integrity(self) -> bool:
        state = self._require_started()
        if self.deck.cards_on_board != len(state.chip_cards):
            raise IntegrityError(
                f"{self.deck.cards_on_board} cards in play but {len(state.chip_cards)} chips tracked"
            )
        return self.deck.verify_integrity(state.held_cards())

    def is_terminal(self) -> bool:
        return self.state is not None and self.state.phase is Phase.GAME_OVER

    def winner_team(self) -> Optional[int]:
        return None if self.state is None else self.state.winner

    def snapshot(self) -> Dict[str, Any]:
        """Opaque, JSON-safe snapshot for persistence collaborators."""
        state = self._require_started()
        with self._lock:
            return {
                "config": self.game_config.to_dict(),
                "state": state.to_dict(),
                "board": self.board.to_dict(),
                "deck": self.deck.to_dict(),
            }

    @classmethod
    def restore(cls, snapshot: Dict[str, Any], move_logger=None) -> "GameEngine":
        engine = cls(move_logger=move_logger)
        engine.game_config = GameConfig(**snapshot["config"])
        engine.detector = SequenceDetector(max_shared_cells=engine.game_config.max_shared_cells)
        engine.state = GameState.from_dict(snapshot["state"])
        engine.board = BoardModel.from_dict(snapshot["board"])
        engine.deck = DeckTracker.from_dict(snapshot["deck"])
        return engine
