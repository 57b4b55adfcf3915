# fiva/engine/state.py
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .cards import Card
from .sequences import SequenceRecord

MIN_PLAYERS, MAX_PLAYERS = 2, 12
MIN_TEAMS, MAX_TEAMS = 2, 3


def hand_size_for(players: int) -> int:
    """Cards dealt per player for a given table size."""
    if players <= 2:
        return 7
    if players <= 4:
        return 6
    if players <= 6:
        return 5
    if players <= 9:
        return 4
    return 3


def win_threshold_for(teams: int) -> int:
    """Completed sequences a team needs to win."""
    return 1 if teams <= 3 else 2


class Phase(str, Enum):
    SETUP = "setup"
    PLAYING = "playing"
    GAME_OVER = "gameOver"


@dataclass
class GameConfig:
    """
    Canonical configuration the engine and the AI rely on.
    `from_dict` reads the nested JSON config files under fiva/configs/.
    """
    # Rules
    players: int = 2
    teams: int = 2
    hand_size: Optional[int] = None             # None -> by player count
    win_sequences_needed: Optional[int] = None  # None -> by team count
    max_shared_cells: int = 1                   # cells a new sequence may share with a counted one

    # Engine options
    layout: str = "digital_optimized"

    # AI
    difficulty: str = "medium"
    top_k: int = 4
    alpha: float = 0.8

    # Episode control (auto-play)
    episode_cap: int = 400

    # Reproducibility
    seed: Optional[int] = None

    # --------- factory & helpers ---------
    @classmethod
    def from_dict(cls, cfg: Dict[str, Any]) -> "GameConfig":
        """
        Build a GameConfig from a nested dict.
        Expected top-level keys: "rules", "engine", "ai", "training" (all optional).
        """
        rules = dict(cfg.get("rules", {}))
        eng = dict(cfg.get("engine", {}))
        ai = dict(cfg.get("ai", {}))
        training = dict(cfg.get("training", {}))

        hand_size = rules.get("hand_size", None)
        win_needed = rules.get("win_sequences_needed", None)
        return cls(
            players=int(rules.get("players", 2)),
            teams=int(rules.get("teams", 2)),
            hand_size=None if hand_size is None else int(hand_size),
            win_sequences_needed=None if win_needed is None else int(win_needed),
            max_shared_cells=int(rules.get("max_shared_cells", 1)),
            layout=str(eng.get("layout", "digital_optimized")),
            difficulty=str(ai.get("difficulty", "medium")),
            top_k=int(ai.get("top_k", 4)),
            alpha=float(ai.get("alpha", 0.8)),
            episode_cap=int(training.get("episode_cap", 400)),
            seed=training.get("seed", None),
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def resolved_hand_size(self) -> int:
        return self.hand_size if self.hand_size is not None else hand_size_for(self.players)

    @property
    def resolved_win_threshold(self) -> int:
        if self.win_sequences_needed is not None:
            return self.win_sequences_needed
        return win_threshold_for(self.teams)


@dataclass
class GameState:
    """Runtime state of one match. Owned and mutated only by GameEngine."""

    phase: Phase = Phase.SETUP
    hands: List[List[Card]] = field(default_factory=list)
    player_teams: List[int] = field(default_factory=list)
    current_player: int = 0
    turns_count: int = 0

    # Counted sequences (immutable records) and per-team totals
    sequences: List[SequenceRecord] = field(default_factory=list)
    sequence_counts: Dict[int, int] = field(default_factory=dict)
    win_threshold: int = 1
    winner: Optional[int] = None

    # Which card put each chip on the board: cell index -> card
    chip_cards: Dict[int, Card] = field(default_factory=dict)

    @property
    def num_players(self) -> int:
        return len(self.player_teams)

    def team_of(self, player: int) -> int:
        return self.player_teams[player]

    def held_cards(self) -> List[Card]:
        return [card for hand in self.hands for card in hand]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "phase": self.phase.value,
            "hands": [[c.code for c in hand] for hand in self.hands],
            "playerTeams": list(self.player_teams),
            "currentPlayer": self.current_player,
            "turnsCount": self.turns_count,
            "sequences": [rec.to_dict() for rec in self.sequences],
            "sequenceCounts": {str(t): n for t, n in self.sequence_counts.items()},
            "winThreshold": self.win_threshold,
            "winner": self.winner,
            "chipCards": {str(idx): c.code for idx, c in self.chip_cards.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameState":
        return cls(
            phase=Phase(data.get("phase", Phase.SETUP.value)),
            hands=[[Card.parse(code) for code in hand] for hand in data.get("hands", [])],
            player_teams=[int(t) for t in data.get("playerTeams", [])],
            current_player=int(data.get("currentPlayer", 0)),
            turns_count=int(data.get("turnsCount", 0)),
            sequences=[SequenceRecord.from_dict(rec) for rec in data.get("sequences", [])],
            sequence_counts={int(t): int(n) for t, n in data.get("sequenceCounts", {}).items()},
            win_threshold=int(data.get("winThreshold", 1)),
            winner=data.get("winner", None),
            chip_cards={int(idx): Card.parse(code) for idx, code in data.get("chipCards", {}).items()},
        )
