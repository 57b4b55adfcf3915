# fiva/scripts/selfplay.py
from __future__ import annotations
import argparse
import os
from pathlib import Path
from typing import Any, Dict

from ..agents.ai_agent import AIAgent
from ..agents.autoplay import AutoPlayer
from ..engine.engine_core import GameEngine
from ..engine.state import GameConfig
from ..utils.jsonio import deep_update, load_json, override_config, parse_override
from ..utils.logging import LoggingMux
from ..utils.replay_io import save_replay
from ..utils.seeding import set_seeds_from_cfg

DEFAULT_CONFIG = Path(__file__).resolve().parents[1] / "configs" / "default.json"


def build_agents(cfg: Dict[str, Any], config: GameConfig, seed: int) -> Dict[int, AIAgent]:
    """One AI per seat; 'ai.seats' may give a seat its own difficulty."""
    seats = {int(k): v for k, v in cfg.get("ai", {}).get("seats", {}).items()}
    return {
        seat: AIAgent(seats.get(seat, config.difficulty), seed=seed + seat,
                      top_k=config.top_k, alpha=config.alpha)
        for seat in range(config.players)
    }


def play_game(cfg: Dict[str, Any], config: GameConfig, seed: int, mux: LoggingMux,
              game: int, replay_dir: str = "") -> Dict[str, Any]:
    engine = GameEngine(move_logger=lambda record: mux.move(game, record))
    engine.seed(seed)
    engine.start_new(config)
    start = engine.snapshot()

    runner = AutoPlayer(engine, build_agents(cfg, config, seed), max_turns=config.episode_cap)
    summary = runner.run()
    engine.verify_integrity()

    result = {k: summary[k] for k in ("winner", "turns", "cancelled", "truncated", "stalled")}
    mux.result(game, result)
    if replay_dir:
        save_replay(os.path.join(replay_dir, f"game_{game:04d}.json"), start, summary["moves"], result)
    return result


def main():
    p = argparse.ArgumentParser(description="Run AI-vs-AI Fiva matches.")
    p.add_argument("--config", default=str(DEFAULT_CONFIG))
    p.add_argument("--games", type=int, default=1)
    p.add_argument("--replays", default="", help="directory for per-game replay files")
    p.add_argument("--set", action="append", default=[], metavar="KEY=VALUE",
                   help="dot-path config override, e.g. ai.difficulty=hard")
    args = p.parse_args()

    cfg = deep_update(load_json(str(DEFAULT_CONFIG)), load_json(args.config))
    for item in args.set:
        cfg = override_config(cfg, parse_override(item))

    seed = set_seeds_from_cfg(cfg, "training")
    config = GameConfig.from_dict(cfg)
    mux = LoggingMux(cfg)

    wins: Dict[Any, int] = {}
    try:
        for game in range(args.games):
            result = play_game(cfg, config, seed + game, mux, game, args.replays)
            wins[result["winner"]] = wins.get(result["winner"], 0) + 1
            print(f"game {game}: winner={result['winner']} turns={result['turns']}")
    finally:
        mux.close()
    print("Self-play completed. Wins per team: {}".format(wins))


if __name__ == "__main__":
    main()
