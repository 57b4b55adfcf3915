# fiva/utils/logging.py
from __future__ import annotations
import os, csv, json, time
from typing import Dict, Any, Optional


class CSVLogger:
    """One row per finished game."""
    FIELDS = ["game", "winner", "turns", "cancelled", "truncated", "stalled", "timestamp"]

    def __init__(self, path: str):
        self.path = path
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        self._fh = open(self.path, "a", newline="", encoding="utf-8")
        self._w = csv.writer(self._fh)
        if self._fh.tell() == 0:
            self._w.writerow(self.FIELDS)

    def log(self, game: int, result: Dict[str, Any]) -> None:
        row = {"game": int(game), "timestamp": int(time.time()), **result}
        self._w.writerow([row.get(k) for k in self.FIELDS])
        self._fh.flush()

    def close(self) -> None:
        self._fh.close()


class JSONLLogger:
    def __init__(self, path: str):
        self.path = path
        os.makedirs(os.path.dirname(self.path), exist_ok=True)
        self._fh = open(self.path, "a", encoding="utf-8")

    def log(self, game: int, payload: Dict[str, Any]) -> None:
        out = {"game": int(game), "ts": int(time.time()), **payload}
        self._fh.write(json.dumps(out, ensure_ascii=False) + "\n")
        self._fh.flush()

    def close(self) -> None:
        self._fh.close()


class LoggingMux:
    """
    Multiplex match logs to CSV (per-game results) and JSONL (per-move records)
    based on the "logging" config section. Creates '<logdir>/<run_name>/'.
    """
    def __init__(self, cfg: Dict[str, Any]):
        log_cfg = cfg.get("logging", {})
        self.run_dir = self.get_run_dir(cfg)
        os.makedirs(self.run_dir, exist_ok=True)
        print("Run dir: {}".format(self.run_dir))

        self.csv: Optional[CSVLogger] = (
            CSVLogger(os.path.join(self.run_dir, "results.csv")) if log_cfg.get("csv", True) else None
        )
        self.jsonl: Optional[JSONLLogger] = (
            JSONLLogger(os.path.join(self.run_dir, "moves.jsonl")) if log_cfg.get("jsonl", True) else None
        )

    def move(self, game: int, record: Dict[str, Any]) -> None:
        if self.jsonl is not None:
            self.jsonl.log(game, record)

    def result(self, game: int, result: Dict[str, Any]) -> None:
        if self.csv is not None:
            self.csv.log(game, result)

    def close(self) -> None:
        if self.csv is not None:
            self.csv.close()
        if self.jsonl is not None:
            self.jsonl.close()

    @staticmethod
    def get_run_dir(cfg: Dict[str, Any]) -> str:
        log_cfg = cfg.get("logging", {})
        base_dir = log_cfg.get("logdir", "runs")
        run_name = log_cfg.get("run_name", "run")
        return os.path.join(os.path.abspath(base_dir), run_name)
