# fiva/utils/replay_io.py
from __future__ import annotations
import os
import json
from typing import Any, Dict, List

REPLAY_FORMAT = "fiva-replay/1"


def save_replay(path: str, start: Dict[str, Any], moves: List[Dict[str, Any]],
                result: Dict[str, Any]) -> None:
    """Write the starting engine snapshot, the move records and the final result."""
    os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
    data = {"format": REPLAY_FORMAT, "start": start, "moves": moves, "result": result}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, separators=(",", ":"), ensure_ascii=False)


def load_replay(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if data.get("format") != REPLAY_FORMAT:
        raise ValueError(f"Unsupported replay format in {path}: {data.get('format')!r}")
    return data
