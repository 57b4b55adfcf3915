# fiva/utils/timers.py
from __future__ import annotations
import time


class Timer:
    """Wall-clock stopwatch for AI decision times."""

    def __init__(self):
        self._t0 = None

    def start(self) -> None:
        self._t0 = time.perf_counter()

    def elapsed(self) -> float:
        return 0.0 if self._t0 is None else (time.perf_counter() - self._t0)
