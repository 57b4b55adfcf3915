# fiva/engine/sequences.py
"""
Sequence (five-in-a-row) detection and locking.

Only the four lines through the cell that just changed are rescanned. Along
each line the contiguous run of the acting team's chips (corners count for
everyone) is cut into windows of five that contain the changed cell; a window
is a new sequence when it shares at most `max_shared_cells` cells with each of
the team's already counted sequences, including ones accepted earlier in the
same scan. Accepted windows lock their chips for good.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Tuple

from .board import DIRECTIONS, BoardModel

SEQUENCE_LENGTH = 5


@dataclass(frozen=True)
class SequenceRecord:
    team: int
    cells: Tuple[int, ...]
    axis: str

    def shared_with(self, other: "SequenceRecord") -> int:
        return len(set(self.cells) & set(other.cells))

    def to_dict(self) -> Dict[str, Any]:
        return {"team": self.team, "cells": list(self.cells), "axis": self.axis}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SequenceRecord":
        return cls(int(data["team"]), tuple(int(c) for c in data["cells"]), str(data["axis"]))


class SequenceDetector:

    def __init__(self, max_shared_cells: int = 1, length: int = SEQUENCE_LENGTH):
        self.max_shared_cells = int(max_shared_cells)
        self.length = int(length)

    def find_new(
        self,
        board: BoardModel,
        cell: int,
        team: int,
        counted: Iterable[SequenceRecord] = (),
    ) -> List[SequenceRecord]:
        """New sequences for `team` passing through `cell`; does not mutate the board."""
        if not board.in_range(cell) or not board.counts_for_team(cell, team):
            return []
        known = [rec for rec in counted if rec.team == team]
        found: List[SequenceRecord] = []
        for dr, dc, axis in DIRECTIONS:
            run = board.gather_run(cell, dr, dc, team)
            if len(run) < self.length:
                continue
            pos = run.index(cell)
            first = max(0, pos - self.length + 1)
            last = min(pos, len(run) - self.length)
            for start in range(first, last + 1):
                candidate = SequenceRecord(team, tuple(run[start:start + self.length]), axis)
                if all(candidate.shared_with(rec) <= self.max_shared_cells for rec in known + found):
                    found.append(candidate)
        return found

    @staticmethod
    def commit(board: BoardModel, records: Iterable[SequenceRecord]) -> None:
        """Lock every chip of the given sequences. Locks are never cleared."""
        for rec in records:
            for idx in rec.cells:
                if not board[idx].is_corner:
                    board[idx].locked = True

    def scan(
        self,
        board: BoardModel,
        cell: int,
        team: int,
        counted: Iterable[SequenceRecord] = (),
    ) -> List[SequenceRecord]:
        found = self.find_new(board, cell, team, counted)
        self.commit(board, found)
        return found
