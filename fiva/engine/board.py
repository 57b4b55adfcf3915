# fiva/engine/board.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .board_layout import (
    BOARD_CELLS, BOARD_COLS, BOARD_ROWS, DEFAULT_LAYOUT, Layout, layout_from_codes, validate_layout,
)
from .cards import Card

# (d_row, d_col, name): horizontal, vertical, diagonal down-right, diagonal up-right
DIRECTIONS = [(0, 1, "H"), (1, 0, "V"), (1, 1, "D1"), (-1, 1, "D2")]


@dataclass
class Cell:
    index: int
    underlying: Optional[Card]        # None for the wild corners
    occupant: Optional[int] = None    # team index of the chip on this cell
    locked: bool = False              # part of a counted sequence

    @property
    def is_corner(self) -> bool:
        return self.underlying is None


def in_bounds(r: int, c: int) -> bool:
    return 0 <= r < BOARD_ROWS and 0 <= c < BOARD_COLS


class BoardModel:
    """The 100-cell grid. Topology is fixed; only occupant/locked change."""

    def __init__(self, layout: Optional[Layout] = None):
        layout = DEFAULT_LAYOUT if layout is None else tuple(layout)
        validate_layout(layout)
        self.layout: Layout = layout
        self.cells: List[Cell] = [Cell(index=i, underlying=card) for i, card in enumerate(layout)]
        self._positions: Dict[Card, Tuple[int, ...]] = {}
        for i, card in enumerate(layout):
            if card is not None:
                self._positions[card] = self._positions.get(card, ()) + (i,)

    def __getitem__(self, index: int) -> Cell:
        return self.cells[index]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self.cells)

    def __len__(self) -> int:
        return BOARD_CELLS

    @staticmethod
    def in_range(index: Any) -> bool:
        return isinstance(index, int) and 0 <= index < BOARD_CELLS

    def positions_of(self, card: Card) -> Tuple[int, ...]:
        """Cells whose printed card equals `card` (two on a valid layout)."""
        return self._positions.get(card, ())

    def counts_for_team(self, index: int, team: int) -> bool:
        cell = self.cells[index]
        return cell.is_corner or cell.occupant == team

    def gather_run(self, index: int, dr: int, dc: int, team: int) -> List[int]:
        """Ordered cells of the contiguous run through `index` along ±(dr, dc).

        Corners count for every team. The starting cell is always included.
        """
        r, c = divmod(index, BOARD_COLS)
        run: List[int] = []
        rr, cc = r - dr, c - dc
        while in_bounds(rr, cc) and self.counts_for_team(rr * BOARD_COLS + cc, team):
            run.insert(0, rr * BOARD_COLS + cc)
            rr -= dr; cc -= dc
        run.append(index)
        rr, cc = r + dr, c + dc
        while in_bounds(rr, cc) and self.counts_for_team(rr * BOARD_COLS + cc, team):
            run.append(rr * BOARD_COLS + cc)
            rr += dr; cc += dc
        return run

    def empty_cells(self) -> List[int]:
        return [cell.index for cell in self.cells if not cell.is_corner and cell.occupant is None]

    def is_full(self) -> bool:
        return all(cell.is_corner or cell.occupant is not None for cell in self.cells)

    def chip_count(self) -> int:
        return sum(1 for cell in self.cells if cell.occupant is not None)

    def copy(self) -> "BoardModel":
        clone = BoardModel.__new__(BoardModel)
        clone.layout = self.layout
        clone._positions = self._positions
        clone.cells = [Cell(c.index, c.underlying, c.occupant, c.locked) for c in self.cells]
        return clone

    def fingerprint(self) -> Tuple[Tuple[Optional[int], bool], ...]:
        return tuple((cell.occupant, cell.locked) for cell in self.cells)

    # ---- snapshots ---------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "layout": [card.code if card is not None else "BONUS" for card in self.layout],
            "occupants": [cell.occupant for cell in self.cells],
            "locked": [i for i, cell in enumerate(self.cells) if cell.locked],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "BoardModel":
        board = cls(layout_from_codes(data["layout"]))
        for cell, occupant in zip(board.cells, data.get("occupants", [])):
            cell.occupant = None if occupant is None else int(occupant)
        for idx in data.get("locked", []):
            board.cells[int(idx)].locked = True
        return board
