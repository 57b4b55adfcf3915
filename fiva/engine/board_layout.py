# fiva/engine/board_layout.py
"""
Loads the static card layout for the 10x10 Fiva board from JSON.
Each cell is a card code (e.g., '7H') or a corner marker ('BONUS', 'RedJoker',
'BlackJoker') for the wild corners.

A layout is a flat tuple of 100 entries indexed by cell (row * 10 + col):
the underlying Card, or None for a corner. The engine receives it at game
start and never assumes a particular arrangement.
"""

from __future__ import annotations

import json
from collections import Counter
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from .cards import CORNER_CODES, Card, CardKind

__all__ = [
    "BOARD_ROWS", "BOARD_COLS", "BOARD_CELLS", "CORNERS",
    "Layout", "load_layout", "layout_from_codes", "validate_layout",
    "available_layouts", "DEFAULT_LAYOUT",
]

BOARD_ROWS = 10
BOARD_COLS = 10
BOARD_CELLS = BOARD_ROWS * BOARD_COLS
CORNERS = (0, BOARD_COLS - 1, BOARD_CELLS - BOARD_COLS, BOARD_CELLS - 1)

Layout = Tuple[Optional[Card], ...]

_BOARDS_DIR = Path(__file__).resolve().parents[1] / "assets" / "boards"
DEFAULT_LAYOUT_NAME = "digital_optimized"


def available_layouts() -> List[str]:
    return sorted(p.stem for p in _BOARDS_DIR.glob("*.json"))


def _layout_path(name_or_path: Union[str, Path, None]) -> Path:
    if name_or_path is None:
        return _BOARDS_DIR / f"{DEFAULT_LAYOUT_NAME}.json"
    path = Path(name_or_path)
    if path.suffix == ".json":
        return path
    return _BOARDS_DIR / f"{name_or_path}.json"


def _parse_code(code: str) -> Optional[Card]:
    if code in CORNER_CODES:
        return None
    return Card.parse(code)


def layout_from_codes(codes: Sequence) -> Layout:
    """Build a layout from 100 codes, flat or as 10 rows of 10."""
    flat: List[str] = []
    if len(codes) == BOARD_ROWS and all(isinstance(row, (list, tuple)) for row in codes):
        for row in codes:
            if len(row) != BOARD_COLS:
                raise ValueError(f"Every layout row must have {BOARD_COLS} cells")
            flat.extend(row)
    else:
        flat = list(codes)
    if len(flat) != BOARD_CELLS:
        raise ValueError(f"Layout must have {BOARD_CELLS} cells, got {len(flat)}")
    layout = tuple(_parse_code(str(code)) for code in flat)
    validate_layout(layout)
    return layout


def validate_layout(layout: Sequence[Optional[Card]]) -> None:
    # corners are wild; 96 printed cells; every non-jack card appears exactly twice
    if len(layout) != BOARD_CELLS:
        raise ValueError(f"Layout must have {BOARD_CELLS} cells, got {len(layout)}")
    for idx in CORNERS:
        if layout[idx] is not None:
            raise ValueError(f"Corner {idx} must be wild, found {layout[idx]}")

    printed = [card for idx, card in enumerate(layout) if idx not in CORNERS]
    if any(card is None for card in printed):
        raise ValueError("Only the four corners may be wild")

    jacks = [card.code for card in printed if card.kind is not CardKind.STANDARD]
    if jacks:
        raise ValueError(f"Jacks may not appear on the board: {jacks}")

    counts = Counter(printed)
    bad = {card.code: n for card, n in counts.items() if n != 2}
    if bad or len(counts) != 48:
        raise ValueError(f"Card multiplicities invalid (expect each non-jack exactly twice): {bad}")


def load_layout(name_or_path: Union[str, Path, None] = None) -> Layout:
    """Load a layout by bundled name ('digital_optimized', 'legacy') or JSON path."""
    src = _layout_path(name_or_path)
    with src.open("r", encoding="utf-8") as f:
        data = json.load(f)

    rows = int(data.get("rows", 0))
    cols = int(data.get("cols", 0))
    if rows != BOARD_ROWS or cols != BOARD_COLS:
        raise ValueError(f"Board JSON must be 10x10, got {rows}x{cols} at {src}")

    cells = data.get("cells", None)
    if not isinstance(cells, list):
        raise ValueError(f"Invalid 'cells' shape in {src}")
    return layout_from_codes(cells)


DEFAULT_LAYOUT: Layout = load_layout()
