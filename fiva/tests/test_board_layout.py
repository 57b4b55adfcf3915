from collections import Counter

import pytest

from fiva.engine.board import BoardModel
from fiva.engine.board_layout import (
    CORNERS, DEFAULT_LAYOUT, available_layouts, layout_from_codes, load_layout, validate_layout,
)
from fiva.engine.cards import Card


def test_bundled_layouts_are_valid():
    assert {"digital_optimized", "legacy"} <= set(available_layouts())
    for name in ["digital_optimized", "legacy"]:
        layout = load_layout(name)
        assert len(layout) == 100
        assert all(layout[i] is None for i in CORNERS)
        counts = Counter(c for c in layout if c is not None)
        assert len(counts) == 48 and set(counts.values()) == {2}
        assert all(c.rank.value != "J" for c in counts)
    assert load_layout() == DEFAULT_LAYOUT


def test_layout_from_codes_accepts_rows_or_flat():
    codes = ["BONUS" if c is None else c.code for c in DEFAULT_LAYOUT]
    rows = [codes[r * 10:(r + 1) * 10] for r in range(10)]
    assert layout_from_codes(codes) == layout_from_codes(rows) == DEFAULT_LAYOUT


def test_invalid_layouts_rejected():
    codes = ["BONUS" if c is None else c.code for c in DEFAULT_LAYOUT]
    with pytest.raises(ValueError):
        layout_from_codes(codes[:99])
    jack = list(codes); jack[1] = "JD"
    with pytest.raises(ValueError):
        layout_from_codes(jack)
    corner = list(codes); corner[0], corner[1] = corner[1], corner[0]
    with pytest.raises(ValueError):
        layout_from_codes(corner)
    triple = list(codes); triple[2] = triple[1]
    with pytest.raises(ValueError):
        layout_from_codes(triple)
    with pytest.raises(ValueError):
        validate_layout(DEFAULT_LAYOUT[:-1])


def test_board_positions_and_runs():
    board = BoardModel()
    assert board.positions_of(Card.parse("2C")) == (1, 50)
    assert board.positions_of(Card.parse("JD")) == ()
    assert len(board.empty_cells()) == 96 and not board.is_full()
    for idx in [1, 2, 3]:
        board[idx].occupant = 0
    assert board.gather_run(2, 0, 1, 0) == [0, 1, 2, 3]
    assert board.gather_run(2, 0, 1, 1) == [2]
    assert board.counts_for_team(0, 1) and not board.counts_for_team(1, 1)
    assert not BoardModel.in_range(100) and not BoardModel.in_range(-1) and BoardModel.in_range(99)


def test_board_copy_and_snapshot():
    board = BoardModel(load_layout("legacy"))
    board[12].occupant = 1; board[12].locked = True
    clone = board.copy()
    clone[13].occupant = 0
    assert board[13].occupant is None
    restored = BoardModel.from_dict(board.to_dict())
    assert restored.fingerprint() == board.fingerprint()
    assert restored.layout == board.layout
    assert board.chip_count() == 1
