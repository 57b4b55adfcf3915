from fiva.engine.board import BoardModel
from fiva.engine.cards import Card, create_full_deck
from fiva.engine.errors import ErrorCode
from fiva.engine.validator import ActionKind, MoveValidator

C = Card.parse


def check(card, cell, team, board):
    return MoveValidator.validate(C(card), cell, team, board)


def test_standard_card_rules():
    board = BoardModel()
    assert check("2C", 1, 0, board).kind is ActionKind.PLACE_CHIP
    assert check("2C", 2, 0, board).reason is ErrorCode.ERR_CARD_MISMATCH
    assert check("2C", 0, 0, board).reason is ErrorCode.ERR_CARD_MISMATCH
    assert check("2C", 100, 0, board).reason is ErrorCode.ERR_OUT_OF_RANGE
    assert check("2C", -1, 0, board).reason is ErrorCode.ERR_OUT_OF_RANGE
    board[1].occupant = 1
    assert check("2C", 1, 0, board).reason is ErrorCode.ERR_CELL_OCCUPIED
    assert check("2C", 50, 0, board).is_valid


def test_two_eyed_jack_rules():
    board = BoardModel()
    board[55].occupant = 0
    assert check("JD", 44, 0, board).kind is ActionKind.PLACE_CHIP
    assert check("JC", 55, 1, board).reason is ErrorCode.ERR_CELL_OCCUPIED
    for corner in [0, 9, 90, 99]:
        assert check("JD", corner, 0, board).reason is ErrorCode.ERR_CELL_OCCUPIED


def test_one_eyed_jack_rules():
    board = BoardModel()
    board[12].occupant = 1; board[13].occupant = 0
    board[14].occupant = 1; board[14].locked = True
    assert check("JS", 12, 0, board).kind is ActionKind.REMOVE_CHIP
    assert check("JH", 13, 0, board).reason is ErrorCode.ERR_NO_REMOVABLE_CHIP
    assert check("JH", 15, 0, board).reason is ErrorCode.ERR_NO_REMOVABLE_CHIP
    assert check("JH", 0, 0, board).reason is ErrorCode.ERR_NO_REMOVABLE_CHIP
    assert check("JS", 14, 0, board).reason is ErrorCode.ERR_SEQUENCE_PROTECTED


def test_every_card_cell_pair_classified_without_mutation():
    board = BoardModel()
    board[12].occupant = 1; board[13].occupant = 0; board[13].locked = True
    before = board.fingerprint()
    for card in create_full_deck():
        for cell in range(-1, 101):
            verdict = MoveValidator.validate(card, cell, 0, board)
            assert verdict.is_valid == (verdict.reason is None)
            assert verdict.kind in ActionKind
    assert board.fingerprint() == before


def test_dead_cards_and_targets():
    board = BoardModel()
    assert not MoveValidator.is_dead(C("2C"), board)
    board[1].occupant = 0; board[50].occupant = 1
    assert MoveValidator.is_dead(C("2C"), board)
    assert not MoveValidator.is_dead(C("JD"), board)
    assert check("2C", None, 0, board).kind is ActionKind.DISCARD_DEAD
    assert check("3C", None, 0, board).reason is ErrorCode.ERR_CARD_NOT_DEAD
    assert MoveValidator.targets_for(C("2C"), 0, board) == []
    assert MoveValidator.targets_for(C("3C"), 0, board) == [2, 51]
    assert MoveValidator.targets_for(C("JS"), 0, board) == [50]
    assert len(MoveValidator.targets_for(C("JD"), 0, board)) == 94
