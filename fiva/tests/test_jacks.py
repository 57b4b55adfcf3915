import pytest

from conftest import start_engine
from fiva.engine.cards import Card
from fiva.engine.errors import EngineError, ErrorCode
from fiva.engine.validator import ActionKind


def test_two_eyed_jack_places_anywhere_but_corners(engine, give):
    jd = give(engine, 0, "JD")
    with pytest.raises(EngineError) as err:
        engine.apply_action(0, jd, 0)
    assert err.value.code is ErrorCode.ERR_CELL_OCCUPIED
    out = engine.apply_action(0, jd, 44)
    assert out.action.kind is ActionKind.PLACE_CHIP
    assert engine.board[44].occupant == 0 and engine.state.chip_cards[44] == jd
    assert engine.verify_integrity()


def test_one_eyed_jack_removes_and_discards_both_cards(engine, give):
    engine.apply_action(0, give(engine, 0, "2C"), 1)
    six = give(engine, 1, "6C")
    engine.apply_action(1, six, 12)
    js = give(engine, 0, "JS")
    with pytest.raises(EngineError) as err:
        engine.apply_action(0, js, 1)
    assert err.value.code is ErrorCode.ERR_NO_REMOVABLE_CHIP

    out = engine.apply_action(0, js, 12)
    assert out.action.kind is ActionKind.REMOVE_CHIP and out.removed_card == six
    assert engine.board[12].occupant is None and 12 not in engine.state.chip_cards
    assert engine.deck.discard_pile[-2:] == [six, js]
    assert engine.deck.cards_on_board == 1
    assert out.to_record()["removedCard"] == "6C"
    assert engine.verify_integrity()


def test_removed_jack_chip_returns_jack_to_discards(engine, give):
    jd = give(engine, 0, "JD")
    engine.apply_action(0, jd, 44)
    jh = give(engine, 1, "JH")
    out = engine.apply_action(1, jh, 44)
    assert out.removed_card == jd
    assert engine.deck.discard_pile[-2:] == [jd, jh]
    assert engine.verify_integrity()


def test_sequence_chips_are_protected(give):
    engine = start_engine(seed=3, win_sequences_needed=2)
    for idx in [10, 11, 12, 13]:
        engine.board[idx].occupant = 1
    engine.state.current_player = 1
    out = engine.apply_action(1, give(engine, 1, "2H"), 14)
    assert len(out.new_sequences) == 1 and not out.game_over
    assert all(engine.board[i].locked for i in range(10, 15))

    js = give(engine, 0, "JS")
    before = engine.snapshot()
    with pytest.raises(EngineError) as err:
        engine.apply_action(0, js, 12)
    assert err.value.code is ErrorCode.ERR_SEQUENCE_PROTECTED
    assert engine.snapshot() == before
    assert Card.parse("JH").kind is js.kind
