import pytest

from dealer.cards import InsufficientDeckError, deal
from dealer.models import Stage

from .helpers import create_engine, start_hand


def test_operations_require_a_started_hand():
    engine = create_engine()
    assert not engine.has_hand()
    assert not engine.is_hand_complete()
    assert engine.consume_events() == []

    with pytest.raises(RuntimeError, match="Hand not active"):
        engine.current_state()
    with pytest.raises(RuntimeError, match="Hand not active"):
        engine.advance_stage()


def test_short_deck_on_flop_raises_without_mutating_hand():
    engine = create_engine()
    start_hand(engine)
    ctx = engine.hand
    assert ctx is not None
    del ctx.deck[2:]
    remaining = list(ctx.deck)

    with pytest.raises(InsufficientDeckError, match="Not enough cards"):
        engine.advance_stage()

    assert ctx.deck == remaining
    assert ctx.community == []
    assert ctx.stage == Stage.PREFLOP
    assert engine.consume_events() == []


def test_short_deck_on_turn_raises_and_keeps_flop():
    engine = create_engine()
    start_hand(engine)
    flop = engine.advance_stage()
    ctx = engine.hand
    assert ctx is not None
    ctx.deck.clear()

    with pytest.raises(InsufficientDeckError) as excinfo:
        engine.advance_stage()

    assert excinfo.value.requested == 1
    assert excinfo.value.remaining == 0
    assert engine.current_state().community == flop.community
    assert engine.current_state().stage == Stage.FLOP


def test_river_to_done_needs_no_cards():
    engine = create_engine()
    start_hand(engine)
    for _ in range(3):
        engine.advance_stage()
    ctx = engine.hand
    assert ctx is not None
    ctx.deck.clear()

    assert engine.advance_stage().stage == Stage.DONE


def test_insufficient_deck_is_a_value_error():
    with pytest.raises(ValueError):
        deal([], 1)


def test_deal_rejects_negative_counts():
    with pytest.raises(ValueError, match="negative"):
        deal([], -1)
