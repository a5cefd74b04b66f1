import pytest

from dealer.models import HandStateSnapshot, Stage

from .helpers import create_engine, start_hand


def test_hand_ids_count_up_per_engine():
    engine = create_engine()
    ids = [start_hand(engine).hand_id for _ in range(3)]
    assert [hand_id[-5:] for hand_id in ids] == ["00000", "00001", "00002"]
    assert all(hand_id.startswith("H-") for hand_id in ids)


def test_engines_do_not_share_hands():
    left = create_engine(seed=1)
    right = create_engine(seed=1)
    start_hand(left)
    left.advance_stage()
    assert not right.has_hand()
    start_hand(right)
    assert right.current_state().stage == Stage.PREFLOP
    assert left.current_state().stage == Stage.FLOP


def test_snapshot_is_frozen():
    engine = create_engine()
    snapshot = start_hand(engine)
    with pytest.raises(AttributeError):
        snapshot.stage = Stage.DONE  # type: ignore[misc]


def test_is_hand_complete_is_derived_from_stage():
    engine = create_engine()
    snapshot = start_hand(engine)
    ctx = engine.hand
    assert ctx is not None
    ctx.stage = Stage.DONE
    assert HandStateSnapshot.from_context(ctx).is_hand_complete
    assert engine.is_hand_complete()
    assert not snapshot.is_hand_complete
