from __future__ import annotations

from typing import List, Optional

from dealer.cards import DECK_SIZE, card_universe
from dealer.engine import HandEngine
from dealer.models import HandStateSnapshot, TableConfig


def create_engine(*, seed: Optional[int] = 42, auto_start: bool = True) -> HandEngine:
    """Instantiate an engine with a reproducible shuffle."""
    return HandEngine(TableConfig(seed=seed, auto_start=auto_start))


def start_hand(engine: HandEngine, seed: Optional[int] = None) -> HandStateSnapshot:
    snapshot = engine.start_new_hand(seed=seed)
    assert engine.hand is not None
    return snapshot


def play_to_done(engine: HandEngine) -> List[HandStateSnapshot]:
    """Advance the current hand until it is complete, returning every snapshot."""
    snapshots = [engine.current_state()]
    while not engine.is_hand_complete():
        snapshots.append(engine.advance_stage())
    return snapshots


def assert_partition(engine: HandEngine) -> None:
    """Player, opponent, board and deck must split the universe exactly."""
    ctx = engine.hand
    assert ctx is not None
    seen = ctx.player + ctx.opponent + ctx.community + ctx.deck
    assert len(seen) == DECK_SIZE
    assert set(seen) == set(card_universe())
