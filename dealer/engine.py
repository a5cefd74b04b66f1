from __future__ import annotations

import logging
import random
import time
from typing import Dict, List, Optional

from .cards import Card, InsufficientDeckError, build_deck, deal
from .models import COMMUNITY_DEAL, HOLE_CARDS, HandContext, HandStateSnapshot, Stage, TableConfig

LOGGER = logging.getLogger("dealer")

# HandEngine owns one heads-up hand at a time. It only deals cards: no
# betting, no hand evaluation, no networking.


class HandEngine:
    """Deck and stage state machine for a single two-seat hand."""

    def __init__(self, config: Optional[TableConfig] = None) -> None:
        self.config = config or TableConfig()
        self.rng = random.Random(self.config.seed)
        self.hand_counter = 0
        self.hand: Optional[HandContext] = None

    # Hand lifecycle --------------------------------------------------

    def has_hand(self) -> bool:
        return self.hand is not None

    def start_new_hand(self, seed: Optional[int] = None) -> HandStateSnapshot:
        if seed is None:
            seed = self.rng.getrandbits(32)
        deck = build_deck(seed)

        hand_id = f"H-{time.strftime('%Y%m%d')}-{self.hand_counter:05d}"
        self.hand_counter += 1

        ctx = HandContext(hand_id=hand_id, seed=seed, deck=deck)
        ctx.player = deal(ctx.deck, HOLE_CARDS)
        ctx.opponent = deal(ctx.deck, HOLE_CARDS)

        # Replace the previous hand only once the new one is fully dealt.
        self.hand = ctx
        LOGGER.debug("Started hand %s (seed=%s)", hand_id, seed)
        return HandStateSnapshot.from_context(ctx)

    def advance_stage(self) -> HandStateSnapshot:
        ctx = self._require_hand()
        if ctx.stage == Stage.DONE:
            return HandStateSnapshot.from_context(ctx)

        count = COMMUNITY_DEAL.get(ctx.stage, 0)
        cards = self._draw(ctx, count)
        ctx.community.extend(cards)
        revealed_at = ctx.stage
        ctx.stage = Stage(min(ctx.stage + 1, Stage.DONE))

        if revealed_at == Stage.PREFLOP:
            ctx.pending_events.append({"ev": "FLOP", "cards": [card.label for card in cards]})
        elif cards:
            ev = "TURN" if revealed_at == Stage.FLOP else "RIVER"
            ctx.pending_events.append({"ev": ev, "card": cards[0].label})

        LOGGER.debug("Hand %s advanced to %s", ctx.hand_id, ctx.stage.name)
        return HandStateSnapshot.from_context(ctx)

    def current_state(self) -> HandStateSnapshot:
        return HandStateSnapshot.from_context(self._require_hand())

    def _draw(self, ctx: HandContext, count: int) -> List[Card]:
        try:
            return deal(ctx.deck, count)
        except InsufficientDeckError:
            LOGGER.warning(
                "Hand %s cannot deal %s card(s) at %s: only %s left",
                ctx.hand_id,
                count,
                ctx.stage.name,
                len(ctx.deck),
            )
            raise

    def _require_hand(self) -> HandContext:
        if self.hand is None:
            raise RuntimeError("Hand not active")
        return self.hand

    # Public/Snapshot helpers -----------------------------------------

    def is_hand_complete(self) -> bool:
        return bool(self.hand and self.hand.stage == Stage.DONE)

    def state_payload(self) -> Dict[str, object]:
        return self.current_state().to_payload()

    def consume_events(self) -> List[Dict[str, object]]:
        if not self.hand:
            return []
        events = list(self.hand.pending_events)
        self.hand.pending_events.clear()
        return events
