#!/usr/bin/env python3
"""Deal many hands offline and report how the shuffle behaves.

Every hand is played out to DONE, checked that no card is lost or duplicated,
and the player's first card is tallied. A chi-square statistic against a
uniform 1/52 distribution is printed at the end (51 degrees of freedom, so
values far above ~70 deserve a closer look).

Example:
    python scripts/deal_stats.py --hands 20000 --seed 7
"""

from __future__ import annotations

import argparse
import logging
from collections import Counter
from typing import Dict, Iterable, Optional

from dealer.cards import DECK_SIZE, Card, card_universe
from dealer.engine import HandEngine
from dealer.models import HandStateSnapshot, Stage, TableConfig

LOGGER = logging.getLogger("deal_stats")


def check_partition(engine: HandEngine) -> None:
    ctx = engine.hand
    assert ctx is not None
    seen = ctx.player + ctx.opponent + ctx.community + ctx.deck
    if len(seen) != DECK_SIZE or set(seen) != set(card_universe()):
        raise AssertionError(f"Hand {ctx.hand_id} lost or duplicated cards")


def play_out(engine: HandEngine) -> HandStateSnapshot:
    snapshot = engine.start_new_hand()
    check_partition(engine)
    while not snapshot.is_hand_complete:
        snapshot = engine.advance_stage()
        check_partition(engine)
    return snapshot


def chi_square(counts: Dict[Card, int], universe: Iterable[Card], total: int) -> float:
    expected = total / DECK_SIZE
    return sum((counts.get(card, 0) - expected) ** 2 / expected for card in universe)


def run(hands: int, seed: Optional[int]) -> None:
    engine = HandEngine(TableConfig(seed=seed))
    first_cards: Counter[Card] = Counter()

    for _ in range(hands):
        snapshot = play_out(engine)
        assert snapshot.stage == Stage.DONE
        first_cards[snapshot.player[0]] += 1

    universe = card_universe()
    stat = chi_square(first_cards, universe, hands)
    LOGGER.info("Dealt %s hands, %s distinct first cards", hands, len(first_cards))
    for card, count in first_cards.most_common(5):
        print(f"{card.label:>4}  {count:6d}  ({count / hands:.4f})")
    print(f"chi-square vs uniform: {stat:.2f} (df={DECK_SIZE - 1})")


def main() -> None:
    parser = argparse.ArgumentParser(description="Offline shuffle statistics")
    parser.add_argument("--hands", type=int, default=10_000)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO)
    run(args.hands, args.seed)


if __name__ == "__main__":
    main()
