from collections import Counter

from dealer.cards import DECK_SIZE, card_universe
from dealer.models import COMMUNITY_SIZE

from .helpers import assert_partition, create_engine, play_to_done, start_hand


def test_engine_handles_thousands_of_hands_without_losing_cards():
    engine = create_engine(seed=1_000)
    for _ in range(2_000):
        start_hand(engine)
        assert_partition(engine)
        for snapshot in play_to_done(engine):
            assert len(snapshot.community) == COMMUNITY_SIZE[snapshot.stage]
            assert snapshot.deck_remaining == DECK_SIZE - 4 - len(snapshot.community)
        assert_partition(engine)


def test_first_player_card_is_spread_across_the_deck():
    engine = create_engine(seed=31_337)
    hands = 5_200
    counts: Counter = Counter(start_hand(engine).player[0] for _ in range(hands))

    # Every card should show up, none should dominate.
    assert len(counts) == DECK_SIZE
    expected = hands / DECK_SIZE
    chi_square = sum((counts[card] - expected) ** 2 / expected for card in card_universe())
    assert chi_square < 120
    assert max(counts.values()) < 3 * expected


def test_unseeded_engines_do_not_repeat_each_other():
    first = create_engine(seed=None)
    second = create_engine(seed=None)
    deals_a = [start_hand(first).player for _ in range(20)]
    deals_b = [start_hand(second).player for _ in range(20)]
    assert deals_a != deals_b
