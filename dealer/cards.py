from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional


class Suit(str, Enum):
    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"


class Rank(str, Enum):
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"
    ACE = "A"


DECK_SIZE = len(Rank) * len(Suit)


class InsufficientDeckError(ValueError):
    """Raised when a draw asks for more cards than the deck still holds."""

    def __init__(self, requested: int, remaining: int) -> None:
        super().__init__(f"Not enough cards left in deck: requested {requested}, {remaining} remaining")
        self.requested = requested
        self.remaining = remaining


@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, Rank):
            raise ValueError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit!r}")

    @property
    def label(self) -> str:
        return f"{self.rank.value}{self.suit.value}"

    def __str__(self) -> str:
        return self.label


def card_universe() -> List[Card]:
    # Suit-major order, one card per (rank, suit).
    return [Card(rank, suit) for suit in Suit for rank in Rank]


def build_deck(seed: Optional[int] = None) -> List[Card]:
    rng = random.Random(seed)
    deck = card_universe()
    rng.shuffle(deck)
    return deck


def deal(deck: List[Card], count: int) -> List[Card]:
    if count < 0:
        raise ValueError(f"Cannot deal a negative number of cards: {count}")
    if len(deck) < count:
        raise InsufficientDeckError(count, len(deck))
    cards = deck[:count]
    # Single slice deletion so the list is never observed half-drawn.
    del deck[:count]
    return cards


def cards_to_labels(cards: Iterable[Card]) -> List[str]:
    return [card.label for card in cards]
