"""Heads-up Hold'em dealing engine shared by the table server and scripts."""

from .cards import DECK_SIZE, Card, InsufficientDeckError, Rank, Suit, build_deck, card_universe, deal
from .engine import HandEngine
from .models import COMMUNITY_SIZE, HandContext, HandStateSnapshot, Stage, TableConfig

__all__ = [
    "DECK_SIZE",
    "Card",
    "InsufficientDeckError",
    "Rank",
    "Suit",
    "build_deck",
    "card_universe",
    "deal",
    "HandEngine",
    "COMMUNITY_SIZE",
    "HandContext",
    "HandStateSnapshot",
    "Stage",
    "TableConfig",
]
