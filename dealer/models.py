from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional, Tuple

from .cards import Card, cards_to_labels


class Stage(IntEnum):
    PREFLOP = 0
    FLOP = 1
    TURN = 2
    RIVER = 3
    DONE = 4


# Cards revealed to the board when leaving each stage.
COMMUNITY_DEAL: Dict[Stage, int] = {
    Stage.PREFLOP: 3,
    Stage.FLOP: 1,
    Stage.TURN: 1,
}

# Board size once a stage has been reached.
COMMUNITY_SIZE: Dict[Stage, int] = {
    Stage.PREFLOP: 0,
    Stage.FLOP: 3,
    Stage.TURN: 4,
    Stage.RIVER: 5,
    Stage.DONE: 5,
}

HOLE_CARDS = 2


@dataclass
class TableConfig:
    seed: Optional[int] = None
    auto_start: bool = True


@dataclass
class HandContext:
    # Everything that changes while a hand is dealt out.
    hand_id: str
    seed: int
    deck: List[Card]
    player: List[Card] = field(default_factory=list)
    opponent: List[Card] = field(default_factory=list)
    community: List[Card] = field(default_factory=list)
    stage: Stage = Stage.PREFLOP
    pending_events: List[Dict[str, object]] = field(default_factory=list)


@dataclass(frozen=True)
class HandStateSnapshot:
    """Read-only view of a hand handed to the presentation layer."""

    hand_id: str
    seed: int
    player: Tuple[Card, ...]
    opponent: Tuple[Card, ...]
    community: Tuple[Card, ...]
    stage: Stage
    deck_remaining: int

    @property
    def is_hand_complete(self) -> bool:
        return self.stage == Stage.DONE

    @classmethod
    def from_context(cls, ctx: HandContext) -> "HandStateSnapshot":
        return cls(
            hand_id=ctx.hand_id,
            seed=ctx.seed,
            player=tuple(ctx.player),
            opponent=tuple(ctx.opponent),
            community=tuple(ctx.community),
            stage=ctx.stage,
            deck_remaining=len(ctx.deck),
        )

    def to_payload(self) -> Dict[str, object]:
        return {
            "hand_id": self.hand_id,
            "seed": self.seed,
            "stage": self.stage.name,
            "player": cards_to_labels(self.player),
            "opponent": cards_to_labels(self.opponent),
            "community": cards_to_labels(self.community),
            "deck_remaining": self.deck_remaining,
            "is_hand_complete": self.is_hand_complete,
        }
