from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Sequence, Tuple

from .cards import HAND_SIZE, Card

HoldMask = Tuple[bool, ...]
PayRow = Tuple[int, int, int, int, int]

MIN_BET = 1
MAX_BET = 5


class Phase(str, Enum):
    BET = "BET"
    DEAL = "DEAL"
    DRAW = "DRAW"
    SHOW = "SHOW"


class Outcome(str, Enum):
    # Shared categories
    ROYAL_FLUSH = "Royal Flush"
    STRAIGHT_FLUSH = "Straight Flush"
    FOUR_OF_A_KIND = "Four of a Kind"
    FULL_HOUSE = "Full House"
    FLUSH = "Flush"
    STRAIGHT = "Straight"
    THREE_OF_A_KIND = "Three of a Kind"
    TWO_PAIR = "Two Pair"
    JACKS_OR_BETTER = "Jacks or Better"
    # Deuces Wild
    NATURAL_ROYAL_FLUSH = "Natural Royal Flush"
    FOUR_DEUCES = "Four Deuces"
    WILD_ROYAL_FLUSH = "Wild Royal Flush"
    FIVE_OF_A_KIND = "Five of a Kind"
    # Double Double Bonus quad tiers
    FOUR_ACES_WITH_LOW_KICKER = "Four Aces w/2,3,4"
    FOUR_LOW_WITH_KICKER = "Four 2s,3s,4s w/A,2,3,4"
    FOUR_ACES = "Four Aces"
    FOUR_LOW = "Four 2s,3s,4s"
    FOUR_MIDDLE = "Four 5s thru Ks"

    NOTHING = "Nothing"


Paytable = Dict[Outcome, PayRow]


def mask_from_indices(indices: Sequence[int]) -> HoldMask:
    keep = set(indices)
    return tuple(idx in keep for idx in range(HAND_SIZE))


def normalize_mask(mask: Sequence[bool]) -> HoldMask:
    if len(mask) != HAND_SIZE:
        raise ValueError(f"Hold mask must have {HAND_SIZE} entries, got {len(mask)}")
    return tuple(bool(held) for held in mask)


HOLD_ALL: HoldMask = (True,) * HAND_SIZE
HOLD_NONE: HoldMask = (False,) * HAND_SIZE


@dataclass(frozen=True)
class Advice:
    """Recommended hold plus any masks that are equally correct."""

    mask: HoldMask
    alternates: Tuple[HoldMask, ...] = ()
    rationale: Optional[str] = None
    rule: Optional[str] = None

    def accepts(self, mask: Sequence[bool]) -> bool:
        candidate = normalize_mask(mask)
        return candidate == self.mask or candidate in self.alternates

    def to_payload(self) -> Dict[str, object]:
        return {
            "mask": list(self.mask),
            "alternates": [list(alt) for alt in self.alternates],
            "reason": self.rationale,
            "rule": self.rule,
        }


@dataclass(frozen=True)
class RoundResult:
    outcome: Outcome
    payout: int
    optimal: Optional[bool] = None


@dataclass
class MachineConfig:
    starting_credits: int = 200
    starting_bank: int = 500
    reshuffle_below: int = 10
    coin_value: int = 1
    dollars_per_point: int = 10
    max_bet: int = MAX_BET


@dataclass
class RoundState:
    # Everything that changes between bet -> deal -> draw -> show.
    phase: Phase = Phase.BET
    bet: int = MIN_BET
    deck: List[Card] = field(default_factory=list)
    hand: List[Card] = field(default_factory=list)
    holds: List[bool] = field(default_factory=lambda: [False] * HAND_SIZE)
    initial_outcome: Optional[Outcome] = None
    last_result: Optional[RoundResult] = None
    suggestion: Optional[Advice] = None
    prompted: bool = False

    def reset_round(self) -> None:
        self.hand = []
        self.holds = [False] * HAND_SIZE
        self.initial_outcome = None
        self.last_result = None
        self.suggestion = None
        self.prompted = False
