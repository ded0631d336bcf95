from __future__ import annotations

from collections import Counter
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from .cards import RANK_VALUE, SUITS, Card
from .models import MAX_BET, MIN_BET, Outcome, Paytable

# Predicates shared by every variant's classifier and advisor. All of them
# work on plain card sequences; hand-size checks happen at the public entry
# points (classify/advise).

HIGH_RANKS = frozenset("JQKA")
ROYAL_RANKS = frozenset("TJQKA")
ACE = RANK_VALUE["A"]

WHEEL_VALUES = frozenset({ACE, 2, 3, 4, 5})

# Every five-value run a straight can occupy, low card first, wheel first.
STRAIGHT_RUNS: Tuple[Tuple[int, ...], ...] = ((ACE, 2, 3, 4, 5),) + tuple(
    tuple(range(start, start + 5)) for start in range(2, 11)
)
STRAIGHT_WINDOWS: Tuple[FrozenSet[int], ...] = tuple(frozenset(run) for run in STRAIGHT_RUNS)


def values(cards: Iterable[Card]) -> List[int]:
    return [card.value for card in cards]


def rank_counts(cards: Iterable[Card]) -> Dict[str, int]:
    return dict(Counter(card.rank for card in cards))


def count_shape(cards: Iterable[Card]) -> List[int]:
    """Multiset of rank multiplicities, largest first (e.g. [3, 2] for a full house)."""
    return sorted(rank_counts(cards).values(), reverse=True)


def ranks_by_count(cards: Iterable[Card]) -> List[str]:
    """Distinct ranks ordered by multiplicity, then rank value, highest first."""
    counts = rank_counts(cards)
    return sorted(counts, key=lambda rank: (counts[rank], RANK_VALUE[rank]), reverse=True)


def is_flush(cards: Sequence[Card]) -> bool:
    return len({card.suit for card in cards}) == 1


def straight_high(cards: Sequence[Card]) -> Optional[int]:
    distinct = set(values(cards))
    if len(distinct) != 5:
        return None
    if distinct == WHEEL_VALUES:  # Ace low
        return 5
    if max(distinct) - min(distinct) == 4:
        return max(distinct)
    return None


def is_straight(cards: Sequence[Card]) -> bool:
    return straight_high(cards) is not None


def is_royal(cards: Sequence[Card]) -> bool:
    return is_flush(cards) and {card.rank for card in cards} == ROYAL_RANKS


def indices_where(cards: Sequence[Card], predicate: Callable[[Card], bool]) -> List[int]:
    return [idx for idx, card in enumerate(cards) if predicate(card)]


def rank_indices(cards: Sequence[Card], rank: str) -> List[int]:
    return indices_where(cards, lambda card: card.rank == rank)


def suit_groups(cards: Sequence[Card]) -> Dict[str, List[int]]:
    """Slot indices per suit, in the fixed suit order (empty suits omitted)."""
    groups: Dict[str, List[int]] = {}
    for suit in SUITS:
        slots = indices_where(cards, lambda card, s=suit: card.suit == s)
        if slots:
            groups[suit] = slots
    return groups


def high_card_count(cards: Sequence[Card], indices: Iterable[int]) -> int:
    return sum(1 for idx in indices if cards[idx].rank in HIGH_RANKS)


def rank_sum(cards: Sequence[Card], indices: Iterable[int]) -> int:
    return sum(cards[idx].value for idx in indices)


def payout_for(paytable: Paytable, outcome: Outcome, bet: int) -> int:
    row = paytable.get(outcome)
    if row is None:
        return 0
    clamped = min(MAX_BET, max(MIN_BET, bet))
    return row[clamped - 1]
