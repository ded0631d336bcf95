"""Hand-pattern finders shared by the variant strategy tables.

Every builder returns a finder ``cards -> Optional[Hold]`` suitable for a
:class:`~videopoker.strategy.Rule`. Slot indices always refer to the
caller's 5-card hand.
"""

from __future__ import annotations

import itertools
from typing import Callable, Collection, List, Optional, Sequence, Tuple

from ..cards import Card
from ..evaluator import ROYAL_RANKS, rank_counts, rank_indices, suit_groups
from ..models import Outcome
from ..strategy import Finder, Hold, best_of, hold, hold_all


def ranks_with_count(cards: Sequence[Card], count: int) -> List[str]:
    return [rank for rank, n in rank_counts(cards).items() if n == count]


def pat_when(classify: Callable[[Sequence[Card]], Outcome], outcomes: Collection[Outcome]) -> Finder:
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        outcome = classify(cards)
        if outcome in outcomes:
            return hold_all(f"Pat {outcome.value}.")
        return None

    return finder


def trips(cards: Sequence[Card]) -> Optional[Hold]:
    ranks = ranks_with_count(cards, 3)
    if not ranks:
        return None
    return hold(rank_indices(cards, ranks[0]))


def royal_draw(size: int) -> Finder:
    """``size`` suited cards toward a royal, best candidate first."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = []
        for slots in suit_groups(cards).values():
            royal = [idx for idx in slots if cards[idx].rank in ROYAL_RANKS]
            candidates.extend(itertools.combinations(royal, size))
        return best_of(cards, candidates)

    return finder


def four_to_flush(cards: Sequence[Card]) -> Optional[Hold]:
    for slots in suit_groups(cards).values():
        if len(slots) == 4:
            return hold(slots)
    return None


def find_suited_pair(cards: Sequence[Card], first: str, second: str) -> Optional[List[int]]:
    for slots in suit_groups(cards).values():
        a = [idx for idx in slots if cards[idx].rank == first]
        b = [idx for idx in slots if cards[idx].rank == second]
        if a and b:
            return [a[0], b[0]]
    return None


def suited_pairs(*pairs: str) -> Finder:
    """First listed rank pair found suited wins (e.g. ``"KQ", "KJ"``)."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        for pair in pairs:
            found = find_suited_pair(cards, pair[0], pair[1])
            if found:
                return hold(found)
        return None

    return finder


def unsuited_pairs(*pairs: str) -> Finder:
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        for pair in pairs:
            for ia in rank_indices(cards, pair[0]):
                for ib in rank_indices(cards, pair[1]):
                    if cards[ia].suit != cards[ib].suit:
                        return hold([ia, ib])
        return None

    return finder


def one_of_each(cards: Sequence[Card], ranks: str) -> List[Tuple[int, ...]]:
    per_rank = [rank_indices(cards, rank) for rank in ranks]
    if not all(per_rank):
        return []
    return list(itertools.product(*per_rank))


def rank_set(ranks: str) -> Finder:
    """One card of each listed rank, suits ignored."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        return best_of(cards, one_of_each(cards, ranks))

    return finder


def rank_sets(patterns: Sequence[str]) -> Finder:
    """Any one of several rank patterns; all matches compete on the tie-break."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = []
        for pattern in patterns:
            candidates.extend(one_of_each(cards, pattern))
        return best_of(cards, candidates)

    return finder


def suited_rank_sets(patterns: Sequence[str]) -> Finder:
    """Same as :func:`rank_sets` but every card of a match shares one suit."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = []
        for slots in suit_groups(cards).values():
            suited = [cards[idx] for idx in slots]
            for pattern in patterns:
                for combo in one_of_each(suited, pattern):
                    candidates.append(tuple(slots[pos] for pos in combo))
        return best_of(cards, candidates)

    return finder


def single(rank: str) -> Finder:
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        slots = rank_indices(cards, rank)
        return hold(slots[:1]) if slots else None

    return finder


def pair_of(rank: str) -> Finder:
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        slots = rank_indices(cards, rank)
        return hold(slots) if len(slots) == 2 else None

    return finder
