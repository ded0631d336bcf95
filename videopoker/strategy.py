"""Ordered hold-strategy tables.

A strategy chart is a list of :class:`Rule` entries evaluated top to bottom;
the first rule whose finder returns a :class:`Hold` decides the advice. The
tables themselves live with each variant under :mod:`videopoker.games`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .cards import HAND_SIZE, Card, ensure_hand
from .evaluator import high_card_count, rank_sum
from .models import HOLD_NONE, Advice, mask_from_indices


@dataclass(frozen=True)
class Hold:
    keep: Tuple[int, ...]
    alternates: Tuple[Tuple[int, ...], ...] = ()
    reason: Optional[str] = None


Finder = Callable[[Sequence[Card]], Optional[Hold]]


@dataclass(frozen=True)
class Rule:
    name: str
    finder: Finder
    rationale: str


DISCARD_ALL = "discard_all"


def hold(indices: Iterable[int], reason: Optional[str] = None) -> Hold:
    return Hold(keep=tuple(sorted(indices)), reason=reason)


def hold_all(reason: Optional[str] = None) -> Hold:
    return Hold(keep=tuple(range(HAND_SIZE)), reason=reason)


def candidate_key(cards: Sequence[Card], indices: Sequence[int]) -> Tuple[int, int]:
    # More J/Q/K/A first, then the larger rank sum.
    return high_card_count(cards, indices), rank_sum(cards, indices)


def best_of(
    cards: Sequence[Card],
    candidates: Iterable[Sequence[int]],
    reason: Optional[str] = None,
) -> Optional[Hold]:
    """Pick the strongest candidate subset; exact ties become alternates.

    Candidates keep their enumeration order, so the first of several tied
    subsets is the primary hold.
    """
    unique: List[Tuple[int, ...]] = []
    for candidate in candidates:
        key = tuple(sorted(candidate))
        if key not in unique:
            unique.append(key)
    if not unique:
        return None

    best = max(candidate_key(cards, candidate) for candidate in unique)
    tied = [candidate for candidate in unique if candidate_key(cards, candidate) == best]
    return Hold(keep=tied[0], alternates=tuple(tied[1:]), reason=reason)


class StrategyTable:
    """First-match-wins executor over an ordered rule list."""

    def __init__(self, name: str, rules: Sequence[Rule]) -> None:
        self.name = name
        self.rules: Tuple[Rule, ...] = tuple(rules)
        self._by_name: Dict[str, Rule] = {}
        for rule in self.rules:
            if rule.name in self._by_name:
                raise ValueError(f"Duplicate rule name {rule.name!r} in {name}")
            self._by_name[rule.name] = rule

    def __len__(self) -> int:
        return len(self.rules)

    def rule(self, name: str) -> Rule:
        return self._by_name[name]

    def match(self, cards: Sequence[Card]) -> Tuple[Optional[Rule], Optional[Hold]]:
        ensure_hand(cards)
        for rule in self.rules:
            found = rule.finder(cards)
            if found is not None:
                return rule, found
        return None, None

    def advise(self, cards: Sequence[Card]) -> Advice:
        rule, found = self.match(cards)
        if rule is None or found is None:
            return Advice(mask=HOLD_NONE, rationale="Discard everything.", rule=DISCARD_ALL)

        primary = mask_from_indices(found.keep)
        alternates = []
        for alt in found.alternates:
            mask = mask_from_indices(alt)
            if mask != primary and mask not in alternates:
                alternates.append(mask)
        return Advice(
            mask=primary,
            alternates=tuple(alternates),
            rationale=found.reason or rule.rationale,
            rule=rule.name,
        )
