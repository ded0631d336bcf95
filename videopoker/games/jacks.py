"""Jacks or Better, 8/5 pay schedule."""

from __future__ import annotations

import itertools
from typing import Iterable, Optional, Sequence, Tuple

from ..cards import Card, ensure_hand
from ..evaluator import (
    ACE,
    HIGH_RANKS,
    ROYAL_RANKS,
    STRAIGHT_WINDOWS,
    count_shape,
    high_card_count,
    is_flush,
    is_royal,
    is_straight,
    rank_counts,
    rank_indices,
    suit_groups,
)
from ..models import Advice, Outcome, Paytable
from ..strategy import Hold, Rule, StrategyTable, best_of, hold
from .patterns import (
    four_to_flush,
    pat_when,
    rank_set,
    ranks_with_count,
    royal_draw,
    single,
    suited_pairs,
    trips,
    unsuited_pairs,
)

GAME_ID = "job_8_5"
TITLE = "Jacks or Better (8/5)"

PAYTABLE: Paytable = {
    Outcome.ROYAL_FLUSH: (250, 500, 750, 1000, 4000),  # 4000 on max bet
    Outcome.STRAIGHT_FLUSH: (50, 100, 150, 200, 250),
    Outcome.FOUR_OF_A_KIND: (25, 50, 75, 100, 125),
    Outcome.FULL_HOUSE: (8, 16, 24, 32, 40),
    Outcome.FLUSH: (5, 10, 15, 20, 25),
    Outcome.STRAIGHT: (4, 8, 12, 16, 20),
    Outcome.THREE_OF_A_KIND: (3, 6, 9, 12, 15),
    Outcome.TWO_PAIR: (2, 4, 6, 8, 10),
    Outcome.JACKS_OR_BETTER: (1, 2, 3, 4, 5),
}

DISPLAY_ORDER = (
    Outcome.ROYAL_FLUSH,
    Outcome.STRAIGHT_FLUSH,
    Outcome.FOUR_OF_A_KIND,
    Outcome.FULL_HOUSE,
    Outcome.FLUSH,
    Outcome.STRAIGHT,
    Outcome.THREE_OF_A_KIND,
    Outcome.TWO_PAIR,
    Outcome.JACKS_OR_BETTER,
)


def classify(cards: Sequence[Card]) -> Outcome:
    ensure_hand(cards)
    flush = is_flush(cards)
    straight = is_straight(cards)

    if is_royal(cards):
        return Outcome.ROYAL_FLUSH
    if flush and straight:
        return Outcome.STRAIGHT_FLUSH

    shape = count_shape(cards)
    if shape[0] == 4:
        return Outcome.FOUR_OF_A_KIND
    if shape[:2] == [3, 2]:
        return Outcome.FULL_HOUSE
    if flush:
        return Outcome.FLUSH
    if straight:
        return Outcome.STRAIGHT
    if shape[0] == 3:
        return Outcome.THREE_OF_A_KIND
    if shape[:2] == [2, 2]:
        return Outcome.TWO_PAIR
    if shape[0] == 2:
        for rank, count in rank_counts(cards).items():
            if count == 2 and rank in HIGH_RANKS:
                return Outcome.JACKS_OR_BETTER
    return Outcome.NOTHING


# Pattern finders -------------------------------------------------------


def _two_pair(cards: Sequence[Card]) -> Optional[Hold]:
    pairs = ranks_with_count(cards, 2)
    if len(pairs) != 2:
        return None
    return hold(rank_indices(cards, pairs[0]) + rank_indices(cards, pairs[1]))


def _pair(high: bool):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        for rank in ranks_with_count(cards, 2):
            if (rank in HIGH_RANKS) == high:
                return hold(rank_indices(cards, rank))
        return None

    return finder


def _four_to_straight_flush(cards: Sequence[Card]) -> Optional[Hold]:
    # Any four suited cards inside one five-rank window, wheel included.
    candidates = []
    for slots in suit_groups(cards).values():
        if len(slots) < 4:
            continue
        for window in STRAIGHT_WINDOWS:
            fit = [idx for idx in slots if cards[idx].value in window]
            candidates.extend(itertools.combinations(fit, 4))
    return best_of(cards, candidates)


def _distinct_value_quads(cards: Sequence[Card]) -> Iterable[Tuple[int, ...]]:
    for combo in itertools.combinations(range(len(cards)), 4):
        if len({cards[idx].value for idx in combo}) == 4:
            yield combo


def _outside_straight(max_highs: int):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = []
        for combo in _distinct_value_quads(cards):
            vals = sorted(cards[idx].value for idx in combo)
            if vals[3] - vals[0] == 3 and high_card_count(cards, combo) <= max_highs:
                candidates.append(combo)
        return best_of(cards, candidates)

    return finder


def _open_ended(vals: Sequence[int]) -> bool:
    # Four in a row that can be filled at either end; JQKA can only take a Ten.
    return vals[3] - vals[0] == 3 and vals[0] >= 2 and vals[3] < ACE


def _inside_straight(highs_needed: int):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = []
        for combo in _distinct_value_quads(cards):
            values = {cards[idx].value for idx in combo}
            if not any(values <= window for window in STRAIGHT_WINDOWS):
                continue
            if _open_ended(sorted(values)):
                continue
            if high_card_count(cards, combo) == highs_needed:
                candidates.append(combo)
        return best_of(cards, candidates)

    return finder


def sf3_gap_type(cards: Sequence[Card], triple: Sequence[int]) -> int:
    """1 = no gaps, 2 = one gap, 3 = two or more. Aces count high."""
    vals = sorted(cards[idx].value for idx in triple)
    gaps = (vals[2] - vals[0]) - 2
    if gaps <= 0:
        return 1
    return 2 if gaps == 1 else 3


def _three_to_straight_flush(gap_type: int):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = []
        for slots in suit_groups(cards).values():
            for triple in itertools.combinations(slots, 3):
                if all(cards[idx].rank in ROYAL_RANKS for idx in triple):
                    continue  # 3 to a royal ranks higher up the table
                if sf3_gap_type(cards, triple) == gap_type:
                    candidates.append(triple)
        return best_of(cards, candidates)

    return finder


def _pat(*outcomes: Outcome):
    return pat_when(classify, outcomes)


STRATEGY = StrategyTable(
    GAME_ID,
    [
        Rule("royal_flush", _pat(Outcome.ROYAL_FLUSH), "Pat Royal Flush."),
        Rule("straight_flush", _pat(Outcome.STRAIGHT_FLUSH), "Pat Straight Flush."),
        Rule("four_of_a_kind", _pat(Outcome.FOUR_OF_A_KIND), "Pat Four of a Kind."),
        Rule("four_to_royal", royal_draw(4), "4 to a Royal Flush."),
        Rule("full_house", _pat(Outcome.FULL_HOUSE), "Pat Full House."),
        Rule("flush", _pat(Outcome.FLUSH), "Pat Flush."),
        Rule("three_of_a_kind", trips, "3 of a kind: draw 2."),
        Rule("straight", _pat(Outcome.STRAIGHT), "Pat Straight."),
        Rule("four_to_straight_flush", _four_to_straight_flush, "4 to a Straight Flush."),
        Rule("two_pair", _two_pair, "Two pair: draw 1."),
        Rule("high_pair", _pair(high=True), "High pair (Jacks or better)."),
        Rule("three_to_royal", royal_draw(3), "3 to a Royal Flush."),
        Rule("four_to_flush", four_to_flush, "4 to a Flush."),
        Rule("unsuited_tjqk", rank_set("TJQK"), "Unsuited TJQK."),
        Rule("low_pair", _pair(high=False), "Low pair."),
        Rule("four_to_outside_straight", _outside_straight(2), "4 to an outside Straight (0-2 high cards)."),
        Rule("three_to_straight_flush_type1", _three_to_straight_flush(1), "3 to a Straight Flush (no gaps)."),
        Rule("suited_qj", suited_pairs("QJ"), "Suited QJ."),
        Rule("four_to_inside_straight_4_highs", _inside_straight(4), "4 to an inside Straight, 4 high cards."),
        Rule("suited_kq_kj", suited_pairs("KQ", "KJ"), "Suited KQ or KJ."),
        Rule("suited_ak_aq_aj", suited_pairs("AK", "AQ", "AJ"), "Suited AK, AQ or AJ."),
        Rule("four_to_inside_straight_3_highs", _inside_straight(3), "4 to an inside Straight, 3 high cards."),
        Rule("three_to_straight_flush_type2", _three_to_straight_flush(2), "3 to a Straight Flush (one gap)."),
        Rule("unsuited_jqk", rank_set("JQK"), "Unsuited JQK."),
        Rule("unsuited_jq", rank_set("JQ"), "Unsuited JQ."),
        Rule("suited_tj", suited_pairs("TJ"), "Suited TJ."),
        Rule("unsuited_kq_kj", unsuited_pairs("KQ", "KJ"), "Two unsuited high cards, King highest."),
        Rule("suited_tq", suited_pairs("TQ"), "Suited TQ."),
        Rule("unsuited_ak_aq_aj", unsuited_pairs("AK", "AQ", "AJ"), "Two unsuited high cards, Ace highest."),
        Rule("jack", single("J"), "Jack only."),
        Rule("suited_tk", suited_pairs("TK"), "Suited TK."),
        Rule("queen", single("Q"), "Queen only."),
        Rule("king", single("K"), "King only."),
        Rule("ace", single("A"), "Ace only."),
        Rule("three_to_straight_flush_type3", _three_to_straight_flush(3), "3 to a Straight Flush (two or more gaps)."),
    ],
)


def advise(cards: Sequence[Card]) -> Advice:
    return STRATEGY.advise(cards)
