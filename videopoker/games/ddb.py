"""Double Double Bonus, full-pay 9/6.

Quads pay by rank and, for aces and 2s-4s, by the kicker as well.
"""

from __future__ import annotations

import itertools
from typing import Optional, Sequence, Tuple

from ..cards import Card, ensure_hand
from ..evaluator import (
    HIGH_RANKS,
    count_shape,
    is_flush,
    is_royal,
    is_straight,
    rank_counts,
    ranks_by_count,
    suit_groups,
)
from ..models import Advice, Outcome, Paytable
from ..strategy import Hold, Rule, StrategyTable, best_of, hold
from .patterns import (
    four_to_flush,
    pair_of,
    pat_when,
    rank_set,
    rank_sets,
    ranks_with_count,
    royal_draw,
    single,
    suited_pairs,
    suited_rank_sets,
    trips,
    unsuited_pairs,
)

GAME_ID = "ddb_9_6"
TITLE = "Double Double Bonus (9/6)"
NOTES = "Full-pay 9/6 DDB. Special quad payouts by rank and kicker."

PAYTABLE: Paytable = {
    Outcome.ROYAL_FLUSH: (250, 500, 750, 1000, 4000),
    Outcome.STRAIGHT_FLUSH: (50, 100, 150, 200, 250),
    Outcome.FOUR_ACES_WITH_LOW_KICKER: (400, 800, 1200, 1600, 2000),
    Outcome.FOUR_LOW_WITH_KICKER: (160, 320, 480, 640, 800),
    Outcome.FOUR_ACES: (160, 320, 480, 640, 800),
    Outcome.FOUR_LOW: (80, 160, 240, 320, 400),
    Outcome.FOUR_MIDDLE: (50, 100, 150, 200, 250),
    Outcome.FULL_HOUSE: (9, 18, 27, 36, 45),
    Outcome.FLUSH: (6, 12, 18, 24, 30),
    Outcome.STRAIGHT: (4, 8, 12, 16, 20),
    Outcome.THREE_OF_A_KIND: (3, 6, 9, 12, 15),
    Outcome.TWO_PAIR: (1, 2, 3, 4, 5),
    Outcome.JACKS_OR_BETTER: (1, 2, 3, 4, 5),
}

DISPLAY_ORDER = (
    Outcome.ROYAL_FLUSH,
    Outcome.STRAIGHT_FLUSH,
    Outcome.FOUR_ACES_WITH_LOW_KICKER,
    Outcome.FOUR_LOW_WITH_KICKER,
    Outcome.FOUR_ACES,
    Outcome.FOUR_LOW,
    Outcome.FOUR_MIDDLE,
    Outcome.FULL_HOUSE,
    Outcome.FLUSH,
    Outcome.STRAIGHT,
    Outcome.THREE_OF_A_KIND,
    Outcome.TWO_PAIR,
    Outcome.JACKS_OR_BETTER,
)

QUAD_OUTCOMES = (
    Outcome.FOUR_ACES_WITH_LOW_KICKER,
    Outcome.FOUR_LOW_WITH_KICKER,
    Outcome.FOUR_ACES,
    Outcome.FOUR_LOW,
    Outcome.FOUR_MIDDLE,
)

LOW_QUAD_RANKS = frozenset("234")
ACE_KICKERS = frozenset("234")
LOW_QUAD_KICKERS = frozenset("A234")


def classify_quad(quad_rank: str, kicker: str) -> Outcome:
    if quad_rank == "A":
        return Outcome.FOUR_ACES_WITH_LOW_KICKER if kicker in ACE_KICKERS else Outcome.FOUR_ACES
    if quad_rank in LOW_QUAD_RANKS:
        return Outcome.FOUR_LOW_WITH_KICKER if kicker in LOW_QUAD_KICKERS else Outcome.FOUR_LOW
    return Outcome.FOUR_MIDDLE


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
        quad_rank = ranks_by_count(cards)[0]
        kicker = next(card.rank for card in cards if card.rank != quad_rank)
        return classify_quad(quad_rank, kicker)
    if shape[:2] == [3, 2]:
        return Outcome.FULL_HOUSE
    if shape[0] == 3:
        return Outcome.THREE_OF_A_KIND
    if flush:
        return Outcome.FLUSH
    if straight:
        return Outcome.STRAIGHT
    if shape[:2] == [2, 2]:
        return Outcome.TWO_PAIR
    if shape[0] == 2:
        for rank, count in rank_counts(cards).items():
            if count == 2 and rank in HIGH_RANKS:
                return Outcome.JACKS_OR_BETTER
    return Outcome.NOTHING


# Rank-shape tables ---------------------------------------------------------

# Curated 4-card inside-straight shapes. This is a literal list from the
# strategy chart, not a general gutshot detector: only these count.
INSIDE_STRAIGHT_ALLOWED: Tuple[str, ...] = (
    "89TJ", "9TJQ", "TJQK",
    "JQKA",
    "89JQ", "8TJQ", "9TJK", "9TQK",
)

STRAIGHT_BROADWAY_EDGE = INSIDE_STRAIGHT_ALLOWED[:3]
STRAIGHT_JQKA = INSIDE_STRAIGHT_ALLOWED[3:4]
STRAIGHT_SECONDARY_INSIDE = INSIDE_STRAIGHT_ALLOWED[4:]

STRAIGHT_OUTSIDE = ("2345", "3456", "4567", "5678", "6789", "789T")
STRAIGHT_HIGH_INSIDE = ("9JQK", "TJQA", "TJKA", "TQKA")
STRAIGHT_WEAK_INSIDE = (
    "2346", "2356", "2456",
    "3457", "3467", "3567",
    "4568", "4578", "4678",
    "5679", "5689", "5789",
    "678T", "679T", "689T",
)

SF3_STRONG = (
    "345", "456", "567", "678", "789", "89T",
    "89J", "8TJ", "8JQ", "9TJ", "9TQ", "9JQ",
    "9JK", "9QK",
)
SF3_MEDIUM = (
    "A23", "234", "235", "245",
    "346", "356", "457", "467",
    "568", "578", "679", "689",
    "78T", "78J", "79J", "79T", "7TJ",
    "89Q", "8TQ", "9TK",
)
SF3_WEAK = (
    "236", "246", "256",
    "347", "357", "367",
    "458", "468", "478",
    "569", "579", "589",
    "67T", "68T", "69T",
)

# Chart order for 3 to a royal; earlier shapes are stronger draws.
THREE_TO_ROYAL_ORDER = ("JQK", "TJQ", "TJK", "TQK", "TJA", "TQA", "TKA", "JQA", "JKA", "QKA")


def find_three_to_royal(cards: Sequence[Card]) -> Optional[Tuple[Hold, str]]:
    for pattern in THREE_TO_ROYAL_ORDER:
        found = suited_rank_sets([pattern])(cards)
        if found is not None:
            return found, pattern
    return None


def _three_to_royal(label: Optional[str] = None):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        match = find_three_to_royal(cards)
        if match is None:
            return None
        found, pattern = match
        if label is not None and pattern != label:
            return None
        return hold(found.keep, reason=f"3 to a Royal: {pattern}.")

    return finder


def _four_to_straight_flush(cards: Sequence[Card]) -> Optional[Hold]:
    # Four suited cards with consecutive ranks; gapped shapes do not qualify here.
    candidates = []
    for slots in suit_groups(cards).values():
        for quad in itertools.combinations(slots, 4):
            vals = sorted(cards[idx].value for idx in quad)
            if all(b - a == 1 for a, b in zip(vals, vals[1:])):
                candidates.append(quad)
    return best_of(cards, candidates)


def _two_pair(cards: Sequence[Card]) -> Optional[Hold]:
    pairs = ranks_with_count(cards, 2)
    if len(pairs) != 2:
        return None
    return hold(idx for idx, card in enumerate(cards) if card.rank in pairs)


def _low_pair(cards: Sequence[Card]) -> Optional[Hold]:
    for rank in "T98765432":
        found = pair_of(rank)(cards)
        if found is not None:
            return hold(found.keep, reason=f"1 pair: {rank}s.")
    return None


def _three_to_flush_tk_low(cards: Sequence[Card]) -> Optional[Hold]:
    candidates = []
    for slots in suit_groups(cards).values():
        ten = [idx for idx in slots if cards[idx].rank == "T"]
        king = [idx for idx in slots if cards[idx].rank == "K"]
        lows = [idx for idx in slots if cards[idx].rank in "2345678"]
        if ten and king:
            candidates.extend((ten[0], king[0], low) for low in lows)
    return best_of(cards, candidates)


def _single_face(cards: Sequence[Card]) -> Optional[Hold]:
    for rank in "KQJ":
        found = single(rank)(cards)
        if found is not None:
            return hold(found.keep, reason=f"1 high card: {rank}.")
    return None


def _pat(*outcomes: Outcome):
    return pat_when(classify, outcomes)


STRATEGY = StrategyTable(
    GAME_ID,
    [
        Rule(
            "pat_hand",
            _pat(
                Outcome.ROYAL_FLUSH,
                Outcome.STRAIGHT_FLUSH,
                *QUAD_OUTCOMES,
                Outcome.FULL_HOUSE,
                Outcome.FLUSH,
                Outcome.STRAIGHT,
            ),
            "Pat hand.",
        ),
        Rule("four_to_royal", royal_draw(4), "4 to a Royal Flush."),
        Rule("three_of_a_kind", trips, "3 of a kind."),
        Rule("four_to_straight_flush", _four_to_straight_flush, "4 to a Straight Flush."),
        Rule("pair_of_aces", pair_of("A"), "1 pair: Aces."),
        Rule("two_pair", _two_pair, "Two pair: draw 1."),
        Rule("three_to_royal_jqk", _three_to_royal("JQK"), "3 to a Royal: JQK."),
        Rule("pair_of_kings", pair_of("K"), "1 pair: Kings."),
        Rule("three_to_royal_tjq", _three_to_royal("TJQ"), "3 to a Royal: TJQ."),
        Rule("pair_of_queens", pair_of("Q"), "1 pair: Queens."),
        Rule("pair_of_jacks", pair_of("J"), "1 pair: Jacks."),
        Rule("four_to_flush", four_to_flush, "4 to a Flush."),
        Rule("three_to_royal", _three_to_royal(), "3 to a Royal."),
        Rule("four_to_straight_broadway_edge", rank_sets(STRAIGHT_BROADWAY_EDGE), "4 to a Straight (broadway-inside)."),
        Rule("low_pair", _low_pair, "1 pair: 2s thru 10s."),
        Rule("four_to_outside_straight", rank_sets(STRAIGHT_OUTSIDE), "4 to an outside Straight."),
        Rule("three_to_straight_flush_strong", suited_rank_sets(SF3_STRONG), "3 to a Straight Flush (strong)."),
        Rule("four_to_straight_jqka", rank_sets(STRAIGHT_JQKA), "4 to a Straight: JQKA."),
        Rule("two_to_royal_jq", suited_pairs("JQ"), "2 to a Royal: JQ suited."),
        Rule("two_to_royal_jk_qk", suited_pairs("JK", "QK"), "2 to a Royal: JK/QK suited."),
        Rule("two_to_royal_with_ace", suited_pairs("JA", "QA", "KA"), "2 to a Royal: (J/Q/K)+A suited."),
        Rule("four_to_straight_high_inside", rank_sets(STRAIGHT_HIGH_INSIDE), "4 to a Straight (9JQK/TJQA/TJKA/TQKA)."),
        Rule("three_to_straight_flush_medium", suited_rank_sets(SF3_MEDIUM), "3 to a Straight Flush (medium)."),
        Rule("three_to_straight_jqk", rank_set("JQK"), "3 to a Straight: JQK."),
        Rule("four_to_straight_secondary_inside", rank_sets(STRAIGHT_SECONDARY_INSIDE), "4 to a Straight (secondary inside)."),
        Rule("ace", single("A"), "1 high card: Ace."),
        Rule("unsuited_jq", unsuited_pairs("JQ"), "2 to a Straight: JQ."),
        Rule("two_to_royal_tj", suited_pairs("TJ"), "2 to a Royal: TJ suited."),
        Rule("unsuited_jk_qk", unsuited_pairs("JK", "QK"), "2 to a Straight: JK/QK."),
        Rule("three_to_flush_tk_low", _three_to_flush_tk_low, "3 to a Flush: T,K + low suited (2-8)."),
        Rule("two_to_royal_tq_tk", suited_pairs("TQ", "TK"), "2 to a Royal: TQ/TK suited."),
        Rule("face_card", _single_face, "1 high card: J/Q/K."),
        Rule("three_to_straight_flush_weak", suited_rank_sets(SF3_WEAK), "3 to a Straight Flush (weak)."),
        Rule("four_to_straight_weak", rank_sets(STRAIGHT_WEAK_INSIDE), "4 to a Straight (weak)."),
    ],
)


def advise(cards: Sequence[Card]) -> Advice:
    return STRATEGY.advise(cards)
