"""Deuces Wild, 25/16/13 pay schedule.

Every 2 is wild. Classification searches the small space of wild
substitutions directly; advice is dispatched on how many deuces were dealt,
because the right play changes sharply with the count.
"""

from __future__ import annotations

import itertools
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from ..cards import Card, ensure_hand
from ..evaluator import ROYAL_RANKS, STRAIGHT_RUNS, STRAIGHT_WINDOWS, is_royal, suit_groups
from ..models import Advice, Outcome, Paytable
from ..strategy import Hold, Rule, StrategyTable, best_of, candidate_key, hold, hold_all
from .patterns import pat_when

GAME_ID = "dw_25_16_13"
TITLE = "Deuces Wild (25/16/13)"
NOTES = "All deuces are wild. Two pair and single pairs do not pay."

WILD_RANK = "2"

PAYTABLE: Paytable = {
    Outcome.NATURAL_ROYAL_FLUSH: (250, 500, 750, 1000, 4000),
    Outcome.FOUR_DEUCES: (200, 400, 600, 800, 1000),
    Outcome.WILD_ROYAL_FLUSH: (25, 50, 75, 100, 125),
    Outcome.FIVE_OF_A_KIND: (16, 32, 48, 64, 80),
    Outcome.STRAIGHT_FLUSH: (13, 26, 39, 52, 65),
    Outcome.FOUR_OF_A_KIND: (4, 8, 12, 16, 20),
    Outcome.FULL_HOUSE: (3, 6, 9, 12, 15),
    Outcome.FLUSH: (2, 4, 6, 8, 10),
    Outcome.STRAIGHT: (2, 4, 6, 8, 10),
    Outcome.THREE_OF_A_KIND: (1, 2, 3, 4, 5),
}

DISPLAY_ORDER = (
    Outcome.NATURAL_ROYAL_FLUSH,
    Outcome.FOUR_DEUCES,
    Outcome.WILD_ROYAL_FLUSH,
    Outcome.FIVE_OF_A_KIND,
    Outcome.STRAIGHT_FLUSH,
    Outcome.FOUR_OF_A_KIND,
    Outcome.FULL_HOUSE,
    Outcome.FLUSH,
    Outcome.STRAIGHT,
    Outcome.THREE_OF_A_KIND,
)


def wild_slots(cards: Sequence[Card]) -> List[int]:
    return [idx for idx, card in enumerate(cards) if card.rank == WILD_RANK]


def natural_slots(cards: Sequence[Card]) -> List[int]:
    return [idx for idx, card in enumerate(cards) if card.rank != WILD_RANK]


# Wild-aware category tests ----------------------------------------------
#
# Each test takes the natural (non-deuce) cards plus the number of wilds that
# may stand in for anything.


def _suited(naturals: Sequence[Card]) -> bool:
    return len({card.suit for card in naturals}) <= 1


def _max_of_a_kind(naturals: Sequence[Card]) -> int:
    counts = Counter(card.rank for card in naturals)
    return max(counts.values()) if counts else 0


def straight_with_wilds(naturals: Sequence[Card], wilds: int) -> bool:
    vals = [card.value for card in naturals]
    if len(set(vals)) != len(vals):
        return False
    present = set(vals)
    for window in STRAIGHT_WINDOWS:
        if present <= window and len(window - present) <= wilds:
            return True
    return False


def full_house_with_wilds(naturals: Sequence[Card], wilds: int) -> bool:
    counts = Counter(card.rank for card in naturals)
    if len(counts) > 2:
        return False
    for trip_rank, pair_rank in itertools.permutations(counts, 2):
        deficit = max(0, 3 - counts[trip_rank]) + max(0, 2 - counts[pair_rank])
        if deficit <= wilds:
            return True
    return False


def wild_royal(naturals: Sequence[Card], wilds: int) -> bool:
    ranks = [card.rank for card in naturals]
    return (
        wilds > 0
        and _suited(naturals)
        and len(set(ranks)) == len(ranks)
        and all(rank in ROYAL_RANKS for rank in ranks)
    )


def classify(cards: Sequence[Card]) -> Outcome:
    ensure_hand(cards)
    naturals = [cards[idx] for idx in natural_slots(cards)]
    wilds = len(cards) - len(naturals)

    if wilds == 0 and is_royal(cards):
        return Outcome.NATURAL_ROYAL_FLUSH
    if wilds == 4:
        return Outcome.FOUR_DEUCES
    if wild_royal(naturals, wilds):
        return Outcome.WILD_ROYAL_FLUSH
    if _max_of_a_kind(naturals) + wilds >= 5:
        return Outcome.FIVE_OF_A_KIND
    if _suited(naturals) and straight_with_wilds(naturals, wilds):
        return Outcome.STRAIGHT_FLUSH
    if _max_of_a_kind(naturals) + wilds >= 4:
        return Outcome.FOUR_OF_A_KIND
    if full_house_with_wilds(naturals, wilds):
        return Outcome.FULL_HOUSE
    if _suited(naturals):
        return Outcome.FLUSH
    if straight_with_wilds(naturals, wilds):
        return Outcome.STRAIGHT
    if _max_of_a_kind(naturals) + wilds >= 3:
        return Outcome.THREE_OF_A_KIND
    return Outcome.NOTHING


# Draw finders ---------------------------------------------------------------


def _pat(*outcomes: Outcome):
    return pat_when(classify, outcomes)


def _hold_deuces(cards: Sequence[Card]) -> Optional[Hold]:
    deuces = wild_slots(cards)
    if not deuces:
        return None
    noun = "deuce" if len(deuces) == 1 else "deuces"
    return hold(deuces, reason=f"Hold the {len(deuces)} {noun} only.")


def _fits_window(cards: Sequence[Card], slots: Sequence[int]) -> bool:
    vals = {cards[idx].value for idx in slots}
    return len(vals) == len(slots) and any(vals <= window for window in STRAIGHT_WINDOWS)


def _consecutive(cards: Sequence[Card], slots: Sequence[int]) -> bool:
    vals = sorted(cards[idx].value for idx in slots)
    return all(b - a == 1 for a, b in zip(vals, vals[1:]))


def _lowest(cards: Sequence[Card], slots: Sequence[int]) -> int:
    return min(cards[idx].value for idx in slots)


def _suited_naturals(cards: Sequence[Card], size: int) -> Iterable[Tuple[int, ...]]:
    naturals = set(natural_slots(cards))
    for slots in suit_groups(cards).values():
        usable = [idx for idx in slots if idx in naturals]
        yield from itertools.combinations(usable, size)


def _with_deuces(size: int, accept, reason: Optional[str] = None):
    """Hold every deuce plus ``size`` suited naturals for which ``accept`` holds."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        deuces = tuple(wild_slots(cards))
        candidates = [
            deuces + combo for combo in _suited_naturals(cards, size) if accept(cards, combo)
        ]
        return best_of(cards, candidates, reason=reason)

    return finder


def _royal_only(cards: Sequence[Card], combo: Sequence[int]) -> bool:
    return all(cards[idx].rank in ROYAL_RANKS for idx in combo)


def _natural_set(size: int):
    """Deuces plus the natural cards of one rank appearing ``size`` times."""

    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        counts = Counter(cards[idx].rank for idx in natural_slots(cards))
        for rank, count in counts.items():
            if count == size:
                return hold(wild_slots(cards) + [i for i, c in enumerate(cards) if c.rank == rank])
        return None

    return finder


def _pairs_with_alternates(cards: Sequence[Card]) -> Optional[Hold]:
    # Either pair of a two-pair hand is an equally good hold.
    counts = Counter(card.rank for card in cards)
    pairs = [
        tuple(idx for idx, card in enumerate(cards) if card.rank == rank)
        for rank, count in counts.items()
        if count == 2
    ]
    if not pairs:
        return None
    pairs.sort(key=lambda slots: candidate_key(cards, slots), reverse=True)
    return Hold(keep=pairs[0], alternates=tuple(pairs[1:]))


def _four_to_outside_straight(cards: Sequence[Card]) -> Optional[Hold]:
    candidates = []
    for combo in itertools.combinations(natural_slots(cards), 4):
        if not _fits_window(cards, combo) or not _consecutive(cards, combo):
            continue
        vals = sorted(cards[idx].value for idx in combo)
        if vals[0] >= 3 and vals[3] <= 13:
            candidates.append(combo)
    return best_of(cards, candidates)


# Windows whose only gap is the centre card are not offered as inside draws.
# TODO: confirm with the strategy chart whether centre-gap windows such as
# 6-7-_-9-T should count; the current table leaves them out.
SKIP_CENTRE_GAP = True


def _four_to_inside_straight(cards: Sequence[Card]) -> Optional[Hold]:
    naturals = natural_slots(cards)
    candidates = []
    for run in STRAIGHT_RUNS:
        present = [idx for idx in naturals if cards[idx].value in run]
        for combo in itertools.combinations(present, 4):
            vals = {cards[idx].value for idx in combo}
            if len(vals) != 4:
                continue
            missing = [pos for pos, value in enumerate(run) if value not in vals]
            if missing[0] in (0, 4):
                continue  # open-ended or one-ended, not an inside draw
            if SKIP_CENTRE_GAP and missing[0] == 2:
                continue
            candidates.append(combo)
    return best_of(cards, candidates)


def _natural_royal_draw(size: int):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = [combo for combo in _suited_naturals(cards, size) if _royal_only(cards, combo)]
        return best_of(cards, candidates)

    return finder


def _two_to_royal(cards: Sequence[Card]) -> Optional[Hold]:
    candidates = [
        combo
        for combo in _suited_naturals(cards, 2)
        if _royal_only(cards, combo) and {cards[idx].rank for idx in combo} != {"T", "A"}
    ]
    return best_of(cards, candidates)


def _suited_window_draw(size: int):
    def finder(cards: Sequence[Card]) -> Optional[Hold]:
        candidates = [combo for combo in _suited_naturals(cards, size) if _fits_window(cards, combo)]
        return best_of(cards, candidates)

    return finder


def _four_to_flush(cards: Sequence[Card]) -> Optional[Hold]:
    candidates = list(_suited_naturals(cards, 4))
    return best_of(cards, candidates)


# Strategy tables, one per deuce count --------------------------------------

FOUR_DEUCES_TABLE = StrategyTable(
    f"{GAME_ID}/4",
    [Rule("four_deuces", lambda cards: hold_all("Pat Four Deuces."), "Pat Four Deuces.")],
)

THREE_DEUCES_TABLE = StrategyTable(
    f"{GAME_ID}/3",
    [
        Rule("pat_hand", _pat(Outcome.WILD_ROYAL_FLUSH, Outcome.FIVE_OF_A_KIND), "Pat hand."),
        Rule("three_deuces", _hold_deuces, "Hold the 3 deuces only."),
    ],
)

TWO_DEUCES_TABLE = StrategyTable(
    f"{GAME_ID}/2",
    [
        Rule(
            "pat_hand",
            _pat(Outcome.WILD_ROYAL_FLUSH, Outcome.FIVE_OF_A_KIND, Outcome.STRAIGHT_FLUSH),
            "Pat hand.",
        ),
        Rule(
            "four_of_a_kind",
            _natural_set(2),
            "Four of a kind: hold deuces and the pair, draw 1 for five of a kind.",
        ),
        Rule("four_to_wild_royal", _with_deuces(2, _royal_only), "4 to a Wild Royal Flush."),
        Rule(
            "four_to_straight_flush_67_up",
            _with_deuces(
                2,
                lambda cards, combo: _consecutive(cards, combo) and _lowest(cards, combo) >= 6,
            ),
            "4 to a Straight Flush with consecutive 6-7 or higher.",
        ),
        Rule("two_deuces", _hold_deuces, "Hold the 2 deuces only."),
    ],
)

ONE_DEUCE_TABLE = StrategyTable(
    f"{GAME_ID}/1",
    [
        Rule(
            "pat_hand",
            _pat(Outcome.WILD_ROYAL_FLUSH, Outcome.FIVE_OF_A_KIND, Outcome.STRAIGHT_FLUSH),
            "Pat hand.",
        ),
        Rule("four_of_a_kind", _natural_set(3), "Four of a kind: draw 1."),
        Rule("four_to_wild_royal", _with_deuces(3, _royal_only), "4 to a Wild Royal Flush."),
        Rule("full_house", _pat(Outcome.FULL_HOUSE), "Pat Full House."),
        Rule(
            "four_to_open_straight_flush",
            _with_deuces(
                3,
                lambda cards, combo: _consecutive(cards, combo) and _lowest(cards, combo) >= 5,
            ),
            "4 to an open Straight Flush (5-6-7 or higher).",
        ),
        Rule("three_of_a_kind", _natural_set(2), "Three of a kind: draw 2."),
        Rule("flush_or_straight", _pat(Outcome.FLUSH, Outcome.STRAIGHT), "Pat hand."),
        Rule("four_to_straight_flush", _with_deuces(3, _fits_window), "4 to a Straight Flush."),
        Rule("three_to_wild_royal", _with_deuces(2, _royal_only), "3 to a Wild Royal Flush."),
        Rule(
            "three_to_straight_flush_67_up",
            _with_deuces(
                2,
                lambda cards, combo: _consecutive(cards, combo) and _lowest(cards, combo) >= 6,
            ),
            "3 to a Straight Flush with consecutive 6-7 or higher.",
        ),
        Rule("one_deuce", _hold_deuces, "Hold the deuce only."),
    ],
)

NO_DEUCES_TABLE = StrategyTable(
    f"{GAME_ID}/0",
    [
        Rule("natural_royal", _pat(Outcome.NATURAL_ROYAL_FLUSH), "Pat Natural Royal Flush."),
        Rule("four_to_royal", _natural_royal_draw(4), "4 to a Royal Flush."),
        Rule("straight_flush", _pat(Outcome.STRAIGHT_FLUSH), "Pat Straight Flush."),
        Rule("four_of_a_kind", _natural_set(4), "Four of a kind: draw 1 for a deuce."),
        Rule(
            "made_hand",
            _pat(Outcome.FULL_HOUSE, Outcome.FLUSH, Outcome.STRAIGHT),
            "Pat hand.",
        ),
        Rule("three_of_a_kind", _natural_set(3), "Three of a kind: draw 2."),
        Rule("four_to_straight_flush", _suited_window_draw(4), "4 to a Straight Flush."),
        Rule("three_to_royal", _natural_royal_draw(3), "3 to a Royal Flush."),
        Rule("one_pair", _pairs_with_alternates, "One pair: draw 3."),
        Rule("four_to_flush", _four_to_flush, "4 to a Flush."),
        Rule("four_to_outside_straight", _four_to_outside_straight, "4 to an outside Straight."),
        Rule("three_to_straight_flush", _suited_window_draw(3), "3 to a Straight Flush."),
        Rule("two_to_royal", _two_to_royal, "2 to a Royal Flush."),
        Rule("four_to_inside_straight", _four_to_inside_straight, "4 to an inside Straight."),
    ],
)

TABLES_BY_DEUCES: Dict[int, StrategyTable] = {
    0: NO_DEUCES_TABLE,
    1: ONE_DEUCE_TABLE,
    2: TWO_DEUCES_TABLE,
    3: THREE_DEUCES_TABLE,
    4: FOUR_DEUCES_TABLE,
}


def table_for(cards: Sequence[Card]) -> StrategyTable:
    ensure_hand(cards)
    return TABLES_BY_DEUCES[len(wild_slots(cards))]


def advise(cards: Sequence[Card]) -> Advice:
    return table_for(cards).advise(cards)
