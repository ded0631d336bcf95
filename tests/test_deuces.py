import pytest

from videopoker.games import deuces
from videopoker.models import HOLD_ALL, HOLD_NONE, Outcome
from videopoker.strategy import DISCARD_ALL

from .helpers import hand, mask


@pytest.mark.parametrize(
    "text, outcome",
    [
        ("Ts Js Qs Ks As", Outcome.NATURAL_ROYAL_FLUSH),
        ("2s 2d 2h 2c 9s", Outcome.FOUR_DEUCES),
        ("2s Js Qs Ks As", Outcome.WILD_ROYAL_FLUSH),
        ("2s 2d Th Qh Ah", Outcome.WILD_ROYAL_FLUSH),
        ("2s 2d 7h 7c 7s", Outcome.FIVE_OF_A_KIND),
        ("2s 5h 6h 7h 8h", Outcome.STRAIGHT_FLUSH),
        ("2s 7h 7c 7s 9d", Outcome.FOUR_OF_A_KIND),
        ("2s 2d 7h 7c 9s", Outcome.FOUR_OF_A_KIND),
        ("2s 7h 7c 9s 9d", Outcome.FULL_HOUSE),
        ("2s 4h 7h 9h Kh", Outcome.FLUSH),
        ("2s 5h 6c 8d 9s", Outcome.STRAIGHT),
        ("As 3d 4c 5h 2s", Outcome.STRAIGHT),
        ("2s 5h 5c 8d Ks", Outcome.THREE_OF_A_KIND),
        ("Ks Kd 7h 7c 4s", Outcome.NOTHING),
        ("3s 3d 8h 9c Kd", Outcome.NOTHING),
    ],
)
def test_wild_classification(text, outcome):
    assert deuces.classify(hand(text)) == outcome


def test_two_pair_does_not_pay():
    assert Outcome.TWO_PAIR not in deuces.PAYTABLE
    assert deuces.PAYTABLE[Outcome.FOUR_DEUCES] == (200, 400, 600, 800, 1000)


def test_wild_search_helpers():
    naturals = hand("5h 6c 8d 9s Ks")[:4]
    assert deuces.straight_with_wilds(naturals, 1)
    assert not deuces.straight_with_wilds(naturals, 0)
    assert deuces.full_house_with_wilds(hand("7h 7c 9s 9d Ks")[:4], 1)
    assert not deuces.full_house_with_wilds(hand("7h 8c 9s 9d Ks")[:4], 1)


def test_four_deuces_hold_all():
    advice = deuces.advise(hand("2s 2d 2h 2c 9s"))
    assert advice.mask == HOLD_ALL
    assert advice.rule == "four_deuces"


def test_two_deuce_quads_are_not_held_pat():
    advice = deuces.advise(hand("2s 2d 7h 7c 9s"))
    assert advice.mask == mask(0, 1, 2, 3)
    assert advice.mask != HOLD_ALL
    assert advice.rule == "four_of_a_kind"


def test_three_deuces_hold_only_deuces():
    advice = deuces.advise(hand("2s 2d 2h 9c 4s"))
    assert advice.mask == mask(0, 1, 2)
    assert advice.rule == "three_deuces"


def test_three_deuces_with_wild_royal_pat():
    advice = deuces.advise(hand("2s 2d 2h Kc Ac"))
    assert advice.mask == HOLD_ALL
    assert advice.rule == "pat_hand"


def test_one_deuce_open_straight_flush_draw():
    advice = deuces.advise(hand("2s 7h 8h 9h Kd"))
    assert advice.mask == mask(0, 1, 2, 3)
    assert advice.rule == "four_to_open_straight_flush"


def test_one_deuce_alone():
    advice = deuces.advise(hand("2s 4h 9c Jd Ks"))
    assert advice.mask == mask(0)
    assert advice.rule == "one_deuce"


def test_two_pair_holds_either_pair():
    advice = deuces.advise(hand("Ks Kd 7h 7c 4s"))
    assert advice.mask == mask(0, 1)
    assert advice.alternates == (mask(2, 3),)
    assert advice.accepts(mask(2, 3))
    assert not advice.accepts(mask(0, 1, 2, 3))


def test_no_deuce_four_to_royal():
    advice = deuces.advise(hand("Ts Js Qs Ks 5d"))
    assert advice.mask == mask(0, 1, 2, 3)
    assert advice.rule == "four_to_royal"


def test_inside_straight_with_side_gap_is_held():
    advice = deuces.advise(hand("5s 7d 8c 9h Kd"))
    assert advice.mask == mask(0, 1, 2, 3)
    assert advice.rule == "four_to_inside_straight"


def test_inside_straight_missing_centre_card_is_skipped():
    advice = deuces.advise(hand("5s 6d 8c 9h Kd"))
    assert advice.mask == HOLD_NONE
    assert advice.rule == DISCARD_ALL


def test_dispatch_by_deuce_count():
    assert deuces.table_for(hand("2s 2d 7h 7c 9s")) is deuces.TWO_DEUCES_TABLE
    assert deuces.table_for(hand("Ks Kd 7h 7c 4s")) is deuces.NO_DEUCES_TABLE


@pytest.mark.parametrize(
    "text, rule, slots",
    [
        ("2s 2d Jh Qh 5c", "four_to_wild_royal", (0, 1, 2, 3)),
        ("2s 2d 7h 8h Kc", "four_to_straight_flush_67_up", (0, 1, 2, 3)),
        ("2s 2d 4h 5h Kc", "two_deuces", (0, 1)),
    ],
)
def test_two_deuce_chart_order(text, rule, slots):
    cards = hand(text)
    assert deuces.table_for(cards) is deuces.TWO_DEUCES_TABLE
    advice = deuces.advise(cards)
    assert advice.rule == rule
    assert advice.mask == mask(*slots)


@pytest.mark.parametrize(
    "text, rule, slots",
    [
        ("2s 7h 7c 7s 9d", "four_of_a_kind", (0, 1, 2, 3)),
        ("2s Jh Qh Kh 5c", "four_to_wild_royal", (0, 1, 2, 3)),
        ("2s 7h 7c 9s 9d", "full_house", (0, 1, 2, 3, 4)),
        ("2s 7h 7c 9s Kd", "three_of_a_kind", (0, 1, 2)),
        ("2s 5h 7h 8h Kd", "four_to_straight_flush", (0, 1, 2, 3)),
        ("2s Jh Qh 5c 8d", "three_to_wild_royal", (0, 1, 2)),
        ("2s 7h 8h 4c Kd", "three_to_straight_flush_67_up", (0, 1, 2)),
        ("2s 4h 5h 9c Kd", "one_deuce", (0,)),
    ],
)
def test_one_deuce_chart_order(text, rule, slots):
    cards = hand(text)
    assert deuces.table_for(cards) is deuces.ONE_DEUCE_TABLE
    advice = deuces.advise(cards)
    assert advice.rule == rule
    assert advice.mask == mask(*slots)
