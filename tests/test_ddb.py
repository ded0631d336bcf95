import pytest

from videopoker.games import ddb
from videopoker.models import HOLD_ALL, Outcome

from .helpers import hand, mask


@pytest.mark.parametrize(
    "text, outcome",
    [
        ("As Ad Ah Ac 3s", Outcome.FOUR_ACES_WITH_LOW_KICKER),
        ("As Ad Ah Ac Ks", Outcome.FOUR_ACES),
        ("3s 3d 3h 3c As", Outcome.FOUR_LOW_WITH_KICKER),
        ("4s 4d 4h 4c 2s", Outcome.FOUR_LOW_WITH_KICKER),
        ("3s 3d 3h 3c 9s", Outcome.FOUR_LOW),
        ("9s 9d 9h 9c As", Outcome.FOUR_MIDDLE),
        ("Ks Kd Kc Kh 2s", Outcome.FOUR_MIDDLE),
    ],
)
def test_quads_tiered_by_rank_and_kicker(text, outcome):
    assert ddb.classify(hand(text)) == outcome


def test_quad_kicker_tiers_pay_more():
    table = ddb.PAYTABLE
    assert table[Outcome.FOUR_ACES_WITH_LOW_KICKER][4] == 2000
    assert table[Outcome.FOUR_ACES_WITH_LOW_KICKER][0] > table[Outcome.FOUR_ACES][0]
    assert table[Outcome.FOUR_LOW_WITH_KICKER][0] > table[Outcome.FOUR_LOW][0]
    assert table[Outcome.TWO_PAIR][0] == 1


def test_non_quad_categories():
    assert ddb.classify(hand("Ks Kd Kh 4c 4s")) == Outcome.FULL_HOUSE
    assert ddb.classify(hand("As Ah 7d 7c 2s")) == Outcome.TWO_PAIR
    assert ddb.classify(hand("Qs Qd 4c 7h 9s")) == Outcome.JACKS_OR_BETTER


def test_quads_and_full_house_are_pat():
    assert ddb.advise(hand("As Ad Ah Ac 3s")).mask == HOLD_ALL
    assert ddb.advise(hand("Ks Kd Kh 4c 4s")).mask == HOLD_ALL


def test_pair_of_aces_beats_two_pair():
    advice = ddb.advise(hand("As Ad 8c 8h 3s"))
    assert advice.mask == mask(0, 1)
    assert advice.rule == "pair_of_aces"


def test_three_to_royal_jqk_beats_pair_of_kings():
    advice = ddb.advise(hand("Js Qs Ks Kd 4c"))
    assert advice.mask == mask(0, 1, 2)
    assert advice.rule == "three_to_royal_jqk"


def test_listed_inside_shape_is_held():
    advice = ddb.advise(hand("8s 9d Tc Jh 2d"))
    assert advice.mask == mask(0, 1, 2, 3)
    assert advice.rule == "four_to_straight_broadway_edge"


def test_unlisted_inside_shape_is_not_a_straight_draw():
    # 7-8-T-J is not one of the charted shapes, so the lone jack is kept instead.
    advice = ddb.advise(hand("7s 8d Tc Jh 2d"))
    assert advice.mask == mask(3)
    assert advice.rule == "face_card"


def test_inside_straight_table_is_literal():
    assert len(ddb.INSIDE_STRAIGHT_ALLOWED) == 8
    assert ddb.STRAIGHT_JQKA == ("JQKA",)


@pytest.mark.parametrize(
    "text, rule, slots",
    [
        ("5h 6h 7h 8h 8s", "four_to_straight_flush", (0, 1, 2, 3)),
        ("Th Jh Kh 4h 9s", "four_to_flush", (0, 1, 2, 3)),
        ("Th Jh Kh 4c 9s", "three_to_royal", (0, 1, 2)),
        ("9s Td Jc Qh 9d", "four_to_straight_broadway_edge", (0, 1, 2, 3)),
        ("5s 6d 7c 8h 8s", "low_pair", (3, 4)),
        ("5s 6d 7c 8h Kh", "four_to_outside_straight", (0, 1, 2, 3)),
        ("5h 6h 7h Jc Kd", "three_to_straight_flush_strong", (0, 1, 2)),
        ("Js Qd Kc Ah 3s", "four_to_straight_jqka", (0, 1, 2, 3)),
        ("Jh Qh 5c 8d 3s", "two_to_royal_jq", (0, 1)),
        ("Kh Qh 5c 8d 3s", "two_to_royal_jk_qk", (0, 1)),
        ("Kh Ah Tc Js 5d", "two_to_royal_with_ace", (0, 1)),
        ("9s Jd Qc Kh 3s", "four_to_straight_high_inside", (0, 1, 2, 3)),
        ("7h 8h Th 3c 4d", "three_to_straight_flush_medium", (0, 1, 2)),
        ("Jh Qd Kc 5s 8h", "three_to_straight_jqk", (0, 1, 2)),
        ("8s 9d Jc Qh 3s", "four_to_straight_secondary_inside", (0, 1, 2, 3)),
        ("As Jd Qc 5h 8s", "ace", (0,)),
        ("Jd Qc 5h 8s 3d", "unsuited_jq", (0, 1)),
        ("Th Jh 5c 8d 3s", "two_to_royal_tj", (0, 1)),
        ("Kh Th 4h Jc 5s", "unsuited_jk_qk", (0, 3)),
        ("Kh Th 4h 9c 5s", "three_to_flush_tk_low", (0, 1, 2)),
        ("Th Kh 5c 8d 3s", "two_to_royal_tq_tk", (0, 1)),
        ("Kd 4h 7h 8h 3c", "face_card", (0,)),
        ("4h 7h 8h 3c 9d", "three_to_straight_flush_weak", (0, 1, 2)),
        ("2s 3d 4c 6h 9h", "four_to_straight_weak", (0, 1, 2, 3)),
    ],
)
def test_ddb_chart_order(text, rule, slots):
    advice = ddb.advise(hand(text))
    assert advice.rule == rule
    assert advice.mask == mask(*slots)


def test_lone_ace_outranks_unsuited_jq():
    advice = ddb.advise(hand("As Jd Qc 5h 8s"))
    assert advice.mask == mask(0)
    assert not advice.accepts(mask(1, 2))
