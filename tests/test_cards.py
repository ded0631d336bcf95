import random

import pytest

from videopoker.cards import (
    Card,
    build_deck,
    cards_to_labels,
    deal,
    ensure_hand,
    new_deck,
    parse_label,
    shuffle,
)

from .helpers import hand


def test_new_deck_has_52_unique_cards():
    deck = new_deck()
    assert len(deck) == 52
    assert len(set(deck)) == 52


def test_seeded_decks_are_repeatable():
    assert build_deck(seed=3) == build_deck(seed=3)
    assert sorted(build_deck(seed=3), key=str) == sorted(new_deck(), key=str)


def test_shuffle_is_in_place_with_injected_rng():
    pool = new_deck()
    result = shuffle(pool, random.Random(11))
    assert result is pool
    assert pool == shuffle(new_deck(), random.Random(11))


def test_deal_takes_from_the_top():
    deck = [Card("A", "h"), Card("K", "d"), Card("9", "c")]
    cards = deal(deck, 2)
    assert cards_to_labels(cards) == ["Ah", "Kd"]
    assert deck == [Card("9", "c")]


def test_parse_label_accepts_ten_and_suit_symbols():
    assert parse_label("10h") == Card("T", "h")
    assert parse_label("A♠") == Card("A", "s")
    assert parse_label("qd") == Card("Q", "d")


def test_parse_hand_round_trips_labels():
    assert cards_to_labels(hand("As Ah 7d 7c 2s")) == ["As", "Ah", "7d", "7c", "2s"]


def test_invalid_cards_rejected():
    with pytest.raises(ValueError, match="Invalid rank"):
        Card("1", "s")
    with pytest.raises(ValueError, match="Invalid suit"):
        Card("A", "x")
    with pytest.raises(ValueError, match="Invalid card label"):
        parse_label("Ahh")


def test_ensure_hand_requires_five_cards():
    with pytest.raises(ValueError, match="exactly 5 cards, got 4"):
        ensure_hand(hand("As Ah 7d 7c 2s")[:4])
