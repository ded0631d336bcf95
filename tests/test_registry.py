import pytest

from videopoker.models import Outcome
from videopoker.registry import DEFAULT_GAME, GAMES, game_ids, get_spec

from .helpers import hand


def test_registry_lists_three_variants():
    assert game_ids() == ["job_8_5", "ddb_9_6", "dw_25_16_13"]
    assert DEFAULT_GAME == "job_8_5"


def test_unknown_game_fails_fast():
    with pytest.raises(ValueError, match="Unknown game id: keno"):
        get_spec("keno")


def test_display_order_covers_paytable():
    for spec in GAMES.values():
        assert set(spec.display_order) == set(spec.paytable)
        assert Outcome.NOTHING not in spec.paytable


def test_spec_composes_classifier_advisor_and_payouts():
    spec = get_spec("dw_25_16_13")
    cards = hand("2s 2d 2h 2c 9s")
    assert spec.classify(cards) == Outcome.FOUR_DEUCES
    assert spec.payout_for(spec.classify(cards), 5) == 1000
    assert spec.advise(cards).mask == (True,) * 5


def test_payload_lists_rows_in_display_order():
    payload = get_spec("ddb_9_6").to_payload()
    assert payload["title"] == "Double Double Bonus (9/6)"
    assert payload["display_order"][2] == "Four Aces w/2,3,4"
    assert payload["paytable"]["Four Aces w/2,3,4"] == [400, 800, 1200, 1600, 2000]
