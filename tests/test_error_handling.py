import pytest

from videopoker.cards import Card, deal
from videopoker.models import normalize_mask
from videopoker.registry import GAMES, get_spec

from .helpers import hand


@pytest.mark.parametrize("game_id", sorted(GAMES))
def test_classify_and_advise_reject_short_hands(game_id):
    spec = get_spec(game_id)
    short = hand("As Ah 7d 7c 2s")[:4]
    with pytest.raises(ValueError, match="exactly 5 cards"):
        spec.classify(short)
    with pytest.raises(ValueError, match="exactly 5 cards"):
        spec.advise(short)


def test_six_cards_rejected_too():
    spec = get_spec("job_8_5")
    cards = hand("As Ah 7d 7c 2s") + [Card("K", "d")]
    with pytest.raises(ValueError, match="got 6"):
        spec.classify(cards)


def test_mask_length_enforced():
    with pytest.raises(ValueError, match="Hold mask must have 5 entries"):
        normalize_mask([True, False])


def test_deal_raises_when_deck_exhausted():
    deck = [Card("A", "h"), Card("K", "d")]
    deal(deck, 2)
    with pytest.raises(ValueError, match="Not enough cards"):
        deal(deck, 1)
