import random

import pytest

from videopoker.cards import HAND_SIZE, build_deck
from videopoker.models import Outcome
from videopoker.registry import GAMES

from .helpers import create_machine


@pytest.mark.parametrize("game_id", sorted(GAMES))
def test_classify_and_advise_total_over_random_hands(game_id):
    spec = GAMES[game_id]
    rng = random.Random(2024)
    for _ in range(2_000):
        cards = build_deck(rng=rng)[:HAND_SIZE]
        outcome = spec.classify(cards)
        assert (outcome == Outcome.NOTHING) == (outcome not in spec.paytable)
        advice = spec.advise(cards)
        assert len(advice.mask) == HAND_SIZE
        assert advice.accepts(advice.mask)
        assert advice.mask not in advice.alternates
        assert advice.rule


@pytest.mark.parametrize("game_id", sorted(GAMES))
def test_machine_follows_advisor_for_many_rounds(game_id):
    machine = create_machine(game_id, credits=50_000, seed=99)
    machine.set_max_bet()
    wagered = returned = 0

    for _ in range(1_000):
        assert machine.deal()
        machine.set_holds(machine.advice().mask)
        assert machine.review_holds() is None
        result = machine.draw()
        wagered += machine.bet
        returned += result.payout

    assert machine.credits == 50_000 - wagered + returned
    assert machine.ledger.accuracy(game_id) == (1_000, 1_000)
    assert machine.ledger.rewards_points == wagered // 10
