from __future__ import annotations

import random
from typing import List, Optional, Sequence

from videopoker.cards import Card, new_deck, parse_cards, parse_hand
from videopoker.ledger import Ledger, MemoryStore
from videopoker.machine import VideoPokerMachine
from videopoker.models import HoldMask, MachineConfig, mask_from_indices


def hand(text: str) -> List[Card]:
    """Shorthand for a 5-card hand, e.g. ``hand("As Ah 7d 7c 2s")``."""
    return parse_hand(text)


def mask(*slots: int) -> HoldMask:
    return mask_from_indices(slots)


def stacked_deck(labels: Sequence[str]) -> List[Card]:
    """Deck whose first cards are ``labels`` in order, followed by the rest of a fresh deck."""
    top = parse_cards(labels)
    rest = [card for card in new_deck() if card not in top]
    return top + rest


def create_machine(
    game: str = "job_8_5",
    *,
    credits: int = 200,
    bank: int = 500,
    seed: int = 7,
    store: Optional[MemoryStore] = None,
) -> VideoPokerMachine:
    """Machine over an in-memory ledger with a seeded deck."""
    config = MachineConfig(starting_credits=credits, starting_bank=bank)
    ledger = Ledger(store or MemoryStore(), config)
    return VideoPokerMachine(game, ledger=ledger, config=config, rng=random.Random(seed))


def deal_stacked(machine: VideoPokerMachine, text: str) -> None:
    """Deal ``text`` as the next hand; any draws come from the following cards in ``text``."""
    machine.state.deck = stacked_deck(text.split())
    assert machine.deal(), "deal was rejected"
