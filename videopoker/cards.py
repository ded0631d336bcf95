from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence

RANKS = "23456789TJQKA"
SUITS = "shdc"
RANK_VALUE = {rank: idx for idx, rank in enumerate(RANKS, start=2)}

HAND_SIZE = 5

# Accepted aliases when parsing labels typed by people (or copied from a UI).
SUIT_SYMBOLS = {"♠": "s", "♥": "h", "♦": "d", "♣": "c"}


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{self.rank}{self.suit}"

    @property
    def value(self) -> int:
        return RANK_VALUE[self.rank]

    def __str__(self) -> str:
        return self.label


def new_deck() -> List[Card]:
    """Return the 52 rank x suit combinations in a fixed order."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


def shuffle(pool: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Shuffle ``pool`` in place and return it.

    ``rng`` is injectable so tests can replay the same deal sequence.
    """
    (rng or random.Random()).shuffle(pool)
    return pool


def build_deck(seed: Optional[int] = None, rng: Optional[random.Random] = None) -> List[Card]:
    if rng is None:
        rng = random.Random(seed)
    return shuffle(new_deck(), rng)


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def ensure_hand(cards: Sequence[Card]) -> Sequence[Card]:
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Hand must contain exactly {HAND_SIZE} cards, got {len(cards)}")
    return cards


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    text = label.strip()
    if text.startswith("10"):
        text = "T" + text[2:]
    if len(text) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank, suit = text[0].upper(), text[1]
    return Card(rank, SUIT_SYMBOLS.get(suit, suit.lower()))


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]


def parse_hand(text: str) -> List[Card]:
    """Parse a whitespace separated hand such as ``"As Ah 7d 7c 2s"``."""
    return list(ensure_hand(parse_cards(text.split())))
