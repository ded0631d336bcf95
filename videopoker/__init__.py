"""Video poker rules engine: classifiers, strategy advisors and the round machine."""

from .cards import Card, RANKS, SUITS, build_deck, deal, new_deck, parse_hand, shuffle
from .ledger import JsonFileStore, Ledger, MemoryStore
from .machine import VideoPokerMachine
from .models import Advice, MachineConfig, Outcome, Phase, RoundResult, RoundState
from .registry import GAMES, GameSpec, get_spec

__all__ = [
    "Card",
    "RANKS",
    "SUITS",
    "build_deck",
    "deal",
    "new_deck",
    "parse_hand",
    "shuffle",
    "JsonFileStore",
    "Ledger",
    "MemoryStore",
    "VideoPokerMachine",
    "Advice",
    "MachineConfig",
    "Outcome",
    "Phase",
    "RoundResult",
    "RoundState",
    "GAMES",
    "GameSpec",
    "get_spec",
]
