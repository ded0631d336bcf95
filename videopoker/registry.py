from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence, Tuple

from .cards import Card
from .evaluator import payout_for
from .games import ddb, deuces, jacks
from .models import Advice, Outcome, Paytable


@dataclass(frozen=True)
class GameSpec:
    """Everything the round machine needs to run one variant."""

    id: str
    title: str
    display_order: Tuple[Outcome, ...]
    paytable: Paytable
    classify: Callable[[Sequence[Card]], Outcome]
    advise: Callable[[Sequence[Card]], Advice]
    notes: str = ""

    def payout_for(self, outcome: Outcome, bet: int) -> int:
        return payout_for(self.paytable, outcome, bet)

    def to_payload(self) -> Dict[str, object]:
        return {
            "id": self.id,
            "title": self.title,
            "notes": self.notes,
            "display_order": [outcome.value for outcome in self.display_order],
            "paytable": {outcome.value: list(self.paytable[outcome]) for outcome in self.display_order},
        }


def _spec_from_module(module) -> GameSpec:
    return GameSpec(
        id=module.GAME_ID,
        title=module.TITLE,
        display_order=tuple(module.DISPLAY_ORDER),
        paytable=module.PAYTABLE,
        classify=module.classify,
        advise=module.advise,
        notes=getattr(module, "NOTES", ""),
    )


GAMES: Dict[str, GameSpec] = {
    spec.id: spec for spec in (_spec_from_module(jacks), _spec_from_module(ddb), _spec_from_module(deuces))
}

DEFAULT_GAME = jacks.GAME_ID


def get_spec(game_id: str) -> GameSpec:
    try:
        return GAMES[game_id]
    except KeyError:
        raise ValueError(f"Unknown game id: {game_id}") from None


def game_ids() -> List[str]:
    return list(GAMES)
