from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Sequence, Union

from .cards import HAND_SIZE, Card, build_deck, cards_to_labels, deal
from .ledger import Ledger
from .models import (
    MIN_BET,
    Advice,
    HoldMask,
    MachineConfig,
    Outcome,
    Phase,
    RoundResult,
    RoundState,
    normalize_mask,
)
from .registry import DEFAULT_GAME, GameSpec, get_spec

LOGGER = logging.getLogger("videopoker.machine")

# VideoPokerMachine owns one table's RoundState. No networking or storage
# format lives here; balances and counters go through the Ledger.

BETTING_PHASES = (Phase.BET, Phase.SHOW)
HOLDING_PHASES = (Phase.DEAL, Phase.DRAW)


class VideoPokerMachine:
    """Single-player bet -> deal -> draw -> show loop for one variant."""

    def __init__(
        self,
        game: Union[str, GameSpec] = DEFAULT_GAME,
        ledger: Optional[Ledger] = None,
        config: Optional[MachineConfig] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or MachineConfig()
        self.ledger = ledger or Ledger(config=self.config)
        self.rng = rng or random.Random()
        self.game = game if isinstance(game, GameSpec) else get_spec(game)
        self.state = RoundState(
            bet=MIN_BET,
            deck=build_deck(rng=self.rng),
        )

    # Convenience accessors -------------------------------------------

    @property
    def phase(self) -> Phase:
        return self.state.phase

    @property
    def credits(self) -> int:
        # Lives only in the ledger so tables sharing a store see one balance.
        return self.ledger.credits

    @property
    def bet(self) -> int:
        return self.state.bet

    @property
    def hand(self) -> List[Card]:
        return list(self.state.hand)

    @property
    def holds(self) -> HoldMask:
        return tuple(self.state.holds)

    @property
    def last_result(self) -> Optional[RoundResult]:
        return self.state.last_result

    # Game selection --------------------------------------------------

    def select_game(self, game_id: str) -> bool:
        spec = get_spec(game_id)
        if self.state.phase not in BETTING_PHASES:
            return False
        self.game = spec
        self.state.reset_round()
        self.state.phase = Phase.BET
        return True

    # Betting ---------------------------------------------------------

    def set_bet(self, amount: int) -> bool:
        if self.state.phase not in BETTING_PHASES:
            return False
        self.state.bet = min(self.config.max_bet, max(MIN_BET, int(amount)))
        return True

    def change_bet(self, delta: int) -> bool:
        return self.set_bet(self.state.bet + int(delta))

    def set_max_bet(self) -> bool:
        return self.set_bet(self.config.max_bet)

    # Money -----------------------------------------------------------

    def insert(self, amount: int) -> int:
        moved = self.ledger.cash_in(int(amount))
        if moved:
            LOGGER.debug("Inserted %s (bank now %s)", moved, self.ledger.bank)
        return moved

    def cash_out_all(self) -> int:
        if self.state.phase not in BETTING_PHASES:
            return 0
        amount = self.ledger.cash_out()
        if amount <= 0:
            return 0
        self.state.reset_round()
        self.state.phase = Phase.BET
        LOGGER.debug("Cashed out %s (bank now %s)", amount, self.ledger.bank)
        return amount

    # Round lifecycle -------------------------------------------------

    def deal(self) -> bool:
        state = self.state
        if state.phase not in BETTING_PHASES:
            return False
        if not self.ledger.spend_credits(state.bet):
            return False

        self.ledger.accrue_wager(state.bet * self.config.coin_value)

        if len(state.deck) < self.config.reshuffle_below:
            LOGGER.debug("Reshuffling with %s cards left", len(state.deck))
            state.deck = build_deck(rng=self.rng)

        state.reset_round()
        state.hand = deal(state.deck, HAND_SIZE)
        outcome = self.game.classify(state.hand)
        state.initial_outcome = None if outcome == Outcome.NOTHING else outcome
        state.phase = Phase.DEAL
        return True

    def toggle_hold(self, slot: int) -> bool:
        if not 0 <= slot < HAND_SIZE:
            raise ValueError(f"Slot must be between 0 and {HAND_SIZE - 1}, got {slot}")
        if self.state.phase not in HOLDING_PHASES:
            return False
        self.state.holds[slot] = not self.state.holds[slot]
        return True

    def set_holds(self, mask: Sequence[bool]) -> bool:
        normalized = normalize_mask(mask)
        if self.state.phase not in HOLDING_PHASES:
            return False
        self.state.holds = list(normalized)
        return True

    def advice(self) -> Optional[Advice]:
        if len(self.state.hand) != HAND_SIZE:
            return None
        return self.game.advise(self.state.hand)

    def draw(self) -> Optional[RoundResult]:
        state = self.state
        if state.phase not in HOLDING_PHASES:
            return None

        advice = self.game.advise(state.hand)
        # A round where the player was shown the answer never scores as correct.
        correct = advice.accepts(state.holds) and not state.prompted
        self.ledger.record_round(self.game.id, correct)

        for slot in range(HAND_SIZE):
            if not state.holds[slot]:
                state.hand[slot] = deal(state.deck, 1)[0]

        outcome = self.game.classify(state.hand)
        payout = self.game.payout_for(outcome, state.bet)
        self.ledger.add_credits(payout)

        state.last_result = RoundResult(outcome=outcome, payout=payout, optimal=correct)
        state.suggestion = None
        state.phase = Phase.SHOW
        LOGGER.debug(
            "%s settled: %s bet=%s payout=%s optimal=%s",
            self.game.id,
            outcome.value,
            state.bet,
            payout,
            correct,
        )
        return state.last_result

    # Coaching --------------------------------------------------------

    def review_holds(self) -> Optional[Advice]:
        """Return the advisor's hold if hints are on and the player's differs.

        The round moves to DRAW and stays there until the player either takes
        the suggestion or keeps their own holds.
        """
        state = self.state
        if state.phase != Phase.DEAL or not self.hints_enabled:
            return None
        advice = self.game.advise(state.hand)
        if advice.accepts(state.holds):
            return None
        state.suggestion = advice
        state.prompted = True
        state.phase = Phase.DRAW
        return advice

    def accept_suggestion_and_draw(self) -> Optional[RoundResult]:
        suggestion = self.state.suggestion
        if suggestion is None or self.state.phase != Phase.DRAW:
            return None
        self.state.holds = list(suggestion.mask)
        return self.draw()

    def keep_mine_and_draw(self) -> Optional[RoundResult]:
        if not self.state.prompted or self.state.phase != Phase.DRAW:
            return None
        return self.draw()

    @property
    def hints_enabled(self) -> bool:
        return self.ledger.hints_enabled(self.game.id)

    def set_hints(self, on: bool) -> None:
        self.ledger.set_hints(self.game.id, on)

    # Counters --------------------------------------------------------

    @property
    def accuracy_pct(self) -> int:
        correct, total = self.ledger.accuracy(self.game.id)
        if total == 0:
            return 100
        return round(100 * correct / total)

    def reset_accuracy(self) -> None:
        self.ledger.reset_accuracy(self.game.id)

    def reset_rewards(self) -> None:
        self.ledger.reset_rewards()

    # Payloads --------------------------------------------------------

    def snapshot(self) -> Dict[str, object]:
        state = self.state
        correct, total = self.ledger.accuracy(self.game.id)
        result = state.last_result
        return {
            "game": self.game.id,
            "phase": state.phase.value,
            "credits": self.ledger.credits,
            "bet": state.bet,
            "hand": cards_to_labels(state.hand),
            "holds": list(state.holds),
            "initial_outcome": state.initial_outcome.value if state.initial_outcome else None,
            "last_result": None
            if result is None
            else {"outcome": result.outcome.value, "payout": result.payout, "optimal": result.optimal},
            "deck_remaining": len(state.deck),
            "bank": self.ledger.bank,
            "money_in": self.ledger.money_in,
            "money_out": self.ledger.money_out,
            "rewards": {
                "points": self.ledger.rewards_points,
                "remainder": self.ledger.rewards_remainder,
            },
            "accuracy": {"correct": correct, "total": total, "pct": self.accuracy_pct},
            "hints": self.hints_enabled,
            "prompted": state.prompted,
        }
