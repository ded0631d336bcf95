"""Persistent balances and counters behind a small key/value interface.

The machine never touches storage directly. It asks the :class:`Ledger` for
explicit numeric operations (withdraw, deposit, record a round) and the
ledger maps them onto keys in whatever :class:`KeyValueStore` it was given.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol, Tuple, Union

from .models import MachineConfig

LOGGER = logging.getLogger("videopoker.ledger")

BANK_KEY = "bank"
BANK_IN_KEY = "bank_in_total"
BANK_OUT_KEY = "bank_out_total"
CREDITS_KEY = "credits"
POINTS_KEY = "rewards_points"
REMAINDER_KEY = "rewards_remainder"


def accuracy_keys(game_id: str) -> Tuple[str, str]:
    return f"acc_correct:{game_id}", f"acc_total:{game_id}"


def hints_key(game_id: str) -> str:
    return f"hints_on:{game_id}"


class KeyValueStore(Protocol):
    def read(self, key: str, default: float = 0) -> float:
        ...

    def write(self, key: str, value: float) -> None:
        ...


class MemoryStore:
    def __init__(self, initial: Optional[Dict[str, float]] = None) -> None:
        self.data: Dict[str, float] = dict(initial or {})

    def read(self, key: str, default: float = 0) -> float:
        return self.data.get(key, default)

    def write(self, key: str, value: float) -> None:
        self.data[key] = value


class JsonFileStore:
    """One JSON object on disk, rewritten atomically on every write."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)
        self.data: Dict[str, float] = {}
        if self.path.exists():
            with self.path.open("r", encoding="utf-8") as handle:
                loaded = json.load(handle)
            if not isinstance(loaded, dict):
                raise ValueError(f"Store file {self.path} must hold a JSON object")
            self.data = loaded

    def read(self, key: str, default: float = 0) -> float:
        return self.data.get(key, default)

    def write(self, key: str, value: float) -> None:
        self.data[key] = value
        self._flush()

    def _flush(self) -> None:
        directory = self.path.parent
        directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(prefix=".store-", suffix=".json", dir=str(directory))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self.data, handle, indent=2, sort_keys=True)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise


class Ledger:
    def __init__(self, store: Optional[KeyValueStore] = None, config: Optional[MachineConfig] = None) -> None:
        self.store: KeyValueStore = store if store is not None else MemoryStore()
        self.config = config or MachineConfig()
        # Seed the bank on first use so cash-in has something to draw from.
        self.store.write(BANK_KEY, self.store.read(BANK_KEY, self.config.starting_bank))

    def _int(self, key: str, default: float = 0) -> int:
        return int(self.store.read(key, default))

    # Bank ------------------------------------------------------------

    @property
    def bank(self) -> int:
        return self._int(BANK_KEY)

    @property
    def money_in(self) -> int:
        return self._int(BANK_IN_KEY)

    @property
    def money_out(self) -> int:
        return self._int(BANK_OUT_KEY)

    def withdraw(self, amount: int) -> int:
        """Take up to ``amount`` out of the bank; returns what was actually moved."""
        if amount <= 0:
            return 0
        moved = min(amount, self.bank)
        if moved <= 0:
            return 0
        self.store.write(BANK_KEY, self.bank - moved)
        self.store.write(BANK_IN_KEY, self.money_in + moved)
        return moved

    def deposit(self, amount: int) -> int:
        if amount <= 0:
            return 0
        self.store.write(BANK_KEY, self.bank + amount)
        self.store.write(BANK_OUT_KEY, self.money_out + amount)
        return amount

    # Credits ---------------------------------------------------------

    @property
    def credits(self) -> int:
        return self._int(CREDITS_KEY, self.config.starting_credits)

    def add_credits(self, amount: int) -> int:
        if amount > 0:
            self.store.write(CREDITS_KEY, self.credits + amount)
        return self.credits

    def spend_credits(self, amount: int) -> bool:
        """Debit ``amount`` if the balance covers it; returns False otherwise."""
        balance = self.credits
        if amount <= 0 or balance < amount:
            return False
        self.store.write(CREDITS_KEY, balance - amount)
        return True

    def cash_in(self, amount: int) -> int:
        """Move up to ``amount`` from the bank onto the credit meter."""
        moved = self.withdraw(amount)
        self.add_credits(moved)
        return moved

    def cash_out(self) -> int:
        """Move the whole credit meter back to the bank; returns the amount."""
        amount = self.credits
        if amount <= 0:
            return 0
        self.store.write(CREDITS_KEY, 0)
        self.deposit(amount)
        return amount

    # Rewards ---------------------------------------------------------

    @property
    def rewards_points(self) -> int:
        return self._int(POINTS_KEY)

    @property
    def rewards_remainder(self) -> int:
        return self._int(REMAINDER_KEY)

    def accrue_wager(self, dollars: int) -> int:
        """Add wagered dollars, converting whole blocks into points. Returns points earned."""
        per_point = max(1, self.config.dollars_per_point)
        total = self.rewards_remainder + max(0, dollars)
        earned, remainder = divmod(total, per_point)
        self.store.write(POINTS_KEY, self.rewards_points + earned)
        self.store.write(REMAINDER_KEY, remainder)
        return earned

    def reset_rewards(self) -> None:
        self.store.write(POINTS_KEY, 0)
        self.store.write(REMAINDER_KEY, 0)

    # Accuracy --------------------------------------------------------

    def accuracy(self, game_id: str) -> Tuple[int, int]:
        correct_key, total_key = accuracy_keys(game_id)
        return self._int(correct_key), self._int(total_key)

    def record_round(self, game_id: str, correct: bool) -> None:
        correct_key, total_key = accuracy_keys(game_id)
        right, total = self.accuracy(game_id)
        self.store.write(total_key, total + 1)
        if correct:
            self.store.write(correct_key, right + 1)

    def reset_accuracy(self, game_id: str) -> None:
        for key in accuracy_keys(game_id):
            self.store.write(key, 0)
        LOGGER.debug("Accuracy reset for %s", game_id)

    # Hints -----------------------------------------------------------

    def hints_enabled(self, game_id: str) -> bool:
        return bool(self.store.read(hints_key(game_id), 1))

    def set_hints(self, game_id: str, on: bool) -> None:
        self.store.write(hints_key(game_id), 1 if on else 0)
