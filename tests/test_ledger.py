import json

import pytest

from videopoker.ledger import JsonFileStore, Ledger, MemoryStore
from videopoker.models import MachineConfig


def test_bank_seeds_once_and_credits_default():
    store = MemoryStore()
    ledger = Ledger(store)
    assert ledger.bank == 500
    assert ledger.credits == 200

    store.write("bank", 42)
    assert Ledger(store).bank == 42


def test_withdraw_limited_by_bank():
    ledger = Ledger(MemoryStore(), MachineConfig(starting_bank=300))
    assert ledger.withdraw(1000) == 300
    assert ledger.bank == 0
    assert ledger.money_in == 300
    assert ledger.withdraw(10) == 0
    assert ledger.withdraw(-5) == 0


def test_deposit_tracks_money_out():
    ledger = Ledger()
    assert ledger.deposit(120) == 120
    assert ledger.bank == 620
    assert ledger.money_out == 120
    assert ledger.deposit(0) == 0


def test_rewards_carry_remainder():
    ledger = Ledger()
    assert ledger.accrue_wager(25) == 2
    assert (ledger.rewards_points, ledger.rewards_remainder) == (2, 5)
    assert ledger.accrue_wager(5) == 1
    assert (ledger.rewards_points, ledger.rewards_remainder) == (3, 0)
    ledger.reset_rewards()
    assert (ledger.rewards_points, ledger.rewards_remainder) == (0, 0)


def test_accuracy_counters_are_per_game():
    ledger = Ledger()
    ledger.record_round("job_8_5", True)
    ledger.record_round("job_8_5", False)
    ledger.record_round("ddb_9_6", True)
    assert ledger.accuracy("job_8_5") == (1, 2)
    assert ledger.accuracy("ddb_9_6") == (1, 1)
    assert ledger.store.read("acc_total:job_8_5") == 2

    ledger.reset_accuracy("job_8_5")
    assert ledger.accuracy("job_8_5") == (0, 0)
    assert ledger.accuracy("ddb_9_6") == (1, 1)


def test_hints_default_on():
    ledger = Ledger()
    assert ledger.hints_enabled("dw_25_16_13")
    ledger.set_hints("dw_25_16_13", False)
    assert not ledger.hints_enabled("dw_25_16_13")
    assert ledger.hints_enabled("job_8_5")


def test_json_store_persists_between_instances(tmp_path):
    path = tmp_path / "profile" / "store.json"
    ledger = Ledger(JsonFileStore(path))
    ledger.cash_in(100)

    reopened = Ledger(JsonFileStore(path))
    assert reopened.credits == 300
    assert reopened.bank == 400
    assert json.loads(path.read_text())["bank"] == 400
    assert [p.name for p in path.parent.iterdir()] == ["store.json"]


def test_json_store_rejects_non_object(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("[1, 2]")
    with pytest.raises(ValueError, match="must hold a JSON object"):
        JsonFileStore(path)


def test_credit_operations_read_the_store_each_time():
    store = MemoryStore()
    first, second = Ledger(store), Ledger(store)
    assert first.spend_credits(5)
    assert second.credits == 195
    assert not second.spend_credits(500)
    assert second.add_credits(10) == 205

    assert first.cash_out() == 205
    assert second.cash_out() == 0
    assert first.bank == 705
    assert second.money_out == 205
