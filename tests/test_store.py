"""Tests for tradejournal.store: JournalStore."""

import threading
from dataclasses import replace
from datetime import datetime, timezone

import pytest

from conftest import make_trade, make_transaction
from tradejournal.config import UserSettings
from tradejournal.imports import normalise_batch
from tradejournal.store import JournalStore
from tradejournal.types import RiskAlertKind


class TestJournalStore:

    def test_starts_empty_with_default_settings(self):
        store = JournalStore()
        snap = store.snapshot()
        assert snap.trades == ()
        assert snap.transactions == ()
        assert snap.settings == UserSettings()

    def test_add_trades_and_transactions(self, scenario_trades, initial_deposit):
        store = JournalStore()
        assert store.add_trades(scenario_trades) == 3
        assert store.add_transactions(initial_deposit) == 1
        assert store.add_trades([]) == 0

        m = store.snapshot().metrics()
        assert m.current_balance == pytest.approx(7450.0)

    def test_snapshot_is_not_affected_by_later_appends(self, scenario_trades):
        store = JournalStore(trades=scenario_trades[:1])
        snap = store.snapshot()
        store.add_trades(scenario_trades[1:])

        assert len(snap.trades) == 1
        assert len(store.snapshot().trades) == 3

    def test_add_batch(self):
        store = JournalStore()
        batch = normalise_batch([{"pnl": 10}], [{"amount": 100}], now=datetime(2025, 1, 1, tzinfo=timezone.utc))
        store.add_batch(batch)
        assert len(store.trades) == 1
        assert len(store.transactions) == 1

    def test_replace_trade_keeps_position(self, scenario_trades):
        store = JournalStore(trades=scenario_trades)
        edited = replace(scenario_trades[1], profit_and_loss=-75.0, outcome=None)
        store.replace_trade(edited)

        assert [t.profit_and_loss for t in store.trades] == [1000.0, -75.0, 1500.0]
        assert store.trades[1].id == scenario_trades[1].id

    def test_replace_unknown_trade_raises(self, scenario_trades):
        store = JournalStore(trades=scenario_trades)
        with pytest.raises(KeyError):
            store.replace_trade(make_trade(1.0))

    def test_remove_trade(self, scenario_trades):
        store = JournalStore(trades=scenario_trades)
        removed = store.remove_trade(scenario_trades[0].id)
        assert removed is scenario_trades[0]
        assert len(store.trades) == 2
        with pytest.raises(KeyError):
            store.remove_trade(scenario_trades[0].id)

    def test_update_settings(self):
        store = JournalStore()
        updated = store.update_settings(daily_loss_limit=250, currency="eur")
        assert updated.daily_loss_limit == 250.0
        assert updated.currency == "EUR"
        assert store.settings.daily_trade_limit == 5

    def test_invalid_settings_update_leaves_settings_unchanged(self):
        store = JournalStore()
        with pytest.raises(ValueError):
            store.update_settings(daily_loss_limit=-1)
        assert store.settings == UserSettings()

    def test_settings_copy_cannot_mutate_store(self):
        store = JournalStore()
        s = store.settings
        s.daily_loss_limit = 1.0
        assert store.settings.daily_loss_limit == 500.0

    def test_snapshot_alerts(self):
        now = datetime(2025, 5, 5, 18, 0, tzinfo=timezone.utc)
        store = JournalStore(settings=UserSettings(daily_loss_limit=500.0, daily_trade_limit=0, max_drawdown_limit=0.0))
        store.add_trades([make_trade(-600.0, ts=now.replace(hour=10))])
        assert [a.kind for a in store.snapshot().alerts(now)] == [RiskAlertKind.DAILY_LOSS_LIMIT]

    def test_concurrent_appends_are_not_lost(self):
        store = JournalStore()

        def writer():
            for _ in range(50):
                store.add_trades([make_trade(1.0)])

        threads = [threading.Thread(target=writer) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(store.snapshot().trades) == 200
        assert store.snapshot().capital().net_capital == 0.0

    def test_initial_transactions(self):
        store = JournalStore(transactions=[make_transaction(10.0)])
        assert store.snapshot().capital().deposits == 10.0
