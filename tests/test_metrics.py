"""Tests for performance metrics computation."""

import math
from datetime import datetime, timedelta, timezone

import pytest

from conftest import make_trade, make_transaction
from tradejournal.metrics import compute_metrics, profit_factor
from tradejournal.types import TransactionKind


def _day(n):
    return datetime(2025, 3, 1, tzinfo=timezone.utc) + timedelta(days=n)


def test_scenario_metrics(scenario_trades, initial_deposit) -> None:
    """Two wins around a small loss, funded by one deposit."""
    m = compute_metrics(scenario_trades, initial_deposit)

    assert m.total_trades == 3
    assert m.total_pnl == pytest.approx(2450.0)
    assert m.current_balance == pytest.approx(7450.0)
    assert m.roi == pytest.approx(49.0)
    assert m.win_rate == pytest.approx(66.6667, abs=1e-3)
    assert m.max_drawdown == pytest.approx(50.0)
    assert m.total_pips == pytest.approx(-250.0)
    assert m.average_win == pytest.approx(1250.0)
    assert m.average_loss == pytest.approx(50.0)
    assert m.profit_factor == pytest.approx(50.0)
    assert m.best_trade == pytest.approx(1500.0)
    assert m.worst_trade == pytest.approx(-50.0)


def test_empty_trades_with_deposit(initial_deposit) -> None:
    m = compute_metrics([], initial_deposit)

    assert m.total_trades == 0
    assert m.current_balance == pytest.approx(5000.0)
    assert m.roi == 0.0
    assert m.win_rate == 0.0
    assert m.max_drawdown == 0.0
    assert m.best_trade == 0.0
    assert m.worst_trade == 0.0
    assert m.profit_factor == 0.0
    assert m.average_win == 0.0
    assert m.average_loss == 0.0


def test_empty_everything() -> None:
    m = compute_metrics([], [])
    assert m.current_balance == 0.0
    assert m.roi == 0.0


def test_no_deposits_means_zero_roi() -> None:
    m = compute_metrics([make_trade(100.0)], [])
    assert m.roi == 0.0
    assert m.current_balance == pytest.approx(100.0)


def test_withdrawals_reduce_balance_but_not_roi_base() -> None:
    txs = [make_transaction(1000.0), make_transaction(400.0, kind=TransactionKind.WITHDRAWAL)]
    m = compute_metrics([make_trade(100.0)], txs)

    assert m.current_balance == pytest.approx(700.0)
    assert m.roi == pytest.approx(10.0)


def test_breakeven_trade_counts_as_loss() -> None:
    trades = [make_trade(100.0, ts=_day(0)), make_trade(0.0, ts=_day(1))]
    m = compute_metrics(trades, [])

    assert m.win_rate == pytest.approx(50.0)
    # Zero-PnL loss pulls the average loss magnitude down
    assert m.average_loss == 0.0
    assert m.profit_factor == math.inf


def test_win_and_loss_sums_partition_total_pnl() -> None:
    pnls = [12.5, -3.0, 0.0, 7.25, -9.5, 1.0]
    trades = [make_trade(p, ts=_day(i)) for i, p in enumerate(pnls)]
    m = compute_metrics(trades, [])

    gross_win = sum(p for p in pnls if p > 0)
    gross_loss = sum(p for p in pnls if p <= 0)
    assert gross_win + gross_loss == pytest.approx(m.total_pnl)
    assert 0.0 <= m.win_rate <= 100.0


def test_all_losses() -> None:
    trades = [make_trade(-10.0, ts=_day(0)), make_trade(-30.0, ts=_day(1))]
    m = compute_metrics(trades, [make_transaction(1000.0)])

    assert m.win_rate == 0.0
    assert m.average_loss == pytest.approx(20.0)
    assert m.profit_factor == 0.0
    assert m.best_trade == pytest.approx(-10.0)
    assert m.worst_trade == pytest.approx(-30.0)
    assert m.roi == pytest.approx(-4.0)
    assert m.max_drawdown == pytest.approx(30.0)


def test_recomputation_is_idempotent(scenario_trades, initial_deposit) -> None:
    trades_before = list(scenario_trades)
    txs_before = list(initial_deposit)

    first = compute_metrics(scenario_trades, initial_deposit)
    second = compute_metrics(scenario_trades, initial_deposit)

    assert first == second
    assert scenario_trades == trades_before
    assert initial_deposit == txs_before


def test_single_pass_iterables_are_accepted(scenario_trades, initial_deposit) -> None:
    expected = compute_metrics(scenario_trades, initial_deposit)
    m = compute_metrics((t for t in scenario_trades), iter(initial_deposit))

    assert m == expected
    assert m.total_trades == 3
    assert m.max_drawdown == pytest.approx(50.0)


def test_reordering_keeps_totals(scenario_trades, initial_deposit) -> None:
    m1 = compute_metrics(scenario_trades, initial_deposit)
    m2 = compute_metrics(list(reversed(scenario_trades)), initial_deposit)

    assert m1.total_pnl == m2.total_pnl
    assert m1.total_pips == m2.total_pips
    assert m1.win_rate == m2.win_rate
    # Trades are re-sorted by time, so drawdown is unchanged as well
    assert m1.max_drawdown == m2.max_drawdown


class TestProfitFactor:

    def test_empty_is_zero(self):
        assert profit_factor([]) == 0.0

    def test_wins_only_is_inf(self):
        assert profit_factor([10.0, 5.0]) == math.inf

    def test_losses_only_is_zero(self):
        assert profit_factor([-10.0, -5.0]) == 0.0

    def test_mixed(self):
        assert profit_factor([10.0, -5.0]) == pytest.approx(2.0)
