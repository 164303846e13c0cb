"""Tests for capital aggregation."""

import pytest

from tradejournal.capital import compute_capital, savings_progress
from tradejournal.types import TransactionKind


def test_empty_transactions_are_all_zero() -> None:
    c = compute_capital([])
    assert (c.deposits, c.withdrawals, c.net_capital) == (0.0, 0.0, 0.0)


def test_deposits_and_withdrawals_are_partitioned_by_kind(transaction_factory) -> None:
    txs = [
        transaction_factory(5000.0),
        transaction_factory(250.0, kind=TransactionKind.WITHDRAWAL),
        transaction_factory(1000.0),
        transaction_factory(100.0, kind=TransactionKind.WITHDRAWAL),
    ]

    c = compute_capital(txs)

    assert c.deposits == pytest.approx(6000.0)
    assert c.withdrawals == pytest.approx(350.0)
    assert c.net_capital == pytest.approx(5650.0)


def test_net_capital_is_exactly_deposits_minus_withdrawals(transaction_factory) -> None:
    txs = [
        transaction_factory(0.1),
        transaction_factory(0.2),
        transaction_factory(0.3, kind=TransactionKind.WITHDRAWAL),
    ]
    c = compute_capital(txs)
    assert c.deposits - c.withdrawals == c.net_capital


def test_order_does_not_matter(transaction_factory) -> None:
    txs = [transaction_factory(10.0), transaction_factory(3.0, kind=TransactionKind.WITHDRAWAL)]
    assert compute_capital(txs) == compute_capital(list(reversed(txs)))


class TestSavingsProgress:

    def test_no_goal_is_zero(self):
        assert savings_progress(1000.0, 0.0) == 0.0

    def test_partial_progress(self):
        assert savings_progress(12500.0, 50000.0) == pytest.approx(25.0)

    def test_capped_at_one_hundred(self):
        assert savings_progress(80000.0, 50000.0) == 100.0
