# tests/conftest.py
import os
import sys
from datetime import datetime, timezone

import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from tradejournal.records import Trade, Transaction
from tradejournal.types import Direction, TransactionKind


def make_trade(pnl=0.0, ts=datetime(2025, 1, 15, 12, 0, tzinfo=timezone.utc), symbol="XAUUSD",
               direction=Direction.BUY, pips=None, **kwargs):
    return Trade(
        symbol=symbol,
        direction=direction,
        entry_price=kwargs.pop("entry_price", 2000.0),
        exit_price=kwargs.pop("exit_price", 2010.0),
        lot_size=kwargs.pop("lot_size", 1.0),
        profit_and_loss=pnl,
        pips_gained=pips,
        occurred_at=ts,
        **kwargs,
    )


def make_transaction(amount, kind=TransactionKind.DEPOSIT, ts=datetime(2025, 1, 1, tzinfo=timezone.utc)):
    return Transaction(kind=kind, amount=amount, occurred_at=ts)


@pytest.fixture
def trade_factory():
    return make_trade


@pytest.fixture
def transaction_factory():
    return make_transaction


@pytest.fixture
def scenario_trades():
    """+1000, -50, +1500 on consecutive days."""
    return [
        make_trade(1000.0, ts=datetime(2023, 10, 1, tzinfo=timezone.utc), pips=100.0),
        make_trade(-50.0, ts=datetime(2023, 10, 2, tzinfo=timezone.utc), symbol="BTCUSD",
                   direction=Direction.SELL, pips=-500.0),
        make_trade(1500.0, ts=datetime(2023, 10, 3, tzinfo=timezone.utc), pips=150.0),
    ]


@pytest.fixture
def initial_deposit():
    return [make_transaction(5000.0, ts=datetime(2023, 1, 1, tzinfo=timezone.utc))]
