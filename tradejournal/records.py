"""Canonical journal records and derived result types."""

import math
import uuid
from dataclasses import dataclass, field
from datetime import datetime

from tradejournal.time_utils import ensure_utc_aware
from tradejournal.types import AlertSeverity, Direction, Outcome, RiskAlertKind, TransactionKind


__all__ = [
    "CapitalSummary",
    "Metrics",
    "RiskAlert",
    "Trade",
    "Transaction",
    "new_id",
]


def new_id() -> str:
    return uuid.uuid4().hex


def _require_non_negative(name: str, value: float | None) -> None:
    if value is None:
        return
    if math.isnan(value) or value < 0:
        raise ValueError(f"{name} must be a non-negative number, got {value!r}")


@dataclass(frozen=True, kw_only=True)
class Trade:
    """
    One closed position.

    ``profit_and_loss`` is the authoritative realised result; it is not
    reconciled against the price fields, so journal entries can carry a PnL
    that was typed in or parsed from a broker statement.

    ``outcome`` defaults to WIN when ``profit_and_loss > 0`` and LOSS
    otherwise. BREAKEVEN is accepted when supplied explicitly.
    """
    symbol: str
    direction: Direction
    entry_price: float
    exit_price: float
    lot_size: float
    profit_and_loss: float
    occurred_at: datetime
    stop_loss: float | None = None
    take_profit: float | None = None
    pips_gained: float | None = None
    notes: str | None = None
    outcome: Outcome | None = None
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        if not self.symbol or not self.symbol.strip():
            raise ValueError("Trade symbol must be a non-empty string")
        if not isinstance(self.direction, Direction):
            raise ValueError(f"Unknown trade direction: {self.direction!r}")
        _require_non_negative("entry_price", self.entry_price)
        _require_non_negative("exit_price", self.exit_price)
        _require_non_negative("stop_loss", self.stop_loss)
        _require_non_negative("take_profit", self.take_profit)
        if math.isnan(self.lot_size) or self.lot_size <= 0:
            raise ValueError(f"lot_size must be positive, got {self.lot_size!r}")
        if math.isnan(self.profit_and_loss):
            raise ValueError("profit_and_loss must be a number")

        # Frozen dataclass: derived fields are filled in via object.__setattr__
        object.__setattr__(self, "occurred_at", ensure_utc_aware(self.occurred_at))
        if self.outcome is None:
            object.__setattr__(self, "outcome", Outcome.from_pnl(self.profit_and_loss))

    @property
    def is_win(self) -> bool:
        return self.profit_and_loss > 0

    @property
    def pips(self) -> float:
        """Pips gained, with a missing value counted as zero."""
        return float(self.pips_gained or 0.0)


@dataclass(frozen=True, kw_only=True)
class Transaction:
    """One capital movement. Direction is carried by ``kind``, never by sign."""
    kind: TransactionKind
    amount: float
    occurred_at: datetime
    note: str | None = None
    id: str = field(default_factory=new_id)

    def __post_init__(self):
        if not isinstance(self.kind, TransactionKind):
            raise ValueError(f"Unknown transaction kind: {self.kind!r}")
        _require_non_negative("amount", self.amount)
        object.__setattr__(self, "occurred_at", ensure_utc_aware(self.occurred_at))

    @property
    def signed_amount(self) -> float:
        return self.amount if self.kind is TransactionKind.DEPOSIT else -self.amount


@dataclass(frozen=True)
class CapitalSummary:
    """Deposits and withdrawals reduced from a transaction sequence."""
    deposits: float
    withdrawals: float
    net_capital: float


@dataclass(frozen=True)
class Metrics:
    """Performance metrics for a trading journal.

    ``win_rate`` and ``roi`` are percentages (0-100 scale). ``average_loss``
    and ``max_drawdown`` are non-negative magnitudes.
    """
    total_trades: int
    win_rate: float
    total_pnl: float
    total_pips: float
    profit_factor: float
    average_win: float
    average_loss: float
    max_drawdown: float
    best_trade: float
    worst_trade: float
    roi: float
    current_balance: float


@dataclass(frozen=True)
class RiskAlert:
    """A triggered risk-limit check."""
    kind: RiskAlertKind
    severity: AlertSeverity
    message: str
