"""Normalisation of loosely typed trade/transaction rows into journal records.

Rows arrive from manual entry forms or from an AI model that parsed a CSV
export, a screenshot or free text. They are captured as :class:`TradeImport`
/ :class:`TransactionImport` with every field optional, then converted to the
strict :class:`~tradejournal.records.Trade` / ``Transaction`` shape. Only the
converted records ever reach the analytics functions.
"""

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Mapping

from tradejournal.records import Trade, Transaction
from tradejournal.time_utils import now_utc, parse_timestamp
from tradejournal.types import Direction, TransactionKind

log = logging.getLogger(__name__)


__all__ = [
    "DEFAULT_LOT_SIZE",
    "DEFAULT_NOTE",
    "UNKNOWN_SYMBOL",
    "ImportBatch",
    "TradeImport",
    "TransactionImport",
    "coerce_number",
    "normalise_batch",
]


DEFAULT_LOT_SIZE = 0.01
UNKNOWN_SYMBOL = "UNKNOWN"
DEFAULT_NOTE = "Imported via AI"

# Accepted spellings for each trade field, first match wins.
_TRADE_KEYS: dict[str, tuple[str, ...]] = {
    "symbol": ("symbol", "instrument"),
    "direction": ("direction", "type", "side"),
    "entry_price": ("entry_price", "entryPrice"),
    "exit_price": ("exit_price", "exitPrice"),
    "stop_loss": ("stop_loss", "stopLoss", "sl"),
    "take_profit": ("take_profit", "takeProfit", "tp"),
    "pips_gained": ("pips_gained", "pipsGained", "pips"),
    "lot_size": ("lot_size", "lotSize", "size"),
    "profit_and_loss": ("profit_and_loss", "profitAndLoss", "pnl"),
    "occurred_at": ("occurred_at", "occurredAt", "date", "timestamp"),
    "notes": ("notes", "note"),
}

_TRANSACTION_KEYS: dict[str, tuple[str, ...]] = {
    "kind": ("kind", "type"),
    "amount": ("amount",),
    "occurred_at": ("occurred_at", "occurredAt", "date", "timestamp"),
    "note": ("note", "notes"),
}


def _pick(raw: Mapping[str, Any], keys: tuple[str, ...]) -> Any:
    for k in keys:
        if k in raw and raw[k] not in (None, ""):
            return raw[k]
    return None


def coerce_number(value: Any, default: float = 0.0) -> float:
    """Convert *value* to float; missing, non-numeric, NaN and infinite values become *default*."""
    if value is None or isinstance(value, bool):
        return default
    try:
        out = float(str(value).replace(",", "").strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        log.debug("Non-numeric import value %r coerced to %s", value, default)
        return default
    if math.isnan(out) or math.isinf(out):
        return default
    return out


def _coerce_optional(value: Any) -> float | None:
    return None if value is None else coerce_number(value)


def _non_negative(name: str, value: float) -> float:
    if value < 0:
        log.warning("Negative %s %s in import coerced to 0", name, value)
        return 0.0
    return value


def _coerce_timestamp(value: Any, now: datetime) -> datetime:
    if value is None:
        return now
    try:
        return parse_timestamp(value)
    except (TypeError, ValueError, OverflowError, OSError):
        log.warning("Unparseable import timestamp %r, using %s", value, now.isoformat())
        return now


@dataclass(frozen=True)
class TradeImport:
    """An untrusted trade row; every field may be missing or malformed."""
    symbol: Any = None
    direction: Any = None
    entry_price: Any = None
    exit_price: Any = None
    stop_loss: Any = None
    take_profit: Any = None
    pips_gained: Any = None
    lot_size: Any = None
    profit_and_loss: Any = None
    occurred_at: Any = None
    notes: Any = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "TradeImport":
        """Capture a raw row, accepting snake_case and the web client's camelCase keys."""
        return cls(**{name: _pick(raw, keys) for name, keys in _TRADE_KEYS.items()})

    def to_trade(self, *, now: datetime | None = None, default_note: str | None = DEFAULT_NOTE) -> Trade:
        """
        Build a strict :class:`Trade`.

        Missing numbers become 0, a missing or non-positive lot size becomes
        ``DEFAULT_LOT_SIZE``, a missing symbol becomes ``UNKNOWN_SYMBOL``, any
        side other than SELL becomes BUY and a missing/unparseable date
        becomes *now*. The outcome is derived from the coerced PnL.
        """
        now = now or now_utc()
        symbol = str(self.symbol).strip() if self.symbol is not None else ""
        lot_size = coerce_number(self.lot_size)
        if lot_size <= 0:
            lot_size = DEFAULT_LOT_SIZE

        stop_loss = _coerce_optional(self.stop_loss)
        take_profit = _coerce_optional(self.take_profit)

        return Trade(
            symbol=symbol or UNKNOWN_SYMBOL,
            direction=Direction.coerce(self.direction),
            entry_price=_non_negative("entry_price", coerce_number(self.entry_price)),
            exit_price=_non_negative("exit_price", coerce_number(self.exit_price)),
            stop_loss=None if stop_loss is None else _non_negative("stop_loss", stop_loss),
            take_profit=None if take_profit is None else _non_negative("take_profit", take_profit),
            pips_gained=_coerce_optional(self.pips_gained),
            lot_size=lot_size,
            profit_and_loss=coerce_number(self.profit_and_loss),
            occurred_at=_coerce_timestamp(self.occurred_at, now),
            notes=str(self.notes) if self.notes is not None else default_note,
        )


@dataclass(frozen=True)
class TransactionImport:
    """An untrusted capital-movement row."""
    kind: Any = None
    amount: Any = None
    occurred_at: Any = None
    note: Any = None

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "TransactionImport":
        return cls(**{name: _pick(raw, keys) for name, keys in _TRANSACTION_KEYS.items()})

    def to_transaction(self, *, now: datetime | None = None, default_note: str | None = DEFAULT_NOTE) -> Transaction:
        """Build a strict :class:`Transaction`; anything but WITHDRAWAL is a deposit."""
        now = now or now_utc()
        amount = coerce_number(self.amount)
        if amount < 0:
            # A signed amount from a statement: the sign is carried by kind instead
            log.warning("Negative transaction amount %s in import, using its magnitude", amount)
            amount = abs(amount)
        return Transaction(
            kind=TransactionKind.coerce(self.kind),
            amount=amount,
            occurred_at=_coerce_timestamp(self.occurred_at, now),
            note=str(self.note) if self.note is not None else default_note,
        )


@dataclass(frozen=True)
class ImportBatch:
    trades: tuple[Trade, ...] = field(default_factory=tuple)
    transactions: tuple[Transaction, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.trades) + len(self.transactions)


def normalise_batch(
    trades: Iterable[Mapping[str, Any]] = (),
    transactions: Iterable[Mapping[str, Any]] = (),
    *,
    now: datetime | None = None,
) -> ImportBatch:
    """Normalise raw trade and transaction rows in one pass, sharing a single *now*."""
    now = now or now_utc()
    batch = ImportBatch(
        trades=tuple(TradeImport.from_raw(r).to_trade(now=now) for r in trades),
        transactions=tuple(TransactionImport.from_raw(r).to_transaction(now=now) for r in transactions),
    )
    log.info("Imported %d trades, %d transactions", len(batch.trades), len(batch.transactions))
    return batch
