"""In-memory owner of a journal session's trades, transactions and settings."""

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime, tzinfo
from typing import Any, Iterable

from tradejournal.capital import compute_capital
from tradejournal.config import UserSettings
from tradejournal.equity import EquityCurve, compute_equity_curve
from tradejournal.imports import ImportBatch
from tradejournal.metrics import compute_metrics
from tradejournal.records import CapitalSummary, Metrics, RiskAlert, Trade, Transaction
from tradejournal.risk import evaluate_alerts

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class JournalSnapshot:
    """A consistent, immutable view of the journal at one point in time."""
    trades: tuple[Trade, ...]
    transactions: tuple[Transaction, ...]
    settings: UserSettings

    def capital(self) -> CapitalSummary:
        return compute_capital(self.transactions)

    def metrics(self) -> Metrics:
        return compute_metrics(self.trades, self.transactions)

    def equity_curve(self) -> EquityCurve:
        return compute_equity_curve(self.trades)

    def alerts(self, now: datetime, tz: tzinfo | None = None) -> list[RiskAlert]:
        return evaluate_alerts(self.trades, self.settings, now, tz)


class JournalStore:
    """
    Single-writer store for one journal session.

    Write pattern:
      Every mutation builds a new tuple and swaps it in under a lock, so a
      reader holding a :class:`JournalSnapshot` always sees a complete
      sequence, never a partial append.

    Read pattern:
      Call :meth:`snapshot` and run the analytics on the snapshot. The
      analytics functions never see the store itself.
    """

    def __init__(
        self,
        trades: Iterable[Trade] = (),
        transactions: Iterable[Transaction] = (),
        settings: UserSettings | None = None,
    ):
        self._lock = threading.Lock()
        self._trades: tuple[Trade, ...] = tuple(trades)
        self._transactions: tuple[Transaction, ...] = tuple(transactions)
        self._settings = settings or UserSettings()

    @property
    def trades(self) -> tuple[Trade, ...]:
        return self._trades

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        return self._transactions

    @property
    def settings(self) -> UserSettings:
        return replace(self._settings)

    def snapshot(self) -> JournalSnapshot:
        with self._lock:
            return JournalSnapshot(
                trades=self._trades,
                transactions=self._transactions,
                settings=replace(self._settings),
            )

    def add_trades(self, trades: Iterable[Trade]) -> int:
        """Append trades atomically; returns the number added."""
        new = tuple(trades)
        if not new:
            return 0
        with self._lock:
            self._trades = self._trades + new
        log.info("Added %d trade%s", len(new), "s" if len(new) != 1 else "")
        return len(new)

    def add_transactions(self, transactions: Iterable[Transaction]) -> int:
        """Append transactions atomically; returns the number added."""
        new = tuple(transactions)
        if not new:
            return 0
        with self._lock:
            self._transactions = self._transactions + new
        log.info("Added %d transaction%s", len(new), "s" if len(new) != 1 else "")
        return len(new)

    def add_batch(self, batch: ImportBatch) -> None:
        """Append an import batch; trades and transactions are published together."""
        with self._lock:
            self._trades = self._trades + tuple(batch.trades)
            self._transactions = self._transactions + tuple(batch.transactions)
        log.info("Imported batch: %d trades, %d transactions", len(batch.trades), len(batch.transactions))

    def replace_trade(self, trade: Trade) -> None:
        """Replace the trade with the same id, keeping its position in the sequence."""
        with self._lock:
            idx = self._index_of(trade.id)
            self._trades = self._trades[:idx] + (trade,) + self._trades[idx + 1:]
        log.debug("Replaced trade %s", trade.id)

    def remove_trade(self, trade_id: str) -> Trade:
        """Remove and return the trade with *trade_id*."""
        with self._lock:
            idx = self._index_of(trade_id)
            removed = self._trades[idx]
            self._trades = self._trades[:idx] + self._trades[idx + 1:]
        log.debug("Removed trade %s", trade_id)
        return removed

    def update_settings(self, **changes: Any) -> UserSettings:
        """Apply *changes* to the settings; invalid values raise ``ValueError`` and leave them unchanged."""
        with self._lock:
            updated = UserSettings.from_raw({**vars(self._settings), **changes})
            self._settings = updated
        log.info("Settings updated: %s", ", ".join(sorted(changes)))
        return replace(updated)

    def _index_of(self, trade_id: str) -> int:
        for i, t in enumerate(self._trades):
            if t.id == trade_id:
                return i
        raise KeyError(f"No trade with id {trade_id!r}")
