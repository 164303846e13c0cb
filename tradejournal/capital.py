"""Capital movements: deposits, withdrawals and savings progress."""

from typing import Iterable

from tradejournal.records import CapitalSummary, Transaction
from tradejournal.types import TransactionKind


__all__ = [
    "compute_capital",
    "savings_progress",
]


def compute_capital(transactions: Iterable[Transaction]) -> CapitalSummary:
    """
    Reduce a transaction sequence to deposit/withdrawal totals.

    Order-independent. An empty sequence yields all zeros.
    """
    deposits = 0.0
    withdrawals = 0.0
    for t in transactions:
        if t.kind is TransactionKind.DEPOSIT:
            deposits += float(t.amount)
        elif t.kind is TransactionKind.WITHDRAWAL:
            withdrawals += float(t.amount)
        else:
            raise ValueError(f"Unknown transaction kind: {t.kind!r}")

    return CapitalSummary(
        deposits=deposits,
        withdrawals=withdrawals,
        net_capital=deposits - withdrawals,
    )


def savings_progress(balance: float, goal: float) -> float:
    """Percentage of *goal* reached by *balance*, capped at 100; 0 when no goal is set."""
    if goal <= 0:
        return 0.0
    return min(float(balance) / float(goal) * 100.0, 100.0)
