# tradejournal/__init__.py
"""
Tradejournal - analytics for a personal trading journal.

Turns logged trades and capital movements into performance metrics, equity
and drawdown curves, risk-limit alerts and grouping views.
"""

from .capital import compute_capital, savings_progress
from .config import UserSettings, configure_logging
from .equity import EquityCurve, EquityPoint, compute_equity_curve, max_drawdown
from .imports import ImportBatch, TradeImport, TransactionImport, normalise_batch
from .metrics import compute_metrics
from .records import CapitalSummary, Metrics, RiskAlert, Trade, Transaction
from .risk import evaluate_alerts
from .store import JournalSnapshot, JournalStore
from .types import AlertSeverity, Direction, Outcome, PriceCondition, RiskAlertKind, TransactionKind

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AlertSeverity",
    "CapitalSummary",
    "Direction",
    "EquityCurve",
    "EquityPoint",
    "ImportBatch",
    "JournalSnapshot",
    "JournalStore",
    "Metrics",
    "Outcome",
    "PriceCondition",
    "RiskAlert",
    "RiskAlertKind",
    "Trade",
    "TradeImport",
    "Transaction",
    "TransactionImport",
    "TransactionKind",
    "UserSettings",
    "compute_capital",
    "compute_equity_curve",
    "compute_metrics",
    "configure_logging",
    "evaluate_alerts",
    "max_drawdown",
    "normalise_batch",
    "savings_progress",
]
