"""Equity curve and drawdown reconstruction."""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Sequence

import numpy as np

from tradejournal.records import Trade


__all__ = [
    "EquityCurve",
    "EquityPoint",
    "compute_equity_curve",
    "max_drawdown",
    "sort_by_time",
]


@dataclass(frozen=True)
class EquityPoint:
    """One step of the cumulative equity/pips curve (index is 1-based)."""
    index: int
    timestamp: datetime
    equity: float
    pips: float
    pnl: float


@dataclass(frozen=True)
class EquityCurve:
    """
    Chronological equity curve built from closed trades.

    The array accessors mirror the points and are convenient for charting
    or vectorised analysis.
    """
    points: tuple[EquityPoint, ...]
    max_drawdown: float

    def equity_array(self) -> np.ndarray:
        """Get array of cumulative PnL values."""
        return np.array([p.equity for p in self.points], dtype=np.float64)

    def pips_array(self) -> np.ndarray:
        """Get array of cumulative pips."""
        return np.array([p.pips for p in self.points], dtype=np.float64)

    def pnl_array(self) -> np.ndarray:
        """Get array of per-trade PnL."""
        return np.array([p.pnl for p in self.points], dtype=np.float64)

    def drawdown_array(self) -> np.ndarray:
        """Get array of distances below the running equity peak (>= 0)."""
        equity = self.equity_array()
        if equity.size == 0:
            return equity
        return np.maximum.accumulate(equity) - equity

    def __len__(self) -> int:
        return len(self.points)


def sort_by_time(trades: Iterable[Trade]) -> list[Trade]:
    """Return trades ordered by ``occurred_at``; ties keep their input order."""
    # sorted() is stable, which is what keeps same-timestamp trades in entry order
    return sorted(trades, key=lambda t: t.occurred_at)


def max_drawdown(equity: Sequence[float]) -> float:
    """Calculate maximum drawdown (as a non-negative magnitude) from an equity curve."""
    peak = float("-inf")
    mdd = 0.0
    for x in equity:
        peak = max(peak, x)
        mdd = max(mdd, peak - x)
    return float(mdd)


def compute_equity_curve(trades: Iterable[Trade]) -> EquityCurve:
    """
    Rebuild the equity curve and maximum drawdown from scratch.

    Drawdown is path-dependent, so the trades are re-sorted by time on every
    call regardless of the order they are supplied in.
    """
    running_pnl = 0.0
    running_pips = 0.0
    peak = float("-inf")
    mdd = 0.0
    points: list[EquityPoint] = []

    for i, t in enumerate(sort_by_time(trades), start=1):
        pnl = float(t.profit_and_loss)
        running_pnl += pnl
        running_pips += t.pips
        peak = max(peak, running_pnl)
        mdd = max(mdd, peak - running_pnl)
        points.append(
            EquityPoint(
                index=i,
                timestamp=t.occurred_at,
                equity=running_pnl,
                pips=running_pips,
                pnl=pnl,
            )
        )

    return EquityCurve(points=tuple(points), max_drawdown=float(mdd))
