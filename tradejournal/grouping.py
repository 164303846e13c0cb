"""Grouping views over trades and the compound-growth projection."""

from dataclasses import dataclass
from typing import Iterable

from tradejournal.records import Trade


__all__ = [
    "EXPOSURE_OFFSET",
    "REVIEW_LIMIT",
    "ProjectionPoint",
    "compound_projection",
    "loss_magnitudes",
    "losing_trades",
    "symbol_exposure",
]


# Per-trade padding so that symbols with zero PnL still get an area on heatmaps.
EXPOSURE_OFFSET = 10.0

# Number of worst losers shown for review.
REVIEW_LIMIT = 5


@dataclass(frozen=True)
class ProjectionPoint:
    month: int
    balance: float


def symbol_exposure(trades: Iterable[Trade]) -> dict[str, float]:
    """
    Map each symbol to ``sum(|pnl| + EXPOSURE_OFFSET)`` over its trades.

    This is a display weight for area-proportional views, not a financial
    figure. Symbols appear in first-seen order.
    """
    exposure: dict[str, float] = {}
    for t in trades:
        exposure[t.symbol] = exposure.get(t.symbol, 0.0) + abs(float(t.profit_and_loss)) + EXPOSURE_OFFSET
    return exposure


def losing_trades(trades: Iterable[Trade], limit: int | None = None) -> list[Trade]:
    """Trades with negative PnL, most negative first; optionally only the first *limit*."""
    losers = sorted((t for t in trades if t.profit_and_loss < 0), key=lambda t: t.profit_and_loss)
    if limit is None:
        return losers
    if limit < 0:
        raise ValueError(f"limit must be >= 0, got {limit}")
    return losers[:limit]


def loss_magnitudes(trades: Iterable[Trade]) -> list[tuple[int, float]]:
    """Loss distribution series: ``(rank, |pnl|)`` with rank 1 the largest loss."""
    return [(i, abs(float(t.profit_and_loss))) for i, t in enumerate(losing_trades(trades), start=1)]


def compound_projection(initial: float, monthly_rate_percent: float, months: int) -> list[ProjectionPoint]:
    """
    Simulate compounding *initial* at a fixed monthly rate.

    Produces ``months + 1`` points where month 0 holds *initial* and each
    following month multiplies the previous balance by ``1 + rate / 100``.
    Values are not rounded. This is a hypothetical and ignores the journal.
    """
    if months < 0:
        raise ValueError(f"months must be >= 0, got {months}")

    growth = 1.0 + float(monthly_rate_percent) / 100.0
    balance = float(initial)
    points = [ProjectionPoint(month=0, balance=balance)]
    for month in range(1, int(months) + 1):
        balance = balance * growth
        points.append(ProjectionPoint(month=month, balance=balance))
    return points

