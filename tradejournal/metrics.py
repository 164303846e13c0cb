"""Performance metrics over a trading journal."""

from typing import Iterable, Sequence

from tradejournal.capital import compute_capital
from tradejournal.equity import compute_equity_curve
from tradejournal.records import Metrics, Trade, Transaction


__all__ = [
    "compute_metrics",
    "profit_factor",
]


def profit_factor(pnls: Sequence[float]) -> float:
    """
    Gross profit divided by gross loss magnitude.

    Returns ``inf`` when there are winning trades and no loss magnitude, and
    ``0.0`` when there are no winning trades at all.
    """
    gross_win = sum(p for p in pnls if p > 0)
    gross_loss = abs(sum(p for p in pnls if p <= 0))
    if gross_loss > 0:
        return gross_win / gross_loss
    return float("inf") if gross_win > 0 else 0.0


def compute_metrics(trades: Iterable[Trade], transactions: Iterable[Transaction]) -> Metrics:
    """
    Compute the full metrics bundle from the journal sequences.

    Win/loss split follows the journal convention: a trade wins only when its
    PnL is strictly positive, so breakeven (PnL == 0) trades count as losses
    for win rate and average loss.

    Neither input is mutated; the result depends only on their contents.
    """
    trades = list(trades)
    capital = compute_capital(transactions)
    curve = compute_equity_curve(trades)

    pnls = [float(t.profit_and_loss) for t in trades]
    wins = [p for p in pnls if p > 0]
    losses = [p for p in pnls if p <= 0]

    n = len(pnls)
    total_pnl = float(sum(pnls))

    win_rate = (len(wins) / n * 100.0) if n else 0.0
    average_win = (sum(wins) / len(wins)) if wins else 0.0
    average_loss = (abs(sum(losses)) / len(losses)) if losses else 0.0
    roi = (total_pnl / capital.deposits * 100.0) if capital.deposits > 0 else 0.0

    return Metrics(
        total_trades=n,
        win_rate=win_rate,
        total_pnl=total_pnl,
        total_pips=float(sum(t.pips for t in trades)),
        profit_factor=profit_factor(pnls),
        average_win=average_win,
        average_loss=average_loss,
        max_drawdown=curve.max_drawdown,
        best_trade=max(pnls) if pnls else 0.0,
        worst_trade=min(pnls) if pnls else 0.0,
        roi=roi,
        current_balance=capital.net_capital + total_pnl,
    )
