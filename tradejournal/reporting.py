"""CSV/JSON exports of the derived journal views."""

import csv
import json
import logging
from dataclasses import asdict
from datetime import timedelta, tzinfo
from pathlib import Path
from typing import Iterable, Sequence

from tradejournal.capital import savings_progress
from tradejournal.equity import EquityCurve
from tradejournal.grouping import ProjectionPoint, losing_trades, symbol_exposure
from tradejournal.records import CapitalSummary, Metrics, Trade
from tradejournal.store import JournalSnapshot
from tradejournal.time_utils import civil_date

log = logging.getLogger(__name__)


__all__ = [
    "write_equity_csv",
    "write_equity_daily_csv",
    "write_exposure_csv",
    "write_losses_csv",
    "write_projection_csv",
    "write_report",
    "write_summary_json",
]


def write_equity_csv(curve: EquityCurve, path: Path) -> None:
    """
    Write the per-trade equity curve.

    Output schema:
    index,timestamp,pnl,equity,pips
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["index", "timestamp", "pnl", "equity", "pips"])
        for p in curve.points:
            w.writerow([p.index, p.timestamp.isoformat(), round(p.pnl, 2), round(p.equity, 2), round(p.pips, 2)])


def write_equity_daily_csv(curve: EquityCurve, path: Path, tz: tzinfo | None = None) -> None:
    """
    Write a daily equity snapshot series with:
    - date format: YYYY-MM-DD (civil date in *tz*, UTC by default)
    - no gaps: emits one row per calendar day across the journal span (inclusive)
    - forward-filled equity for days without trades
    - the last trade of a day sets that day's equity

    Output schema:
    date,equity
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["date", "equity"])

        if not curve.points:
            return

        by_date = {}
        for p in curve.points:
            by_date[civil_date(p.timestamp, tz)] = p.equity

        cur = min(by_date)
        end = max(by_date)
        last_equity = by_date[cur]

        while cur <= end:
            last_equity = by_date.get(cur, last_equity)
            w.writerow([cur.isoformat(), round(last_equity, 2)])
            cur += timedelta(days=1)


def write_losses_csv(trades: Iterable[Trade], path: Path, limit: int | None = None) -> None:
    """
    Write losing trades ranked from the largest loss.

    Output schema:
    rank,id,symbol,direction,occurred_at,pnl,pips
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["rank", "id", "symbol", "direction", "occurred_at", "pnl", "pips"])
        for rank, t in enumerate(losing_trades(trades, limit), start=1):
            w.writerow(
                [
                    rank,
                    t.id,
                    t.symbol,
                    t.direction.value,
                    t.occurred_at.isoformat(),
                    round(t.profit_and_loss, 2),
                    "" if t.pips_gained is None else t.pips_gained,
                ]
            )


def write_exposure_csv(trades: Iterable[Trade], path: Path) -> None:
    """
    Write per-symbol heatmap weights.

    Output schema:
    symbol,size
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["symbol", "size"])
        for symbol, size in symbol_exposure(trades).items():
            w.writerow([symbol, round(size, 2)])


def write_projection_csv(points: Sequence[ProjectionPoint], path: Path) -> None:
    """
    Write a compound-growth projection. Balances are rounded for display only.

    Output schema:
    month,balance
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="") as f:
        w = csv.writer(f)
        w.writerow(["month", "balance"])
        for p in points:
            w.writerow([p.month, round(p.balance, 2)])


def write_summary_json(
    metrics: Metrics,
    capital: CapitalSummary,
    path: Path,
    *,
    savings_goal: float = 0.0,
    currency: str = "USD",
) -> None:
    """Write the metrics bundle and capital totals as JSON.

    An infinite profit factor is written as ``null``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    m = asdict(metrics)
    if m["profit_factor"] == float("inf"):
        m["profit_factor"] = None

    data = {
        "version": 1,
        "currency": currency,
        "metrics": m,
        "capital": asdict(capital),
        "savings_progress": savings_progress(metrics.current_balance, savings_goal),
    }
    path.write_text(json.dumps(data, indent=2))


def write_report(
    snapshot: JournalSnapshot,
    out_dir: Path,
    tz: tzinfo | None = None,
    *,
    projection: Sequence[ProjectionPoint] | None = None,
) -> None:
    """Write every report file for *snapshot* into *out_dir*.

    ``projection.csv`` is written only when *projection* is given.
    """
    out_dir.mkdir(parents=True, exist_ok=True)

    curve = snapshot.equity_curve()
    write_equity_csv(curve, out_dir / "equity.csv")
    write_equity_daily_csv(curve, out_dir / "equity_daily.csv", tz)
    write_losses_csv(snapshot.trades, out_dir / "losses.csv")
    write_exposure_csv(snapshot.trades, out_dir / "exposure.csv")
    write_summary_json(
        snapshot.metrics(),
        snapshot.capital(),
        out_dir / "summary.json",
        savings_goal=snapshot.settings.savings_goal,
        currency=snapshot.settings.currency,
    )
    if projection is not None:
        write_projection_csv(projection, out_dir / "projection.csv")
    log.info("Journal report written to %s (%d trades)", out_dir, len(snapshot.trades))
