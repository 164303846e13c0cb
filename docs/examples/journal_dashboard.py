# examples/journal_dashboard.py
"""Build the dashboard views for a small journal and export a report."""
import logging
from datetime import datetime, timezone
from pathlib import Path

from tradejournal import JournalStore, UserSettings, configure_logging, normalise_batch
from tradejournal.grouping import REVIEW_LIMIT, compound_projection, losing_trades, symbol_exposure
from tradejournal.price_alerts import PriceAlertBook
from tradejournal.reporting import write_report

log = logging.getLogger("tradejournal.examples.dashboard")


def main() -> None:
    configure_logging("INFO")
    now = datetime.now(timezone.utc)

    store = JournalStore(settings=UserSettings.from_raw({"dailyLossLimit": 500, "dailyTradeLimit": 5}))

    # Rows as they come back from a parsed CSV export
    store.add_batch(
        normalise_batch(
            [
                {"symbol": "XAUUSD", "type": "BUY", "entryPrice": 2020, "exitPrice": 2030, "lotSize": 1, "pnl": 1000, "pips": 100, "date": "2023-10-01"},
                {"symbol": "BTCUSD", "type": "SELL", "entryPrice": 35000, "exitPrice": 35500, "lotSize": 0.1, "pnl": -50, "pips": -500, "date": "2023-10-02"},
                {"symbol": "XAUUSD", "type": "BUY", "entryPrice": 2025, "exitPrice": 2040, "lotSize": 1, "pnl": 1500, "pips": 150, "date": "2023-10-03"},
            ],
            [{"type": "DEPOSIT", "amount": 5000, "date": "2023-01-01", "note": "Initial Capital"}],
            now=now,
        )
    )

    snap = store.snapshot()
    m = snap.metrics()
    log.info(
        "Balance %.2f | ROI %.1f%% | win rate %.1f%% | max drawdown %.2f",
        m.current_balance, m.roi, m.win_rate, m.max_drawdown,
    )

    for alert in snap.alerts(now):
        log.warning(alert.message)

    log.info("Exposure: %s", symbol_exposure(snap.trades))
    for t in losing_trades(snap.trades, REVIEW_LIMIT):
        log.info("Review: %s %s %.2f", t.symbol, t.direction.value, t.profit_and_loss)

    book = PriceAlertBook()
    book.add("XAUUSD", 2050.0, "ABOVE")
    for fired in book.check("XAUUSD", 2051.0):
        log.info("Price alert: %s %s %s", fired.symbol, fired.condition.value, fired.price)

    out = Path("journal_report")
    write_report(snap, out, projection=compound_projection(1000.0, 5.0, 12))


if __name__ == "__main__":
    main()
