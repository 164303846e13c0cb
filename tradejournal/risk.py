"""Risk-limit alerts for the trading day."""

import logging
from datetime import datetime, timezone, tzinfo
from typing import Sequence

from tradejournal.config import UserSettings
from tradejournal.equity import compute_equity_curve
from tradejournal.records import RiskAlert, Trade
from tradejournal.time_utils import civil_date, ensure_utc_aware
from tradejournal.types import AlertSeverity, RiskAlertKind

log = logging.getLogger(__name__)


__all__ = [
    "evaluate_alerts",
    "todays_trades",
]


def todays_trades(trades: Sequence[Trade], now: datetime, tz: tzinfo | None = None) -> list[Trade]:
    """
    Trades whose ``occurred_at`` falls on the same civil date as *now*.

    Both sides are converted to *tz* before taking the date. When *tz* is
    omitted the zone attached to *now* is used (UTC for naive values).
    """
    now = ensure_utc_aware(now)
    zone = tz or now.tzinfo or timezone.utc
    today = civil_date(now, zone)
    return [t for t in trades if civil_date(t.occurred_at, zone) == today]


def _message(kind: RiskAlertKind, *, count: int, amount: float, currency: str) -> str:
    if kind is RiskAlertKind.DAILY_TRADE_LIMIT:
        return f"DAILY LIMIT REACHED: {count} trades taken."
    if kind is RiskAlertKind.DAILY_LOSS_LIMIT:
        return f"DAILY LOSS LIMIT HIT: Loss of {amount:.2f} {currency} exceeds limit."
    if kind is RiskAlertKind.MAX_DRAWDOWN:
        return f"MAX DRAWDOWN WARNING: Drawdown of {amount:.2f} {currency} detected."
    raise ValueError(f"Unknown risk alert kind: {kind!r}")


def evaluate_alerts(
    trades: Sequence[Trade],
    settings: UserSettings,
    now: datetime,
    tz: tzinfo | None = None,
) -> list[RiskAlert]:
    """
    Apply the configured risk limits to the journal.

    Checks are independent and all inclusive (exactly at the limit
    triggers). A limit of zero disables its check. Alerts are returned in a
    fixed order: daily trade count, daily loss, max drawdown.

    The daily loss only sums today's losing trades; today's winners do not
    offset it. Max drawdown is measured over the whole journal.
    """
    alerts: list[RiskAlert] = []
    today = todays_trades(trades, now, tz)

    if settings.daily_trade_limit > 0 and len(today) >= settings.daily_trade_limit:
        alerts.append(
            RiskAlert(
                kind=RiskAlertKind.DAILY_TRADE_LIMIT,
                severity=AlertSeverity.DANGER,
                message=_message(RiskAlertKind.DAILY_TRADE_LIMIT, count=len(today), amount=0.0, currency=settings.currency),
            )
        )

    daily_loss = sum(t.profit_and_loss for t in today if t.profit_and_loss < 0)
    if settings.daily_loss_limit > 0 and abs(daily_loss) >= settings.daily_loss_limit:
        alerts.append(
            RiskAlert(
                kind=RiskAlertKind.DAILY_LOSS_LIMIT,
                severity=AlertSeverity.DANGER,
                message=_message(RiskAlertKind.DAILY_LOSS_LIMIT, count=len(today), amount=abs(daily_loss), currency=settings.currency),
            )
        )

    if settings.max_drawdown_limit > 0:
        drawdown = compute_equity_curve(trades).max_drawdown
        if drawdown >= settings.max_drawdown_limit:
            alerts.append(
                RiskAlert(
                    kind=RiskAlertKind.MAX_DRAWDOWN,
                    severity=AlertSeverity.DANGER,
                    message=_message(RiskAlertKind.MAX_DRAWDOWN, count=len(today), amount=drawdown, currency=settings.currency),
                )
            )

    if alerts:
        log.debug("Risk alerts triggered: %s", ", ".join(a.kind.value for a in alerts))
    return alerts
