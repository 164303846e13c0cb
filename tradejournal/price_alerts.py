"""Price-level alerts (ABOVE/BELOW) set from the market view."""

import logging
from dataclasses import dataclass, field, replace
from datetime import datetime

from tradejournal.records import new_id
from tradejournal.time_utils import now_utc
from tradejournal.types import PriceCondition

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceAlert:
    symbol: str
    price: float
    condition: PriceCondition
    active: bool = True
    created_at: datetime = field(default_factory=now_utc)
    id: str = field(default_factory=new_id)


class PriceAlertBook:
    """
    Holds the user's price alerts and checks them against incoming prices.

    An alert fires once: :meth:`check` returns it and marks it inactive.
    Delivering the notification is left to the caller.
    """

    def __init__(self):
        self._alerts: dict[str, PriceAlert] = {}

    def add(self, symbol: str, price: float, condition: PriceCondition | str) -> PriceAlert:
        sym = (symbol or "").strip().upper()
        if not sym:
            raise ValueError("Alert symbol must be a non-empty string")
        try:
            level = float(price)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Alert price is not numeric: {price!r}") from exc
        if not level > 0:
            raise ValueError(f"Alert price must be positive, got {price!r}")

        if not isinstance(condition, PriceCondition):
            condition = PriceCondition(str(condition).strip().upper())

        alert = PriceAlert(symbol=sym, price=level, condition=condition)
        self._alerts[alert.id] = alert
        log.info("Alert set for %s %s %s", alert.symbol, alert.condition.value, alert.price)
        return alert

    def remove(self, alert_id: str) -> None:
        if self._alerts.pop(alert_id, None) is None:
            raise KeyError(f"No alert with id {alert_id!r}")

    def active(self) -> list[PriceAlert]:
        return [a for a in self._alerts.values() if a.active]

    def all(self) -> list[PriceAlert]:
        return list(self._alerts.values())

    def check(self, symbol: str, price: float) -> list[PriceAlert]:
        """Return the active alerts on *symbol* that *price* triggers, deactivating them."""
        sym = symbol.strip().upper()
        fired: list[PriceAlert] = []
        for alert in self.active():
            if alert.symbol != sym:
                continue
            if alert.condition.is_met(level=alert.price, price=float(price)):
                done = replace(alert, active=False)
                self._alerts[alert.id] = done
                fired.append(done)
                log.info("Alert triggered: %s %s %s (price %s)", sym, alert.condition.value, alert.price, price)
        return fired

    def __len__(self) -> int:
        return len(self._alerts)
