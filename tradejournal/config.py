"""User settings and logging configuration."""

import logging
import math
import sys
from dataclasses import dataclass, fields
from typing import Any, Mapping, TextIO


__all__ = [
    "JOURNAL_LOGGER",
    "UserSettings",
    "configure_logging",
]


@dataclass
class UserSettings:
    """
    Risk limits and goals for one journal session.

    A limit of zero disables the corresponding risk check. ``currency`` is a
    display code only and never takes part in arithmetic.
    """
    daily_loss_limit: float = 500.0
    daily_trade_limit: int = 5
    max_drawdown_limit: float = 2000.0
    savings_goal: float = 50000.0
    currency: str = "USD"

    def __post_init__(self):
        for name in ("daily_loss_limit", "daily_trade_limit", "max_drawdown_limit", "savings_goal"):
            value = getattr(self, name)
            if math.isnan(value) or value < 0:
                raise ValueError(f"settings.{name} must be >= 0, got {value!r}")

    @classmethod
    def from_raw(cls, raw: Mapping[str, Any]) -> "UserSettings":
        """Validate and construct from a raw settings mapping.

        Missing keys take their defaults. Both snake_case and the camelCase
        keys used by the web client are accepted. Raises ``ValueError`` with a
        clear message on bad values instead of letting ``TypeError`` propagate.
        """
        aliases = {
            "dailyLossLimit": "daily_loss_limit",
            "dailyTradeLimit": "daily_trade_limit",
            "maxDrawdownLimit": "max_drawdown_limit",
            "savingsGoal": "savings_goal",
        }
        values = {aliases.get(k, k): v for k, v in raw.items()}
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise ValueError(f"Unknown settings: {', '.join(unknown)}")

        kwargs: dict[str, Any] = {}
        for name in ("daily_loss_limit", "max_drawdown_limit", "savings_goal"):
            if name in values:
                try:
                    kwargs[name] = float(values[name])
                except (TypeError, ValueError) as exc:
                    raise ValueError(f"settings.{name} is not numeric") from exc
        if "daily_trade_limit" in values:
            try:
                kwargs["daily_trade_limit"] = int(values["daily_trade_limit"])
            except (TypeError, ValueError) as exc:
                raise ValueError("settings.daily_trade_limit is not an integer") from exc
        if "currency" in values:
            kwargs["currency"] = str(values["currency"]).strip().upper() or "USD"

        return cls(**kwargs)


JOURNAL_LOGGER = "tradejournal"
_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO", force: bool = False, stream: TextIO | None = None) -> logging.Logger:
    """
    Attach a console handler to the ``tradejournal`` logger and return it.

    Only the package logger is touched, so a host application's root logging
    setup is left alone. Repeated calls are no-ops unless *force* is set, in
    which case handlers installed by an earlier call are swapped for a new one.
    Import coercion warnings and store activity are emitted on this logger.
    """
    logger = logging.getLogger(JOURNAL_LOGGER)
    ours = [h for h in logger.handlers if getattr(h, "_tradejournal", False)]
    if ours and not force:
        return logger

    for handler in ours:
        logger.removeHandler(handler)

    logger.setLevel(level.upper() if isinstance(level, str) else level)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    handler._tradejournal = True
    logger.addHandler(handler)
    return logger
