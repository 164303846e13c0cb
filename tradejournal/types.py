"""Journal-wide enumerations."""

from enum import Enum


class Direction(str, Enum):
    """Side of a closed position as entered in the journal."""
    BUY = "BUY"
    SELL = "SELL"

    def opposite(self) -> "Direction":
        """Return the opposite direction."""
        return Direction.SELL if self is Direction.BUY else Direction.BUY

    @classmethod
    def coerce(cls, value: object) -> "Direction":
        """
        Map a loosely typed side to a Direction.

        Anything that reads as "SELL" (case-insensitive) is a sell; everything
        else, including missing values, is treated as a buy.
        """
        if isinstance(value, Direction):
            return value
        return cls.SELL if str(value or "").strip().upper() == "SELL" else cls.BUY


class Outcome(str, Enum):
    WIN = "WIN"
    LOSS = "LOSS"
    BREAKEVEN = "BREAKEVEN"

    @classmethod
    def from_pnl(cls, pnl: float) -> "Outcome":
        """WIN iff pnl is strictly positive; BREAKEVEN is never derived."""
        return cls.WIN if pnl > 0 else cls.LOSS


class TransactionKind(str, Enum):
    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"

    @classmethod
    def coerce(cls, value: object) -> "TransactionKind":
        if isinstance(value, TransactionKind):
            return value
        return cls.WITHDRAWAL if str(value or "").strip().upper() == "WITHDRAWAL" else cls.DEPOSIT


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    DANGER = "danger"


class RiskAlertKind(Enum):
    """Classification of risk-limit breaches."""

    DAILY_TRADE_LIMIT = "daily_trade_limit"
    DAILY_LOSS_LIMIT = "daily_loss_limit"
    MAX_DRAWDOWN = "max_drawdown"


class PriceCondition(str, Enum):
    ABOVE = "ABOVE"
    BELOW = "BELOW"

    def is_met(self, *, level: float, price: float) -> bool:
        """Return True when *price* has reached *level* from this side."""
        if self is PriceCondition.ABOVE:
            return price >= level
        if self is PriceCondition.BELOW:
            return price <= level
        raise ValueError(f"Unknown price condition: {self!r}")
