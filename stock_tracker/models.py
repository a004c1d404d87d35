"""Domain models used by the application."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidSymbolError


def normalize_symbol(raw: str) -> str:
    """Return the canonical (trimmed, uppercase) form of a ticker symbol."""
    symbol = (raw or "").strip().upper()
    if not symbol:
        raise InvalidSymbolError("Symbol must not be empty")
    return symbol


class CrossingDirection(str, Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class Quote:
    symbol: str
    price: float


@dataclass(frozen=True)
class AlertTarget:
    symbol: str
    price: float


@dataclass(frozen=True)
class AlertFired:
    symbol: str
    target: float
    observed_price: float
    direction: CrossingDirection

    def __str__(self) -> str:
        return f"ALERT: {self.symbol} hit ${self.observed_price} (target: ${self.target})"

    def to_telegram_string(self) -> str:
        arrow = "📈" if self.direction is CrossingDirection.UP else "📉"
        return (
            f"{arrow} {self.symbol}\n"
            f"  Price: ${self.observed_price}\n"
            f"  Target: ${self.target} (crossed {self.direction.value})\n"
        )
