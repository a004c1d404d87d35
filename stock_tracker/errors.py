"""Exceptions raised by the tracker core."""

from __future__ import annotations


class StockTrackerError(Exception):
    """Base class for every tracker error."""


class InvalidSymbolError(StockTrackerError, ValueError):
    """Raised when a ticker symbol is blank after normalization."""


class NotTrackedError(StockTrackerError):
    """Raised when an operation names a symbol that is not tracked."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"{symbol} not tracked")
        self.symbol = symbol


class AlreadyTrackedError(StockTrackerError):
    """Raised when a symbol is tracked twice."""

    def __init__(self, symbol: str) -> None:
        super().__init__(f"{symbol} already tracked")
        self.symbol = symbol


class FetchError(StockTrackerError):
    """Raised when the market-data source cannot produce prices."""
