"""Bounded per-symbol price history."""

from __future__ import annotations

import threading
from collections import deque
from typing import Any, Deque, Dict, Optional, Tuple

from .config import Config
from .errors import NotTrackedError


class PriceHistoryStore:
    """Keep the most recent ``capacity`` prices for every open symbol.

    Histories are opened when a symbol starts being tracked and discarded when
    it stops; reads and writes for any other symbol raise ``NotTrackedError``.
    The store guards itself with ``lock``, which is normally shared with the
    rest of the tracker state so that history and registry change together.
    """

    def __init__(self, capacity: int = Config.HISTORY_SIZE, lock: Optional[Any] = None) -> None:
        if capacity < 1:
            raise ValueError("History capacity must be at least 1")
        self.capacity = capacity
        self._lock = lock if lock is not None else threading.RLock()
        self._series: Dict[str, Deque[float]] = {}

    def __contains__(self, symbol: object) -> bool:
        with self._lock:
            return symbol in self._series

    def open(self, symbol: str) -> None:
        with self._lock:
            self._series.setdefault(symbol, deque(maxlen=self.capacity))

    def discard(self, symbol: str) -> None:
        with self._lock:
            self._series.pop(symbol, None)

    def _series_for(self, symbol: str) -> Deque[float]:
        try:
            return self._series[symbol]
        except KeyError:
            raise NotTrackedError(symbol) from None

    def record(self, symbol: str, price: float) -> None:
        """Append ``price``; the oldest entry is evicted once at capacity."""
        with self._lock:
            self._series_for(symbol).append(float(price))

    def latest(self, symbol: str) -> Optional[float]:
        with self._lock:
            series = self._series_for(symbol)
            return series[-1] if series else None

    def snapshot(self, symbol: str) -> Tuple[float, ...]:
        with self._lock:
            return tuple(self._series_for(symbol))
