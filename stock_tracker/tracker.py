"""Process-wide tracker state shared by the scheduler and the console."""

from __future__ import annotations

import threading
from typing import Dict, Optional, Tuple

from .config import Config
from .history import PriceHistoryStore
from .models import AlertTarget


class TrackerState:
    """Own the tracked symbols, their histories and their alert targets.

    Every field is guarded by ``lock``. Callers that need several reads or
    writes to be observed as one unit (a poll cycle, a removal) hold the lock
    around the whole sequence; single calls take it themselves.
    """

    def __init__(self, history_size: int = Config.HISTORY_SIZE) -> None:
        self.lock = threading.RLock()
        self.history = PriceHistoryStore(history_size, lock=self.lock)
        self._tracked: Dict[str, None] = {}
        self._alerts: Dict[str, AlertTarget] = {}
        self._generations: Dict[str, int] = {}
        self._next_generation = 0

    def is_tracked(self, symbol: str) -> bool:
        with self.lock:
            return symbol in self._tracked

    def symbols(self) -> Tuple[str, ...]:
        with self.lock:
            return tuple(self._tracked)

    def generations(self) -> Dict[str, int]:
        """Map each tracked symbol to the id of its current tracking period."""
        with self.lock:
            return dict(self._generations)

    def track(self, symbol: str) -> bool:
        with self.lock:
            if symbol in self._tracked:
                return False
            self._tracked[symbol] = None
            self._next_generation += 1
            self._generations[symbol] = self._next_generation
            self.history.open(symbol)
            return True

    def untrack(self, symbol: str) -> bool:
        with self.lock:
            if symbol not in self._tracked:
                return False
            del self._tracked[symbol]
            del self._generations[symbol]
            self.history.discard(symbol)
            self._alerts.pop(symbol, None)
            return True

    def set_alert(self, target: AlertTarget) -> None:
        with self.lock:
            self._alerts[target.symbol] = target

    def clear_alert(self, symbol: str) -> Optional[AlertTarget]:
        with self.lock:
            return self._alerts.pop(symbol, None)

    def alert_target(self, symbol: str) -> Optional[AlertTarget]:
        with self.lock:
            return self._alerts.get(symbol)

    def alert_targets(self) -> Dict[str, AlertTarget]:
        with self.lock:
            return dict(self._alerts)
