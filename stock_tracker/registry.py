"""Symbol registry: the operator-facing mutators of the tracker state."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, List, Optional

from .errors import AlreadyTrackedError, InvalidSymbolError, NotTrackedError
from .models import AlertTarget, normalize_symbol
from .tracker import TrackerState

logger = logging.getLogger(__name__)

TrackCallback = Callable[[List[str]], None]


class TrackedSymbols:
    """Restartable view over the tracked symbols in insertion order.

    Each iteration works on a snapshot taken when it starts, so a concurrent
    add or remove never breaks an in-progress listing.
    """

    def __init__(self, state: TrackerState) -> None:
        self._state = state

    def __iter__(self) -> Iterator[str]:
        return iter(self._state.symbols())

    def __len__(self) -> int:
        return len(self._state.symbols())

    def __contains__(self, symbol: object) -> bool:
        if not isinstance(symbol, str):
            return False
        try:
            return self._state.is_tracked(normalize_symbol(symbol))
        except InvalidSymbolError:
            return False


class SymbolRegistry:
    """Add, remove and configure alerts for tracked symbols."""

    def __init__(self, state: TrackerState, on_track: Optional[TrackCallback] = None) -> None:
        self.state = state
        self.on_track = on_track

    def add(self, raw_symbol: str) -> str:
        symbol = normalize_symbol(raw_symbol)
        if not self.state.track(symbol):
            raise AlreadyTrackedError(symbol)
        logger.info("Tracking %s", symbol)
        if self.on_track is not None:
            self.on_track([symbol])
        return symbol

    def remove(self, raw_symbol: str) -> str:
        symbol = normalize_symbol(raw_symbol)
        if not self.state.untrack(symbol):
            raise NotTrackedError(symbol)
        logger.info("Stopped tracking %s", symbol)
        return symbol

    def set_alert(self, raw_symbol: str, price: float) -> AlertTarget:
        symbol = normalize_symbol(raw_symbol)
        target = AlertTarget(symbol=symbol, price=float(price))
        with self.state.lock:
            if not self.state.is_tracked(symbol):
                raise NotTrackedError(symbol)
            self.state.set_alert(target)
        logger.info("Alert set for %s at %s", symbol, target.price)
        return target

    def clear_alert(self, raw_symbol: str) -> Optional[AlertTarget]:
        symbol = normalize_symbol(raw_symbol)
        with self.state.lock:
            if not self.state.is_tracked(symbol):
                raise NotTrackedError(symbol)
            return self.state.clear_alert(symbol)

    def alert_for(self, raw_symbol: str) -> Optional[AlertTarget]:
        return self.state.alert_target(normalize_symbol(raw_symbol))

    def list(self) -> TrackedSymbols:
        return TrackedSymbols(self.state)

    def load(self, symbols: Iterable[str]) -> List[str]:
        """Track a persisted list without triggering out-of-cycle polls."""
        loaded: List[str] = []
        for raw in symbols:
            if not raw or not raw.strip():
                continue
            symbol = normalize_symbol(raw)
            if self.state.track(symbol):
                loaded.append(symbol)
        return loaded
