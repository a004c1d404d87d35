"""Threshold-crossing detection over price histories."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence

from .models import AlertFired, AlertTarget, CrossingDirection
from .tracker import TrackerState

logger = logging.getLogger(__name__)


class AlertEngine:
    """Detect a price crossing its target between the last two observations."""

    @staticmethod
    def check(history: Sequence[float], target: AlertTarget) -> Optional[AlertFired]:
        if len(history) < 2:
            return None
        prev, cur = history[-2], history[-1]
        if prev < target.price <= cur:
            direction = CrossingDirection.UP
        elif prev > target.price >= cur:
            direction = CrossingDirection.DOWN
        else:
            return None
        return AlertFired(
            symbol=target.symbol,
            target=target.price,
            observed_price=cur,
            direction=direction,
        )

    def evaluate(self, state: TrackerState, symbols: Iterable[str]) -> List[AlertFired]:
        """Evaluate each of ``symbols`` once against its alert target, if any.

        Untracked symbols and symbols without a target are skipped.
        """
        fired: List[AlertFired] = []
        with state.lock:
            for symbol in dict.fromkeys(symbols):
                target = state.alert_target(symbol)
                if target is None or not state.is_tracked(symbol):
                    continue
                event = self.check(state.history.snapshot(symbol), target)
                if event is not None:
                    logger.info(
                        "Alert fired for %s: %s crossed %s (%s)",
                        symbol,
                        event.observed_price,
                        event.target,
                        event.direction.value,
                    )
                    fired.append(event)
        return fired
