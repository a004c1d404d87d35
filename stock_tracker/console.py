"""Operator commands returning human-readable status strings."""

from __future__ import annotations

from typing import List

from .errors import AlreadyTrackedError, InvalidSymbolError, NotTrackedError
from .registry import SymbolRegistry

MENU = (
    "\nStock Market Tracker\n"
    "1. Add Stock\n"
    "2. Remove Stock\n"
    "3. View Stocks\n"
    "4. Set Price Alert\n"
    "5. Exit"
)


class TrackerConsole:
    """Thin command layer over the registry and the price history."""

    def __init__(self, registry: SymbolRegistry) -> None:
        self.registry = registry

    def track(self, raw_symbol: str) -> str:
        try:
            symbol = self.registry.add(raw_symbol)
        except AlreadyTrackedError as exc:
            return f"{exc.symbol} already tracked."
        except InvalidSymbolError:
            return "Please enter a stock symbol."
        return f"{symbol} added."

    def untrack(self, raw_symbol: str) -> str:
        try:
            symbol = self.registry.remove(raw_symbol)
        except NotTrackedError as exc:
            return f"{exc.symbol} not found."
        except InvalidSymbolError:
            return "Please enter a stock symbol."
        return f"{symbol} removed."

    def set_alert(self, raw_symbol: str, price: float) -> str:
        try:
            target = self.registry.set_alert(raw_symbol, price)
        except NotTrackedError as exc:
            return f"{exc.symbol} not tracked. Add it first."
        except InvalidSymbolError:
            return "Please enter a stock symbol."
        return f"Alert set for {target.symbol} at ${target.price}"

    def list(self) -> str:
        return self.render()

    def exit(self) -> str:
        return "Exiting..."

    def render(self) -> str:
        """Latest price and a bar chart of the history for each symbol."""
        state = self.registry.state
        blocks: List[str] = []
        with state.lock:
            for symbol in self.registry.list():
                prices = state.history.snapshot(symbol)
                lines = [f"\n{symbol}:"]
                if not prices:
                    lines.append("No data yet.")
                else:
                    lines.append(f"Latest Price: ${prices[-1]}")
                    lines.append(f"Price History (last {len(prices)} updates):")
                    for price in prices:
                        lines.append(f"{price:.2f} " + "*" * _bar_width(price))
                target = state.alert_target(symbol)
                if target is not None:
                    lines.append(f"Alert target: ${target.price}")
                blocks.append("\n".join(lines))
        if not blocks:
            return "No stocks tracked."
        return "\n".join(blocks)


def _bar_width(price: float) -> int:
    # One star per $10, rounded up.
    if price <= 0:
        return 0
    return int(-(-price // 10))
