from typing import Iterable, List, Optional, Sequence, Set

import pytest

from stock_tracker.errors import FetchError
from stock_tracker.models import Quote
from stock_tracker.registry import SymbolRegistry
from stock_tracker.tracker import TrackerState


class FakeClient:
    """Market-data client returning scripted responses, one per fetch."""

    def __init__(self, responses: Optional[Sequence[object]] = None) -> None:
        self.responses = list(responses or [])
        self.calls: List[Set[str]] = []

    def fetch(self, symbols: Iterable[str]) -> List[Quote]:
        self.calls.append(set(symbols))
        response = self.responses.pop(0) if self.responses else {}
        if isinstance(response, Exception):
            raise response
        return [Quote(symbol, price) for symbol, price in response.items()]


@pytest.fixture
def state() -> TrackerState:
    return TrackerState(history_size=10)


@pytest.fixture
def registry(state: TrackerState) -> SymbolRegistry:
    return SymbolRegistry(state)


@pytest.fixture
def fetch_error() -> FetchError:
    return FetchError("network down")


@pytest.fixture
def make_client():
    return FakeClient
