"""Market-data clients returning batched end-of-day prices."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import requests

from .config import Config
from .errors import FetchError
from .models import Quote, normalize_symbol

logger = logging.getLogger(__name__)


class MarketDataClient(ABC):
    """Fallible batch price lookup."""

    @abstractmethod
    def fetch(self, symbols: Iterable[str]) -> List[Quote]:
        """Return one quote per symbol the source knows about.

        Symbols the source cannot price are omitted. Raises ``FetchError`` when
        the whole lookup fails.
        """


class MarketstackClient(MarketDataClient):
    """Client for the marketstack end-of-day endpoint."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else Config.MARKETSTACK_API_KEY
        self.url = url or Config.MARKETSTACK_URL
        self.timeout = timeout if timeout is not None else Config.REQUEST_TIMEOUT
        self.session = session or requests.Session()

    def fetch(self, symbols: Iterable[str]) -> List[Quote]:
        requested = sorted({normalize_symbol(s) for s in symbols})
        if not requested:
            return []
        if not self.api_key:
            raise FetchError("MARKETSTACK_API_KEY is not set")

        params = {"access_key": self.api_key, "symbols": ",".join(requested)}
        try:
            response = self.session.get(self.url, params=params, timeout=self.timeout)
        except requests.Timeout as exc:
            raise FetchError(f"Timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise FetchError(f"Request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise FetchError(f"Malformed response (HTTP {response.status_code})") from exc

        if not response.ok:
            raise FetchError(f"HTTP {response.status_code}: {self._error_message(payload)}")
        if isinstance(payload, dict) and "error" in payload:
            raise FetchError(f"API error: {self._error_message(payload)}")

        quotes = self._parse_quotes(payload, set(requested))
        logger.debug("Fetched %s/%s quotes", len(quotes), len(requested))
        return quotes

    @staticmethod
    def _error_message(payload: Any) -> str:
        if isinstance(payload, dict):
            error = payload.get("error")
            if isinstance(error, dict):
                return str(error.get("message") or error.get("code") or error)
            if error:
                return str(error)
        return "unknown error"

    @staticmethod
    def _parse_quotes(payload: Any, requested: set) -> List[Quote]:
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
            raise FetchError("Malformed response: missing 'data' list")

        seen: Dict[str, Quote] = {}
        for row in payload["data"]:
            try:
                symbol = normalize_symbol(str(row["symbol"]))
                close = row["close"]
                if close is None:
                    continue
                price = float(close)
            except (KeyError, TypeError, ValueError) as exc:
                raise FetchError(f"Malformed quote row: {row!r}") from exc
            # Rows arrive newest first; keep the first one per symbol.
            if symbol in requested and symbol not in seen:
                seen[symbol] = Quote(symbol=symbol, price=price)
        return list(seen.values())
