"""Background poll scheduler: fetch, record, then evaluate alerts."""

from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Tuple

from .alerts import AlertEngine
from .api_client import MarketDataClient
from .config import Config
from .errors import FetchError
from .models import AlertFired
from .notifier import AlertNotifier
from .tracker import TrackerState

logger = logging.getLogger(__name__)

_TICK = object()
_STOP = object()


@dataclass
class CycleResult:
    requested: Tuple[str, ...] = ()
    updated: List[str] = field(default_factory=list)
    alerts: List[AlertFired] = field(default_factory=list)
    error: Optional[FetchError] = None

    @property
    def skipped(self) -> bool:
        return not self.requested


class PollScheduler:
    """Drive poll cycles on a fixed period and on demand.

    A single worker thread owns all fetching. The recurring tick fires as soon
    as the scheduler starts and then every ``interval`` seconds; on-demand
    requests (a symbol was just added) are queued and served between ticks.
    """

    def __init__(
        self,
        state: TrackerState,
        client: MarketDataClient,
        engine: Optional[AlertEngine] = None,
        notifier: Optional[AlertNotifier] = None,
        interval: float = Config.POLL_INTERVAL,
        on_error: Optional[Callable[[str], None]] = None,
        heartbeat_file: Optional[str] = None,
    ) -> None:
        if interval <= 0:
            raise ValueError("Poll interval must be positive")
        self.state = state
        self.client = client
        self.engine = engine or AlertEngine()
        self.notifier = notifier
        self.interval = interval
        self.on_error = on_error
        self.heartbeat_file = heartbeat_file
        self._requests: "queue.Queue[object]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._stopping = threading.Event()

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            if self._stopping.is_set():
                raise RuntimeError("Poll scheduler is still finishing its last cycle")
            return
        self._stopping.clear()
        self._requests = queue.Queue()
        self._thread = threading.Thread(target=self._run, name="poll-scheduler", daemon=True)
        self._thread.start()
        logger.info("Poll scheduler started (interval %ss)", self.interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        """Cancel the recurring tick and wait for an in-flight cycle to finish."""
        if self._thread is None:
            return
        self._stopping.set()
        self._requests.put(_STOP)
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("Poll scheduler still finishing its last cycle")
            return
        logger.info("Poll scheduler stopped")
        self._thread = None

    def request_poll(self, symbols: Optional[Iterable[str]] = None) -> None:
        """Queue an out-of-cycle poll, for ``symbols`` only when given."""
        if self._stopping.is_set():
            return
        self._requests.put(tuple(symbols) if symbols is not None else _TICK)

    def _run(self) -> None:
        next_tick = time.monotonic()
        while not self._stopping.is_set():
            timeout = max(0.0, next_tick - time.monotonic())
            try:
                request = self._requests.get(timeout=timeout)
            except queue.Empty:
                request = _TICK
                next_tick += self.interval
                if next_tick < time.monotonic():
                    next_tick = time.monotonic() + self.interval

            if request is _STOP:
                break
            symbols = None if request is _TICK else request
            try:
                self.run_cycle(symbols)  # type: ignore[arg-type]
            except Exception:  # noqa: BLE001 - the scheduler must outlive any cycle
                logger.exception("Unexpected error during poll cycle")

    def run_cycle(self, symbols: Optional[Iterable[str]] = None) -> CycleResult:
        """Run one fetch, record, evaluate pass and return what happened."""
        generations = self.state.generations()
        tracked = tuple(generations)
        if symbols is not None:
            wanted = set(symbols)
            tracked = tuple(s for s in tracked if s in wanted)
        result = CycleResult(requested=tracked)
        if result.skipped:
            logger.debug("No tracked symbols to poll")
            return result

        try:
            quotes = self.client.fetch(set(tracked))
        except FetchError as exc:
            result.error = exc
            self._report_error(exc)
            return result

        with self.state.lock:
            current = self.state.generations()
            for quote in quotes:
                # Drop quotes for symbols removed, or removed and re-added, mid-fetch.
                if quote.symbol not in tracked:
                    continue
                if current.get(quote.symbol) != generations[quote.symbol]:
                    continue
                self.state.history.record(quote.symbol, quote.price)
                result.updated.append(quote.symbol)
                logger.info("Updated %s: $%s", quote.symbol, quote.price)
            result.alerts = self.engine.evaluate(self.state, result.updated)

        missing = set(tracked) - set(result.updated)
        if missing:
            logger.warning("No price returned for: %s", ", ".join(sorted(missing)))
        self._write_heartbeat()
        if result.alerts and self.notifier is not None:
            self.notifier.send_alerts(result.alerts)
        return result

    def _report_error(self, exc: FetchError) -> None:
        logger.error("Error fetching stock prices: %s", exc)
        if self.on_error is not None:
            self.on_error(f"Error fetching stock prices: {exc}")

    def _write_heartbeat(self) -> None:
        if not self.heartbeat_file:
            return
        try:
            with open(self.heartbeat_file, "w", encoding="utf-8") as handle:
                handle.write(str(time.time()))
        except OSError as exc:
            logger.warning("Could not write fetch timestamp: %s", exc)
