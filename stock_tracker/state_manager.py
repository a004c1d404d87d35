"""Persistence of the tracked-symbol list between runs."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

import redis

from .config import Config
from .models import normalize_symbol

logger = logging.getLogger(__name__)


def _clean(lines: Iterable[str]) -> List[str]:
    symbols: List[str] = []
    for line in lines:
        if not line.strip():
            continue
        symbol = normalize_symbol(line)
        if symbol not in symbols:
            symbols.append(symbol)
    return symbols


class SymbolStore(ABC):
    """Load and save the list of tracked symbols."""

    @abstractmethod
    def load(self) -> List[str]:
        ...

    @abstractmethod
    def save(self, symbols: Iterable[str]) -> bool:
        ...


class FileSymbolStore(SymbolStore):
    """Newline-delimited symbol list on local disk."""

    def __init__(self, path: Optional[str] = None) -> None:
        self.path = path or Config.STOCK_FILE

    def load(self) -> List[str]:
        if not os.path.exists(self.path):
            logger.info("No saved stocks found.")
            return []
        try:
            with open(self.path, "r", encoding="utf-8") as handle:
                symbols = _clean(handle)
        except OSError as exc:
            logger.error("Error loading stocks: %s", exc)
            return []
        logger.info("Loaded %s stocks from file.", len(symbols))
        return symbols

    def save(self, symbols: Iterable[str]) -> bool:
        symbols = list(symbols)
        try:
            with open(self.path, "w", encoding="utf-8") as handle:
                for symbol in symbols:
                    handle.write(f"{symbol}\n")
        except OSError as exc:
            logger.error("Error saving stocks: %s", exc)
            return False
        logger.info("Saved %s stocks to file.", len(symbols))
        return True


class RedisSymbolStore(SymbolStore):
    """Symbol list kept in a Redis list under ``<prefix>symbols``."""

    def __init__(self, client: Optional[redis.Redis] = None) -> None:
        try:
            self.redis_client = client or redis.Redis(
                host=Config.REDIS_HOST,
                port=Config.REDIS_PORT,
                db=Config.REDIS_DB,
                password=Config.REDIS_PASSWORD,
                decode_responses=True,
                ssl=Config.REDIS_SSL,
                socket_connect_timeout=3,
                socket_timeout=3,
            )
            self.redis_client.ping()
            logger.info("Connected to Redis successfully")
        except redis.RedisError as exc:
            logger.error("Failed to connect to Redis: %s", exc)
            raise
        self.key = f"{Config.REDIS_KEY_PREFIX}symbols"

    def load(self) -> List[str]:
        try:
            symbols = _clean(self.redis_client.lrange(self.key, 0, -1) or [])
        except redis.RedisError as exc:
            logger.error("Failed to load symbols from Redis: %s", exc)
            return []
        logger.info("Loaded %s stocks from Redis.", len(symbols))
        return symbols

    def save(self, symbols: Iterable[str]) -> bool:
        symbols = list(symbols)
        try:
            pipe = self.redis_client.pipeline()
            pipe.delete(self.key)
            if symbols:
                pipe.rpush(self.key, *symbols)
            pipe.execute()
        except redis.RedisError as exc:
            logger.error("Failed to save symbols to Redis: %s", exc)
            return False
        logger.info("Saved %s stocks to Redis.", len(symbols))
        return True


def create_symbol_store(kind: Optional[str] = None, path: Optional[str] = None) -> SymbolStore:
    """Build the configured store, falling back to the file store without Redis."""
    kind = (kind or Config.SYMBOL_STORE).lower()
    if kind == "redis":
        try:
            return RedisSymbolStore()
        except redis.RedisError as exc:
            logger.warning("Redis not available, falling back to file store: %s", exc)
    elif kind != "file":
        raise ValueError(f"Unknown symbol store: {kind}")
    return FileSymbolStore(path)
