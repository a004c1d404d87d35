"""Application configuration and logging setup."""

from __future__ import annotations

import logging
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler()],
)


class Config:
    """Configuration values sourced from the environment."""

    MARKETSTACK_API_KEY: Optional[str] = os.getenv("MARKETSTACK_API_KEY")
    MARKETSTACK_URL: str = os.getenv("MARKETSTACK_URL", "http://api.marketstack.com/v1/eod/latest")
    REQUEST_TIMEOUT: float = float(os.getenv("REQUEST_TIMEOUT", "10"))
    POLL_INTERVAL: float = float(os.getenv("POLL_INTERVAL", "300"))
    HISTORY_SIZE: int = int(os.getenv("HISTORY_SIZE", "10"))
    STOCK_FILE: str = os.getenv("STOCK_FILE", "stocks.txt")
    SYMBOL_STORE: str = os.getenv("SYMBOL_STORE", "file").lower()
    TELEGRAM_BOT_TOKEN: Optional[str] = os.getenv("TELEGRAM_BOT_TOKEN")
    TELEGRAM_CHANNEL_ID: Optional[str] = os.getenv("TELEGRAM_CHANNEL_ID")
    REDIS_HOST: str = os.getenv("REDIS_HOST", "localhost")
    REDIS_PORT: int = int(os.getenv("REDIS_PORT", "6379"))
    REDIS_DB: int = int(os.getenv("REDIS_DB", "0"))
    REDIS_PASSWORD: Optional[str] = os.getenv("REDIS_PASSWORD")
    REDIS_SSL: bool = os.getenv("REDIS_SSL", "False").lower() == "true"
    REDIS_KEY_PREFIX: str = os.getenv("REDIS_KEY_PREFIX", "stock_tracker:")
    LAST_FETCH_FILE: str = os.getenv("LAST_FETCH_FILE", ".last_fetch_timestamp")
    HEALTHCHECK_INTERVAL: int = int(os.getenv("HEALTHCHECK_INTERVAL", "900"))
