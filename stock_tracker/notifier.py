"""Console and Telegram delivery of fired price alerts."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

import click
import requests

from .config import Config
from .models import AlertFired

logger = logging.getLogger(__name__)


class AlertNotifier:
    """Print fired alerts and forward them to Telegram when configured."""

    def __init__(
        self,
        bot_token: Optional[str] = None,
        channel_id: Optional[str] = None,
        dry_run: bool = False,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        self.bot_token = bot_token if bot_token is not None else Config.TELEGRAM_BOT_TOKEN
        self.channel_id = channel_id if channel_id is not None else Config.TELEGRAM_CHANNEL_ID
        self.dry_run = dry_run
        self.echo = echo

    @property
    def telegram_enabled(self) -> bool:
        return bool(self.bot_token and self.channel_id) and not self.dry_run

    def send_alerts(self, events: List[AlertFired]) -> bool:
        if not events:
            return True

        for event in events:
            self.echo(str(event))

        if not self.telegram_enabled:
            if self.dry_run:
                logger.info("DRY RUN: Would notify Telegram about %s alerts", len(events))
            return True

        message = "🔔 Price Alerts\n\n"
        for event in events:
            message += event.to_telegram_string() + "\n"

        url = f"https://api.telegram.org/bot{self.bot_token}/sendMessage"
        payload = {
            "chat_id": self.channel_id,
            "text": message,
            "disable_web_page_preview": True,
        }

        try:
            response = requests.post(url, json=payload, timeout=float(Config.REQUEST_TIMEOUT))
            if response.ok:
                logger.info("Notification sent for %s alerts", len(events))
                return True
            logger.error("Telegram API error: %s", response.status_code)
            return False
        except requests.RequestException as exc:
            logger.error("Failed to send Telegram notification: %s", exc)
            return False
