"""Command-line interface for the stock tracker."""

from __future__ import annotations

import logging

import click

from .alerts import AlertEngine
from .api_client import MarketstackClient
from .config import Config
from .console import MENU, TrackerConsole
from .notifier import AlertNotifier
from .registry import SymbolRegistry
from .scheduler import PollScheduler
from .state_manager import create_symbol_store
from .tracker import TrackerState

logger = logging.getLogger(__name__)


def run_console(console: TrackerConsole) -> None:
    """Serve the interactive menu until the operator exits."""
    while True:
        click.echo(MENU)
        choice = click.prompt("Choose an option", default="", show_default=False).strip()
        if choice == "1":
            symbol = click.prompt("Enter stock symbol (e.g., AAPL)", default="", show_default=False)
            click.echo(console.track(symbol))
        elif choice == "2":
            symbol = click.prompt("Enter stock symbol to remove", default="", show_default=False)
            click.echo(console.untrack(symbol))
        elif choice == "3":
            click.echo(console.list())
        elif choice == "4":
            symbol = click.prompt("Enter stock symbol for alert", default="", show_default=False)
            price = click.prompt("Enter alert price", type=float)
            click.echo(console.set_alert(symbol, price))
        elif choice == "5":
            click.echo(console.exit())
            return
        else:
            click.echo("Invalid option.")


@click.command()
@click.option(
    "--interval",
    type=click.FloatRange(min=1),
    default=Config.POLL_INTERVAL,
    show_default=True,
    help="Seconds between scheduled price polls.",
)
@click.option(
    "--stock-file",
    type=click.Path(dir_okay=False),
    default=Config.STOCK_FILE,
    show_default=True,
    help="File holding the tracked symbols between runs.",
)
@click.option(
    "--store",
    type=click.Choice(["file", "redis"], case_sensitive=False),
    default=Config.SYMBOL_STORE,
    show_default=True,
    help="Where the tracked symbol list is persisted.",
)
@click.option(
    "--dry-run",
    is_flag=True,
    help="Print alerts to the terminal only, without sending them to Telegram.",
)
def main(
    interval: float,
    stock_file: str,
    store: str,
    dry_run: bool,
) -> None:
    if dry_run:
        logger.info("DRY RUN mode enabled - alerts will only be printed to terminal")

    state = TrackerState()
    registry = SymbolRegistry(state)
    symbol_store = create_symbol_store(store, stock_file)
    registry.load(symbol_store.load())

    scheduler = PollScheduler(
        state,
        MarketstackClient(),
        engine=AlertEngine(),
        notifier=AlertNotifier(dry_run=dry_run),
        interval=interval,
        on_error=lambda message: click.echo(message, err=True),
        heartbeat_file=Config.LAST_FETCH_FILE,
    )
    registry.on_track = scheduler.request_poll
    scheduler.start()
    try:
        run_console(TrackerConsole(registry))
    finally:
        scheduler.stop()
        symbol_store.save(registry.list())
