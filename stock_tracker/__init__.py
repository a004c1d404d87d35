"""Core package for the stock tracker application."""

__all__ = [
    "config",
    "errors",
    "models",
    "history",
    "tracker",
    "registry",
    "alerts",
    "api_client",
    "scheduler",
    "notifier",
    "state_manager",
    "console",
    "cli",
]
