"""Ledger settings (pydantic-settings) and structlog configuration."""

from src.config.logging import configure_logging, get_logger
from src.config.settings import Settings, get_settings, reset_settings

__all__ = [
    "Settings",
    "get_settings",
    "reset_settings",
    "configure_logging",
    "get_logger",
]
