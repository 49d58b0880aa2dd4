"""Configuration loading and settings."""

from cycling_portal.config.logging_config import configure_logging
from cycling_portal.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "configure_logging",
    "get_settings",
]
