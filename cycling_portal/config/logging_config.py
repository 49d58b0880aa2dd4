"""Logging setup for scripts and applications embedding the portal."""

import logging

from cycling_portal.config.settings import Settings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """
    Configure root logging from settings.

    Args:
        settings: Optional settings (defaults to cached environment settings)
    """
    if settings is None:
        settings = get_settings()

    level = logging.DEBUG if settings.debug else settings.log_level.upper()
    logging.basicConfig(level=level, format=LOG_FORMAT)
