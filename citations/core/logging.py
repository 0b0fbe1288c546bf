"""Process-wide logging setup for the citation desk."""
from __future__ import annotations

import logging

from citations.core.utils import get_config_value

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
QUIET_LOGGERS = ("urllib3", "PIL")


def configure_logging(level: str | None = None) -> None:
    """Set the root level from ``level`` or ``LOG_LEVEL`` (secrets or env, default ``INFO``).

    HTTP connection and image decoder chatter stays at WARNING unless the desk
    itself runs at DEBUG.
    """

    resolved_level = (level or get_config_value("LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=resolved_level, format=LOG_FORMAT)
    if resolved_level != "DEBUG":
        for name in QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
