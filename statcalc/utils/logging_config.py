"""Logging setup for applications embedding statcalc."""

import logging
from typing import Optional
from config import settings

DEFAULT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: Optional[str] = None, format: str = DEFAULT_FORMAT,
                      datefmt: str = DEFAULT_DATEFMT) -> logging.Logger:
    """
    Configure root logging and the ``statcalc`` logger.

    Args:
        level: Optional explicit log level. Falls back to ``settings.log_level``
            (env ``STATCALC_LOG_LEVEL``).
        format: Log format string.
        datefmt: Date format string.

    Returns:
        The ``statcalc`` logger.
    """
    resolved_level = (level or settings.log_level).upper()
    logging.basicConfig(level=resolved_level, format=format, datefmt=datefmt)

    app_logger = logging.getLogger("statcalc")
    app_logger.setLevel(resolved_level)
    app_logger.debug("Logging configured at %s", resolved_level)
    return app_logger
