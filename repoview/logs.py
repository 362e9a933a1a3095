"""Logging setup for the repoview command line."""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s"


def configure_logging(level: str, *, logger_name: str = "repoview") -> logging.Logger:
    """Configure the root logger and return the application logger.

    Records go to stderr so rendered output on stdout stays clean. Unknown
    level names fall back to ``WARNING``.
    """
    log_level = getattr(logging, level.upper(), logging.WARNING)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
    )
    # httpx logs every request at INFO.
    logging.getLogger("httpx").setLevel(max(log_level, logging.WARNING))

    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level)
    logger.debug("Logging configured with level %s", logging.getLevelName(log_level))
    return logger
