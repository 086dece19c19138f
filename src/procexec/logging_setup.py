"""Opt-in logging configuration for the procexec namespace."""

from __future__ import annotations

import logging
import sys

from .config import Config, get_config

__all__ = ["configure_logging", "LOG_FORMAT"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(config: Config | None = None) -> logging.Handler:
    """Attach a handler to the ``procexec`` logger.

    With ``log_debug`` enabled, DEBUG records go to ``config.log_file``;
    otherwise INFO records go to stderr. Only the ``procexec`` namespace is
    touched, the root logger is left alone.

    Returns:
        The handler that was installed
    """
    config = config or get_config()

    handler: logging.Handler
    if config.log_debug and config.log_file:
        handler = logging.FileHandler(config.log_file, encoding="utf-8")
        log_level = logging.DEBUG
    else:
        handler = logging.StreamHandler(sys.stderr)
        log_level = logging.INFO
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    package_logger = logging.getLogger("procexec")
    package_logger.addHandler(handler)
    package_logger.setLevel(log_level)
    return handler
