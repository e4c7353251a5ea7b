from __future__ import annotations

import logging

PACKAGE_LOGGER = "workforce_analytics"


def configure_logging(level: str = "INFO") -> None:
    """Set the package logger level; handlers are left to the host application."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(getattr(logging, str(level).upper(), logging.INFO))
