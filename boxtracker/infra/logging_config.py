"""Logging setup shared by the API process and the client controller."""

from __future__ import annotations

import logging
import logging.config
from typing import Optional

from boxtracker.config import get_settings

LOGGER_NAMESPACE = "boxtracker"
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class LoggingConfig:
    """Configure the root and package loggers once per process."""

    _configured = False

    def __init__(self, level: Optional[str] = None) -> None:
        self.level = (level or get_settings().log_level).upper()
        if not LoggingConfig._configured:
            self.configure()
            LoggingConfig._configured = True

    def configure(self) -> None:
        logging.config.dictConfig(
            {
                "version": 1,
                "disable_existing_loggers": False,
                "formatters": {"default": {"format": LOG_FORMAT}},
                "handlers": {
                    "console": {
                        "class": "logging.StreamHandler",
                        "formatter": "default",
                    }
                },
                "loggers": {
                    LOGGER_NAMESPACE: {
                        "handlers": ["console"],
                        "level": self.level,
                        "propagate": False,
                    },
                    "uvicorn.access": {"level": "WARNING"},
                },
                "root": {"handlers": ["console"], "level": "WARNING"},
            }
        )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the package namespace."""
    if not name:
        return logging.getLogger(LOGGER_NAMESPACE)
    if name.startswith(LOGGER_NAMESPACE):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")
