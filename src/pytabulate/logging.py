"""
Logging setup for pytabulate.

The library never configures logging on import; applications call
:func:`setup` to route ``pytabulate`` messages through a plain stream handler
and a rich console handler.
"""

from __future__ import annotations

import logging
import logging.config
from logging import LogRecord
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class AppFilter(logging.Filter):
    """
    Adds the short module name (``filenameStem``) used by the pretty formatter.
    """

    def filter(self, record: LogRecord) -> bool:
        record.filenameStem = Path(record.filename).stem
        return True


def rich_handler_factory() -> RichHandler:
    return RichHandler(
        console=Console(width=160),
        rich_tracebacks=True,
        tracebacks_suppress=[],
        markup=True,
    )


LOGGING_CONFIG: dict[str, Any] = {
    "version": 1,
    "disable_existing_loggers": False,
    "filters": {
        "appfilter": {
            "()": AppFilter,
        }
    },
    "formatters": {
        "standard": {"format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"},
        "pretty": {"format": "[[yellow]%(filenameStem)s[/]] %(message)s"},
    },
    "handlers": {
        "default": {
            "formatter": "standard",
            "class": "logging.StreamHandler",
            "stream": "ext://sys.stderr",
        },
        "rich": {
            "()": rich_handler_factory,
            "formatter": "pretty",
            "filters": ["appfilter"],
        },
    },
    "loggers": {
        "": {
            "handlers": ["default", "rich"],
            "level": "WARNING",
            "propagate": False,
        },
        "pytabulate": {
            "handlers": [],
            "level": "INFO",
            "propagate": True,
        },
    },
}


def setup(level: int | str | None = None) -> None:
    """
    Initialize logging based on the configuration dictionary in this file.

    Args:
        level: Level for the ``pytabulate`` logger, overriding the configured ``INFO``.
    """
    logging.config.dictConfig(LOGGING_CONFIG)
    if level is not None:
        logging.getLogger("pytabulate").setLevel(level)


__all__ = ("setup",)
