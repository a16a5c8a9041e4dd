"""
Logging setup shared by the CLI, the gateway and the operation registry.

``configure_logging`` installs a single stderr handler on the root logger,
either with a pipe-separated console layout or with ``JsonFormatter``.
Modules only call ``get_logger(__name__)`` and attach context through
``extra=`` (``person_id``, ``operation``, ``sqlstate``); the JSON formatter
lifts those keys to the top level of each line.
"""

from __future__ import annotations

import json
import logging
import logging.config
from typing import Any, Dict, Optional

CONSOLE_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
CONSOLE_DATEFMT = "%Y-%m-%d %H:%M:%S"

# Loggers of chatty dependencies and the level they are capped at.
QUIET_LOGGERS = {"psycopg.pool": "WARNING"}

_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def record_to_dict(record: logging.LogRecord) -> Dict[str, Any]:
    """Level, logger, message, any traceback, and every ``extra=`` key of ``record``."""
    data: Dict[str, Any] = {
        "level": record.levelname,
        "logger": record.name,
        "message": record.getMessage(),
    }
    data.update(
        (key, value) for key, value in vars(record).items() if key not in _STANDARD_ATTRS
    )
    if record.exc_info:
        data["exc_info"] = logging.Formatter().formatException(record.exc_info)
    return data


class JsonFormatter(logging.Formatter):
    """One JSON object per line; values json can't encode are written with ``str()``."""

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        return json.dumps(record_to_dict(record), default=str)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Replace the root handlers with one stream handler at ``level``."""
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "console": {"format": CONSOLE_FORMAT, "datefmt": CONSOLE_DATEFMT},
                "json": {"()": JsonFormatter},
            },
            "handlers": {
                "stderr": {
                    "class": "logging.StreamHandler",
                    "formatter": "json" if json_logs else "console",
                }
            },
            "root": {"handlers": ["stderr"], "level": level},
            "loggers": {name: {"level": cap} for name, cap in QUIET_LOGGERS.items()},
        }
    )


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name)


__all__ = ["JsonFormatter", "configure_logging", "get_logger", "record_to_dict"]
