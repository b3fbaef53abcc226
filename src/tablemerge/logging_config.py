"""Logging configuration for tablemerge.

Library modules log through ``logging.getLogger(__name__)`` and never configure
handlers themselves. Applications call :func:`setup_logging` once to attach a
handler to the ``tablemerge`` logger.

Environment variables:
    TABLEMERGE_LOG_LEVEL: level name used when no level or settings are given.
    TABLEMERGE_LOG_FORMAT: ``human`` (default) or ``json``.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any

from tablemerge.io.config import IoSettings

__all__ = ["JSONFormatter", "setup_logging", "get_log_level_from_env"]

LOGGER_NAME = "tablemerge"
_HANDLER_NAME = "tablemerge-default"

_RESERVED = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


class JSONFormatter(logging.Formatter):
    """Format log records as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)
        # Fields passed via ``extra=``
        for key, value in record.__dict__.items():
            if key not in _RESERVED:
                log_data[key] = value
        return json.dumps(log_data, default=str)


def get_log_level_from_env(default: str = "WARNING") -> int:
    """Read TABLEMERGE_LOG_LEVEL, falling back to ``default`` for unknown names."""
    name = os.environ.get("TABLEMERGE_LOG_LEVEL", default).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.getLevelName(default)


def setup_logging(
    level: int | str | None = None,
    settings: IoSettings | None = None,
    format_type: str | None = None,
) -> logging.Logger:
    """
    Configure the ``tablemerge`` logger.

    Level precedence: ``level`` argument > ``settings.log_level`` > TABLEMERGE_LOG_LEVEL.
    Calling this again replaces the handler it installed earlier rather than
    stacking a second one.

    Returns:
        logging.Logger: The configured ``tablemerge`` logger.
    """
    if level is None:
        level = settings.log_level_number if settings is not None else get_log_level_from_env()
    elif isinstance(level, str):
        level = level.strip().upper()
    if format_type is None:
        format_type = os.environ.get("TABLEMERGE_LOG_FORMAT", "human").lower()

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in [h for h in logger.handlers if h.get_name() == _HANDLER_NAME]:
        logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if format_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "[%(levelname)s] %(asctime)s - %(name)s - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    logger.addHandler(handler)
    return logger
