"""Structured logging for gh-inbox.

Log records are written as JSON lines to stderr so they never interleave with
the menu and tables printed on stdout. Anything passed through ``extra=`` ends up
under the ``context`` key.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO

LOG_LEVELS: tuple[str, ...] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

HANDLER_NAME = "gh_inbox.json"

# Attributes every LogRecord carries; whatever else is on a record came from `extra=`.
_STANDARD_RECORD_ATTRS: frozenset[str] = frozenset(
    logging.LogRecord("", logging.NOTSET, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Chatty libraries kept at WARNING or above whatever the root level is.
_QUIET_LOGGERS: tuple[str, ...] = ("urllib3", "requests")


def normalize_level(name: str) -> str:
    """Return the canonical upper-case level name.

    Raises:
        ValueError if ``name`` is not one of LOG_LEVELS.
    """

    level = name.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"unknown log level {name!r}, expected one of {', '.join(LOG_LEVELS)}")
    return level


def record_context(record: logging.LogRecord) -> dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_RECORD_ATTRS and not key.startswith("_")
    }


class JsonFormatter(logging.Formatter):
    """One JSON object per record: timestamp, level, logger, message, context."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = record_context(record)
        if context:
            payload["context"] = context
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        # Paths and exceptions in `extra` are not JSON types.
        return json.dumps(payload, ensure_ascii=False, default=str)


def configure_logging(level: str, *, stream: TextIO | None = None) -> logging.Handler:
    """Install the JSON handler on the root logger.

    Calling this again swaps out the handler installed earlier; handlers added by
    anything else are left alone.
    """

    level_name = normalize_level(level)
    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(JsonFormatter())
    root.addHandler(handler)
    root.setLevel(level_name)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(root.level, logging.WARNING))
    return handler
