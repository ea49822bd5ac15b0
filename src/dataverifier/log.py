"""
Logging setup for dataverifier.

Library modules only create loggers; nothing is configured until an
application (or the CLI) calls ``configure_logging()``.  JSON output
emits one object per line for log aggregation; text output is for
terminals.

Usage:
    from dataverifier.log import configure_logging

    configure_logging("info", "text")
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Optional

ROOT_LOGGER = "dataverifier"

_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    """Formats records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def configure_logging(
    level: str = "warning",
    fmt: str = "json",
    stream: Optional[object] = None,
) -> logging.Logger:
    """Attach a single stream handler to the ``dataverifier`` logger.

    Calling it again replaces the previous handler instead of stacking.

    Args:
        level: ``debug``, ``info``, ``warning`` or ``error``.
        fmt: ``json`` or ``text``.
        stream: Defaults to ``sys.stderr``.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_dataverifier_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    if fmt == "json":
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(_TEXT_FORMAT))
    handler._dataverifier_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
