"""Process-wide logging configuration.

One stream handler on the root logger, stdout unless told otherwise, with
either a plain text format or single-line JSON records for log aggregators.
"""

from __future__ import annotations

import json
import logging
import sys
from typing import TextIO

_CONFIG_LOG_TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class JsonLogFormatter(logging.Formatter):
    """Format log records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, object] = {
            "ts": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[0]:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def config_configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Configure the root logger with one stream handler.

    Args:
        level: Log level name.
        json_output: Emit JSON records instead of plain text.
        stream: Target stream, stdout when omitted.

    Returns:
        None: Configures logging as a side effect.
    """

    resolved_level = logging.getLevelName(level.strip().upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    # Reconfiguration replaces handlers instead of stacking them.
    for existing_handler in root_logger.handlers[:]:
        root_logger.removeHandler(existing_handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setLevel(resolved_level)
    handler.setFormatter(JsonLogFormatter() if json_output else logging.Formatter(_CONFIG_LOG_TEXT_FORMAT))
    root_logger.addHandler(handler)

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
