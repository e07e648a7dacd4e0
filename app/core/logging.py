"""
Logging setup for the cipher service.

Console output goes through :class:`rich.logging.RichHandler`; with
``json_logs`` enabled every record is written as a single JSON line instead,
which suits log collectors better than coloured text.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER = "app"


class _JSONFormatter(logging.Formatter):
    """Emit each log record as a single-line JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1] is not None:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


def configure_logging(level: str = "INFO", json_logs: bool = False) -> logging.Logger:
    """
    Attach a single handler to the application logger.

    Safe to call more than once: existing handlers are replaced.

    Args:
        level: Minimum severity name (DEBUG, INFO, ...)
        json_logs: Emit JSON lines instead of Rich console output

    Returns:
        The configured application logger
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False
    logger.handlers.clear()

    handler: logging.Handler
    if json_logs:
        handler = logging.StreamHandler()
        handler.setFormatter(_JSONFormatter())
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
            markup=False,
        )

    logger.addHandler(handler)
    return logger
