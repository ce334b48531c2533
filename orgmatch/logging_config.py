"""
Logging setup shared by the engine and its scripts.

Every line is rendered as:

    2026-01-06T14:05:52Z [source] LEVEL message

LOG_LEVEL picks the verbosity:
    INFO (default)  directory size, resolution and coverage summaries
    DEBUG           department heads, team leaders, per-method counts
    TRACE           one line per assigned identifier and per resolved identity

Usage:
    from orgmatch.logging_config import configure_logging

    configure_logging(source="coverage")
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime

# Below DEBUG; used via logger.log(TRACE, ...)
TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_LEVELS_BY_NAME = {
    "TRACE": TRACE,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class ISO8601Formatter(logging.Formatter):
    """Formats records as '<UTC timestamp> [source] LEVEL message'."""

    def __init__(self, source: str = "orgmatch"):
        super().__init__()
        self.source = source

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, UTC).strftime("%Y-%m-%dT%H:%M:%SZ")
        text = record.getMessage()
        if record.exc_info:
            text = f"{text}\n{self.formatException(record.exc_info)}"
        return f"{stamp} [{self.source}] {record.levelname} {text}"


def resolve_level(level_name: str | None = None, debug: bool | None = None) -> int:
    """Map a LOG_LEVEL style name to a numeric level.

    Args:
        level_name: Level name; the LOG_LEVEL env var is read when omitted
        debug: Raise INFO to DEBUG (an explicit TRACE is kept)

    Returns:
        Numeric logging level, INFO for unknown names
    """
    name = (level_name if level_name is not None else os.getenv("LOG_LEVEL", "")).upper()
    level = _LEVELS_BY_NAME.get(name, logging.INFO)
    if debug and level > logging.DEBUG:
        return logging.DEBUG
    return level


def configure_logging(
    source: str = "orgmatch",
    level: int | None = None,
    debug: bool | None = None,
) -> logging.Logger:
    """Install a single stdout handler on the root logger.

    Safe to call more than once; earlier handlers are replaced.

    Args:
        source: Tag shown in brackets, e.g. "coverage"
        level: Explicit level; resolved from LOG_LEVEL when omitted
        debug: Force at least DEBUG

    Returns:
        The root logger
    """
    if level is None:
        level = resolve_level(debug=debug)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(ISO8601Formatter(source=source))

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # PocketBase client chatter
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root
