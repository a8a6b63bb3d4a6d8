# Copyright (c)
# SPDX-License-Identifier: MIT
"""JSON log lines for the directory cache.

Every record renders as one JSON object on stderr, so the CLI can keep
stdout for command output. Fields:

    ts, level, logger, message   always present; callers cannot override them
    exc_type, exc_message        when the record carries an exception
    <caller fields>              from ``extra={"extra": {...}}``

Caller fields whose name mentions a password are masked before rendering.

Typical usage:
    configure_root_logging()
    log = get_json_logger(__name__)
    log.info("directory_cache.stored", extra={"extra": {"count": 3}})
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import UTC, datetime
from typing import Any, Final

__all__ = ["configure_root_logging", "get_json_logger"]

_LOG_LEVEL_ENV_KEY: Final[str] = "LOG_LEVEL"
_CORE_KEYS: Final[frozenset[str]] = frozenset({"ts", "level", "logger", "message"})
_MASK: Final[str] = "***"


class _JsonFormatter(logging.Formatter):
    """Render a record as a single compact JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            if exc_type is not None:
                payload["exc_type"] = exc_type.__name__
            if exc_value is not None:
                payload["exc_message"] = str(exc_value)

        fields = getattr(record, "extra", None)
        if isinstance(fields, dict):
            for key, value in fields.items():
                if key in _CORE_KEYS:
                    continue
                payload[key] = _MASK if "password" in str(key).lower() else value

        # default=str covers enums, SecretStr and exceptions passed as fields.
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


def _resolve_level(level: str | int | None) -> str | int:
    if level is not None:
        return level.upper() if isinstance(level, str) else level
    env_level = os.getenv(_LOG_LEVEL_ENV_KEY)
    return env_level.upper() if env_level else "INFO"


def configure_root_logging(level: str | int | None = None) -> None:
    """Attach the JSON stderr handler to the root logger.

    Calling it again only updates the level; the handler is added once.

    Args:
        level: Level or level name. Defaults to ``LOG_LEVEL`` or ``INFO``.
    """
    root = logging.getLogger()
    root.setLevel(_resolve_level(level))

    if any(isinstance(h.formatter, _JsonFormatter) for h in root.handlers):
        return

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_JsonFormatter())
    root.addHandler(handler)


def get_json_logger(name: str) -> logging.Logger:
    """Return the named logger, leaving formatting to the root handler.

    Args:
        name: Usually the caller's ``__name__``.

    Returns:
        logging.Logger: Logger that propagates to root.
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger
