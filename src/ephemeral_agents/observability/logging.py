"""Logging setup for the delegation core.

Modules log through ``logging.getLogger(__name__)`` and attach structured
fields with ``extra={...}``. Nothing here is required for correct delegation:
without ``setup_logging`` records simply propagate to the root logger.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

from ephemeral_agents.config.logging_config import LoggingConfig

LOGGER_NAME = "ephemeral_agents"

# Attributes present on every LogRecord; anything else came in via ``extra``
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime"}

_SENSITIVE_MARKERS = ("api_key", "apikey", "secret", "token", "password", "authorization")

REDACTED = "[REDACTED]"


def _is_sensitive(key: str) -> bool:
    lowered = key.lower()
    return any(marker in lowered for marker in _SENSITIVE_MARKERS)


def _extra_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


class SensitiveDataFilter(logging.Filter):
    """Mask structured fields whose names look like credentials."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in _extra_fields(record).items():
            if _is_sensitive(key):
                setattr(record, key, REDACTED)
            elif isinstance(value, dict):
                setattr(record, key, self._redact_mapping(value))
        return True

    def _redact_mapping(self, value: dict[str, Any]) -> dict[str, Any]:
        redacted: dict[str, Any] = {}
        for key, item in value.items():
            if _is_sensitive(str(key)):
                redacted[key] = REDACTED
            elif isinstance(item, dict):
                redacted[key] = self._redact_mapping(item)
            else:
                redacted[key] = item
        return redacted


class StructuredFormatter(logging.Formatter):
    """Render records as single-line JSON objects.

    Output keys: ``timestamp``, ``level``, ``logger``, ``message``, every
    ``extra`` field, and ``exception`` when ``exc_info`` is set.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(_extra_fields(record))
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


def setup_logging(
    config: LoggingConfig | None = None,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure the package logger.

    Installs exactly one handler on the ``ephemeral_agents`` logger; calling
    again replaces it rather than stacking a second one.

    Args:
        config: Logging configuration. Defaults to ``LoggingConfig()``.
        stream: Output stream. Defaults to stderr.

    Returns:
        The configured package logger.
    """
    config = config or LoggingConfig()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(config.level)

    for handler in list(logger.handlers):
        if getattr(handler, "_ephemeral_agents", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler._ephemeral_agents = True  # type: ignore[attr-defined]
    if config.structured:
        handler.setFormatter(StructuredFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    if config.redact_sensitive:
        handler.addFilter(SensitiveDataFilter())

    logger.addHandler(handler)
    logger.propagate = False
    return logger
