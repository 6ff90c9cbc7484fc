"""Logging configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class LoggingConfig(BaseModel):
    """Configuration for the ``ephemeral_agents`` logger.

    Attributes:
        level: Minimum level emitted.
        structured: Emit JSON lines instead of plain text.
        redact_sensitive: Mask values of key/secret/token-like fields.
    """

    level: LogLevel = Field(
        default="INFO",
        description="Minimum log level",
    )
    structured: bool = Field(
        default=False,
        description="Emit JSON lines instead of plain text",
    )
    redact_sensitive: bool = Field(
        default=True,
        description="Mask values of key/secret/token-like fields",
    )
