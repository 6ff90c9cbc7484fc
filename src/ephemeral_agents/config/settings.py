"""Root settings for sub-agent delegation."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ephemeral_agents.config.logging_config import LoggingConfig

DEFAULT_SAFE_TOOLS: tuple[str, ...] = (
    "heartware_read",
    "heartware_search",
    "heartware_list",
    "memory_recall",
)


class DelegationSettings(BaseSettings):
    """Settings for the delegation core.

    Values load from constructor arguments, then ``EPHEMERAL_*`` environment
    variables (nested with ``__``), then a ``.env`` file.

    Attributes:
        max_iterations: Turn cap for one sub-agent run.
        timeout_seconds: Default wall-clock deadline for one sub-agent run.
        default_tools: Read-only tools every sub-agent receives.
        delegation_tool_name: Name of the tool that spawns sub-agents.
        logging: Logging configuration.

    Example:
        >>> settings = DelegationSettings(timeout_seconds=30)
        >>> # or: EPHEMERAL_TIMEOUT_SECONDS=30 EPHEMERAL_LOGGING__LEVEL=DEBUG
    """

    model_config = SettingsConfigDict(
        env_prefix="EPHEMERAL_",
        env_nested_delimiter="__",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    max_iterations: int = Field(
        default=10,
        gt=0,
        description="Maximum turns per sub-agent run",
    )
    timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Default deadline per sub-agent run, in seconds",
    )
    default_tools: list[str] = Field(
        default_factory=lambda: list(DEFAULT_SAFE_TOOLS),
        description="Read-only tools granted to every sub-agent",
    )
    delegation_tool_name: str = Field(
        default="delegate_task",
        min_length=1,
        description="Name of the delegation-trigger tool",
    )
    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging configuration",
    )

    @field_validator("default_tools")
    @classmethod
    def _strip_blank_tools(cls, value: list[str]) -> list[str]:
        return [name.strip() for name in value if name and name.strip()]
