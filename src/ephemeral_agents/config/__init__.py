"""Configuration system for ephemeral-agents.

Main exports:
- DelegationSettings: Root configuration class
- LoggingConfig: Logging configuration
"""

from ephemeral_agents.config.logging_config import LoggingConfig
from ephemeral_agents.config.settings import DEFAULT_SAFE_TOOLS, DelegationSettings

__all__ = [
    "DEFAULT_SAFE_TOOLS",
    "DelegationSettings",
    "LoggingConfig",
]
