"""Framework error types."""

from ephemeral_agents.errors.exceptions import (
    AgentError,
    ConfigurationError,
    ModelBackendError,
)

__all__ = [
    "AgentError",
    "ConfigurationError",
    "ModelBackendError",
]
