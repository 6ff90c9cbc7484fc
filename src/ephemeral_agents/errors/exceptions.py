"""Framework-level exception hierarchy."""

from __future__ import annotations

from typing import Any, ClassVar


class AgentError(Exception):
    """Base exception for all framework errors.

    Attributes:
        message: Human-readable error message.
        cause: Original exception that caused this error.
        details: Additional error context as key-value pairs.

    Details can be accessed as attributes (e.g., error.backend_id).
    """

    # Map attribute names to default values when not in details
    _defaults: ClassVar[dict[str, Any]] = {}

    def __init__(
        self,
        message: str,
        *,
        cause: Exception | None = None,
        **details: Any,
    ) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
            cause: Original exception that caused this error.
            **details: Additional error context.
        """
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details

    def __getattr__(self, name: str) -> Any:
        """Access details as attributes."""
        # Guard against recursion before __init__ has populated details
        if name in ("details", "message", "cause"):
            raise AttributeError(name)
        if name in self.details:
            return self.details[name]
        if name in self._defaults:
            return self._defaults[name]
        raise AttributeError(f"'{type(self).__name__}' has no attribute '{name}'")

    def __str__(self) -> str:
        """Return string representation."""
        if self.cause:
            return f"{self.message} (caused by: {self.cause})"
        return self.message


class ConfigurationError(AgentError):
    """Error in framework configuration.

    Raised when a registry or catalog is wired up inconsistently, for
    example registering a backend under a tier token that does not exist.

    Attributes from details: config_key, expected, actual.
    """


class ModelBackendError(AgentError):
    """Error from a chat backend.

    Raised by backend adapters when the underlying model API fails,
    is unreachable, or returns something that cannot be interpreted.

    Attributes from details: backend_id, retryable (default: False).
    """

    _defaults: ClassVar[dict[str, Any]] = {"retryable": False}
