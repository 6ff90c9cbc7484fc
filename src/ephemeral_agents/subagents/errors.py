"""Subagent delegation exceptions.

These are raised inside the delegation core and converted to text or to a
failed ``SubagentOutcome`` at the boundary that owns each category, so none
of them ever reaches the caller of the delegation tool.
"""

from __future__ import annotations


class SubagentError(Exception):
    """Base exception for all subagent-related errors.

    Attributes:
        message: Human-readable error message.
    """

    def __init__(self, message: str) -> None:
        """Initialize the error.

        Args:
            message: Human-readable error message.
        """
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}({self.message!r})"


class SubagentValidationError(SubagentError):
    """Raised when a delegation request fails input validation.

    Attributes:
        field: Name of the offending input field.
        detail: Description of the problem.
    """

    def __init__(self, field: str, detail: str) -> None:
        """Initialize the error.

        Args:
            field: Name of the offending input field.
            detail: Description of the problem.
        """
        self.field = field
        self.detail = detail
        super().__init__(f"{field} {detail}")

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(field={self.field!r}, detail={self.detail!r})"

    def __reduce__(self) -> tuple:
        """Support pickling with custom constructor arguments."""
        return (type(self), (self.field, self.detail))


class ToolNotFoundError(SubagentError):
    """Raised when a sub-agent calls a tool outside its capability set.

    Attributes:
        tool_name: Name of the tool that was requested.
        available: Names of the tools that were granted.
    """

    def __init__(self, tool_name: str, available: list[str] | None = None) -> None:
        """Initialize the error.

        Args:
            tool_name: Name of the tool that was requested.
            available: Names of the tools that were granted.
        """
        self.tool_name = tool_name
        self.available = list(available) if available is not None else None
        super().__init__(f'Tool "{tool_name}" not found')

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(tool_name={self.tool_name!r}, available={self.available!r})"
        )

    def __reduce__(self) -> tuple:
        """Support pickling with custom constructor arguments."""
        return (type(self), (self.tool_name, self.available))


class ToolExecutionError(SubagentError):
    """Raised when a granted tool fails while executing.

    Attributes:
        tool_name: Name of the tool that failed.
        cause: The underlying exception.
    """

    def __init__(self, tool_name: str, cause: Exception | None = None) -> None:
        """Initialize the error.

        Args:
            tool_name: Name of the tool that failed.
            cause: The underlying exception.
        """
        self.tool_name = tool_name
        self.cause = cause
        detail = str(cause) if cause is not None else "unknown failure"
        super().__init__(detail or type(cause).__name__)

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(tool_name={self.tool_name!r}, cause={self.cause!r})"

    def __reduce__(self) -> tuple:
        """Support pickling with custom constructor arguments."""
        return (type(self), (self.tool_name, self.cause))


class SubagentTimeoutError(SubagentError):
    """Raised when a sub-agent does not finish before its deadline.

    Attributes:
        timeout_seconds: The deadline that was exceeded.
        iterations: Turns completed before the deadline fired.
    """

    def __init__(self, timeout_seconds: float, iterations: int = 0) -> None:
        """Initialize the error.

        Args:
            timeout_seconds: The deadline that was exceeded.
            iterations: Turns completed before the deadline fired.
        """
        self.timeout_seconds = timeout_seconds
        self.iterations = iterations
        super().__init__(f"Sub-agent timed out after {timeout_seconds:g}s")

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{type(self).__name__}(timeout_seconds={self.timeout_seconds!r}, "
            f"iterations={self.iterations!r})"
        )

    def __reduce__(self) -> tuple:
        """Support pickling with custom constructor arguments."""
        return (type(self), (self.timeout_seconds, self.iterations))


class SubagentNestingError(SubagentError):
    """Raised when a capability set would let a sub-agent delegate again.

    Attributes:
        tool_name: The delegation-trigger tool name that leaked in.
    """

    def __init__(self, tool_name: str) -> None:
        """Initialize the error.

        Args:
            tool_name: The delegation-trigger tool name that leaked in.
        """
        self.tool_name = tool_name
        super().__init__(
            f"Sub-agent capability set contains '{tool_name}'. Nesting is not allowed."
        )

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return f"{type(self).__name__}(tool_name={self.tool_name!r})"

    def __reduce__(self) -> tuple:
        """Support pickling with custom constructor arguments."""
        return (type(self), (self.tool_name,))
