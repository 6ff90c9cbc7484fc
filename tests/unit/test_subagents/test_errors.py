"""Tests for sub-agent error classes."""

import pickle

import pytest

from ephemeral_agents.subagents.errors import (
    SubagentError,
    SubagentNestingError,
    SubagentTimeoutError,
    SubagentValidationError,
    ToolExecutionError,
    ToolNotFoundError,
)


class TestSubagentError:
    """Tests for base SubagentError."""

    def test_is_exception(self) -> None:
        """Test SubagentError is an Exception."""
        assert isinstance(SubagentError("Test error"), Exception)

    def test_message_attribute(self) -> None:
        """Test error stores message attribute."""
        assert SubagentError("Custom message").message == "Custom message"

    def test_repr(self) -> None:
        """Test repr() produces useful debugging info."""
        assert repr(SubagentError("Something went wrong")) == (
            "SubagentError('Something went wrong')"
        )

    def test_catches_all_subagent_errors(self) -> None:
        """Test base class catches all subagent-related errors."""
        errors = [
            SubagentValidationError("task", "must be a non-empty string"),
            ToolNotFoundError("missing"),
            ToolExecutionError("broken", RuntimeError("x")),
            SubagentTimeoutError(60),
            SubagentNestingError("delegate_task"),
        ]
        for error in errors:
            assert isinstance(error, SubagentError)


class TestSubagentValidationError:
    """Tests for SubagentValidationError."""

    def test_message(self) -> None:
        """Test the message joins field and detail."""
        error = SubagentValidationError("role", "must be a non-empty string")

        assert error.message == "role must be a non-empty string"
        assert error.field == "role"
        assert error.detail == "must be a non-empty string"


class TestToolNotFoundError:
    """Tests for ToolNotFoundError."""

    def test_message_quotes_name(self) -> None:
        """Test the message names the missing tool in quotes."""
        assert str(ToolNotFoundError("heartware_write")) == 'Tool "heartware_write" not found'

    def test_available_copied(self) -> None:
        """Test the available names are stored as a new list."""
        available = ["heartware_read"]
        error = ToolNotFoundError("x", available)

        available.append("other")

        assert error.available == ["heartware_read"]


class TestToolExecutionError:
    """Tests for ToolExecutionError."""

    def test_message_from_cause(self) -> None:
        """Test the message is the cause's message."""
        error = ToolExecutionError("heartware_read", FileNotFoundError("no such file"))

        assert error.message == "no such file"
        assert isinstance(error.cause, FileNotFoundError)

    def test_message_from_cause_type(self) -> None:
        """Test an empty cause message falls back to its type name."""
        assert ToolExecutionError("t", KeyError()).message == "KeyError"

    def test_message_without_cause(self) -> None:
        """Test a missing cause yields a generic message."""
        assert ToolExecutionError("t").message == "unknown failure"


class TestSubagentTimeoutError:
    """Tests for SubagentTimeoutError."""

    @pytest.mark.parametrize(
        ("seconds", "expected"),
        [(60, "60s"), (60.0, "60s"), (0.5, "0.5s"), (1.25, "1.25s")],
    )
    def test_message_formats_seconds(self, seconds: float, expected: str) -> None:
        """Test the deadline is formatted compactly."""
        assert SubagentTimeoutError(seconds).message == f"Sub-agent timed out after {expected}"

    def test_iterations(self) -> None:
        """Test completed iterations are recorded."""
        assert SubagentTimeoutError(60, iterations=4).iterations == 4


class TestSubagentNestingError:
    """Tests for SubagentNestingError."""

    def test_message(self) -> None:
        """Test the message names the leaked tool."""
        error = SubagentNestingError("delegate_task")

        assert "delegate_task" in str(error)
        assert "Nesting is not allowed" in str(error)


class TestPickling:
    """Tests for pickling every error type."""

    @pytest.mark.parametrize(
        "error",
        [
            SubagentError("base"),
            SubagentValidationError("task", "must be a non-empty string"),
            ToolNotFoundError("x", ["a", "b"]),
            ToolExecutionError("t", ValueError("bad")),
            SubagentTimeoutError(1.5, iterations=2),
            SubagentNestingError("delegate_task"),
        ],
    )
    def test_round_trip(self, error: SubagentError) -> None:
        """Test error can be pickled and unpickled with its message."""
        restored = pickle.loads(pickle.dumps(error))

        assert type(restored) is type(error)
        assert restored.message == error.message
        assert repr(restored) == repr(error)
