"""Message and tool-call records exchanged with chat backends.

Models:
    MessageRole: The four roles a history entry can carry.
    ToolCallRecord: One tool invocation requested by a backend.
    Message: One immutable entry in a sub-agent's private history.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class MessageRole(str, Enum):
    """Role of a history entry."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


def new_call_id() -> str:
    """Generate a unique tool-call identifier."""
    return f"call_{uuid.uuid4().hex}"


@dataclass(frozen=True)
class ToolCallRecord:
    """A single tool invocation.

    Attributes:
        id: Identifier unique per call, used to correlate the tool result.
        name: Name of the tool to invoke.
        arguments: Mapping of argument name to value.
    """

    id: str
    name: str
    arguments: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def create(cls, name: str, arguments: dict[str, Any] | None = None) -> ToolCallRecord:
        """Build a record with a freshly generated id."""
        return cls(id=new_call_id(), name=name, arguments=dict(arguments or {}))


@dataclass(frozen=True)
class Message:
    """One entry in a message history.

    Attributes:
        role: Who produced the message.
        content: Text content, possibly empty for pure tool-call turns.
        tool_calls: Tool calls emitted by an assistant message.
        tool_call_id: For tool messages, the id of the originating call.
        name: For tool messages, the name of the tool that produced the result.
    """

    role: MessageRole
    content: str = ""
    tool_calls: tuple[ToolCallRecord, ...] = ()
    tool_call_id: str | None = None
    name: str | None = None

    @classmethod
    def system(cls, content: str) -> Message:
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def user(cls, content: str) -> Message:
        return cls(role=MessageRole.USER, content=content)

    @classmethod
    def assistant(
        cls,
        content: str,
        tool_calls: list[ToolCallRecord] | tuple[ToolCallRecord, ...] = (),
    ) -> Message:
        return cls(role=MessageRole.ASSISTANT, content=content, tool_calls=tuple(tool_calls))

    @classmethod
    def tool_result(cls, call: ToolCallRecord, content: str) -> Message:
        return cls(
            role=MessageRole.TOOL,
            content=content,
            tool_call_id=call.id,
            name=call.name,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to an OpenAI-style message dict.

        Returns:
            Dict with ``role`` and ``content``, plus ``tool_calls`` or
            ``tool_call_id`` when present.
        """
        data: dict[str, Any] = {"role": self.role.value, "content": self.content}
        if self.tool_calls:
            data["tool_calls"] = [
                {"id": call.id, "name": call.name, "arguments": dict(call.arguments)}
                for call in self.tool_calls
            ]
        if self.tool_call_id is not None:
            data["tool_call_id"] = self.tool_call_id
        return data
