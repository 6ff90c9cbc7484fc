"""Backend capability interface.

A backend wraps one chat-completion service. The delegation core only ever
calls ``chat()``, so anything that implements this protocol can back a
sub-agent: the bundled pydantic-ai adapter, a scripted fake in tests, or a
custom HTTP client.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ephemeral_agents.messages import Message, ToolCallRecord
    from ephemeral_agents.tools.base import Tool


@dataclass(frozen=True)
class TextResponse:
    """A plain text turn.

    Attributes:
        content: The text the model produced.
    """

    content: str = ""
    kind: Literal["text"] = field(default="text", init=False)


@dataclass(frozen=True)
class ToolCallsResponse:
    """A turn carrying native structured tool calls.

    Attributes:
        calls: Tool calls in the order the model emitted them.
        content: Optional text emitted alongside the calls.
    """

    calls: tuple[ToolCallRecord, ...] = ()
    content: str = ""
    kind: Literal["tool_calls"] = field(default="tool_calls", init=False)


BackendResponse = TextResponse | ToolCallsResponse


@runtime_checkable
class Backend(Protocol):
    """Chat backend used by sub-agents.

    Attributes:
        id: Identifier reported in delegation outcomes.
    """

    @property
    def id(self) -> str: ...

    async def chat(
        self,
        history: Sequence[Message],
        tools: Sequence[Tool],
    ) -> BackendResponse:
        """Submit the full history and granted tools, returning one turn.

        Args:
            history: The sub-agent's message history, oldest first.
            tools: Tools the sub-agent may call.

        Returns:
            Either a ``TextResponse`` or a ``ToolCallsResponse``.

        Raises:
            ModelBackendError: On transport or provider failure.
        """
        ...
