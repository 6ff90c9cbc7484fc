"""Backend adapter over pydantic-ai models.

Lets any pydantic-ai ``Model`` (OpenAI, Anthropic, Ollama via the OpenAI
provider, ``FunctionModel`` in tests, ...) serve as a sub-agent backend by
translating between the delegation core's message records and pydantic-ai's
request/response parts.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from pydantic_ai.direct import model_request
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelRequestPart,
    ModelResponse,
    ModelResponsePart,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)
from pydantic_ai.models import ModelRequestParameters
from pydantic_ai.tools import ToolDefinition

from ephemeral_agents.backends.base import BackendResponse, TextResponse, ToolCallsResponse
from ephemeral_agents.errors import ModelBackendError
from ephemeral_agents.messages import Message, MessageRole, ToolCallRecord

if TYPE_CHECKING:
    from pydantic_ai.models import Model
    from pydantic_ai.settings import ModelSettings

    from ephemeral_agents.tools.base import Tool

logger = logging.getLogger(__name__)


def to_model_messages(history: Sequence[Message]) -> list[ModelMessage]:
    """Convert a sub-agent history into pydantic-ai messages.

    Consecutive system/user/tool entries are merged into one
    ``ModelRequest``. Tool results whose call was recovered from plain text
    have no matching ``ToolCallPart``, so they are sent as user prompt parts
    instead of orphaned ``ToolReturnPart``s.
    """
    native_ids = {call.id for message in history for call in message.tool_calls}
    messages: list[ModelMessage] = []
    pending: list[ModelRequestPart] = []

    for message in history:
        if message.role is MessageRole.ASSISTANT:
            if pending:
                messages.append(ModelRequest(parts=pending))
                pending = []
            parts: list[ModelResponsePart] = []
            if message.content:
                parts.append(TextPart(content=message.content))
            for call in message.tool_calls:
                parts.append(
                    ToolCallPart(
                        tool_name=call.name,
                        args=dict(call.arguments),
                        tool_call_id=call.id,
                    )
                )
            messages.append(ModelResponse(parts=parts or [TextPart(content="")]))
        elif message.role is MessageRole.SYSTEM:
            pending.append(SystemPromptPart(content=message.content))
        elif message.role is MessageRole.USER:
            pending.append(UserPromptPart(content=message.content))
        elif message.tool_call_id in native_ids:
            pending.append(
                ToolReturnPart(
                    tool_name=message.name or "",
                    content=message.content,
                    tool_call_id=message.tool_call_id,
                )
            )
        else:
            label = message.name or "unknown"
            pending.append(UserPromptPart(content=f"Tool result ({label}):\n{message.content}"))

    if pending:
        messages.append(ModelRequest(parts=pending))
    return messages


def to_tool_definitions(tools: Sequence[Tool]) -> list[ToolDefinition]:
    return [
        ToolDefinition(
            name=tool.name,
            description=tool.description,
            parameters_json_schema=tool.parameters,
        )
        for tool in tools
    ]


def _call_arguments(part: ToolCallPart) -> dict[str, Any]:
    try:
        return part.args_as_dict()
    except ValueError:
        logger.debug("Unparseable arguments for tool call '%s'", part.tool_name)
        return {}


def from_model_response(response: ModelResponse) -> BackendResponse:
    """Map a pydantic-ai response onto the text / tool-calls variant."""
    text = "".join(part.content for part in response.parts if isinstance(part, TextPart))
    calls = tuple(
        ToolCallRecord(
            id=part.tool_call_id,
            name=part.tool_name,
            arguments=_call_arguments(part),
        )
        for part in response.parts
        if isinstance(part, ToolCallPart)
    )
    if calls:
        return ToolCallsResponse(calls=calls, content=text)
    return TextResponse(content=text)


class PydanticAIBackend:
    """Backend that sends each turn through a pydantic-ai model.

    Example::

        from pydantic_ai.models.openai import OpenAIChatModel

        backend = PydanticAIBackend(OpenAIChatModel("gpt-4o-mini"), backend_id="openai-mini")
        registry.register("simple", backend)

    Args:
        model: Any pydantic-ai ``Model`` instance.
        backend_id: Identifier reported in outcomes. Defaults to
            ``"<system>:<model_name>"``.
        model_settings: Optional per-request settings (temperature, ...).
    """

    def __init__(
        self,
        model: Model,
        backend_id: str | None = None,
        model_settings: ModelSettings | None = None,
    ) -> None:
        self._model = model
        self._id = backend_id or f"{model.system}:{model.model_name}"
        self._model_settings = model_settings

    @property
    def id(self) -> str:
        return self._id

    @property
    def model(self) -> Model:
        return self._model

    async def chat(
        self,
        history: Sequence[Message],
        tools: Sequence[Tool],
    ) -> BackendResponse:
        """Run one model request for the given history and tools.

        Raises:
            ModelBackendError: If the model request fails for any reason.
        """
        parameters = ModelRequestParameters(function_tools=to_tool_definitions(tools))
        try:
            response = await model_request(
                self._model,
                to_model_messages(history),
                model_settings=self._model_settings,
                model_request_parameters=parameters,
            )
        except Exception as exc:
            raise ModelBackendError(
                f"Backend '{self._id}' request failed",
                cause=exc,
                backend_id=self._id,
            ) from exc
        return from_model_response(response)
