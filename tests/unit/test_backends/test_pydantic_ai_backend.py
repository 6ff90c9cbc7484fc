"""Tests for the pydantic-ai backend adapter."""

from __future__ import annotations

import pytest
from pydantic_ai.messages import (
    ModelMessage,
    ModelRequest,
    ModelResponse,
    SystemPromptPart,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
    UserPromptPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel
from pydantic_ai.models.test import TestModel

from ephemeral_agents.backends import PydanticAIBackend, TextResponse, ToolCallsResponse
from ephemeral_agents.backends.pydantic_ai import (
    from_model_response,
    to_model_messages,
    to_tool_definitions,
)
from ephemeral_agents.errors import ModelBackendError
from ephemeral_agents.messages import Message, ToolCallRecord
from ephemeral_agents.subagents.config import SubagentRequest
from ephemeral_agents.subagents.prompts import build_seed_history
from ephemeral_agents.subagents.runner import run_subagent
from ephemeral_agents.tools import ToolCatalog


class TestToModelMessages:
    """Tests for history conversion."""

    def test_seed_history_single_request(self) -> None:
        """Test system and user messages merge into one request."""
        messages = to_model_messages(build_seed_history("Summarizer", "Summarize doc"))

        assert len(messages) == 1
        request = messages[0]
        assert isinstance(request, ModelRequest)
        assert isinstance(request.parts[0], SystemPromptPart)
        assert isinstance(request.parts[1], UserPromptPart)
        assert request.parts[1].content == "Summarize doc"

    def test_native_call_round_trip(self) -> None:
        """Test native calls map to ToolCallPart and ToolReturnPart."""
        call = ToolCallRecord(id="c1", name="heartware_read", arguments={"filename": "a.md"})
        history = [
            *build_seed_history("r", "t"),
            Message.assistant("Checking.", [call]),
            Message.tool_result(call, "contents"),
        ]

        messages = to_model_messages(history)

        assert len(messages) == 3
        response = messages[1]
        assert isinstance(response, ModelResponse)
        assert isinstance(response.parts[0], TextPart)
        tool_call = response.parts[1]
        assert isinstance(tool_call, ToolCallPart)
        assert tool_call.tool_name == "heartware_read"
        assert tool_call.tool_call_id == "c1"
        assert tool_call.args == {"filename": "a.md"}
        tool_return = messages[2].parts[0]
        assert isinstance(tool_return, ToolReturnPart)
        assert tool_return.tool_call_id == "c1"
        assert tool_return.content == "contents"

    def test_text_recovered_result_sent_as_user_prompt(self) -> None:
        """Test a result for a text-embedded call is sent as user text."""
        call = ToolCallRecord.create("heartware_list", {})
        history = [
            *build_seed_history("r", "t"),
            Message.assistant('{"action": "heartware_list"}'),
            Message.tool_result(call, "notes.md"),
        ]

        messages = to_model_messages(history)

        part = messages[2].parts[0]
        assert isinstance(part, UserPromptPart)
        assert part.content == "Tool result (heartware_list):\nnotes.md"

    def test_empty_assistant_message(self) -> None:
        """Test an empty assistant turn still produces a response."""
        messages = to_model_messages([Message.user("t"), Message.assistant("")])

        assert isinstance(messages[1], ModelResponse)
        assert messages[1].parts[0].content == ""


class TestToToolDefinitions:
    """Tests for tool definition conversion."""

    def test_definitions(self, catalog: ToolCatalog) -> None:
        """Test name, description and schema are carried over."""
        definitions = to_tool_definitions(catalog.select(["heartware_read"]))

        assert len(definitions) == 1
        assert definitions[0].name == "heartware_read"
        assert definitions[0].description.startswith("Read a heartware file.")
        assert "filename" in definitions[0].parameters_json_schema["properties"]


class TestFromModelResponse:
    """Tests for response conversion."""

    def test_text(self) -> None:
        """Test text-only responses become TextResponse."""
        result = from_model_response(ModelResponse(parts=[TextPart("Done.")]))

        assert result == TextResponse("Done.")
        assert result.kind == "text"

    def test_multiple_text_parts_joined(self) -> None:
        """Test text parts are concatenated."""
        result = from_model_response(ModelResponse(parts=[TextPart("a"), TextPart("b")]))

        assert result.content == "ab"

    def test_tool_calls(self) -> None:
        """Test tool-call parts become an ordered ToolCallsResponse."""
        response = ModelResponse(
            parts=[
                TextPart("Looking."),
                ToolCallPart("heartware_list", {}, tool_call_id="c1"),
                ToolCallPart("heartware_read", '{"filename": "a.md"}', tool_call_id="c2"),
            ]
        )

        result = from_model_response(response)

        assert isinstance(result, ToolCallsResponse)
        assert result.kind == "tool_calls"
        assert result.content == "Looking."
        assert [c.id for c in result.calls] == ["c1", "c2"]
        assert result.calls[1].arguments == {"filename": "a.md"}


class TestPydanticAIBackend:
    """Tests for PydanticAIBackend."""

    @pytest.mark.asyncio
    async def test_text_response(self) -> None:
        """Test a text reply is returned as TextResponse."""
        backend = PydanticAIBackend(TestModel(custom_output_text="Done."), backend_id="test")

        result = await backend.chat(build_seed_history("r", "t"), [])

        assert result == TextResponse("Done.")
        assert backend.id == "test"

    def test_default_id(self) -> None:
        """Test the id defaults to system and model name."""
        backend = PydanticAIBackend(TestModel())

        assert backend.id == "test:test"

    @pytest.mark.asyncio
    async def test_tools_offered(self, catalog: ToolCatalog) -> None:
        """Test granted tools are sent as function tools."""
        seen: list[str] = []

        def reply(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            seen.extend(t.name for t in info.function_tools)
            return ModelResponse(parts=[TextPart("ok")])

        backend = PydanticAIBackend(FunctionModel(reply), backend_id="fn")

        await backend.chat(
            build_seed_history("r", "t"), catalog.select(["heartware_read", "memory_recall"])
        )

        assert seen == ["heartware_read", "memory_recall"]

    @pytest.mark.asyncio
    async def test_request_failure_wrapped(self) -> None:
        """Test model failures are wrapped in ModelBackendError."""

        def reply(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            raise ConnectionError("provider unreachable")

        backend = PydanticAIBackend(FunctionModel(reply), backend_id="fn")

        with pytest.raises(ModelBackendError) as exc_info:
            await backend.chat(build_seed_history("r", "t"), [])

        assert exc_info.value.backend_id == "fn"
        assert exc_info.value.message == "Backend 'fn' request failed"
        assert isinstance(exc_info.value.cause, ConnectionError)

    @pytest.mark.asyncio
    async def test_subagent_with_native_tools(self, catalog: ToolCatalog) -> None:
        """Test a full sub-agent run through the adapter with a native call."""

        def reply(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
            last = messages[-1]
            returns = [p for p in last.parts if isinstance(p, ToolReturnPart)]
            if returns:
                return ModelResponse(parts=[TextPart(f"Summary of: {returns[0].content}")])
            return ModelResponse(
                parts=[ToolCallPart("heartware_read", {"filename": "notes.md"}, tool_call_id="c1")]
            )

        backend = PydanticAIBackend(FunctionModel(reply), backend_id="fn")
        request = SubagentRequest(
            task="Summarize notes.md",
            role="Summarizer",
            backend=backend,
            tools=catalog.select(["heartware_read"]),
        )

        outcome = await run_subagent(request)

        assert outcome.success is True
        assert outcome.response == "Summary of: contents of notes.md"
        assert outcome.iterations == 2
        assert outcome.backend_id == "fn"
