"""Tool execution for sub-agent turns."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ephemeral_agents.messages import ToolCallRecord
from ephemeral_agents.subagents.errors import ToolExecutionError, ToolNotFoundError
from ephemeral_agents.tools.base import Tool

logger = logging.getLogger(__name__)


async def invoke_tool(call: ToolCallRecord, tools: Sequence[Tool]) -> str:
    """Look up ``call.name`` among ``tools`` and run it.

    Raises:
        ToolNotFoundError: If the tool is not in the granted set.
        ToolExecutionError: If the tool raises.
    """
    tool = next((t for t in tools if t.name == call.name), None)
    if tool is None:
        raise ToolNotFoundError(call.name, [t.name for t in tools])

    try:
        result = await tool.execute(dict(call.arguments))
    except Exception as exc:
        raise ToolExecutionError(call.name, exc) from exc
    return result if isinstance(result, str) else str(result)


async def execute_tool_call(call: ToolCallRecord, tools: Sequence[Tool]) -> str:
    """Run a tool call and return text for the tool-result message.

    Lookup misses and tool failures come back as ``"Error: ..."`` text so
    the model can see them and carry on. Never raises ``Exception``.
    """
    try:
        return await invoke_tool(call, tools)
    except ToolNotFoundError as exc:
        logger.debug("Sub-agent requested unavailable tool '%s'", call.name)
        return f"Error: {exc.message}"
    except ToolExecutionError as exc:
        logger.debug("Tool '%s' failed: %r", call.name, exc.cause)
        return f"Error: {exc.message}"
