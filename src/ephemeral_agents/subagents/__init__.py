"""Ephemeral sub-agents for one-shot task delegation.

A sub-agent is a short-lived reasoning loop: it gets a role-framed system
prompt, the task, a restricted tool set and a backend, runs until it
answers in plain text (or hits its turn cap or deadline) and is discarded.
It has no memory and cannot delegate further.

Quick Start:
    >>> from ephemeral_agents.subagents import create_delegation_tool
    >>> tool = create_delegation_tool(router, catalog)
    >>> text = tool.execute_sync({"task": "Summarize doc", "role": "Summarizer"})

Classes:
    DelegationTool: The ``delegate_task`` tool exposed to the primary agent.
    SubagentRequest: Everything one sub-agent run needs.
    SubagentOutcome: Result of one sub-agent run.
    DelegationHandle: Handle for a sub-agent started in the background.
    ToolCallExtractor: Recovers tool calls embedded in free text.

Exceptions:
    SubagentError: Base exception for all sub-agent errors.
    SubagentValidationError: Delegation input is invalid.
    ToolNotFoundError: Model asked for a tool it was not granted.
    ToolExecutionError: A granted tool failed while running.
    SubagentTimeoutError: Sub-agent exceeded its deadline.
    SubagentNestingError: Sub-agent was granted the delegation tool.
"""

from __future__ import annotations

from ephemeral_agents.subagents.capabilities import (
    DELEGATION_TOOL_NAME,
    grant_tool_names,
    select_granted_tools,
)
from ephemeral_agents.subagents.config import (
    DelegationHandle,
    SubagentOutcome,
    SubagentRequest,
)
from ephemeral_agents.subagents.delegation import (
    DelegationTool,
    create_delegation_tool,
    format_outcome,
)
from ephemeral_agents.subagents.errors import (
    SubagentError,
    SubagentNestingError,
    SubagentTimeoutError,
    SubagentValidationError,
    ToolExecutionError,
    ToolNotFoundError,
)
from ephemeral_agents.subagents.extraction import (
    ExtractionResult,
    ExtractionStatus,
    ToolCallExtractor,
    extract_tool_call,
)
from ephemeral_agents.subagents.runner import (
    run_subagent,
    run_subagent_async,
    run_subagent_sync,
)

__all__ = [
    "DELEGATION_TOOL_NAME",
    "DelegationHandle",
    "DelegationTool",
    "ExtractionResult",
    "ExtractionStatus",
    "SubagentError",
    "SubagentNestingError",
    "SubagentOutcome",
    "SubagentRequest",
    "SubagentTimeoutError",
    "SubagentValidationError",
    "ToolCallExtractor",
    "ToolExecutionError",
    "ToolNotFoundError",
    "create_delegation_tool",
    "extract_tool_call",
    "format_outcome",
    "grant_tool_names",
    "run_subagent",
    "run_subagent_async",
    "run_subagent_sync",
    "select_granted_tools",
]
