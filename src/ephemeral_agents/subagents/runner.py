"""Run one ephemeral sub-agent to completion.

A run keeps everything in memory: the seed history, the granted tools and
the timer all belong to the invocation and are dropped when it returns.
Nothing is persisted and nothing is learned from the run.
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import time

from ephemeral_agents.subagents.capabilities import DELEGATION_TOOL_NAME, ensure_no_delegation
from ephemeral_agents.subagents.config import DelegationHandle, SubagentOutcome, SubagentRequest
from ephemeral_agents.subagents.guard import run_guarded
from ephemeral_agents.subagents.loop import LoopState, run_loop
from ephemeral_agents.subagents.prompts import build_seed_history

logger = logging.getLogger(__name__)


async def run_subagent(
    request: SubagentRequest,
    *,
    delegation_tool_name: str = DELEGATION_TOOL_NAME,
) -> SubagentOutcome:
    """Run a sub-agent and return its outcome.

    Backend failures, tool failures, timeouts and iteration exhaustion all
    come back as an outcome; this coroutine does not raise for them.

    Args:
        request: The run's task, role, backend, tools and limits.
        delegation_tool_name: Name that must not appear among the tools.

    Returns:
        The sub-agent outcome.

    Raises:
        SubagentNestingError: If the request grants the delegation tool.
    """
    ensure_no_delegation(request.tools, delegation_tool_name)

    history = build_seed_history(request.role, request.task)
    tools = list(request.tools)

    async def run(state: LoopState) -> SubagentOutcome:
        return await run_loop(
            history,
            request.backend,
            tools,
            max_iterations=request.max_iterations,
            state=state,
        )

    start = time.monotonic()
    outcome = await run_guarded(
        run,
        timeout_seconds=request.timeout_seconds,
        backend_id=request.backend.id,
    )
    return dataclasses.replace(outcome, duration=time.monotonic() - start)


def run_subagent_sync(
    request: SubagentRequest,
    *,
    delegation_tool_name: str = DELEGATION_TOOL_NAME,
) -> SubagentOutcome:
    """Synchronous wrapper around ``run_subagent``.

    Must not be called from inside a running event loop.
    """
    return asyncio.run(run_subagent(request, delegation_tool_name=delegation_tool_name))


async def run_subagent_async(
    request: SubagentRequest,
    *,
    delegation_tool_name: str = DELEGATION_TOOL_NAME,
) -> DelegationHandle:
    """Start a sub-agent in the background and return a handle to it.

    Raises:
        SubagentNestingError: If the request grants the delegation tool.
    """
    ensure_no_delegation(request.tools, delegation_tool_name)
    task = asyncio.create_task(run_subagent(request, delegation_tool_name=delegation_tool_name))
    logger.debug("Started background sub-agent", extra={"role": request.role})
    return DelegationHandle(role=request.role, task=request.task, _task=task)
