"""Turn-by-turn execution loop for one sub-agent."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from ephemeral_agents.backends.base import Backend, TextResponse, ToolCallsResponse
from ephemeral_agents.messages import Message
from ephemeral_agents.subagents.config import DEFAULT_MAX_ITERATIONS, SubagentOutcome
from ephemeral_agents.subagents.executor import execute_tool_call
from ephemeral_agents.subagents.extraction import ExtractionStatus, ToolCallExtractor
from ephemeral_agents.tools.base import Tool

logger = logging.getLogger(__name__)

EXHAUSTED_MESSAGE = "Sub-agent reached maximum iterations without completing the task."
STOPPED_MESSAGE = "Sub-agent stopped before completing the task."


@dataclass
class LoopState:
    """Progress shared between the loop and the guard waiting on it.

    Attributes:
        iterations: Number of the turn currently running (or last run).
        completed: Number of turns fully processed.
        stop: Set by the guard; checked at every turn and tool boundary.
    """

    iterations: int = 0
    completed: int = 0
    stop: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def stop_requested(self) -> bool:
        return self.stop.is_set()

    def request_stop(self) -> None:
        self.stop.set()


async def run_loop(
    history: list[Message],
    backend: Backend,
    tools: Sequence[Tool],
    *,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    state: LoopState | None = None,
    extractor: ToolCallExtractor | None = None,
) -> SubagentOutcome:
    """Drive the backend until it answers in plain text or the cap is hit.

    Each turn submits the whole history plus ``tools``. A text turn holding
    a recoverable tool call, and every native tool-call turn, run their
    calls one at a time, in order, and append an assistant message plus a
    correlated tool-result message per call. A text turn with no
    recoverable call is the final answer.

    Args:
        history: Seed history; appended to in place.
        backend: Backend serving every turn.
        tools: Granted tools, sent to the backend and used for execution.
        max_iterations: Turn cap.
        state: Shared progress and stop signal.
        extractor: Tool-call extractor for text turns.

    Returns:
        Success with the final text, or failure when the cap is exhausted
        or a stop was requested.

    Raises:
        ModelBackendError: Or any other error raised by ``backend.chat``.
    """
    state = state or LoopState()
    extractor = extractor or ToolCallExtractor()

    for turn in range(1, max_iterations + 1):
        if state.stop_requested:
            return _stopped(state, backend)
        state.iterations = turn

        response = await backend.chat(tuple(history), tools)

        if isinstance(response, TextResponse):
            content = response.content or ""
            extraction = extractor.extract(content)
            if not extraction.found:
                if extraction.status is ExtractionStatus.MALFORMED:
                    logger.debug("Treating text as final answer: %s", extraction.reason)
                state.completed = turn
                return SubagentOutcome(
                    success=True,
                    response=content,
                    iterations=turn,
                    backend_id=backend.id,
                )

            if state.stop_requested:
                return _stopped(state, backend)
            call = extraction.call
            result = await execute_tool_call(call, tools)
            history.append(Message.assistant(content))
            history.append(Message.tool_result(call, result))

        elif isinstance(response, ToolCallsResponse):
            for call in response.calls:
                if state.stop_requested:
                    return _stopped(state, backend)
                result = await execute_tool_call(call, tools)
                history.append(Message.assistant(response.content, [call]))
                history.append(Message.tool_result(call, result))

        state.completed = turn

    return SubagentOutcome(
        success=False,
        response=EXHAUSTED_MESSAGE,
        iterations=max_iterations,
        backend_id=backend.id,
    )


def _stopped(state: LoopState, backend: Backend) -> SubagentOutcome:
    return SubagentOutcome(
        success=False,
        response=STOPPED_MESSAGE,
        iterations=state.completed,
        backend_id=backend.id,
    )
