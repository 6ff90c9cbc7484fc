"""Deadline enforcement around the execution loop.

The loop runs as its own task. If the deadline passes first, the guard sets
the loop's stop signal and returns a timeout outcome immediately. The loop
task is not cancelled: a backend or tool call already in flight runs to
completion, its result is ignored, and the loop exits at its next turn or
tool boundary.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from ephemeral_agents.subagents.config import SubagentOutcome
from ephemeral_agents.subagents.errors import SubagentTimeoutError
from ephemeral_agents.subagents.loop import LoopState

logger = logging.getLogger(__name__)

# Abandoned loop tasks, held until they reach a stop checkpoint.
# Strong references only; no invocation reads or shares state through it.
_abandoned: set[asyncio.Task[SubagentOutcome]] = set()


def _reap(task: asyncio.Task[SubagentOutcome]) -> None:
    _abandoned.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.debug("Abandoned sub-agent loop ended with %r", exc)


def _abandon(task: asyncio.Task[SubagentOutcome]) -> None:
    _abandoned.add(task)
    task.add_done_callback(_reap)


def failure_outcome(
    message: str,
    iterations: int,
    backend_id: str,
    *,
    timed_out: bool = False,
) -> SubagentOutcome:
    return SubagentOutcome(
        success=False,
        response=f"Sub-agent error: {message}",
        iterations=iterations,
        backend_id=backend_id,
        timed_out=timed_out,
    )


async def run_guarded(
    run: Callable[[LoopState], Awaitable[SubagentOutcome]],
    *,
    timeout_seconds: float,
    backend_id: str,
) -> SubagentOutcome:
    """Race ``run`` against a deadline. Never raises ``Exception``.

    Args:
        run: Starts the loop given its shared state.
        timeout_seconds: Deadline in seconds.
        backend_id: Reported in outcomes produced by the guard itself.

    Returns:
        The loop's outcome if it settles in time, otherwise a failed outcome
        describing the timeout or the loop's exception.
    """
    state = LoopState()
    task: asyncio.Task[SubagentOutcome] = asyncio.ensure_future(run(state))

    try:
        done, _ = await asyncio.wait({task}, timeout=timeout_seconds)
    except asyncio.CancelledError:
        state.request_stop()
        task.cancel()
        raise

    if task in done:
        try:
            return task.result()
        except Exception as exc:
            logger.error(
                "Sub-agent loop failed",
                exc_info=exc,
                extra={"backend": backend_id, "iterations": state.iterations},
            )
            return failure_outcome(str(exc) or type(exc).__name__, state.iterations, backend_id)

    state.request_stop()
    _abandon(task)
    timeout = SubagentTimeoutError(timeout_seconds, state.completed)
    logger.warning(
        "Sub-agent timed out",
        extra={
            "backend": backend_id,
            "timeout_seconds": timeout_seconds,
            "iterations": state.completed,
        },
    )
    return failure_outcome(timeout.message, state.completed, backend_id, timed_out=True)
