"""Sub-agent request and outcome models."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ephemeral_agents.backends.base import Backend
from ephemeral_agents.tools.base import Tool

DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_MAX_ITERATIONS = 10


class SubagentRequest(BaseModel):
    """Everything one sub-agent run needs. Immutable once constructed.

    Attributes:
        task: What the sub-agent must accomplish.
        role: Role/specialty framing the sub-agent's system prompt.
        backend: Backend serving every turn of the run.
        tools: Tools granted to the sub-agent (its capability set).
        timeout_seconds: Wall-clock deadline for the whole run.
        max_iterations: Turn cap for the execution loop.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    task: str = Field(description="Task for the sub-agent")
    role: str = Field(description="Role used in the system prompt")
    backend: Backend = Field(description="Backend serving the run")
    tools: tuple[Tool, ...] = Field(
        default=(),
        description="Granted tools",
    )
    timeout_seconds: float = Field(
        default=DEFAULT_TIMEOUT_SECONDS,
        gt=0,
        description="Deadline for the run, in seconds",
    )
    max_iterations: int = Field(
        default=DEFAULT_MAX_ITERATIONS,
        gt=0,
        description="Maximum turns",
    )

    @field_validator("task", "role")
    @classmethod
    def _require_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must be a non-empty string")
        return value

    @property
    def capability_names(self) -> frozenset[str]:
        """Names of the granted tools."""
        return frozenset(tool.name for tool in self.tools)


@dataclass(frozen=True)
class SubagentOutcome:
    """Result of one sub-agent run.

    Attributes:
        success: Whether the sub-agent produced a final answer.
        response: Final answer on success, failure detail otherwise.
        iterations: Turns used. Never exceeds the configured cap.
        backend_id: Identifier of the backend that served the run.
        timed_out: Whether the run was cut off by its deadline.
        duration: Wall-clock seconds spent waiting on the run.
    """

    success: bool
    response: str
    iterations: int
    backend_id: str
    timed_out: bool = False
    duration: float = 0.0


@dataclass
class DelegationHandle:
    """Handle for a sub-agent run started in the background.

    Wraps an ``asyncio.Task`` so callers can poll, await or cancel it.

    Attributes:
        role: Role the sub-agent was given.
        task: The task description that was delegated.
    """

    role: str
    task: str
    _task: asyncio.Task[SubagentOutcome] | None = field(default=None, repr=False)

    @property
    def is_complete(self) -> bool:
        """Check if the run has completed without blocking.

        Returns:
            True if the task is done or no task was assigned.
        """
        if self._task is None:
            return True
        return self._task.done()

    async def result(self) -> SubagentOutcome:
        """Await the run's outcome.

        Raises:
            asyncio.CancelledError: If the run was cancelled.
            RuntimeError: If no task is associated with this handle.
        """
        if self._task is None:
            msg = "No task associated with this delegation handle"
            raise RuntimeError(msg)
        return await self._task

    def cancel(self) -> None:
        """Stop waiting on the run. No-op if it already finished."""
        if self._task is not None and not self._task.done():
            self._task.cancel()
