"""The ``delegate_task`` tool exposed to the primary agent.

The primary agent calls this tool with a task and a role; it resolves a
backend, grants a filtered tool set, runs an ephemeral sub-agent and returns
a formatted text block. Every failure path ends in returned text; the tool
never raises.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from typing import Any

from ephemeral_agents.backends.base import Backend
from ephemeral_agents.backends.errors import BackendResolutionError
from ephemeral_agents.backends.registry import Tier
from ephemeral_agents.backends.router import BackendRouter
from ephemeral_agents.config.settings import DelegationSettings
from ephemeral_agents.subagents.capabilities import select_granted_tools
from ephemeral_agents.subagents.config import SubagentOutcome, SubagentRequest
from ephemeral_agents.subagents.errors import SubagentValidationError
from ephemeral_agents.subagents.runner import run_subagent
from ephemeral_agents.tools.base import Tool
from ephemeral_agents.tools.catalog import ToolCatalog

logger = logging.getLogger(__name__)

TIER_TOKENS: tuple[str, ...] = tuple(tier.value for tier in Tier)


def format_outcome(role: str, outcome: SubagentOutcome) -> str:
    """Render an outcome as the text block returned to the primary agent."""
    if outcome.success:
        header = (
            f"[Sub-agent ({role}) completed in {outcome.iterations} iteration(s) "
            f"via {outcome.backend_id}]"
        )
        return f"{header}\n\n{outcome.response}"
    header = (
        f"[Sub-agent ({role}) failed after {outcome.iterations} iteration(s) "
        f"via {outcome.backend_id}]"
    )
    return f"{header}\n\nError: {outcome.response}"


def _require_text(arguments: Mapping[str, Any], field: str) -> str:
    value = arguments.get(field)
    if not isinstance(value, str) or not value.strip():
        raise SubagentValidationError(field, "must be a non-empty string")
    return value


def _optional_tier(arguments: Mapping[str, Any]) -> str | None:
    tier = arguments.get("tier")
    if tier is None or tier == "":
        return None
    if not isinstance(tier, str):
        raise SubagentValidationError("tier", f"must be one of: {', '.join(TIER_TOKENS)}")
    return tier


def _optional_tool_names(arguments: Mapping[str, Any]) -> list[str]:
    tools = arguments.get("tools")
    if tools is None:
        return []
    if isinstance(tools, str) or not isinstance(tools, Sequence):
        raise SubagentValidationError("tools", "must be a list of tool names")
    if not all(isinstance(name, str) for name in tools):
        raise SubagentValidationError("tools", "must be a list of tool names")
    return list(tools)


class DelegationTool:
    """Tool that delegates a task to an ephemeral sub-agent.

    Satisfies the ``Tool`` protocol, so it can be registered in the primary
    agent's catalog next to the tools it filters. Sub-agents never receive
    it, whatever the caller requests.

    Args:
        router: Resolves backends by tier or by classifying the task.
        catalog: Every tool known to the primary agent.
        settings: Limits, default tools and the tool's own name.
        default_tools: Overrides ``settings.default_tools``.
    """

    def __init__(
        self,
        router: BackendRouter,
        catalog: ToolCatalog,
        settings: DelegationSettings | None = None,
        default_tools: Sequence[str] | None = None,
    ) -> None:
        self._router = router
        self._catalog = catalog
        self._settings = settings or DelegationSettings()
        self._default_tools = tuple(
            default_tools if default_tools is not None else self._settings.default_tools
        )

    @property
    def name(self) -> str:
        return self._settings.delegation_tool_name

    @property
    def description(self) -> str:
        defaults = ", ".join(self._default_tools) or "none"
        return (
            "Delegate a task to an ephemeral sub-agent. The sub-agent runs independently "
            "with a specific role, completes the task, and returns the result. Use this for "
            "research, analysis, data gathering, summarization, or any task that benefits "
            "from focused single-purpose execution. The sub-agent has read-only tools by "
            f"default ({defaults}). You can grant additional tools and route to a specific "
            'backend tier (e.g. "reasoning" for complex analysis).'
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "task": {
                    "type": "string",
                    "description": (
                        "Clear, detailed description of what the sub-agent should accomplish"
                    ),
                },
                "role": {
                    "type": "string",
                    "description": (
                        'Role/specialty for the sub-agent (e.g. "Research Specialist", '
                        '"Data Analyst", "Content Summarizer")'
                    ),
                },
                "tier": {
                    "type": "string",
                    "enum": list(TIER_TOKENS),
                    "description": (
                        "Optional complexity tier for backend routing. If omitted, "
                        "the task text is auto-classified."
                    ),
                },
                "tools": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": (
                        "Optional additional tool names to grant beyond the default "
                        "read-only set"
                    ),
                },
            },
            "required": ["task", "role"],
        }

    @property
    def default_tools(self) -> tuple[str, ...]:
        return self._default_tools

    def resolve_backend(self, task: str, tier: str | None) -> Backend:
        """Resolve the backend for a delegation.

        Raises:
            BackendResolutionError: On an unknown tier, an empty tier, or a
                routing failure.
        """
        if tier is not None:
            return self._router.get_for_tier(tier)
        return self._router.route(task).backend

    def granted_tools(self, additional_tools: Sequence[str] = ()) -> list[Tool]:
        """Tools a sub-agent would receive for ``additional_tools``."""
        return select_granted_tools(
            self._catalog,
            self._default_tools,
            additional_tools,
            delegation_tool_name=self.name,
        )

    async def execute(self, arguments: Mapping[str, Any]) -> str:
        """Run the delegation described by ``arguments``.

        Args:
            arguments: ``task`` and ``role`` (required), ``tier`` and
                ``tools`` (optional).

        Returns:
            Formatted outcome text, or an ``"Error..."`` description.
        """
        try:
            return await self._delegate(arguments)
        except Exception as exc:
            logger.exception("Delegation failed unexpectedly")
            return f"Error: delegation failed: {exc}"

    def execute_sync(self, arguments: Mapping[str, Any]) -> str:
        """Synchronous wrapper around ``execute``.

        Must not be called from inside a running event loop.
        """
        return asyncio.run(self.execute(arguments))

    async def _delegate(self, arguments: Mapping[str, Any]) -> str:
        try:
            task = _require_text(arguments, "task")
            role = _require_text(arguments, "role")
            tier = _optional_tier(arguments)
            additional_tools = _optional_tool_names(arguments)
        except SubagentValidationError as exc:
            return f"Error: {exc.message}."

        try:
            backend = self.resolve_backend(task, tier)
        except BackendResolutionError as exc:
            logger.warning("Backend resolution failed", extra={"tier": tier or "auto"})
            return f"Error resolving backend: {exc}"

        logger.info(
            "Delegating task",
            extra={
                "role": role,
                "tier": tier or "auto",
                "backend": backend.id,
                "additional_tools": additional_tools,
            },
        )

        request = SubagentRequest(
            task=task,
            role=role,
            backend=backend,
            tools=self.granted_tools(additional_tools),
            timeout_seconds=self._settings.timeout_seconds,
            max_iterations=self._settings.max_iterations,
        )
        outcome = await run_subagent(request, delegation_tool_name=self.name)

        log_fields = {
            "role": role,
            "backend": outcome.backend_id,
            "iterations": outcome.iterations,
            "duration": round(outcome.duration, 3),
        }
        if outcome.success:
            logger.info("Sub-agent completed", extra=log_fields)
        else:
            logger.warning("Sub-agent failed", extra={**log_fields, "timed_out": outcome.timed_out})
        return format_outcome(role, outcome)


def create_delegation_tool(
    router: BackendRouter,
    catalog: ToolCatalog,
    settings: DelegationSettings | None = None,
    default_tools: Sequence[str] | None = None,
) -> DelegationTool:
    """Create the delegation tool for a primary agent.

    Example::

        tool = create_delegation_tool(router, catalog)
        catalog.register(tool)  # safe: sub-agents never receive it
        text = await tool.execute({"task": "Summarize doc", "role": "Summarizer"})
    """
    return DelegationTool(router, catalog, settings=settings, default_tools=default_tools)
