"""Capability sets for sub-agents.

A sub-agent gets the default read-only tools plus whatever the caller asks
for, minus the delegation-trigger tool. Removing that one name is what
limits delegation to a single level.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from ephemeral_agents.subagents.errors import SubagentNestingError
from ephemeral_agents.tools.base import Tool
from ephemeral_agents.tools.catalog import ToolCatalog

DELEGATION_TOOL_NAME = "delegate_task"


def grant_tool_names(
    default_tools: Iterable[str],
    additional_tools: Iterable[str] = (),
    *,
    delegation_tool_name: str = DELEGATION_TOOL_NAME,
) -> frozenset[str]:
    """Union of the default and requested names, without the delegation tool.

    The delegation tool is dropped even when requested explicitly.
    """
    granted = set(default_tools) | set(additional_tools)
    granted.discard(delegation_tool_name)
    return frozenset(granted)


def select_granted_tools(
    catalog: ToolCatalog,
    default_tools: Iterable[str],
    additional_tools: Iterable[str] = (),
    *,
    delegation_tool_name: str = DELEGATION_TOOL_NAME,
) -> list[Tool]:
    """Resolve the granted names against the catalog.

    Names the catalog does not know are skipped.
    """
    names = grant_tool_names(
        default_tools,
        additional_tools,
        delegation_tool_name=delegation_tool_name,
    )
    return catalog.select(names)


def ensure_no_delegation(
    tools: Sequence[Tool],
    delegation_tool_name: str = DELEGATION_TOOL_NAME,
) -> None:
    """Reject a capability set that would let a sub-agent delegate.

    Raises:
        SubagentNestingError: If the delegation tool is among ``tools``.
    """
    if any(tool.name == delegation_tool_name for tool in tools):
        raise SubagentNestingError(delegation_tool_name)
