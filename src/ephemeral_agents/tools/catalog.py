"""Catalog of every tool known to the primary agent."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Any

from ephemeral_agents.errors import ConfigurationError
from ephemeral_agents.tools.base import FunctionTool, Tool

logger = logging.getLogger(__name__)


class ToolCatalog:
    """Ordered, name-keyed collection of tools.

    The catalog is populated during setup and only read while delegations
    run, so it needs no locking.

    Example::

        catalog = ToolCatalog()
        catalog.register(heartware_read)           # plain function
        catalog.register(MyMemoryRecallTool())     # Tool protocol object
        granted = catalog.select(["heartware_read", "unknown"])
    """

    def __init__(self, tools: Iterable[Tool | Callable[..., Any]] | None = None) -> None:
        """Initialize the catalog.

        Args:
            tools: Optional initial tools or callables to register.
        """
        self._tools: dict[str, Tool] = {}
        for tool in tools or ():
            self.register(tool)

    def register(self, tool: Tool | Callable[..., Any]) -> Tool:
        """Register a tool, wrapping plain callables in ``FunctionTool``.

        A tool with the same name replaces the existing entry.

        Args:
            tool: A ``Tool`` implementation or a callable.

        Returns:
            The registered ``Tool``.

        Raises:
            ConfigurationError: If the object is neither a tool nor callable,
                or its name is empty.
        """
        if not isinstance(tool, Tool):
            if not callable(tool):
                raise ConfigurationError(
                    f"Cannot register {tool!r} as a tool",
                    config_key="tools",
                    actual=type(tool).__name__,
                )
            tool = FunctionTool.from_function(tool)

        if not tool.name or not tool.name.strip():
            raise ConfigurationError("Tool name must not be empty", config_key="tools")

        if tool.name in self._tools:
            logger.debug("Replacing tool '%s' in catalog", tool.name)
        self._tools[tool.name] = tool
        return tool

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def names(self) -> list[str]:
        return list(self._tools)

    def select(self, names: Iterable[str]) -> list[Tool]:
        """Return the catalog tools whose names appear in ``names``.

        Catalog registration order is preserved and unknown names are
        skipped silently.
        """
        wanted = set(names)
        return [tool for name, tool in self._tools.items() if name in wanted]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[Tool]:
        return iter(list(self._tools.values()))

    def __len__(self) -> int:
        return len(self._tools)
