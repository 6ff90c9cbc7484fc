"""Tool capability interface and a function-backed implementation."""

from __future__ import annotations

import asyncio
import inspect
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic_ai import Tool as PydanticAITool

logger = logging.getLogger(__name__)

_KEYWORD_KINDS = (inspect.Parameter.POSITIONAL_OR_KEYWORD, inspect.Parameter.KEYWORD_ONLY)


@runtime_checkable
class Tool(Protocol):
    """A named action a sub-agent may invoke.

    Attributes:
        name: Identifier the model uses to call the tool.
        description: What the tool does, shown to the model.
        parameters: JSON schema of the accepted arguments.
    """

    name: str
    description: str
    parameters: dict[str, Any]

    async def execute(self, arguments: Mapping[str, Any]) -> str:
        """Run the tool.

        Args:
            arguments: Mapping of argument name to value.

        Returns:
            The tool output as text.
        """
        ...


@dataclass
class FunctionTool:
    """Tool backed by a plain Python callable.

    Sync callables run in a worker thread so a slow tool never blocks the
    event loop the timeout guard is waiting on.

    Example:
        >>> def heartware_read(filename: str) -> str:
        ...     '''Read a heartware file.'''
        ...     return Path(filename).read_text()
        >>> tool = FunctionTool.from_function(heartware_read)
        >>> tool.name
        'heartware_read'
    """

    name: str
    description: str
    function: Callable[..., Any] = field(repr=False)
    parameters: dict[str, Any] = field(default_factory=lambda: {"type": "object", "properties": {}})

    @classmethod
    def from_function(
        cls,
        func: Callable[..., Any],
        *,
        name: str | None = None,
        description: str | None = None,
        parameters: dict[str, Any] | None = None,
    ) -> FunctionTool:
        """Build a tool from a callable.

        The JSON schema and description are derived from the signature and
        docstring with pydantic-ai's function schema support, unless given.

        Args:
            func: Sync or async callable taking keyword arguments.
            name: Tool name. Defaults to the function name.
            description: Tool description. Defaults to the docstring.
            parameters: JSON schema override.

        Returns:
            A new ``FunctionTool``.
        """
        tool_name = name or func.__name__
        if parameters is None or description is None:
            tool_def = PydanticAITool(func, takes_ctx=False, name=tool_name).tool_def
            if parameters is None:
                parameters = dict(tool_def.parameters_json_schema)
            if description is None:
                description = tool_def.description or ""
        return cls(
            name=tool_name,
            description=description,
            function=func,
            parameters=parameters,
        )

    def accepted_arguments(self, arguments: Mapping[str, Any]) -> dict[str, Any]:
        """Keep only the keys the wrapped function's signature accepts.

        Functions taking ``**kwargs`` receive every key. Alias keys left in
        place by argument normalization are dropped here.
        """
        parameters = inspect.signature(self.function).parameters.values()
        if any(param.kind is inspect.Parameter.VAR_KEYWORD for param in parameters):
            return dict(arguments)
        accepted = {param.name for param in parameters if param.kind in _KEYWORD_KINDS}
        dropped = sorted(key for key in arguments if key not in accepted)
        if dropped:
            logger.debug(
                "Dropping unaccepted arguments",
                extra={"tool": self.name, "dropped": dropped},
            )
        return {key: value for key, value in arguments.items() if key in accepted}

    async def execute(self, arguments: Mapping[str, Any]) -> str:
        """Call the wrapped function with the accepted ``arguments`` as keywords.

        Exceptions propagate; the sub-agent tool executor converts them.
        """
        kwargs = self.accepted_arguments(arguments)
        if inspect.iscoroutinefunction(self.function):
            result = await self.function(**kwargs)
        else:
            result = await asyncio.to_thread(self.function, **kwargs)
            if inspect.isawaitable(result):
                result = await result
        if result is None:
            return ""
        return result if isinstance(result, str) else str(result)
