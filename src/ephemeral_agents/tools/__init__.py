"""Tool capability interface and catalog.

Concrete tools (heartware files, memory recall, secrets, ...) belong to the
primary agent. This package only defines how they are described, looked up
and invoked by sub-agents.

Usage:
    >>> from ephemeral_agents.tools import ToolCatalog
    >>> def heartware_read(filename: str) -> str:
    ...     '''Read a heartware file.'''
    ...     ...
    >>> catalog = ToolCatalog([heartware_read])
    >>> catalog.names()
    ['heartware_read']
"""

from ephemeral_agents.tools.base import FunctionTool, Tool
from ephemeral_agents.tools.catalog import ToolCatalog

__all__ = [
    "FunctionTool",
    "Tool",
    "ToolCatalog",
]
