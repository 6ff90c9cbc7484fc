"""
Ephemeral Agents - single-level task delegation to short-lived sub-agents.

Quick Start:
    >>> from pydantic_ai.models.openai import OpenAIChatModel
    >>> from ephemeral_agents import (
    ...     BackendRegistry, BackendRouter, PydanticAIBackend, ToolCatalog,
    ...     create_delegation_tool,
    ... )
    >>> registry = BackendRegistry({"moderate": PydanticAIBackend(OpenAIChatModel("gpt-4o-mini"))})
    >>> catalog = ToolCatalog([heartware_read, heartware_search])
    >>> tool = create_delegation_tool(BackendRouter(registry), catalog)
    >>> print(tool.execute_sync({"task": "Summarize doc", "role": "Summarizer"}))
    [Sub-agent (Summarizer) completed in 1 iteration(s) via openai:gpt-4o-mini]

With Settings:
    >>> from ephemeral_agents import DelegationSettings
    >>> settings = DelegationSettings()  # EPHEMERAL_* env vars and .env
    >>> tool = create_delegation_tool(router, catalog, settings=settings)

Key Features:
    - Turn cap and wall-clock deadline on every sub-agent run
    - Tool calls from native responses or embedded JSON in plain text
    - Read-only default tools; the delegation tool is never granted
    - Tier-based backend routing with heuristic auto-classification
"""

from ephemeral_agents.backends import (
    Backend,
    BackendRegistry,
    BackendResolutionError,
    BackendRouter,
    PydanticAIBackend,
    TextResponse,
    Tier,
    TierClassifier,
    ToolCallsResponse,
)
from ephemeral_agents.config import DelegationSettings, LoggingConfig
from ephemeral_agents.errors import AgentError, ConfigurationError, ModelBackendError
from ephemeral_agents.messages import Message, MessageRole, ToolCallRecord
from ephemeral_agents.observability import setup_logging
from ephemeral_agents.subagents import (
    DelegationTool,
    SubagentOutcome,
    SubagentRequest,
    create_delegation_tool,
    run_subagent,
    run_subagent_sync,
)
from ephemeral_agents.tools import FunctionTool, Tool, ToolCatalog

__version__ = "0.1.0"

__all__ = [
    "AgentError",
    "Backend",
    "BackendRegistry",
    "BackendResolutionError",
    "BackendRouter",
    "ConfigurationError",
    "DelegationSettings",
    "DelegationTool",
    "FunctionTool",
    "LoggingConfig",
    "Message",
    "MessageRole",
    "ModelBackendError",
    "PydanticAIBackend",
    "SubagentOutcome",
    "SubagentRequest",
    "TextResponse",
    "Tier",
    "TierClassifier",
    "Tool",
    "ToolCallRecord",
    "ToolCallsResponse",
    "ToolCatalog",
    "__version__",
    "create_delegation_tool",
    "run_subagent",
    "run_subagent_sync",
    "setup_logging",
]
