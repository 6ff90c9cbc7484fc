"""Chat backends and backend resolution.

Backend Capability:
    Backend - protocol with ``id`` and ``async chat(history, tools)``
    TextResponse / ToolCallsResponse - the two response shapes

Concrete Backend:
    PydanticAIBackend - adapter over any pydantic-ai ``Model``

Resolution:
    Tier - simple | moderate | complex | reasoning
    BackendRegistry - tier -> backend lookup plus health marks
    TierClassifier - heuristic task -> tier classification
    BackendRouter - direct tier lookup or classify-then-resolve

Usage:
    >>> from ephemeral_agents.backends import BackendRegistry, BackendRouter, PydanticAIBackend
    >>> registry = BackendRegistry({"simple": PydanticAIBackend(model)})
    >>> router = BackendRouter(registry)
    >>> router.route("What time is it in Tokyo?").backend.id
"""

from ephemeral_agents.backends.base import (
    Backend,
    BackendResponse,
    TextResponse,
    ToolCallsResponse,
)
from ephemeral_agents.backends.classifier import Classification, TierClassifier
from ephemeral_agents.backends.errors import BackendResolutionError
from ephemeral_agents.backends.pydantic_ai import PydanticAIBackend
from ephemeral_agents.backends.registry import BackendRegistry, Tier
from ephemeral_agents.backends.router import BackendRouter, RouteResult

__all__ = [
    "Backend",
    "BackendRegistry",
    "BackendResolutionError",
    "BackendResponse",
    "BackendRouter",
    "Classification",
    "PydanticAIBackend",
    "RouteResult",
    "TextResponse",
    "Tier",
    "TierClassifier",
    "ToolCallsResponse",
]
