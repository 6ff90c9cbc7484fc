"""Shared test fixtures and configuration for ephemeral-agents tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from typing import Any

import pytest
from pydantic_ai import models

from ephemeral_agents.backends import BackendRegistry, BackendRouter, TextResponse
from ephemeral_agents.backends.base import BackendResponse
from ephemeral_agents.config import DelegationSettings
from ephemeral_agents.messages import Message
from ephemeral_agents.tools import ToolCatalog

# Block all real model requests globally for safety
models.ALLOW_MODEL_REQUESTS = False


class ScriptedBackend:
    """Backend that replays a fixed script of responses.

    Each item is a response, an exception to raise, or a callable that
    builds a response from the history. Once the script runs out the last
    item repeats.

    Attributes:
        histories: Snapshot of the history submitted on every call.
        tool_names: Names of the tools submitted on every call.
    """

    def __init__(
        self,
        script: Sequence[Any],
        backend_id: str = "scripted",
        delay: float = 0.0,
    ) -> None:
        self._script = list(script)
        self._id = backend_id
        self._delay = delay
        self.histories: list[list[Message]] = []
        self.tool_names: list[list[str]] = []

    @property
    def id(self) -> str:
        return self._id

    @property
    def calls(self) -> int:
        return len(self.histories)

    async def chat(self, history: Sequence[Message], tools: Sequence[Any]) -> BackendResponse:
        self.histories.append(list(history))
        self.tool_names.append([tool.name for tool in tools])
        index = min(len(self.histories), len(self._script)) - 1
        item = self._script[index]
        if self._delay:
            await asyncio.sleep(self._delay)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            return item(list(history))
        return item


def heartware_read(filename: str) -> str:
    """Read a heartware file.

    Args:
        filename: Name of the file to read.
    """
    return f"contents of {filename}"


def heartware_search(query: str) -> str:
    """Search heartware files.

    Args:
        query: Text to search for.
    """
    return f"matches for {query}"


def heartware_list() -> str:
    """List heartware files."""
    return "notes.md, plan.md"


async def memory_recall(query: str) -> str:
    """Recall memories related to a query.

    Args:
        query: What to recall.
    """
    return f"memories about {query}"


def heartware_write(filename: str, content: str) -> str:
    """Write a heartware file.

    Args:
        filename: Name of the file to write.
        content: New file content.
    """
    return f"wrote {len(content)} chars to {filename}"


def delegate_task(task: str, role: str) -> str:
    """Stand-in for the delegation tool."""
    return "nested delegation"


@pytest.fixture
def scripted_backend() -> type[ScriptedBackend]:
    """Factory fixture for scripted backends.

    Usage:
        def test_something(scripted_backend):
            backend = scripted_backend([TextResponse("Done.")])
    """
    return ScriptedBackend


@pytest.fixture
def done_backend() -> ScriptedBackend:
    """Backend that answers "Done." on its first turn."""
    return ScriptedBackend([TextResponse("Done.")], backend_id="done-backend")


@pytest.fixture
def catalog() -> ToolCatalog:
    """Catalog with the default read-only tools plus a write tool and a
    stand-in delegation tool."""
    return ToolCatalog(
        [
            heartware_read,
            heartware_search,
            heartware_list,
            memory_recall,
            heartware_write,
            delegate_task,
        ]
    )


@pytest.fixture
def settings() -> DelegationSettings:
    """Settings with defaults, isolated from the environment and .env."""
    return DelegationSettings(_env_file=None)


@pytest.fixture
def make_router() -> Callable[..., BackendRouter]:
    """Factory fixture building a router over a tier -> backend mapping.

    Usage:
        router = make_router({"moderate": backend})
    """

    def _make(backends: dict[str, Any]) -> BackendRouter:
        return BackendRouter(BackendRegistry(backends))

    return _make
