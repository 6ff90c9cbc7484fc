#!/usr/bin/env python3
"""Delegation example.

This example demonstrates:
- Wrapping plain functions as sub-agent tools
- Registering backends per tier and routing tasks to them
- Calling the delegate_task tool and reading its formatted result
- What a sub-agent sees: role prompt, task, and read-only tools only

Runs offline with pydantic-ai's FunctionModel. To use a real model, swap in
e.g. ``OpenAIChatModel("gpt-4o-mini")`` (requires the ``openai`` extra).
"""

import asyncio

from pydantic_ai.messages import (
    ModelMessage,
    ModelResponse,
    TextPart,
    ToolCallPart,
    ToolReturnPart,
)
from pydantic_ai.models.function import AgentInfo, FunctionModel

from ephemeral_agents import (
    BackendRegistry,
    BackendRouter,
    DelegationSettings,
    PydanticAIBackend,
    ToolCatalog,
    create_delegation_tool,
    setup_logging,
)

NOTES = {
    "trip.md": "Day 1: ramen at Ichiran. Day 2: sushi at Daiwa, best meal of the trip.",
}


def heartware_read(filename: str) -> str:
    """Read a heartware file.

    Args:
        filename: Name of the file to read.
    """
    return NOTES.get(filename, f"No such file: {filename}")


def heartware_list() -> str:
    """List heartware files."""
    return ", ".join(sorted(NOTES))


def heartware_write(filename: str, content: str) -> str:
    """Write a heartware file.

    Args:
        filename: Name of the file to write.
        content: New file content.
    """
    NOTES[filename] = content
    return f"Wrote {filename}"


def summarizer_model(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
    """Stand-in model: reads trip.md once, then answers."""
    returns = [p for p in messages[-1].parts if isinstance(p, ToolReturnPart)]
    if not returns:
        return ModelResponse(parts=[ToolCallPart("heartware_read", {"filename": "trip.md"})])
    offered = ", ".join(t.name for t in info.function_tools)
    return ModelResponse(
        parts=[TextPart(f"Highlight: sushi at Daiwa. (tools offered: {offered})")]
    )


def plain_model(messages: list[ModelMessage], info: AgentInfo) -> ModelResponse:
    """Stand-in model that answers directly."""
    return ModelResponse(parts=[TextPart("It is 9:00 in Tokyo.")])


async def main():
    setup_logging()

    catalog = ToolCatalog([heartware_read, heartware_list, heartware_write])
    registry = BackendRegistry(
        {
            "simple": PydanticAIBackend(FunctionModel(plain_model), backend_id="fast-local"),
            "moderate": PydanticAIBackend(FunctionModel(summarizer_model), backend_id="mid"),
        }
    )
    settings = DelegationSettings(timeout_seconds=30)
    delegate = create_delegation_tool(BackendRouter(registry), catalog, settings=settings)

    # The delegation tool can live in the same catalog; sub-agents never get it
    catalog.register(delegate)

    print("--- Auto-routed (moderate) ---\n")
    print(
        await delegate.execute(
            {
                "task": "Summarize my trip notes in trip.md",
                "role": "Content Summarizer",
                "tools": ["delegate_task"],
            }
        )
    )

    print("\n--- Explicit tier ---\n")
    print(await delegate.execute({"task": "What time is it?", "role": "Clock", "tier": "simple"}))

    print("\n--- Validation and resolution errors ---\n")
    print(await delegate.execute({"task": "", "role": "Nobody"}))
    print(await delegate.execute({"task": "Think hard", "role": "Thinker", "tier": "ultra"}))


if __name__ == "__main__":
    asyncio.run(main())
