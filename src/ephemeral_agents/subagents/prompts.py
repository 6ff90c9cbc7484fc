"""Seed history for a sub-agent run."""

from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from ephemeral_agents.messages import Message

SYSTEM_PROMPT_TEMPLATE = """\
You are a focused sub-agent with the role: {{ role }}.

Complete the following task and return a clear, concise result.
Do not ask follow-up questions; use your best judgment and available tools.
When you have finished, respond with your final answer as plain text."""

_environment = Environment(autoescape=False, undefined=StrictUndefined)
_system_template = _environment.from_string(SYSTEM_PROMPT_TEMPLATE)


def render_system_prompt(role: str) -> str:
    return _system_template.render(role=role)


def build_seed_history(role: str, task: str) -> list[Message]:
    """Build the two-message history every sub-agent starts from.

    Args:
        role: Role/specialty for the system prompt.
        task: Task text, passed through verbatim as the user message.

    Returns:
        ``[system, user]`` messages.
    """
    return [
        Message.system(render_system_prompt(role)),
        Message.user(task),
    ]
